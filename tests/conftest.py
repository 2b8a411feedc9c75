"""Shared test fixtures for the blogbuild test suite.

Design:
- posts_dir: empty posts directory in a temp dir, BLOGBUILD_POSTS_DIR pointed at it
- write_post: helper fixture that writes a post with a front matter header
- runner: CliRunner for CLI tests
"""

import logging
from collections.abc import Callable, Generator
from datetime import date
from pathlib import Path

import pytest
from click.testing import CliRunner

FIXED_TODAY = date(2025, 3, 14)


# ─────────────────────────────────────────────────────────────────────────────
# Core Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers installed by configure_logging() between tests."""
    yield
    logger = logging.getLogger("blogbuild")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner with isolated environment."""
    return CliRunner()


@pytest.fixture
def posts_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty posts directory used as the default for the CLI."""
    posts = tmp_path / "posts"
    posts.mkdir()
    monkeypatch.setenv("BLOGBUILD_POSTS_DIR", str(posts))
    return posts


@pytest.fixture
def write_post(posts_dir: Path) -> Callable[..., Path]:
    """Write a markdown post into posts_dir.

    Usage:
        def test_something(write_post):
            path = write_post("hello.md", title="Hello", date="2024-05-01")
    """

    def _write(name: str, body: str = "Some content.", **fields: str) -> Path:
        lines = ["---"]
        lines.extend(f"{key}: {value}" for key, value in fields.items())
        lines.append("---")
        text = "\n".join(lines) + f"\n\n{body}\n" if fields else f"{body}\n"
        path = posts_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
