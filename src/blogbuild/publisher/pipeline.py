"""Markdown to HTML conversion for single posts and whole directories."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path

from ..config import BuildConfig, html_name_for, is_markdown_name
from ..errors import ConversionError, FileIOError, MissingInputError
from ..models import ConversionSummary
from ..parser import parse_front_matter, read_source
from .markdown import create_markdown
from .templates import render_post_page

log = logging.getLogger(__name__)


def list_markdown_sources(directory: Path) -> list[Path]:
    """List markdown entries of a directory, sorted by name.

    Hidden names are skipped. Entries are not checked for being regular
    files; anything unreadable fails at conversion time.
    """
    if not directory.is_dir():
        raise MissingInputError(directory, kind="directory")
    return sorted(p for p in directory.iterdir() if is_markdown_name(p.name))


class ConversionPipeline:
    """Converts markdown posts into standalone HTML pages.

    Each file goes through: read, parse front matter, render the body,
    wrap it in the page template, write. The clock supplies "today" for the
    copyright year and for undated posts; it is the only source of
    non-determinism in the output.
    """

    def __init__(
        self,
        config: BuildConfig | None = None,
        clock: Callable[[], date] = date.today,
    ):
        self.config = config or BuildConfig()
        self.clock = clock
        self.md = create_markdown()

    def render(self, text: str, today: date | None = None) -> str:
        """Render raw document text to a complete HTML page."""
        front_matter, body = parse_front_matter(text)
        html_content = self.md.render(body)
        return render_post_page(front_matter, html_content, today or self.clock())

    def convert_one(
        self,
        input_path: Path,
        output_path: Path | None = None,
        *,
        today: date | None = None,
    ) -> Path:
        """Convert one markdown file.

        Args:
            input_path: Markdown source.
            output_path: Destination; defaults to the source with an .html suffix.
            today: Fixed date for this conversion (defaults to the clock).

        Returns:
            The path written.

        Raises:
            MissingInputError: If input_path does not exist.
            ConversionError: If reading or writing fails.
        """
        if not input_path.exists():
            raise MissingInputError(input_path)
        if output_path is None:
            output_path = input_path.with_name(html_name_for(input_path.name))

        source = read_source(input_path)
        html = self.render(source.text, today)

        try:
            output_path.write_text(html, encoding="utf-8")
        except OSError as e:
            raise ConversionError(output_path, f"cannot write file: {e}") from e

        log.info("Converted %s -> %s", input_path, output_path)
        return output_path

    def convert_all(
        self,
        input_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> ConversionSummary:
        """Convert every markdown file in a directory.

        A failing file is logged and counted; the rest of the batch still runs.

        Raises:
            MissingInputError: If input_dir does not exist.
        """
        input_dir = input_dir or self.config.posts_dir
        output_dir = output_dir or self.config.resolved_output_dir

        sources = list_markdown_sources(input_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        summary = ConversionSummary(output_dir=str(output_dir.resolve()))

        if not sources:
            log.warning("No markdown files found in %s", input_dir)
            return summary

        log.info("Found %d markdown file(s) to convert", len(sources))
        # One date for the whole batch
        today = self.clock()

        for source in sources:
            target = output_dir / html_name_for(source.name)
            try:
                self.convert_one(source, target, today=today)
            except FileIOError as e:
                log.error("Failed to convert %s: %s", source.name, e.message)
                summary.failed += 1
                summary.failures.append({"path": str(source), "error": e.message})
                continue
            summary.converted += 1
            summary.outputs.append(str(target))
            log.debug("Progress: %d converted, %d failed", summary.converted, summary.failed)

        return summary
