"""Post manifest (metadata.json) generation.

The manifest is rebuilt from scratch on every run so it mirrors exactly the
markdown files present: posts whose source was deleted disappear.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from ..config import (
    DEFAULT_AUTHOR,
    DEFAULT_CATEGORY,
    DEFAULT_READ_TIME,
    METADATA_FILENAME,
    POSTS_URL_PREFIX,
    html_name_for,
)
from ..errors import FileIOError, IncompleteMetadataError
from ..models import FrontMatter, Manifest, MetadataResult, PostManifestEntry
from ..parser import read_front_matter
from .pipeline import list_markdown_sources

log = logging.getLogger(__name__)

_REQUIRED_KEYS = ("title", "date")


def manifest_entry_for(
    source: Path,
    front_matter: FrontMatter,
    url_prefix: str = POSTS_URL_PREFIX,
) -> PostManifestEntry:
    """Build the manifest entry of one post.

    Raises:
        IncompleteMetadataError: If title or date is missing or empty.
    """
    missing = [key for key in _REQUIRED_KEYS if not front_matter.has(key)]
    if missing:
        raise IncompleteMetadataError(source, missing)

    return PostManifestEntry(
        title=front_matter.text("title"),
        date=front_matter.text("date"),
        category=front_matter.text("category", DEFAULT_CATEGORY),
        excerpt=front_matter.text("excerpt"),
        tags=front_matter.items("tags"),
        url=f"{url_prefix}{html_name_for(source.name)}",
        read_time=front_matter.text("readTime", DEFAULT_READ_TIME),
        author=front_matter.text("author", DEFAULT_AUTHOR),
    )


def parse_post_date(value: str) -> datetime | None:
    """Parse an ISO-like date, normalized to naive UTC. None if unparsable."""
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def sort_entries(entries: list[PostManifestEntry]) -> list[PostManifestEntry]:
    """Sort newest first, keeping input order for equal dates.

    Entries whose date does not parse go last.
    """

    def key(entry: PostManifestEntry) -> tuple[bool, datetime]:
        parsed = parse_post_date(entry.date)
        return (parsed is not None, parsed or datetime.min)

    # sorted() is stable with reverse=True too
    return sorted(entries, key=key, reverse=True)


def build_manifest(
    posts_dir: Path,
    url_prefix: str = POSTS_URL_PREFIX,
) -> tuple[Manifest, MetadataResult]:
    """Collect front matter from every post into a sorted manifest.

    Only headers are parsed; bodies are never rendered.

    Raises:
        MissingInputError: If posts_dir does not exist.
    """
    sources = list_markdown_sources(posts_dir)
    log.info("Processing %d markdown file(s) for metadata", len(sources))

    entries: list[PostManifestEntry] = []
    skipped: list[str] = []
    failed: list[str] = []

    for source in sources:
        try:
            front_matter = read_front_matter(source)
            entry = manifest_entry_for(source, front_matter, url_prefix)
        except IncompleteMetadataError as e:
            log.debug("Skipping %s: missing %s", source.name, ", ".join(e.missing))
            skipped.append(source.name)
            continue
        except FileIOError as e:
            log.warning("Cannot read %s: %s", source.name, e.message)
            failed.append(source.name)
            continue
        entries.append(entry)
        log.debug("Added metadata for: %s", entry.title)

    manifest = Manifest(posts=sort_entries(entries))
    result = MetadataResult(
        included=len(manifest.posts),
        scanned=len(sources),
        metadata_path="",
        skipped=skipped,
        failed=failed,
    )
    return manifest, result


def update_metadata(
    posts_dir: Path,
    metadata_path: Path | None = None,
    url_prefix: str = POSTS_URL_PREFIX,
) -> MetadataResult:
    """Regenerate metadata.json, replacing any previous content.

    Args:
        posts_dir: Directory of markdown posts.
        metadata_path: Output file; defaults to posts_dir/metadata.json.
        url_prefix: Prefix for entry URLs.

    Returns:
        MetadataResult with counts.

    Raises:
        MissingInputError: If posts_dir does not exist.
        FileIOError: If the manifest cannot be written.
    """
    metadata_path = metadata_path or posts_dir / METADATA_FILENAME
    manifest, result = build_manifest(posts_dir, url_prefix)

    try:
        metadata_path.write_text(manifest.to_json(), encoding="utf-8")
    except OSError as e:
        raise FileIOError(metadata_path, f"cannot write manifest: {e}") from e

    result.metadata_path = str(metadata_path)
    log.info("Wrote %s with %d post(s)", metadata_path, result.included)
    return result
