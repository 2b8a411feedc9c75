"""Configuration for blogbuild.

This module contains all configurable constants for the blog build.
Site identity and defaults live here rather than scattered through templates.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

# =============================================================================
# Source and output files
# =============================================================================

# Suffixes treated as markdown sources (compared case-sensitively, like the
# original build script)
MARKDOWN_EXTENSIONS: tuple[str, ...] = (".md",)

HTML_EXTENSION = ".html"

# Manifest file written beside the posts
METADATA_FILENAME = "metadata.json"

# Prefix for manifest entry URLs, relative to the site root
POSTS_URL_PREFIX = "./posts/"

# Shared assets, as seen from a page inside posts/
ASSETS_ROOT = "../src/assets"

DEFAULT_POSTS_DIR = "./posts"

# =============================================================================
# Front matter defaults
# =============================================================================

DEFAULT_TITLE = "Blog Post"
DEFAULT_CATEGORY = "General"
DEFAULT_READ_TIME = "5 min read"
DEFAULT_AUTHOR = "Prashish Phunyal"

# =============================================================================
# Site identity
# =============================================================================

SITE_NAME = "Prashish"
SITE_AUTHOR = "Prashish Phunyal"

# (label, url) pairs rendered in every page header
SOCIAL_LINKS: tuple[tuple[str, str], ...] = (
    ("Bluesky", "https://bsky.app/profile/prashish.bsky.social"),
    ("GitHub", "https://github.com/pphunyal"),
    ("Instagram", "https://instagram.com/quantumbrokemyrsa"),
)

# Category slug -> display name for the browsing layer
CATEGORIES: dict[str, str] = {
    "blockchain": "Blockchain",
    "cryptography": "Cryptography",
    "fragments": "Fragments",
    "mathematics": "Mathematics",
}

# =============================================================================
# Browsing and search
# =============================================================================

# Reading speed used to estimate readTime when the manifest lacks one
WORDS_PER_MINUTE = 200

# Queries shorter than this return every post
MIN_QUERY_LENGTH = 2

RECENT_POSTS_LIMIT = 10

MAX_SEARCH_SUGGESTIONS = 5


def get_posts_dir() -> Path:
    """Get the default posts directory.

    BLOGBUILD_POSTS_DIR overrides the built-in ./posts default.
    """
    return Path(os.environ.get("BLOGBUILD_POSTS_DIR", DEFAULT_POSTS_DIR))


def is_markdown_name(name: str) -> bool:
    """Whether a directory entry name is a markdown source to process."""
    return not name.startswith(".") and name.endswith(MARKDOWN_EXTENSIONS)


def html_name_for(name: str) -> str:
    """Swap the markdown extension of a file name for the HTML one."""
    for ext in MARKDOWN_EXTENSIONS:
        if name.endswith(ext):
            return name[: -len(ext)] + HTML_EXTENSION
    return name + HTML_EXTENSION


@dataclass
class BuildConfig:
    """Configuration for a build run."""

    posts_dir: Path = field(default_factory=get_posts_dir)
    output_dir: Path | None = None  # Defaults to posts_dir
    url_prefix: str = POSTS_URL_PREFIX
    metadata_filename: str = METADATA_FILENAME

    @property
    def resolved_output_dir(self) -> Path:
        return self.output_dir if self.output_dir is not None else self.posts_dir

    @property
    def metadata_path(self) -> Path:
        return self.posts_dir / self.metadata_filename
