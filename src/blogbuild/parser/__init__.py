"""Front matter parsing for blog posts."""

from .frontmatter import build_front_matter, parse_front_matter, read_front_matter, read_source

__all__ = [
    "build_front_matter",
    "parse_front_matter",
    "read_front_matter",
    "read_source",
]
