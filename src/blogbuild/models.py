"""Data models for blog sources, front matter and the post manifest."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_AUTHOR, DEFAULT_CATEGORY, DEFAULT_READ_TIME


@dataclass(frozen=True)
class SourceDocument:
    """Raw text of one markdown file."""

    path: Path
    text: str


@dataclass(frozen=True)
class Scalar:
    """A plain string front matter value."""

    value: str


@dataclass(frozen=True)
class ListValue:
    """A bracketed, comma separated front matter value."""

    items: tuple[str, ...]


FieldValue = Scalar | ListValue


@dataclass
class FrontMatter:
    """Key/value header of a markdown document.

    Keys keep their order of appearance. Unknown keys are kept as-is;
    consumers only look up the ones they know about.
    """

    fields: dict[str, FieldValue] = field(default_factory=dict)

    def __contains__(self, key: str) -> bool:
        return key in self.fields

    def __len__(self) -> int:
        return len(self.fields)

    def keys(self) -> list[str]:
        return list(self.fields)

    def get(self, key: str) -> FieldValue | None:
        return self.fields.get(key)

    def text(self, key: str, default: str = "") -> str:
        """Return a value as a string, falling back to default when empty.

        A list value is joined with ", ".
        """
        value = self.fields.get(key)
        if isinstance(value, Scalar):
            return value.value or default
        if isinstance(value, ListValue):
            return ", ".join(value.items) or default
        return default

    def items(self, key: str) -> list[str]:
        """Return a list value; scalars and missing keys give an empty list."""
        value = self.fields.get(key)
        if isinstance(value, ListValue):
            return list(value.items)
        return []

    def has(self, key: str) -> bool:
        """True when the key is present with a non-empty value."""
        return bool(self.text(key))


class PostManifestEntry(BaseModel):
    """One post as listed in metadata.json."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    date: str
    category: str = DEFAULT_CATEGORY
    excerpt: str = ""
    tags: list[str] = Field(default_factory=list)
    url: str
    read_time: str = Field(default=DEFAULT_READ_TIME, alias="readTime")
    author: str = DEFAULT_AUTHOR


class Manifest(BaseModel):
    """The sorted post listing consumed by the browsing layer."""

    posts: list[PostManifestEntry] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize with 2-space indentation and camelCase keys."""
        return json.dumps(self.model_dump(by_alias=True), indent=2, ensure_ascii=False)


@dataclass
class ConversionSummary:
    """Result of converting a directory of markdown files."""

    converted: int = 0
    failed: int = 0
    output_dir: str = ""
    outputs: list[str] = field(default_factory=list)
    failures: list[dict] = field(default_factory=list)  # [{path, error}]


@dataclass
class MetadataResult:
    """Result of regenerating metadata.json."""

    included: int
    scanned: int
    metadata_path: str
    skipped: list[str] = field(default_factory=list)  # Missing title or date
    failed: list[str] = field(default_factory=list)  # Unreadable
