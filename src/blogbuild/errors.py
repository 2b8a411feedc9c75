"""Exceptions raised by the build pipeline."""

from pathlib import Path


class BlogBuildError(Exception):
    """Base class for blogbuild errors."""


class MissingInputError(BlogBuildError):
    """Raised when an input file or directory does not exist."""

    def __init__(self, path: Path, kind: str = "file") -> None:
        self.path = path
        self.kind = kind
        super().__init__(f"Input {kind} not found: {path}")


class FileIOError(BlogBuildError):
    """Raised when a single file cannot be read or written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class ConversionError(FileIOError):
    """Raised when converting one markdown document fails."""


class MalformedFrontMatterError(BlogBuildError):
    """Opening delimiter present but the header is never closed.

    parse_front_matter() recovers from this by treating the whole
    document as body text, so it never reaches callers.
    """


class IncompleteMetadataError(BlogBuildError):
    """Raised when a document lacks the fields needed for the manifest."""

    def __init__(self, path: Path, missing: list[str]) -> None:
        self.path = path
        self.missing = missing
        super().__init__(f"{path}: missing {', '.join(missing)}")
