"""Front matter parsing and serialization.

Posts start with a header block::

    ---
    title: "Hello"
    tags: [python, "web"]
    ---

Each header line is ``key: value``. Values are plain strings, except that
one layer of double quotes is stripped and ``[a, b]`` becomes a list. This is
not YAML: unquoted values are taken verbatim.
"""

import logging
import re
from pathlib import Path

from ..errors import ConversionError, MalformedFrontMatterError
from ..models import FieldValue, FrontMatter, ListValue, Scalar, SourceDocument

log = logging.getLogger(__name__)

# Opening delimiter, header lines, closing delimiter on its own line, body
_FRONT_MATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---(?:\r?\n|\Z)(.*)\Z", re.DOTALL)
_OPENING_RE = re.compile(r"\A---\r?\n")
_LINE_SPLIT_RE = re.compile(r"\r?\n")
# Characters removed from every list element
_LIST_ITEM_STRIP_RE = re.compile(r'["\[\]]')


def parse_front_matter(text: str) -> tuple[FrontMatter, str]:
    """Split a document into its front matter and trimmed body.

    Args:
        text: Raw document text.

    Returns:
        Tuple of (front_matter, body). Documents without a complete header
        give an empty FrontMatter and the whole text as body.
    """
    try:
        header, body = _split_header(text)
    except MalformedFrontMatterError as e:
        log.debug("Treating document as body only: %s", e)
        return FrontMatter(), text.strip()

    if header is None:
        return FrontMatter(), text.strip()

    fields: dict[str, FieldValue] = {}
    for line in _LINE_SPLIT_RE.split(header):
        key, sep, raw_value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if not key:
            continue
        fields[key] = _parse_value(raw_value)

    return FrontMatter(fields), body.strip()


def _split_header(text: str) -> tuple[str | None, str]:
    match = _FRONT_MATTER_RE.match(text)
    if match:
        return match.group(1), match.group(2)
    if _OPENING_RE.match(text):
        raise MalformedFrontMatterError("opening '---' without a closing '---' line")
    return None, text


def _parse_value(raw: str) -> FieldValue:
    value = raw.strip()

    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]

    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        if not inner.strip():
            return ListValue(())
        return ListValue(
            tuple(_LIST_ITEM_STRIP_RE.sub("", item.strip()) for item in inner.split(","))
        )

    return Scalar(value)


def build_front_matter(front_matter: FrontMatter) -> str:
    """Serialize front matter back into a header block.

    parse_front_matter() on the result recovers every key and value.

    Args:
        front_matter: The front matter to serialize.

    Returns:
        Header including both ``---`` delimiters and a trailing blank line.

    Raises:
        ValueError: If a key or value cannot be expressed in the header format.
    """
    parts = ["---"]
    for key, value in front_matter.fields.items():
        if not key or key != key.strip() or ":" in key or "\n" in key:
            raise ValueError(f"Cannot serialize front matter key {key!r}")
        if isinstance(value, ListValue):
            parts.append(f"{key}: {_format_list(value.items)}")
        else:
            parts.append(f"{key}: {_quote_if_needed(value.value)}")
    parts.append("---\n\n")
    return "\n".join(parts)


def _quote_if_needed(value: str) -> str:
    """Quote a scalar so that parsing gives it back unchanged."""
    if "\n" in value or "\r" in value:
        raise ValueError(f"Front matter values must be single-line: {value!r}")
    if value.startswith("[") and value.endswith("]"):
        raise ValueError(f"Scalar value would be read as a list: {value!r}")
    if value != value.strip() or (len(value) >= 2 and value[0] == value[-1] == '"'):
        return f'"{value}"'
    return value


def _format_list(items: tuple[str, ...]) -> str:
    for item in items:
        if item != item.strip() or _LIST_ITEM_STRIP_RE.search(item) or "," in item or "\n" in item:
            raise ValueError(f"Cannot serialize list item {item!r}")
    if items == ("",):
        # "[]" would read back as an empty list
        return '[""]'
    return "[" + ", ".join(items) + "]"


def read_source(path: Path) -> SourceDocument:
    """Read a markdown source as UTF-8, dropping a leading byte order mark.

    Raises:
        ConversionError: If the file cannot be read or decoded.
    """
    try:
        return SourceDocument(path=path, text=path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConversionError(path, f"cannot read file: {e}") from e


def read_front_matter(path: Path) -> FrontMatter:
    """Read a file and parse only its header."""
    front_matter, _ = parse_front_matter(read_source(path).text)
    return front_matter
