"""Tests for blogbuild.parser.frontmatter."""

import pytest

from blogbuild.errors import ConversionError
from blogbuild.models import FrontMatter, ListValue, Scalar
from blogbuild.parser import build_front_matter, parse_front_matter, read_front_matter


class TestParseFrontMatter:
    """Tests for parse_front_matter function."""

    def test_scalar_and_list_values(self):
        text = """---
title: "Hello World"
date: 2024-05-01
tags: [python, "web", [nested]]
---

# Heading

Body text.
"""
        front_matter, body = parse_front_matter(text)

        assert front_matter.get("title") == Scalar("Hello World")
        assert front_matter.get("date") == Scalar("2024-05-01")
        assert front_matter.get("tags") == ListValue(("python", "web", "nested"))
        assert body == "# Heading\n\nBody text."

    def test_crlf_line_endings(self):
        text = "---\r\ntitle: Windows\r\ncategory: fragments\r\n---\r\nBody\r\n"

        front_matter, body = parse_front_matter(text)

        assert front_matter.text("title") == "Windows"
        assert front_matter.text("category") == "fragments"
        assert body == "Body"

    def test_unquoted_values_are_verbatim(self):
        front_matter, _ = parse_front_matter("---\nexcerpt: It's 'fine': really\n---\nx\n")

        # Only the first colon separates key from value
        assert front_matter.text("excerpt") == "It's 'fine': really"

    def test_lines_without_colon_are_ignored(self):
        front_matter, _ = parse_front_matter("---\ntitle: A\njust a line\n: no key\n---\nx\n")

        assert front_matter.keys() == ["title"]

    def test_unknown_keys_are_kept(self):
        front_matter, _ = parse_front_matter("---\nlayout: wide\n---\nx\n")

        assert "layout" in front_matter
        assert front_matter.text("layout") == "wide"

    def test_empty_list(self):
        front_matter, _ = parse_front_matter("---\ntags: []\n---\nx\n")

        assert front_matter.get("tags") == ListValue(())
        assert front_matter.items("tags") == []

    def test_quoted_list_is_still_a_list(self):
        front_matter, _ = parse_front_matter('---\ntags: "[a, b]"\n---\nx\n')

        assert front_matter.items("tags") == ["a", "b"]

    def test_no_header_returns_trimmed_text(self):
        text = "\n\n# Just markdown\n\nNo header here.\n\n"

        front_matter, body = parse_front_matter(text)

        assert len(front_matter) == 0
        assert body == text.strip()

    def test_unclosed_header_is_body(self):
        text = "---\ntitle: Never closed\n\nBody"

        front_matter, body = parse_front_matter(text)

        assert len(front_matter) == 0
        assert body == text.strip()

    def test_closing_delimiter_at_end_of_file(self):
        front_matter, body = parse_front_matter("---\ntitle: Only header\n---")

        assert front_matter.text("title") == "Only header"
        assert body == ""

    def test_thematic_break_in_body_is_kept(self):
        text = "---\ntitle: A\n---\nabove\n\n---\n\nbelow\n"

        _, body = parse_front_matter(text)

        assert body == "above\n\n---\n\nbelow"


class TestFrontMatterAccessors:
    """Tests for FrontMatter lookups and defaults."""

    def test_text_default_for_missing_and_empty(self):
        front_matter = FrontMatter({"category": Scalar("")})

        assert front_matter.text("category", "General") == "General"
        assert front_matter.text("missing", "x") == "x"
        assert not front_matter.has("category")

    def test_list_as_text_is_joined(self):
        front_matter = FrontMatter({"title": ListValue(("a", "b"))})

        assert front_matter.text("title") == "a, b"

    def test_scalar_tags_give_empty_list(self):
        front_matter = FrontMatter({"tags": Scalar("python")})

        assert front_matter.items("tags") == []


class TestBuildFrontMatter:
    """Tests for build_front_matter function."""

    def test_minimal(self):
        result = build_front_matter(FrontMatter({"title": Scalar("Hello")}))

        assert result == "---\ntitle: Hello\n---\n\n"

    @pytest.mark.parametrize(
        "fields",
        [
            {"title": Scalar("Plain"), "date": Scalar("2024-06-01")},
            {"title": Scalar("  padded  "), "tags": ListValue(("a", "b c"))},
            {"excerpt": Scalar('"already quoted"'), "tags": ListValue(())},
            {"title": Scalar("Colons: everywhere: here"), "readTime": Scalar("3 min read")},
            {"empty": Scalar(""), "author": Scalar("Someone Else")},
            {"tags": ListValue(("",))},
            {"tags": ListValue(("a", ""))},
        ],
    )
    def test_round_trip_recovers_keys(self, fields):
        original = FrontMatter(dict(fields))

        parsed, body = parse_front_matter(build_front_matter(original) + "Body\n")

        assert parsed.fields == original.fields
        assert body == "Body"

    def test_rejects_scalar_that_looks_like_list(self):
        with pytest.raises(ValueError):
            build_front_matter(FrontMatter({"title": Scalar("[not a list]")}))

    def test_rejects_list_item_with_comma(self):
        with pytest.raises(ValueError):
            build_front_matter(FrontMatter({"tags": ListValue(("a,b",))}))


class TestReadFrontMatter:
    """Tests for read_front_matter function."""

    def test_reads_header_only(self, tmp_path):
        path = tmp_path / "post.md"
        path.write_text("---\ntitle: From disk\n---\n# Body\n", encoding="utf-8")

        assert read_front_matter(path).text("title") == "From disk"

    def test_byte_order_mark_before_header(self, tmp_path):
        path = tmp_path / "windows.md"
        path.write_bytes("\ufeff---\r\ntitle: Saved by Notepad\r\n---\r\nBody\r\n".encode("utf-8"))

        assert read_front_matter(path).text("title") == "Saved by Notepad"

    def test_invalid_utf8_raises_conversion_error(self, tmp_path):
        path = tmp_path / "bad.md"
        path.write_bytes(b"---\ntitle: \xff\xfe\n---\n")

        with pytest.raises(ConversionError):
            read_front_matter(path)
