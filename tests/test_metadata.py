"""Tests for metadata.json generation."""

import json
from pathlib import Path

import pytest

from blogbuild.errors import IncompleteMetadataError, MissingInputError
from blogbuild.models import FrontMatter, PostManifestEntry, Scalar
from blogbuild.publisher import build_manifest, update_metadata
from blogbuild.publisher.metadata import manifest_entry_for, sort_entries


def _entry(title: str, date: str) -> PostManifestEntry:
    return PostManifestEntry(title=title, date=date, url=f"./posts/{title}.html")


class TestManifestEntry:
    """Tests for manifest_entry_for function."""

    def test_defaults(self):
        front_matter = FrontMatter({"title": Scalar("T"), "date": Scalar("2024-01-01")})

        entry = manifest_entry_for(Path("posts/my-post.md"), front_matter)

        assert entry.model_dump(by_alias=True) == {
            "title": "T",
            "date": "2024-01-01",
            "category": "General",
            "excerpt": "",
            "tags": [],
            "url": "./posts/my-post.html",
            "readTime": "5 min read",
            "author": "Prashish Phunyal",
        }

    @pytest.mark.parametrize(
        "fields",
        [
            {"title": Scalar("Only title")},
            {"date": Scalar("2024-01-01")},
            {"title": Scalar(""), "date": Scalar("2024-01-01")},
        ],
    )
    def test_incomplete(self, fields):
        with pytest.raises(IncompleteMetadataError):
            manifest_entry_for(Path("x.md"), FrontMatter(fields))


class TestSortEntries:
    """Tests for sort_entries function."""

    def test_newest_first(self):
        entries = [_entry("may", "2024-05-01"), _entry("june", "2024-06-01")]

        assert [e.title for e in sort_entries(entries)] == ["june", "may"]

    def test_ties_keep_input_order(self):
        entries = [
            _entry("first", "2024-05-01"),
            _entry("newer", "2024-07-01"),
            _entry("second", "2024-05-01"),
            _entry("third", "2024-05-01"),
        ]

        assert [e.title for e in sort_entries(entries)] == ["newer", "first", "second", "third"]

    def test_unparsable_dates_last(self):
        entries = [_entry("bad", "soon"), _entry("old", "2001-01-01")]

        assert [e.title for e in sort_entries(entries)] == ["old", "bad"]

    def test_mixed_timezones(self):
        entries = [_entry("utc", "2024-05-01T12:00:00+00:00"), _entry("naive", "2024-05-02")]

        assert [e.title for e in sort_entries(entries)] == ["naive", "utc"]


class TestUpdateMetadata:
    """Tests for update_metadata and build_manifest."""

    def test_writes_sorted_manifest(self, write_post, posts_dir):
        write_post("may.md", title="May post", date="2024-05-01", tags='["a", "b"]')
        write_post("june.md", title="June post", date="2024-06-01", category="mathematics")

        result = update_metadata(posts_dir)

        assert result.included == 2
        assert result.scanned == 2
        data = json.loads((posts_dir / "metadata.json").read_text(encoding="utf-8"))
        assert [p["title"] for p in data["posts"]] == ["June post", "May post"]
        assert data["posts"][0]["url"] == "./posts/june.html"
        assert data["posts"][0]["category"] == "mathematics"
        assert data["posts"][1]["tags"] == ["a", "b"]

    def test_two_space_indentation(self, write_post, posts_dir):
        write_post("a.md", title="A", date="2024-01-01")

        update_metadata(posts_dir)

        text = (posts_dir / "metadata.json").read_text(encoding="utf-8")
        assert text.startswith('{\n  "posts": [\n    {\n      "title": "A"')

    def test_incomplete_posts_are_skipped(self, write_post, posts_dir):
        write_post("ok.md", title="Ok", date="2024-01-01")
        write_post("no-date.md", title="No date")
        write_post("no-header.md", body="# nothing")

        result = update_metadata(posts_dir)

        assert result.included == 1
        assert result.scanned == 3
        assert sorted(result.skipped) == ["no-date.md", "no-header.md"]

    def test_replaces_previous_manifest(self, write_post, posts_dir):
        old = write_post("old.md", title="Old", date="2023-01-01")
        write_post("new.md", title="New", date="2024-01-01")
        update_metadata(posts_dir)

        old.unlink()
        update_metadata(posts_dir)

        data = json.loads((posts_dir / "metadata.json").read_text(encoding="utf-8"))
        assert [p["title"] for p in data["posts"]] == ["New"]

    def test_unreadable_file_is_skipped(self, write_post, posts_dir):
        write_post("ok.md", title="Ok", date="2024-01-01")
        (posts_dir / "bad.md").write_bytes(b"\xff\xfe")

        result = update_metadata(posts_dir)

        assert result.included == 1
        assert result.failed == ["bad.md"]

    def test_custom_output_path(self, write_post, posts_dir, tmp_path):
        write_post("a.md", title="A", date="2024-01-01")
        target = tmp_path / "public" / "metadata.json"
        target.parent.mkdir()

        result = update_metadata(posts_dir, target)

        assert result.metadata_path == str(target)
        assert target.exists()
        assert not (posts_dir / "metadata.json").exists()

    def test_non_ascii_is_preserved(self, write_post, posts_dir):
        write_post("np.md", title="नमस्ते", date="2024-01-01")

        update_metadata(posts_dir)

        assert "नमस्ते" in (posts_dir / "metadata.json").read_text(encoding="utf-8")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(MissingInputError):
            update_metadata(tmp_path / "absent")

    def test_build_manifest_does_not_write(self, write_post, posts_dir):
        write_post("a.md", title="A", date="2024-01-01")

        manifest, result = build_manifest(posts_dir)

        assert len(manifest.posts) == result.included == 1
        assert not (posts_dir / "metadata.json").exists()
