"""Read-only browsing over the post manifest.

The site's index page lists posts by category and filters them with a
search box. That logic lives here as plain functions over a BlogIndex:
a route (from the URL hash) plus an optional query resolves to a View
describing what to show. Nothing here touches the DOM or the network.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from .config import (
    CATEGORIES,
    DEFAULT_AUTHOR,
    MAX_SEARCH_SUGGESTIONS,
    MIN_QUERY_LENGTH,
    POSTS_URL_PREFIX,
    RECENT_POSTS_LIMIT,
    SITE_AUTHOR,
    WORDS_PER_MINUTE,
)
from .errors import FileIOError, MissingInputError
from .models import PostManifestEntry
from .publisher.metadata import sort_entries

log = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated slug of a title."""
    return _SLUG_RE.sub("-", text.lower()).strip("-")


def estimate_read_time(text: str) -> str:
    """Estimate reading time at WORDS_PER_MINUTE, at least one minute."""
    words = len(text.split())
    minutes = max(1, math.ceil(words / WORDS_PER_MINUTE))
    return f"{minutes} min read"


@dataclass
class BlogIndex:
    """Validated posts from the manifest plus the category catalogue."""

    posts: list[PostManifestEntry] = field(default_factory=list)
    categories: dict[str, str] = field(default_factory=lambda: dict(CATEGORIES))

    @classmethod
    def from_manifest(cls, data: dict, categories: dict[str, str] | None = None) -> BlogIndex:
        """Build an index from decoded manifest JSON.

        Entries without title, date or category, or with fields of the
        wrong type, are dropped.
        """
        posts = []
        for raw in data.get("posts") or []:
            try:
                post = _validate_post(raw)
            except ValidationError:
                post = None
            if post is None:
                log.warning("Invalid post data: %r", raw)
                continue
            posts.append(post)
        return cls(posts=posts, categories=dict(categories or CATEGORIES))

    @classmethod
    def load(cls, path: Path, categories: dict[str, str] | None = None) -> BlogIndex:
        """Load an index from a metadata.json file."""
        if not path.exists():
            raise MissingInputError(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise FileIOError(path, f"cannot load manifest: {e}") from e
        if not isinstance(data, dict):
            raise FileIOError(path, "manifest must be a JSON object")
        return cls.from_manifest(data, categories)

    def category_name(self, slug: str) -> str:
        return self.categories.get(slug, slug)

    def is_valid_category(self, slug: str) -> bool:
        return slug in self.categories

    def posts_by_category(self, slug: str) -> list[PostManifestEntry]:
        return [post for post in self.posts if post.category == slug]

    def categories_with_counts(self) -> dict[str, dict]:
        """Map each known category slug to {"name", "count"}."""
        counts = {slug: {"name": name, "count": 0} for slug, name in self.categories.items()}
        for post in self.posts:
            if post.category in counts:
                counts[post.category]["count"] += 1
        return counts

    def recent_posts(self, limit: int = RECENT_POSTS_LIMIT) -> list[PostManifestEntry]:
        return sort_entries(self.posts)[:limit]

    def search(self, query: str | None) -> list[PostManifestEntry]:
        """Case-insensitive substring match on title, excerpt, tags and category.

        Queries shorter than MIN_QUERY_LENGTH return every post.
        """
        term = (query or "").strip().lower()
        if len(term) < MIN_QUERY_LENGTH:
            return list(self.posts)
        return [post for post in self.posts if self._matches(post, term)]

    def _matches(self, post: PostManifestEntry, term: str) -> bool:
        return (
            term in post.title.lower()
            or term in post.excerpt.lower()
            or any(term in tag.lower() for tag in post.tags)
            or term in self.category_name(post.category).lower()
        )

    def search_suggestions(self, query: str | None) -> list[str]:
        """Words from titles, tags and category names containing the query."""
        term = (query or "").strip().lower()
        if len(term) < MIN_QUERY_LENGTH:
            return []

        suggestions: dict[str, None] = {}
        for post in self.posts:
            for word in post.title.lower().split():
                if term in word and len(word) > 2:
                    suggestions[word] = None
        for post in self.posts:
            for tag in post.tags:
                if term in tag.lower():
                    suggestions[tag] = None
        for name in self.categories.values():
            if term in name.lower():
                suggestions[name.lower()] = None

        return list(suggestions)[:MAX_SEARCH_SUGGESTIONS]


def _validate_post(raw: object) -> PostManifestEntry | None:
    if not isinstance(raw, dict):
        return None
    title, date, category = raw.get("title"), raw.get("date"), raw.get("category")
    if not title or not date or not category:
        return None

    excerpt = raw.get("excerpt") or ""
    tags = raw.get("tags") or []
    return PostManifestEntry(
        title=str(title),
        date=str(date),
        category=str(category),
        url=raw.get("url") or f"{POSTS_URL_PREFIX}{slugify(str(title))}.html",
        excerpt=str(excerpt),
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        author=raw.get("author") or DEFAULT_AUTHOR,
        read_time=raw.get("readTime") or estimate_read_time(str(excerpt)),
    )


@dataclass(frozen=True)
class Route:
    """Where the URL hash points."""

    kind: str  # "home" | "category" | "not_found"
    category: str | None = None


def parse_route(url_hash: str | None) -> Route:
    """Parse a location hash such as "#category/blockchain"."""
    if not url_hash or url_hash == "#":
        return Route("home")
    if url_hash.startswith("#category/"):
        return Route("category", url_hash[len("#category/"):])
    return Route("not_found")


@dataclass
class View:
    """What the index page should display for a route."""

    document_title: str
    heading: str
    posts: list[PostManifestEntry] = field(default_factory=list)
    empty_message: str | None = None
    active_category: str | None = None
    not_found: bool = False
    description: str | None = None


def resolve_view(index: BlogIndex, route: Route, query: str | None = None) -> View:
    """Decide what to render for a route and an optional search query."""
    if route.kind == "category" and route.category is not None:
        if not index.is_valid_category(route.category):
            return _not_found(
                "Invalid Category", f'The category "{route.category}" does not exist.'
            )
        name = index.category_name(route.category)
        posts = index.posts_by_category(route.category)
        return View(
            document_title=f"{name} | Blog | {SITE_AUTHOR}",
            heading=name,
            posts=posts,
            empty_message=None if posts else "No posts in this category yet.",
            active_category=route.category,
        )

    if route.kind != "home":
        return _not_found("Page Not Found", "The page you are looking for does not exist.")

    term = (query or "").strip()
    if len(term) >= MIN_QUERY_LENGTH:
        results = index.search(term)
        return View(
            document_title=f"Blog | {SITE_AUTHOR}",
            heading=f"Search Results ({len(results)})" if results else "No Results Found",
            posts=results,
            empty_message=None if results else f'No posts found for "{term}"',
        )

    posts = index.recent_posts()
    return View(
        document_title=f"Blog | {SITE_AUTHOR}",
        heading="Recent Posts",
        posts=posts,
        empty_message=None if posts else "No posts found.",
    )


def _not_found(heading: str, description: str) -> View:
    return View(
        document_title=f"Page Not Found | Blog | {SITE_AUTHOR}",
        heading=heading,
        description=description,
        not_found=True,
    )


def highlight_terms(text: str, query: str | None) -> str:
    """Wrap case-insensitive occurrences of query in <mark>."""
    if not query or not text:
        return text
    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)
    return pattern.sub(r"<mark>\1</mark>", text)
