"""GFM-flavoured markdown rendering with image path rewriting."""

from collections.abc import Sequence
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.tasklists import tasklists_plugin

from .images import render_image


def _image_render(
    self: Any,
    tokens: Sequence[Token],
    idx: int,
    options: Any,
    env: Any,
) -> str:
    """Render rule for image tokens, routed through render_image()."""
    token = tokens[idx]
    href = token.attrGet("src") or ""
    title = token.attrGet("title")
    alt = self.renderInlineAsText(token.children or [], options, env)
    return render_image(str(href), alt, str(title) if title else None)


def create_markdown() -> MarkdownIt:
    """Create a parser with tables, strikethrough, autolinks and task lists."""
    md = MarkdownIt("gfm-like").use(tasklists_plugin)
    md.add_render_rule("image", _image_render)
    return md


def render_markdown(body: str, md: MarkdownIt | None = None) -> str:
    """Render a markdown body to an HTML fragment."""
    return (md or create_markdown()).render(body)
