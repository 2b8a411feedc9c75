"""Image reference rewriting for generated post pages.

Pages are written into posts/, so shared assets are reached one directory up.
"""

from markdown_it.common.utils import escapeHtml

from ..config import ASSETS_ROOT

_ASSET_PREFIXES = ("images/", "assets/")
_PASSTHROUGH_PREFIXES = ("http", "/", "../")


def resolve_image_path(href: str) -> str:
    """Rewrite an image href relative to a page inside posts/.

    Examples:
        images/cat.png         -> ../src/assets/images/cat.png
        src/assets/cat.png     -> ../src/assets/cat.png
        cat.png                -> ../src/assets/images/cat.png
        https://x.com/cat.png  -> unchanged
    """
    if href.startswith(_ASSET_PREFIXES):
        return f"{ASSETS_ROOT}/{href}"
    if href.startswith("src/assets/"):
        return f"../{href}"
    if not href.startswith(_PASSTHROUGH_PREFIXES):
        return f"{ASSETS_ROOT}/images/{href}"
    return href


def render_image(href: str, alt: str = "", title: str | None = None) -> str:
    """Render an <img>, wrapped in a captioned figure when titled."""
    src = escapeHtml(resolve_image_path(href))
    html = f'<img src="{src}" alt="{escapeHtml(alt or "")}"'
    if title:
        html += f' title="{escapeHtml(title)}"'
    html += ' loading="lazy">'

    if title and title.strip():
        html = (
            '<figure class="image-container">\n'
            f"    {html}\n"
            f"    <figcaption>{escapeHtml(title)}</figcaption>\n"
            "</figure>"
        )
    return html
