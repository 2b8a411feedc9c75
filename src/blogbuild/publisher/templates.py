"""HTML page template for generated posts.

The page shell is plain string formatting; the article block is a Jinja2
template with autoescape on, and the rendered markdown body is passed in
as already-safe HTML.
"""

from __future__ import annotations

from datetime import date, datetime

from jinja2 import BaseLoader, Environment, select_autoescape
from markupsafe import Markup

from ..config import (
    DEFAULT_AUTHOR,
    DEFAULT_CATEGORY,
    DEFAULT_READ_TIME,
    DEFAULT_TITLE,
    SITE_AUTHOR,
    SITE_NAME,
    SOCIAL_LINKS,
)
from ..models import FrontMatter


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _social_nav() -> str:
    links = []
    for label, url in SOCIAL_LINKS:
        links.append(
            f'<a href="{url}" target="_blank" rel="noopener noreferrer" class="social-link">\n'
            f'                        <span class="sr-only">{label}</span>\n'
            f"                        {label}\n"
            f"                    </a>"
        )
    return "\n                    ".join(links)


def _base_wrapper(
    title: str,
    description: str,
    author: str,
    year: int,
    content: str,
) -> str:
    """Wrap the article in the site shell: head, header, footer, theme scripts."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{_escape_html(title)} | {SITE_AUTHOR}</title>
    <meta name="description" content="{_escape_html(description)}">
    <meta name="author" content="{_escape_html(author)}">

    <!-- Stylesheets -->
    <link rel="stylesheet" href="../src/style.css">
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&family=JetBrains+Mono:ital,wght@0,400;0,500;0,600;1,400;1,500;1,600&display=swap" rel="stylesheet">

    <!-- Favicon -->
    <link rel="icon" type="image/x-icon" href="../src/assets/prashish.png">

    <!-- Theme Script -->
    <script>
        (function() {{
            const savedTheme = localStorage.getItem('theme') || 'light';
            document.documentElement.setAttribute('data-theme', savedTheme);
        }})();
    </script>
</head>
<body>
    <div class="container">
        <div id="theme-toggle" class="theme-toggle" aria-label="Toggle theme">
            <button type="button" class="theme-toggle-btn" aria-label="Toggle dark/light mode">
                <svg class="sun-icon" xmlns="http://www.w3.org/2000/svg" fill="none" viewBox="0 0 24 24" stroke="currentColor">
                    <path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="M12 3v1m0 16v1m9-9h-1M4 12H3m15.364 6.364l-.707-.707M6.343 6.343l-.707-.707m12.728 0l-.707.707M6.343 17.657l-.707.707M16 12a4 4 0 11-8 0 4 4 0 018 0z" />
                </svg>
                <svg class="moon-icon" xmlns="http://www.w3.org/2000/svg" fill="none" viewBox="0 0 24 24" stroke="currentColor">
                    <path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="M20.354 15.354A9 9 0 018.646 3.646 9.003 9.003 0 0012 21a9.003 9.003 0 008.354-5.646z" />
                </svg>
            </button>
        </div>

        <header class="header">
            <div class="header-content">
                <h1 class="site-title">
                    <a href="/" class="site-title-link">{SITE_NAME}</a>
                </h1>
                <nav class="social-nav">
                    {_social_nav()}
                </nav>
            </div>
        </header>

        <main class="main">
            {content}
        </main>

        <footer class="footer">
            <p>&copy; {year} {SITE_NAME}</p>
        </footer>
    </div>

    <script>
        const themeToggle = document.getElementById('theme-toggle');

        themeToggle.addEventListener('click', () => {{
            const currentTheme = document.documentElement.getAttribute('data-theme');
            const newTheme = currentTheme === 'dark' ? 'light' : 'dark';

            document.documentElement.setAttribute('data-theme', newTheme);
            localStorage.setItem('theme', newTheme);
        }});
    </script>
</body>
</html>
"""


# Article block: category badge, date, title, body, tags
POST_TEMPLATE = """<article class="post-article">
                <div class="post-header">
                    <div class="post-meta">
                        <span class="post-category-tag">{{ category }}</span>
                        <time class="post-date" datetime="{{ date }}">{{ display_date }}</time>
                    </div>
                    <h1 class="post-title">{{ title }}</h1>
                    <div class="post-info">
                        <span class="read-time">{{ read_time }}</span>
                    </div>
                </div>

                <div class="post-content">
                    {{ html_content }}
                </div>

                <div class="post-footer">
                    <div class="post-tags">
                        {%- if tags %}
                        <ul class="tag-list">
                            {%- for tag in tags %}
                            <li><span class="tag">{{ tag }}</span></li>
                            {%- endfor %}
                        </ul>
                        {%- endif %}
                    </div>
                    <div class="post-navigation">
                        <a href="../index.html" class="nav-link">&larr; Back to Posts</a>
                    </div>
                </div>
            </article>"""


def _get_env() -> Environment:
    """Create Jinja2 environment with autoescape enabled."""
    return Environment(
        loader=BaseLoader(),
        autoescape=select_autoescape(default=True, default_for_string=True),
    )


def format_long_date(value: str) -> str:
    """Format an ISO-like date as "May 1, 2024".

    Values that do not parse are returned unchanged.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        try:
            parsed = datetime.fromisoformat(value.strip()[:10])
        except ValueError:
            return value
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def render_post_page(front_matter: FrontMatter, html_content: str, today: date) -> str:
    """Render a complete post page.

    Args:
        front_matter: Parsed header of the post.
        html_content: Rendered markdown body.
        today: Used for the copyright year and as the date of undated posts.

    Returns:
        Complete HTML page string.
    """
    title = front_matter.text("title", DEFAULT_TITLE)
    post_date = front_matter.text("date", today.isoformat())

    tmpl = _get_env().from_string(POST_TEMPLATE)
    content = tmpl.render(
        title=title,
        date=post_date,
        display_date=format_long_date(post_date),
        category=front_matter.text("category", DEFAULT_CATEGORY),
        read_time=front_matter.text("readTime", DEFAULT_READ_TIME),
        tags=front_matter.items("tags"),
        # Already HTML, must not be escaped again
        html_content=Markup(html_content),
    )

    return _base_wrapper(
        title=title,
        description=front_matter.text("description"),
        author=front_matter.text("author", DEFAULT_AUTHOR),
        year=today.year,
        content=content,
    )
