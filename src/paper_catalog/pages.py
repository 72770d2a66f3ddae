"""Shared document shell (head, navigation chrome, footer) for generated pages."""

from __future__ import annotations

from paper_catalog.escaping import escape_markup
from paper_catalog.models import FEED_FILENAME, INDEX_FILENAME, SiteConfig


def render_document(
    *,
    title: str,
    description: str,
    body: str,
    config: SiteConfig,
    root: str = "",
    main_class: str = "",
) -> str:
    """Wrap an already-escaped body fragment in the site's page chrome.

    Args:
        title: Escaped page title (the site title is appended).
        description: Escaped meta description.
        body: Escaped inner markup of ``<main>``.
        config: Site settings for titles.
        root: Relative prefix back to the site root, e.g. ``"../"``.
        main_class: Optional CSS class for ``<main>``.
    """
    site_title = escape_markup(config.site_title)
    main_open = f'<main class="{main_class}">' if main_class else "<main>"
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title} - {site_title}</title>
  <meta name="description" content="{description}">
  <link rel="stylesheet" href="{root}css/styles.css">
  <link rel="alternate" type="application/rss+xml" title="{site_title}" href="{root}{FEED_FILENAME}">
</head>
<body>
  <header>
    <div class="container">
      <a href="{root}{INDEX_FILENAME}" class="logo">{site_title}</a>
      <nav>
        <a href="{root}{INDEX_FILENAME}">Papers</a>
        <a href="{root}about.html">About</a>
        <a href="{root}{FEED_FILENAME}">Feed</a>
      </nav>
    </div>
  </header>

  {main_open}
    <div class="container">
{body}
    </div>
  </main>

  <footer>
    <div class="container">
      <p>&copy; {site_title}. Built for researchers and policymakers.</p>
    </div>
  </footer>
</body>
</html>
"""


__all__ = ["render_document"]
