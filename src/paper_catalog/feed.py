"""RSS 2.0 feed rendering for the most recent records."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from email.utils import format_datetime

from paper_catalog.escaping import escape_feed_text
from paper_catalog.models import FEED_FILENAME, PAPERS_DIRNAME, PaperRecord, SiteConfig
from paper_catalog.store import sort_by_date_added


def build_permalink(base_url: str, record_id: str) -> str:
    """Stable absolute URL of a record's detail page (also its GUID)."""
    return f"{base_url.rstrip('/')}/{PAPERS_DIRNAME}/{record_id}.html"


def format_rfc2822(moment: datetime) -> str:
    """Format a timestamp like ``Mon, 15 Jan 2024 00:00:00 GMT``."""
    return format_datetime(moment.astimezone(UTC), usegmt=True)


def select_recent(records: Iterable[PaperRecord], limit: int) -> list[PaperRecord]:
    """The ``limit`` newest records; ties keep input order."""
    return sort_by_date_added(records)[: max(0, limit)]


def _render_item(record: PaperRecord, base_url: str) -> str:
    permalink = escape_feed_text(build_permalink(base_url, record.id))
    lines = [
        "    <item>",
        f"      <title>{escape_feed_text(record.title)}</title>",
        f"      <link>{permalink}</link>",
        f"      <description>{escape_feed_text(record.summary)}</description>",
        f"      <author>{escape_feed_text(', '.join(record.authors))}</author>",
    ]
    if record.date_added_at is not None:
        lines.append(f"      <pubDate>{format_rfc2822(record.date_added_at)}</pubDate>")
    lines.append(f'      <guid isPermaLink="true">{permalink}</guid>')
    lines.append("    </item>")
    return "\n".join(lines)


def render_feed(records: Iterable[PaperRecord], config: SiteConfig | None = None) -> str:
    """Render the syndication feed for the newest ``config.feed_limit`` records.

    An empty record set still yields a valid channel with zero items.
    ``lastBuildDate`` is the newest parsed ``dateAdded`` so that identical
    input always produces identical output.
    """
    config = config or SiteConfig()
    recent = select_recent(records, config.feed_limit)
    base_url = config.base_url.rstrip("/") + "/"

    channel = [
        f"    <title>{escape_feed_text(config.feed_title)}</title>",
        f"    <link>{escape_feed_text(base_url)}</link>",
        f"    <description>{escape_feed_text(config.feed_description)}</description>",
        f"    <language>{escape_feed_text(config.language)}</language>",
    ]
    newest = next((r.date_added_at for r in recent if r.date_added_at is not None), None)
    if newest is not None:
        channel.append(f"    <lastBuildDate>{format_rfc2822(newest)}</lastBuildDate>")
    self_link = escape_feed_text(f"{base_url}{FEED_FILENAME}")
    channel.append(
        f'    <atom:link href="{self_link}" rel="self" type="application/rss+xml"/>'
    )
    channel.extend(_render_item(record, base_url) for record in recent)

    body = "\n".join(channel)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
{body}
  </channel>
</rss>
"""


__all__ = [
    "build_permalink",
    "format_rfc2822",
    "render_feed",
    "select_recent",
]
