"""Research paper catalog: record store, filtering, and static site rendering."""

from paper_catalog.detail import (
    format_citation,
    format_citation_authors,
    format_date_added,
    render_detail_page,
)
from paper_catalog.errors import CatalogError, LoadError, RenderError, ValidationError
from paper_catalog.escaping import escape_feed_text, escape_markup, format_tag, get_escaper
from paper_catalog.feed import build_permalink, render_feed
from paper_catalog.generate import BuildReport, build_site
from paper_catalog.listing import ListingCard, ListingView, render_listing, render_listing_html
from paper_catalog.models import DEFAULT_FEED_LIMIT, PaperRecord, QueryState, SiteConfig
from paper_catalog.query import filter_records, matches_query
from paper_catalog.store import RecordStore, load_store, parse_record

__all__ = [
    "DEFAULT_FEED_LIMIT",
    "BuildReport",
    "CatalogError",
    "ListingCard",
    "ListingView",
    "LoadError",
    "PaperRecord",
    "QueryState",
    "RecordStore",
    "RenderError",
    "SiteConfig",
    "ValidationError",
    "build_permalink",
    "build_site",
    "escape_feed_text",
    "escape_markup",
    "filter_records",
    "format_citation",
    "format_citation_authors",
    "format_date_added",
    "format_tag",
    "get_escaper",
    "load_store",
    "matches_query",
    "parse_record",
    "render_detail_page",
    "render_feed",
    "render_listing",
    "render_listing_html",
]
