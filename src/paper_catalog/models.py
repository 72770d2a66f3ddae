"""Data models and constants for the paper catalog."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

# Application identity, used for platformdirs config paths
CONFIG_APP_NAME = "paper-catalog"

# Feed constants
DEFAULT_FEED_LIMIT = 20
MAX_FEED_LIMIT = 500

DEFAULT_BASE_URL = "http://localhost:8000/"
DEFAULT_SITE_TITLE = "AI Labor Research"
DEFAULT_FEED_TITLE = "AI & Labor Market Research Database"
DEFAULT_FEED_DESCRIPTION = (
    "A curated collection of economics papers on the labor market impact of AI and automation."
)
DEFAULT_LANGUAGE = "en-us"

# Escaper names accepted by SiteConfig.listing_escaper
ESCAPER_NAMES = ("markup", "feed")

# Record ids double as file names and URL path segments
RECORD_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

# Output layout of a generated site
PAPERS_DIRNAME = "papers"
FEED_FILENAME = "feed.xml"
INDEX_FILENAME = "index.html"


@dataclass(frozen=True, slots=True)
class PaperRecord:
    """One cataloged paper entry, immutable once loaded."""

    id: str
    title: str
    authors: tuple[str, ...]
    year: int
    publication: str = ""
    summary: str = ""
    abstract: str = ""
    tags: tuple[str, ...] = ()
    methodology: str = ""
    date_added: str = ""  # verbatim ISO 8601 value from the source
    date_added_at: datetime | None = None  # UTC; None when unparsable
    url: str | None = None
    pdf_url: str | None = None
    featured: bool = False


@dataclass(frozen=True, slots=True)
class QueryState:
    """Current search term plus the selected discrete filters.

    ``None`` or an empty string means "no constraint" for every field.
    """

    search: str = ""
    year: str | int | None = None
    methodology: str | None = None
    tag: str | None = None


@dataclass(slots=True)
class SiteConfig:
    """Externally tunable settings for generation and listing."""

    base_url: str = DEFAULT_BASE_URL
    feed_limit: int = DEFAULT_FEED_LIMIT
    site_title: str = DEFAULT_SITE_TITLE
    feed_title: str = DEFAULT_FEED_TITLE
    feed_description: str = DEFAULT_FEED_DESCRIPTION
    language: str = DEFAULT_LANGUAGE
    listing_escaper: str = "markup"  # "markup" | "feed"
    version: int = 1

    def __post_init__(self) -> None:
        """Clamp feed_limit to the supported range."""
        if self.feed_limit < 1 or self.feed_limit > MAX_FEED_LIMIT:
            self.feed_limit = max(1, min(self.feed_limit, MAX_FEED_LIMIT))


__all__ = [
    "CONFIG_APP_NAME",
    "DEFAULT_BASE_URL",
    "DEFAULT_FEED_DESCRIPTION",
    "DEFAULT_FEED_LIMIT",
    "DEFAULT_FEED_TITLE",
    "DEFAULT_LANGUAGE",
    "DEFAULT_SITE_TITLE",
    "ESCAPER_NAMES",
    "FEED_FILENAME",
    "INDEX_FILENAME",
    "MAX_FEED_LIMIT",
    "PAPERS_DIRNAME",
    "RECORD_ID_PATTERN",
    "PaperRecord",
    "QueryState",
    "SiteConfig",
]
