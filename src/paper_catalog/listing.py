"""Listing view model and its static markup form."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from paper_catalog.escaping import escape_markup, format_tag
from paper_catalog.models import PAPERS_DIRNAME, PaperRecord, SiteConfig
from paper_catalog.pages import render_document

EMPTY_STATE_MESSAGE = "No papers match your filters. Try adjusting your search."


@dataclass(frozen=True, slots=True)
class ListingCard:
    """Card payload for one record; every text field is already escaped."""

    record_id: str
    title: str
    year: int
    authors: str
    publication: str
    summary: str
    tags: tuple[str, ...]
    methodology: str
    detail_href: str
    source_url: str | None = None
    featured: bool = False


@dataclass(frozen=True, slots=True)
class ListingView:
    """Summary line plus cards, or the empty-result state."""

    summary: str
    cards: tuple[ListingCard, ...]
    shown: int
    total: int

    @property
    def empty(self) -> bool:
        return self.shown == 0


def format_results_summary(shown: int, total: int) -> str:
    """Human-readable count line for the listing."""
    if shown == total:
        return f"Showing all {total} papers"
    return f"Showing {shown} of {total} papers"


def detail_href(record_id: str) -> str:
    """Relative link from the listing to a record's detail page."""
    return f"{PAPERS_DIRNAME}/{record_id}.html"


def build_card(
    record: PaperRecord,
    escape: Callable[[str | None], str] = escape_markup,
) -> ListingCard:
    """Escape each display field of a record exactly once."""
    return ListingCard(
        record_id=record.id,
        title=escape(record.title),
        year=record.year,
        authors=escape(", ".join(record.authors)),
        publication=escape(record.publication),
        summary=escape(record.summary),
        tags=tuple(escape(format_tag(tag)) for tag in record.tags),
        methodology=escape(record.methodology),
        detail_href=escape(detail_href(record.id)),
        source_url=escape(record.url) if record.url else None,
        featured=record.featured,
    )


def render_listing(
    filtered: Sequence[PaperRecord],
    total: int,
    escape: Callable[[str | None], str] = escape_markup,
) -> ListingView:
    """Compute the listing view for a filtered subset of ``total`` records.

    Args:
        filtered: Matching records, already in display order.
        total: Size of the full store.
        escape: Escaper applied to every user-sourced field.
    """
    shown = len(filtered)
    cards = tuple(build_card(record, escape) for record in filtered)
    return ListingView(
        summary=format_results_summary(shown, total),
        cards=cards,
        shown=shown,
        total=total,
    )


def _render_card_html(card: ListingCard) -> str:
    css_class = "paper-card featured" if card.featured else "paper-card"
    chips = "".join(f'<span class="tag">{tag}</span>' for tag in card.tags)
    source_link = (
        f'<a href="{card.source_url}" target="_blank" rel="noopener" class="paper-link">'
        "Original Source ↗</a>"
        if card.source_url
        else ""
    )
    return f"""    <article class="{css_class}">
      <div class="paper-header">
        <h2 class="paper-title">
          <a href="{card.detail_href}">{card.title}</a>
        </h2>
        <span class="paper-year">{card.year}</span>
      </div>
      <p class="paper-authors">{card.authors}</p>
      <p class="paper-publication">{card.publication}</p>
      <p class="paper-summary">{card.summary}</p>
      <div class="paper-tags">
        {chips}<span class="tag tag-methodology">{card.methodology}</span>
      </div>
      <div class="paper-links">
        <a href="{card.detail_href}" class="paper-link">View Details →</a>
        {source_link}
      </div>
    </article>"""


def render_listing_html(view: ListingView) -> str:
    """Render a markup-escaped ListingView as the results block of a page."""
    lines = [f'<p class="results-info" id="resultsInfo">{view.summary}</p>']
    if view.empty:
        lines.append(f'<div class="empty-state" id="emptyState"><p>{EMPTY_STATE_MESSAGE}</p></div>')
    else:
        lines.append('<div class="paper-list" id="paperList">')
        lines.extend(_render_card_html(card) for card in view.cards)
        lines.append("</div>")
    return "\n".join(lines)


def render_index_page(view: ListingView, config: SiteConfig) -> str:
    """Render the static listing snapshot written as the site's index page."""
    description = escape_markup(config.feed_description)
    return render_document(
        title="Papers",
        description=description,
        body=render_listing_html(view),
        config=config,
    )


__all__ = [
    "EMPTY_STATE_MESSAGE",
    "ListingCard",
    "ListingView",
    "build_card",
    "detail_href",
    "format_results_summary",
    "render_index_page",
    "render_listing",
    "render_listing_html",
]
