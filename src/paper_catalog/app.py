"""Paper Catalog TUI - browse, search, and filter a catalog of research papers.

Key bindings:
    /       - Focus the search box
    o       - Open the highlighted paper's original source
    escape  - Clear the search and every filter
    q       - Quit

The search box is debounced; the year, methodology, and tag selectors apply
immediately.
"""

from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable, Sequence

from textual import on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.timer import Timer
from textual.widgets import Footer, Header, Input, Label, OptionList, Select, Static
from textual.widgets.option_list import Option

from paper_catalog.detail import format_citation_authors, format_date_added
from paper_catalog.escaping import escape_rich_text, format_tag
from paper_catalog.listing import EMPTY_STATE_MESSAGE, ListingCard, render_listing
from paper_catalog.models import PaperRecord, QueryState
from paper_catalog.query import filter_records, query_from_selection
from paper_catalog.store import RecordStore
from paper_catalog.ui_constants import APP_BINDINGS, APP_CSS, SEARCH_DEBOUNCE_DELAY

logger = logging.getLogger(__name__)


def facet_options(
    values: Sequence[int | str], *, word_space: bool = False
) -> list[tuple[str, str]]:
    """Build (label, value) pairs for a filter selector."""
    options: list[tuple[str, str]] = []
    for value in values:
        text = str(value)
        options.append((format_tag(text) if word_space else text, text))
    return options


def render_card_prompt(card: ListingCard) -> str:
    """Render a Rich-escaped listing card as an option-list prompt."""
    star = "[yellow]★[/] " if card.featured else ""
    chips = " ".join(f"[reverse] {tag} [/]" for tag in card.tags)
    methodology = f"[green]{card.methodology}[/]" if card.methodology else ""
    chip_line = " ".join(part for part in (chips, methodology) if part)
    lines = [
        f"{star}[bold]{card.title}[/] [dim]({card.year})[/]",
        card.authors,
    ]
    if card.publication:
        lines.append(f"[italic]{card.publication}[/]")
    if chip_line:
        lines.append(chip_line)
    return "\n".join(lines)


def render_record_details(record: PaperRecord) -> str:
    """Render the detail pane for one record as Rich markup."""
    lines = [
        f"[bold]{escape_rich_text(record.title)}[/]",
        f"{escape_rich_text(', '.join(record.authors))} • {record.year} • "
        f"{escape_rich_text(record.publication)}",
        "",
        f"[dim]Cite as:[/] {escape_rich_text(format_citation_authors(record.authors))} "
        f"({record.year})",
        f"[dim]Added:[/] {format_date_added(record)}",
        "",
        "[bold]Summary[/]",
        escape_rich_text(record.summary),
        "",
        "[bold]Abstract[/]",
        escape_rich_text(record.abstract),
    ]
    if record.url:
        lines.extend(["", f"[dim]Source:[/] {escape_rich_text(record.url)}"])
    if record.pdf_url:
        lines.append(f"[dim]PDF:[/] {escape_rich_text(record.pdf_url)}")
    return "\n".join(lines)


def _selected_value(select: Select) -> str | None:
    """Return a selector's value, or None while it shows its blank prompt."""
    value = select.value
    return value if isinstance(value, str) else None


class CatalogBrowser(App):
    """Interactive listing over a read-only RecordStore."""

    TITLE = "Paper Catalog"
    CSS = APP_CSS
    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        store: RecordStore,
        *,
        open_url: Callable[[str], object] = webbrowser.open,
    ) -> None:
        super().__init__()
        self._store = store
        self._open_url = open_url
        self._pending_query = ""
        self._search_timer: Timer | None = None
        self._visible_ids: list[str] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="filters"):
            yield Input(placeholder=" Search titles, authors, abstracts, tags", id="search-input")
            with Horizontal(id="selectors"):
                yield Select(
                    facet_options(self._store.years()),
                    prompt="All years",
                    id="year-filter",
                )
                yield Select(
                    facet_options(self._store.methodologies()),
                    prompt="All methodologies",
                    id="methodology-filter",
                )
                yield Select(
                    facet_options(self._store.tags(), word_space=True),
                    prompt="All tags",
                    id="tag-filter",
                )
        yield Label("", id="results-info")
        with Horizontal(id="main-container"):
            yield OptionList(id="paper-list")
            yield Static(EMPTY_STATE_MESSAGE, id="empty-state")
            yield Static("", id="paper-details")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#empty-state", Static).display = False
        self._apply_query(self._current_query())
        self.query_one("#search-input", Input).focus()

    # ------------------------------------------------------------------
    # Query state
    # ------------------------------------------------------------------

    def _current_query(self) -> QueryState:
        """Combine the pending search term with the selector values."""
        return query_from_selection(
            search=self._pending_query,
            year=_selected_value(self.query_one("#year-filter", Select)),
            methodology=_selected_value(self.query_one("#methodology-filter", Select)),
            tag=_selected_value(self.query_one("#tag-filter", Select)),
        )

    def _apply_query(self, query: QueryState) -> None:
        """Filter the store and swap the visible regions to match."""
        records = self._store.records
        filtered = filter_records(records, query)
        view = render_listing(filtered, len(records), escape=escape_rich_text)
        logger.debug("Query %r matched %d of %d", query, view.shown, view.total)

        self.query_one("#results-info", Label).update(view.summary)
        option_list = self.query_one("#paper-list", OptionList)
        empty_state = self.query_one("#empty-state", Static)
        details = self.query_one("#paper-details", Static)

        option_list.clear_options()
        self._visible_ids = [card.record_id for card in view.cards]
        if view.empty:
            option_list.display = False
            empty_state.display = True
            details.update("")
            return

        option_list.display = True
        empty_state.display = False
        option_list.add_options(
            [Option(render_card_prompt(card), id=card.record_id) for card in view.cards]
        )
        option_list.highlighted = 0
        self._show_details(self._visible_ids[0])

    def _show_details(self, record_id: str | None) -> None:
        record = self._store.get(record_id) if record_id else None
        text = render_record_details(record) if record else ""
        self.query_one("#paper-details", Static).update(text)

    def _highlighted_record(self) -> PaperRecord | None:
        option_list = self.query_one("#paper-list", OptionList)
        index = option_list.highlighted
        if index is None or not (0 <= index < len(self._visible_ids)):
            return None
        return self._store.get(self._visible_ids[index])

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        """Handle search input change with debouncing.

        Uses atomic swap pattern to avoid race conditions with timer callbacks.
        """
        self._pending_query = event.value
        old_timer = self._search_timer
        self._search_timer = None
        if old_timer is not None:
            old_timer.stop()
        self._search_timer = self.set_timer(SEARCH_DEBOUNCE_DELAY, self._debounced_filter)

    def _debounced_filter(self) -> None:
        """Apply filter after debounce delay."""
        self._search_timer = None
        self._apply_query(self._current_query())

    @on(Select.Changed)
    def on_selector_changed(self, event: Select.Changed) -> None:
        """Selector changes apply immediately."""
        self._apply_query(self._current_query())

    @on(OptionList.OptionHighlighted, "#paper-list")
    def on_paper_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        self._show_details(event.option.id)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_open_source(self) -> None:
        """Open the highlighted paper's original source in the browser."""
        record = self._highlighted_record()
        if record is None:
            return
        if not record.url:
            self.notify(f"{record.id} has no source link", severity="warning")
            return
        self._open_url(record.url)

    def action_clear_filters(self) -> None:
        """Reset the search box and every selector, then show all papers."""
        old_timer = self._search_timer
        self._search_timer = None
        if old_timer is not None:
            old_timer.stop()
        self._pending_query = ""
        with self.prevent(Input.Changed, Select.Changed):
            self.query_one("#search-input", Input).value = ""
            for selector_id in ("#year-filter", "#methodology-filter", "#tag-filter"):
                self.query_one(selector_id, Select).clear()
        self._apply_query(QueryState())


__all__ = [
    "CatalogBrowser",
    "facet_options",
    "render_card_prompt",
    "render_record_details",
]
