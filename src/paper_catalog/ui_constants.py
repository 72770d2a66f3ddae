"""Internal UI constants for the CatalogBrowser app."""

from __future__ import annotations

from textual.binding import Binding, BindingType

# Search debounce delay in seconds
SEARCH_DEBOUNCE_DELAY = 0.3

APP_CSS = """
#filters {
    height: auto;
    padding: 0 1;
}

#search-input {
    margin-bottom: 1;
}

#selectors {
    height: auto;
}

#selectors Select {
    width: 1fr;
}

#results-info {
    padding: 0 1;
    color: $accent;
    text-style: bold;
}

#main-container {
    height: 1fr;
}

#paper-list {
    width: 3fr;
    height: 100%;
}

#empty-state {
    width: 3fr;
    height: 100%;
    content-align: center middle;
    color: $text-muted;
}

#paper-details {
    width: 2fr;
    height: 100%;
    padding: 0 1;
    border-left: tall $primary;
}
"""

APP_BINDINGS: list[BindingType] = [
    Binding("slash", "focus_search", "Search"),
    Binding("o", "open_source", "Open source"),
    Binding("escape", "clear_filters", "Clear filters"),
    Binding("q", "quit", "Quit"),
]


__all__ = ["APP_BINDINGS", "APP_CSS", "SEARCH_DEBOUNCE_DELAY"]
