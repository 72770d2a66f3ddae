"""Context-aware text escaping for markup pages, feeds, and the terminal."""

from __future__ import annotations

from collections.abc import Callable

from rich.markup import escape as _escape_rich

# Each table is applied in order; "&" must come first so entities aren't re-escaped
_MARKUP_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)
_FEED_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def _replace_all(text: str | None, replacements: tuple[tuple[str, str], ...]) -> str:
    if not text:
        return ""
    for old, new in replacements:
        text = text.replace(old, new)
    return text


def escape_markup(text: str | None) -> str:
    """Escape text for HTML bodies and attribute values."""
    return _replace_all(text, _MARKUP_REPLACEMENTS)


def escape_feed_text(text: str | None) -> str:
    """Escape text for strict XML feed content (apostrophe as ``&apos;``)."""
    return _replace_all(text, _FEED_REPLACEMENTS)


def escape_rich_text(text: str | None) -> str:
    """Escape text for safe Rich markup rendering."""
    return _escape_rich(text) if text else ""


def format_tag(tag: str) -> str:
    """Display form of a tag token: ``policy-response`` -> ``policy response``."""
    return tag.replace("-", " ")


ESCAPERS: dict[str, Callable[[str | None], str]] = {
    "markup": escape_markup,
    "feed": escape_feed_text,
}


def get_escaper(name: str) -> Callable[[str | None], str]:
    """Look up a named escaper.

    Raises:
        ValueError: If ``name`` is not a registered escaper.
    """
    try:
        return ESCAPERS[name]
    except KeyError:
        raise ValueError(f"Unknown escaper {name!r}; expected one of {sorted(ESCAPERS)}") from None


__all__ = [
    "ESCAPERS",
    "escape_feed_text",
    "escape_markup",
    "escape_rich_text",
    "format_tag",
    "get_escaper",
]
