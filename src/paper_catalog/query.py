"""Search and filter matching over paper records."""

from __future__ import annotations

from collections.abc import Iterable

from paper_catalog.models import PaperRecord, QueryState


def _is_unset(value: object) -> bool:
    """True when a filter value means "no constraint"."""
    return value is None or (isinstance(value, str) and not value.strip())


def _optional(value: str | None) -> str | None:
    return None if _is_unset(value) else value


def query_from_selection(
    search: str = "",
    year: str | None = None,
    methodology: str | None = None,
    tag: str | None = None,
) -> QueryState:
    """Build a QueryState from raw selector values, mapping blanks to None."""
    return QueryState(
        search=search or "",
        year=_optional(year),
        methodology=_optional(methodology),
        tag=_optional(tag),
    )


def matches_search(record: PaperRecord, term: str) -> bool:
    """Check a lowercased search term against title, authors, summary, abstract, tags.

    Args:
        record: The record to match against.
        term: Trimmed, lowercased search term. Empty matches everything.
    """
    if not term:
        return True
    if term in record.title.lower():
        return True
    if any(term in author.lower() for author in record.authors):
        return True
    if term in record.summary.lower() or term in record.abstract.lower():
        return True
    return any(term in tag.lower() for tag in record.tags)


def matches_query(record: PaperRecord, query: QueryState) -> bool:
    """Evaluate every constraint in ``query`` against one record (logical AND)."""
    if not matches_search(record, (query.search or "").strip().lower()):
        return False
    if not _is_unset(query.year) and str(record.year) != str(query.year).strip():
        return False
    if not _is_unset(query.methodology):
        if record.methodology.casefold() != str(query.methodology).strip().casefold():
            return False
    if not _is_unset(query.tag):
        wanted = str(query.tag).strip().casefold()
        if not any(tag.casefold() == wanted for tag in record.tags):
            return False
    return True


def filter_records(records: Iterable[PaperRecord], query: QueryState) -> list[PaperRecord]:
    """Return the records matching ``query``, preserving input order.

    Filtering never re-sorts and never ranks; the result keeps the store's
    newest-first ordering.
    """
    return [record for record in records if matches_query(record, query)]


__all__ = [
    "filter_records",
    "matches_query",
    "matches_search",
    "query_from_selection",
]
