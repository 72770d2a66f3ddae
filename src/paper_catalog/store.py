"""Record loading, validation, ordering, and facet derivation."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import httpx

from paper_catalog.errors import LoadError, ValidationError
from paper_catalog.models import RECORD_ID_PATTERN, PaperRecord

logger = logging.getLogger(__name__)

SOURCE_FETCH_TIMEOUT = 30
SOURCE_USER_AGENT = "paper-catalog/1.0"

# Sort key used for records whose dateAdded could not be parsed
_UNPARSED_SORT_KEY = (False, datetime.min.replace(tzinfo=UTC))

# Characters outside the XML 1.0 Char production; they would break the feed
_XML_ILLEGAL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


# ============================================================================
# Timestamp Parsing & Ordering
# ============================================================================


def parse_date_added(raw: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp, normalised to UTC.

    Date-only values (``2024-01-15``) are treated as midnight UTC, as are
    timestamps without an offset.

    Returns:
        The parsed datetime, or None for empty or malformed values.
    """
    if not raw or not raw.strip():
        return None
    # Older Pythons reject a trailing Z in fromisoformat
    value = raw.strip().replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _date_sort_key(record: PaperRecord) -> tuple[bool, datetime]:
    if record.date_added_at is None:
        return _UNPARSED_SORT_KEY
    return (True, record.date_added_at)


def sort_by_date_added(records: Iterable[PaperRecord]) -> list[PaperRecord]:
    """Return records newest first; unparsable dates sort last.

    The sort is stable, so records sharing a timestamp (or both lacking one)
    keep their input order.
    """
    return sorted(records, key=_date_sort_key, reverse=True)


# ============================================================================
# Record Validation
# ============================================================================


def _check_xml_text(value: str, key: str, record_id: str | None) -> str:
    match = _XML_ILLEGAL_CHARS.search(value)
    if match:
        raise ValidationError(
            record_id, key, f"character U+{ord(match.group()):04X} is not allowed in XML"
        )
    return value


def _require_str(raw: dict[str, Any], key: str, record_id: str | None) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(record_id, key, "expected a non-empty string")
    return _check_xml_text(value, key, record_id)


def _optional_str(raw: dict[str, Any], key: str, record_id: str | None) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(record_id, key, "expected a string")
    return _check_xml_text(value, key, record_id)


def _optional_link(raw: dict[str, Any], key: str, record_id: str | None) -> str | None:
    value = _optional_str(raw, key, record_id).strip()
    return value or None


def _parse_authors(raw: dict[str, Any], record_id: str) -> tuple[str, ...]:
    value = raw.get("authors")
    if not isinstance(value, list) or not value:
        raise ValidationError(record_id, "authors", "expected a non-empty list of names")
    if not all(isinstance(a, str) and a.strip() for a in value):
        raise ValidationError(record_id, "authors", "every author must be a non-empty string")
    for author in value:
        _check_xml_text(author, "authors", record_id)
    return tuple(value)


def _parse_tags(raw: dict[str, Any], record_id: str) -> tuple[str, ...]:
    value = raw.get("tags", [])
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValidationError(record_id, "tags", "expected a list of strings")
    for tag in value:
        if not isinstance(tag, str) or not tag:
            raise ValidationError(record_id, "tags", "every tag must be a non-empty string")
        if tag != tag.strip():
            raise ValidationError(record_id, "tags", f"tag {tag!r} has surrounding whitespace")
        _check_xml_text(tag, "tags", record_id)
    return tuple(value)


def _parse_year(raw: dict[str, Any], record_id: str) -> int:
    value = raw.get("year")
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(record_id, "year", "expected an integer")
    return value


def parse_record(raw: Any) -> PaperRecord:
    """Validate one source object and build a PaperRecord.

    Raises:
        ValidationError: If a required field is missing or has the wrong shape.
    """
    if not isinstance(raw, dict):
        raise ValidationError(None, "<record>", "expected an object")

    record_id = raw.get("id")
    if not isinstance(record_id, str) or not RECORD_ID_PATTERN.fullmatch(record_id):
        raise ValidationError(
            record_id if isinstance(record_id, str) else None,
            "id",
            "expected a URL-safe slug",
        )

    date_added = _optional_str(raw, "dateAdded", record_id)
    date_added_at = parse_date_added(date_added)
    if date_added_at is None:
        logger.warning(
            "Record %s has unparsable dateAdded %r; sorting it last", record_id, date_added
        )

    featured = raw.get("featured", False)
    if not isinstance(featured, bool):
        raise ValidationError(record_id, "featured", "expected a boolean")

    return PaperRecord(
        id=record_id,
        title=_require_str(raw, "title", record_id),
        authors=_parse_authors(raw, record_id),
        year=_parse_year(raw, record_id),
        publication=_optional_str(raw, "publication", record_id),
        summary=_optional_str(raw, "summary", record_id),
        abstract=_optional_str(raw, "abstract", record_id),
        tags=_parse_tags(raw, record_id),
        methodology=_optional_str(raw, "methodology", record_id),
        date_added=date_added,
        date_added_at=date_added_at,
        url=_optional_link(raw, "url", record_id),
        pdf_url=_optional_link(raw, "pdfUrl", record_id),
        featured=featured,
    )


# ============================================================================
# Record Store
# ============================================================================


def _distinct_casefolded(values: Iterable[str]) -> list[str]:
    """Sort ascending case-insensitively, collapsing case-only duplicates."""
    result: list[str] = []
    seen: set[str] = set()
    for value in sorted(values, key=lambda v: (v.casefold(), v)):
        key = value.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
    return result


@dataclass(frozen=True, slots=True)
class RecordStore:
    """Read-only, date-ordered collection of paper records."""

    records: tuple[PaperRecord, ...]

    @classmethod
    def from_records(cls, records: Iterable[PaperRecord]) -> RecordStore:
        """Build a store, rejecting duplicate ids.

        Raises:
            ValidationError: If two records share an id.
        """
        items = list(records)
        seen: set[str] = set()
        for record in items:
            if record.id in seen:
                raise ValidationError(record.id, "id", "duplicate id")
            seen.add(record.id)
        return cls(records=tuple(sort_by_date_added(items)))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PaperRecord]:
        return iter(self.records)

    def get(self, record_id: str) -> PaperRecord | None:
        """Return the record with the given id, if any."""
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def years(self) -> list[int]:
        """Distinct publication years, newest first."""
        return sorted({record.year for record in self.records}, reverse=True)

    def tags(self) -> list[str]:
        """Distinct tags, ascending and case-insensitive."""
        return _distinct_casefolded(tag for record in self.records for tag in record.tags)

    def methodologies(self) -> list[str]:
        """Distinct non-empty methodologies, ascending and case-insensitive."""
        return _distinct_casefolded(r.methodology for r in self.records if r.methodology)


# ============================================================================
# Source Loading
# ============================================================================


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_source_text(source: str) -> str:
    """Read raw JSON text from a local path or an HTTP(S) URL."""
    if _is_url(source):
        try:
            response = httpx.get(
                source,
                headers={"User-Agent": SOURCE_USER_AGENT},
                timeout=SOURCE_FETCH_TIMEOUT,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise LoadError(source, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise LoadError(source, str(exc) or type(exc).__name__) from exc
        return response.text

    path = Path(source)
    if path.is_dir():
        raise LoadError(source, "is a directory, not a file")
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise LoadError(source, "file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(source, str(exc)) from exc


def parse_records_payload(payload: Any, source: str = "<memory>") -> list[PaperRecord]:
    """Validate a decoded JSON payload into records.

    Raises:
        LoadError: If the payload is not a list.
        ValidationError: If any record is malformed.
    """
    if not isinstance(payload, list):
        raise LoadError(source, "expected a JSON array of paper records")
    return [parse_record(item) for item in payload]


def load_store(source: str | Path) -> RecordStore:
    """Load, validate, and sort the complete record set from one source.

    Raises:
        LoadError: If the source cannot be read or is not valid JSON.
        ValidationError: If a record is malformed or ids collide.
    """
    source_str = str(source)
    text = _read_source_text(source_str)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LoadError(source_str, f"invalid JSON: {exc}") from exc

    records = parse_records_payload(payload, source_str)
    store = RecordStore.from_records(records)
    logger.info("Loaded %d records from %s", len(store), source_str)
    return store


__all__ = [
    "SOURCE_FETCH_TIMEOUT",
    "RecordStore",
    "load_store",
    "parse_date_added",
    "parse_record",
    "parse_records_payload",
    "sort_by_date_added",
]
