"""Exception hierarchy for loading, validating, and rendering records."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every error raised by the catalog pipeline."""


class LoadError(CatalogError):
    """The record source could not be read or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load records from {source}: {reason}")


class ValidationError(CatalogError):
    """A record violates the schema or the store's uniqueness guarantees."""

    def __init__(self, record_id: str | None, field: str, reason: str) -> None:
        self.record_id = record_id
        self.field = field
        self.reason = reason
        label = record_id if record_id else "<unknown>"
        super().__init__(f"Invalid record {label!r} (field {field!r}): {reason}")


class RenderError(CatalogError):
    """A single record is missing a field required for rendering."""

    def __init__(
        self, record_id: str, field: str, reason: str = "required field is missing"
    ) -> None:
        self.record_id = record_id
        self.field = field
        self.reason = reason
        super().__init__(f"Cannot render record {record_id!r} (field {field!r}): {reason}")


__all__ = [
    "CatalogError",
    "LoadError",
    "RenderError",
    "ValidationError",
]
