"""User-facing copy builders for command results and failures."""

from __future__ import annotations

from paper_catalog.errors import CatalogError, LoadError, RenderError, ValidationError


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_actionable_warning(
    message: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable warning message."""
    lines = [_ensure_sentence(message)]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_actionable_success(
    message: str,
    *,
    detail: str | None = None,
    next_step: str | None = None,
) -> str:
    """Build a concise success message with optional detail and next step."""
    lines = [_ensure_sentence(message)]
    if detail:
        lines.append(_ensure_sentence(detail))
    if next_step:
        lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_load_failure_message(error: CatalogError) -> str:
    """Explain a fatal load or validation failure."""
    if isinstance(error, ValidationError):
        return build_actionable_error(
            "load the paper records",
            why=str(error),
            next_step=f"fix field {error.field!r} of record {error.record_id or '<unknown>'!r} "
            "in the source and run again",
        )
    if isinstance(error, LoadError):
        return build_actionable_error(
            "load the paper records",
            why=f"{error.source}: {error.reason}",
            next_step="check that --input points to a readable JSON array of papers",
        )
    return build_actionable_error("load the paper records", why=str(error), next_step="run again")


def build_skipped_records_warning(skipped: list[RenderError]) -> str:
    """Summarise records that were skipped during a build."""
    ids = ", ".join(f"{err.record_id} ({err.field})" for err in skipped)
    return build_actionable_warning(
        f"Skipped {_plural(len(skipped), 'record')}",
        why=f"missing required fields: {ids}",
        next_step="add the missing fields to those records and rebuild",
    )


def build_build_success_message(page_count: int, output_dir: str) -> str:
    """Build the closing line of a successful generation run."""
    return build_actionable_success(
        f"Generated {_plural(page_count, 'paper page')} and the RSS feed",
        detail=f"Output written to {output_dir}",
    )


__all__ = [
    "build_actionable_error",
    "build_actionable_success",
    "build_actionable_warning",
    "build_build_success_message",
    "build_load_failure_message",
    "build_next_step_hint",
    "build_skipped_records_warning",
]
