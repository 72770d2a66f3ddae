"""Per-record detail page rendering and citation formatting."""

from __future__ import annotations

from collections.abc import Sequence

from paper_catalog.errors import RenderError
from paper_catalog.escaping import escape_markup, format_tag
from paper_catalog.models import PaperRecord, SiteConfig
from paper_catalog.pages import render_document

META_DESCRIPTION_MAX_LEN = 160
UNKNOWN_DATE_LABEL = "Unknown"

# Locale-independent month names so output never depends on the host locale
_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


# ============================================================================
# Citation & Date Formatting
# ============================================================================


def format_citation_authors(authors: Sequence[str]) -> str:
    """Citation stem: ``A``, ``A & B``, or ``A et al.``."""
    if not authors:
        return ""
    if len(authors) == 1:
        return authors[0]
    if len(authors) == 2:
        return f"{authors[0]} & {authors[1]}"
    return f"{authors[0]} et al."


def format_citation(record: PaperRecord) -> str:
    """Format ``Citation (Year). Title. Publication.`` as escaped markup."""
    stem = escape_markup(format_citation_authors(record.authors))
    title = escape_markup(record.title)
    publication = escape_markup(record.publication)
    return f"{stem} ({record.year}). {title}. <em>{publication}</em>."


def format_date_added(record: PaperRecord) -> str:
    """Human-readable date added, e.g. ``January 15, 2024``."""
    moment = record.date_added_at
    if moment is None:
        return UNKNOWN_DATE_LABEL
    return f"{_MONTH_NAMES[moment.month - 1]} {moment.day}, {moment.year}"


# ============================================================================
# Detail Page
# ============================================================================


def _render_chips(record: PaperRecord) -> str:
    chips = [f'<span class="tag">{escape_markup(format_tag(tag))}</span>' for tag in record.tags]
    chips.append(f'<span class="tag tag-methodology">{escape_markup(record.methodology)}</span>')
    return "\n          ".join(chips)


def _render_pdf_link(record: PaperRecord) -> str:
    if not record.pdf_url:
        return ""
    return (
        f'<a href="{escape_markup(record.pdf_url)}" target="_blank" rel="noopener" '
        'class="btn btn-outline">Download PDF</a>'
    )


def render_detail_page(record: PaperRecord, config: SiteConfig | None = None) -> str:
    """Render a complete, self-contained detail document for one record.

    Every document has the same structure; only escaped content varies.

    Raises:
        RenderError: If the record has no ``url`` (a detail page needs a source link).
    """
    if not record.url:
        raise RenderError(record.id, "url")
    config = config or SiteConfig()

    title = escape_markup(record.title)
    body = f"""      <a href="../index.html" class="back-link">← Back to all papers</a>

      <div class="paper-detail-header">
        <h1 class="paper-detail-title">{title}</h1>
        <div class="paper-detail-meta">
          <span>{escape_markup(", ".join(record.authors))}</span>
          <span>•</span>
          <span>{record.year}</span>
          <span>•</span>
          <span>{escape_markup(record.publication)}</span>
        </div>
        <div class="paper-tags">
          {_render_chips(record)}
        </div>
      </div>

      <div class="paper-detail-content">
        <div class="paper-detail-main">
          <section>
            <h2>Summary</h2>
            <p>{escape_markup(record.summary)}</p>
          </section>

          <section>
            <h2>Abstract</h2>
            <p>{escape_markup(record.abstract)}</p>
          </section>
        </div>

        <div class="paper-detail-sidebar">
          <h3>Access Paper</h3>
          <a href="{escape_markup(record.url)}" target="_blank" rel="noopener" class="btn">View Original →</a>
          {_render_pdf_link(record)}

          <div class="sidebar-section">
            <h3>Cite This Paper</h3>
            <p class="citation">
              {format_citation(record)}
            </p>
          </div>

          <div class="sidebar-section">
            <h3>Added to Database</h3>
            <p class="date-added">{format_date_added(record)}</p>
          </div>
        </div>
      </div>"""

    return render_document(
        title=title,
        description=escape_markup(record.summary[:META_DESCRIPTION_MAX_LEN]),
        body=body,
        config=config,
        root="../",
        main_class="paper-detail",
    )


__all__ = [
    "META_DESCRIPTION_MAX_LEN",
    "UNKNOWN_DATE_LABEL",
    "format_citation",
    "format_citation_authors",
    "format_date_added",
    "render_detail_page",
]
