"""Full-rebuild static site generation: detail pages, feed, and index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from paper_catalog.config import atomic_write_text
from paper_catalog.detail import render_detail_page
from paper_catalog.errors import RenderError
from paper_catalog.escaping import get_escaper
from paper_catalog.feed import render_feed
from paper_catalog.listing import render_index_page, render_listing
from paper_catalog.models import FEED_FILENAME, INDEX_FILENAME, PAPERS_DIRNAME, SiteConfig
from paper_catalog.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BuildReport:
    """Outcome of one generation run."""

    output_dir: Path
    pages: list[Path] = field(default_factory=list)
    skipped: list[RenderError] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    feed_path: Path | None = None
    index_path: Path | None = None

    @property
    def ok(self) -> bool:
        return not self.skipped


def render_site(
    store: RecordStore, config: SiteConfig
) -> tuple[dict[str, str], list[RenderError]]:
    """Render every artifact in memory.

    Returns:
        (artifacts, skipped) where artifacts maps output-relative paths to
        document text, and skipped lists the records that could not render.
    """
    artifacts: dict[str, str] = {}
    skipped: list[RenderError] = []

    for record in store:
        try:
            artifacts[f"{PAPERS_DIRNAME}/{record.id}.html"] = render_detail_page(record, config)
        except RenderError as exc:
            logger.warning("Skipping %s: missing %s", exc.record_id, exc.field)
            skipped.append(exc)

    artifacts[FEED_FILENAME] = render_feed(store, config)

    records = list(store)
    view = render_listing(records, len(records), escape=get_escaper(config.listing_escaper))
    artifacts[INDEX_FILENAME] = render_index_page(view, config)
    return artifacts, skipped


def _remove_stale_pages(papers_dir: Path, keep: set[str]) -> list[Path]:
    """Delete detail pages left over from records no longer in the store."""
    removed: list[Path] = []
    if not papers_dir.is_dir():
        return removed
    for page in sorted(papers_dir.glob("*.html")):
        if page.name not in keep:
            page.unlink()
            logger.info("Removed stale page %s", page)
            removed.append(page)
    return removed


def build_site(
    store: RecordStore, output_dir: Path, config: SiteConfig | None = None
) -> BuildReport:
    """Regenerate the whole site from the complete record set.

    All documents are rendered before anything is written, and each file is
    written atomically. A record that fails to render is skipped and reported
    without aborting the run.
    """
    config = config or SiteConfig()
    report = BuildReport(output_dir=output_dir)

    artifacts, report.skipped = render_site(store, config)

    papers_dir = output_dir / PAPERS_DIRNAME
    keep = {Path(rel).name for rel in artifacts if rel.startswith(f"{PAPERS_DIRNAME}/")}
    report.removed = _remove_stale_pages(papers_dir, keep)

    for rel_path, text in artifacts.items():
        target = output_dir / rel_path
        atomic_write_text(target, text)
        logger.debug("Wrote %s", target)
        if rel_path == FEED_FILENAME:
            report.feed_path = target
        elif rel_path == INDEX_FILENAME:
            report.index_path = target
        else:
            report.pages.append(target)

    logger.info(
        "Build finished: pages=%d skipped=%d removed=%d output=%s",
        len(report.pages),
        len(report.skipped),
        len(report.removed),
        output_dir,
    )
    return report


__all__ = [
    "BuildReport",
    "build_site",
    "render_site",
]
