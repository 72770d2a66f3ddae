"""Shared test fixtures for paper catalog tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from paper_catalog.models import PaperRecord
from paper_catalog.store import RecordStore, parse_date_added

# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_record():
    """Factory fixture for creating PaperRecord instances with sensible defaults.

    ``date_added_at`` is derived from ``date_added`` the same way the loader does.
    """

    def _make(
        id: str = "acemoglu-restrepo-2020",
        title: str = "Robots and Jobs",
        authors: tuple[str, ...] | list[str] = ("Daron Acemoglu", "Pascual Restrepo"),
        year: int = 2020,
        publication: str = "Journal of Political Economy",
        summary: str = "Industrial robots reduce employment and wages.",
        abstract: str = "We study the effects of industrial robots on US labor markets.",
        tags: tuple[str, ...] | list[str] = ("automation", "wages"),
        methodology: str = "Empirical",
        date_added: str = "2024-01-15T00:00:00Z",
        url: str | None = "https://example.org/robots-and-jobs",
        pdf_url: str | None = None,
        featured: bool = False,
    ) -> PaperRecord:
        return PaperRecord(
            id=id,
            title=title,
            authors=tuple(authors),
            year=year,
            publication=publication,
            summary=summary,
            abstract=abstract,
            tags=tuple(tags),
            methodology=methodology,
            date_added=date_added,
            date_added_at=parse_date_added(date_added),
            url=url,
            pdf_url=pdf_url,
            featured=featured,
        )

    return _make


@pytest.fixture
def make_raw_record():
    """Factory for source-shaped dicts, as they appear in papers.json."""

    def _make(**overrides: Any) -> dict[str, Any]:
        raw: dict[str, Any] = {
            "id": "acemoglu-restrepo-2020",
            "title": "Robots and Jobs",
            "authors": ["Daron Acemoglu", "Pascual Restrepo"],
            "year": 2020,
            "publication": "Journal of Political Economy",
            "summary": "Industrial robots reduce employment and wages.",
            "abstract": "We study the effects of industrial robots on US labor markets.",
            "tags": ["automation", "wages"],
            "methodology": "Empirical",
            "dateAdded": "2024-01-15T00:00:00Z",
            "url": "https://example.org/robots-and-jobs",
        }
        raw.update(overrides)
        return raw

    return _make


@pytest.fixture
def sample_store(make_record) -> RecordStore:
    """Three records with distinct years, tags, and methodologies."""
    return RecordStore.from_records(
        [
            make_record(
                id="brynjolfsson-2023",
                title="Generative AI at Work",
                authors=("Erik Brynjolfsson", "Danielle Li", "Lindsey Raymond"),
                year=2023,
                publication="NBER Working Paper",
                summary="AI assistance raises customer-support productivity by 14%.",
                tags=("productivity", "generative-ai"),
                methodology="Experimental",
                date_added="2024-03-01T00:00:00Z",
                featured=True,
            ),
            make_record(),
            make_record(
                id="eloundou-2023",
                title="GPTs are GPTs",
                authors=("Tyna Eloundou",),
                year=2023,
                publication="Science",
                summary="Exposure of occupations to large language models.",
                tags=("exposure", "generative-ai"),
                methodology="Theoretical",
                date_added="2024-02-10T00:00:00Z",
            ),
        ]
    )


@pytest.fixture
def write_source(tmp_path):
    """Write a list of raw records as a JSON source file and return its path."""

    def _write(payload: Any, name: str = "papers.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
