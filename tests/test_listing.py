"""Tests for the listing view model and the static index snapshot."""

from __future__ import annotations

from paper_catalog.escaping import escape_rich_text
from paper_catalog.listing import (
    EMPTY_STATE_MESSAGE,
    build_card,
    detail_href,
    format_results_summary,
    render_index_page,
    render_listing,
    render_listing_html,
)
from paper_catalog.models import SiteConfig


class TestResultsSummary:
    def test_all_shown(self):
        assert format_results_summary(3, 3) == "Showing all 3 papers"

    def test_subset_shown(self):
        assert format_results_summary(1, 3) == "Showing 1 of 3 papers"

    def test_empty_store(self):
        assert format_results_summary(0, 0) == "Showing all 0 papers"


class TestBuildCard:
    def test_fields_are_escaped(self, make_record):
        card = build_card(make_record(title="<b>Bold</b> & more", authors=("O'Brien",)))
        assert card.title == "&lt;b&gt;Bold&lt;/b&gt; &amp; more"
        assert card.authors == "O&#039;Brien"

    def test_authors_joined_and_tags_spaced(self, make_record):
        card = build_card(make_record(tags=("policy-response",)))
        assert card.authors == "Daron Acemoglu, Pascual Restrepo"
        assert card.tags == ("policy response",)

    def test_links(self, make_record):
        card = build_card(make_record(id="x-1", url=None))
        assert card.detail_href == "papers/x-1.html"
        assert card.source_url is None

    def test_custom_escaper(self, make_record):
        card = build_card(make_record(title="[bold]x[/bold]"), escape_rich_text)
        assert card.title == "\\[bold]x\\[/bold]"


class TestRenderListing:
    def test_full_listing(self, sample_store):
        records = list(sample_store)
        view = render_listing(records, len(records))
        assert view.summary == "Showing all 3 papers"
        assert [card.record_id for card in view.cards] == [r.id for r in records]
        assert not view.empty

    def test_filtered_listing(self, sample_store):
        records = list(sample_store)
        view = render_listing(records[:1], len(records))
        assert view.summary == "Showing 1 of 3 papers"
        assert view.shown == 1
        assert view.total == 3

    def test_empty_result(self, sample_store):
        view = render_listing([], len(sample_store))
        assert view.empty
        assert view.cards == ()
        assert view.summary == "Showing 0 of 3 papers"


class TestRenderListingHtml:
    def test_cards_rendered_in_order(self, sample_store):
        records = list(sample_store)
        html = render_listing_html(render_listing(records, len(records)))
        positions = [html.index(f'href="{detail_href(r.id)}"') for r in records]
        assert positions == sorted(positions)
        assert EMPTY_STATE_MESSAGE not in html

    def test_featured_card_class(self, sample_store):
        records = list(sample_store)
        html = render_listing_html(render_listing(records, len(records)))
        assert html.count('class="paper-card featured"') == 1

    def test_empty_state_replaces_list(self, sample_store):
        html = render_listing_html(render_listing([], len(sample_store)))
        assert EMPTY_STATE_MESSAGE in html
        assert 'id="paperList"' not in html

    def test_hostile_title_is_inert(self, make_record):
        record = make_record(title="<script>alert(1)</script>")
        html = render_listing_html(render_listing([record], 1))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html


def test_index_page_wraps_listing(sample_store):
    records = list(sample_store)
    page = render_index_page(render_listing(records, len(records)), SiteConfig())
    assert page.startswith("<!DOCTYPE html>")
    assert "Showing all 3 papers" in page
    assert 'href="feed.xml"' in page
    assert "<title>Papers - AI Labor Research</title>" in page
