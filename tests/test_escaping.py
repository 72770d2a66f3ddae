"""Tests for markup, feed, and terminal escapers."""

from __future__ import annotations

import pytest

from paper_catalog.escaping import (
    ESCAPERS,
    escape_feed_text,
    escape_markup,
    escape_rich_text,
    format_tag,
    get_escaper,
)


class TestEscapeMarkup:
    def test_escapes_all_special_characters(self):
        assert escape_markup("<b>\"A\" & 'B'</b>") == (
            "&lt;b&gt;&quot;A&quot; &amp; &#039;B&#039;&lt;/b&gt;"
        )

    def test_ampersand_is_escaped_first(self):
        assert escape_markup("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self):
        assert escape_markup("Robots and Jobs") == "Robots and Jobs"

    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_input_yields_empty_string(self, value):
        assert escape_markup(value) == ""

    def test_script_tag_is_neutralised(self):
        escaped = escape_markup("<script>alert(1)</script>")
        assert "<" not in escaped
        assert ">" not in escaped


class TestEscapeFeedText:
    def test_apostrophe_uses_apos_entity(self):
        assert escape_feed_text("it's") == "it&apos;s"

    def test_other_characters_match_markup_escaper(self):
        assert escape_feed_text('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"

    def test_none_yields_empty_string(self):
        assert escape_feed_text(None) == ""


class TestEscapeRichText:
    def test_square_brackets_are_escaped(self):
        assert escape_rich_text("[bold]x[/bold]") == "\\[bold]x\\[/bold]"

    def test_none_yields_empty_string(self):
        assert escape_rich_text(None) == ""


class TestGetEscaper:
    def test_known_names(self):
        assert get_escaper("markup") is escape_markup
        assert get_escaper("feed") is escape_feed_text

    def test_registry_names(self):
        assert set(ESCAPERS) == {"markup", "feed"}

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown escaper"):
            get_escaper("latex")


def test_format_tag_replaces_hyphens():
    assert format_tag("policy-response") == "policy response"
    assert format_tag("generative-ai-adoption") == "generative ai adoption"
    assert format_tag("wages") == "wages"
