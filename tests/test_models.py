"""Tests for models.py — data model construction and serialization."""

import dataclasses

import pytest

from omnivore_mcp.models import (
    Article,
    Highlight,
    HighlightType,
    Label,
    PageType,
    UpdateReason,
)


def _article(**overrides):
    fields = dict(
        title="T",
        site_name="S",
        original_article_url="https://example.com",
        author="A",
        description="D",
        slug="t",
        updated_at="2023-01-06T00:00:00.000Z",
        saved_at="2023-01-05T00:00:00.000Z",
    )
    fields.update(overrides)
    return Article(**fields)


class TestEnums:
    def test_page_type_values(self):
        assert PageType("HIGHLIGHTS") is PageType.HIGHLIGHTS
        assert PageType.FILE.value == "FILE"

    def test_page_type_parse_fallback(self):
        assert PageType.parse("BOOK") is PageType.BOOK
        assert PageType.parse("SOMETHING_NEW") is PageType.UNKNOWN
        assert PageType.parse(None) is PageType.UNKNOWN

    def test_highlight_type_parse_fallback(self):
        assert HighlightType.parse("REDACTION") is HighlightType.REDACTION
        assert HighlightType.parse(None) is HighlightType.HIGHLIGHT

    def test_update_reason_compares_to_wire_value(self):
        assert UpdateReason.DELETED == "DELETED"


class TestArticle:
    def test_construction_with_defaults(self):
        article = _article()
        assert article.page_type is PageType.UNKNOWN
        assert article.labels is None
        assert article.highlights is None
        assert article.content is None
        assert article.url == ""

    def test_is_immutable(self):
        article = _article()
        with pytest.raises(dataclasses.FrozenInstanceError):
            article.title = "changed"

    def test_to_dict(self):
        highlight = Highlight(
            id="h1",
            quote="q",
            annotation="",
            patch="",
            updated_at="",
            labels=[Label(name="x")],
            type=HighlightType.NOTE,
        )
        d = _article(
            page_type=PageType.BOOK,
            labels=[Label(name="books")],
            highlights=[highlight],
        ).to_dict()

        assert d["page_type"] == "BOOK"
        assert d["labels"] == [{"name": "books"}]
        assert d["highlights"][0]["type"] == "NOTE"
        assert d["highlights"][0]["labels"] == [{"name": "x"}]
        assert d["published_at"] is None

    def test_to_dict_keeps_absent_lists_as_none(self):
        d = _article().to_dict()
        assert d["labels"] is None
        assert d["highlights"] is None


class TestHighlight:
    def test_defaults(self):
        highlight = Highlight(id="h", quote="q", annotation="a", patch="p", updated_at="u")
        assert highlight.type is HighlightType.HIGHLIGHT
        assert highlight.labels is None
        assert highlight.to_dict()["labels"] is None
