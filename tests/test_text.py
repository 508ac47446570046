"""Tests for text.py — escaping and date helpers."""

from datetime import date, datetime
from unittest.mock import patch

import pytest

from omnivore_mcp.text import (
    escape_quotation_marks,
    format_date,
    markdown_escape,
    parse_date_time,
)


class TestMarkdownEscape:
    def test_escapes_markdown_characters(self):
        assert markdown_escape("*bold* [link](url)") == "\\*bold\\* \\[link\\]\\(url\\)"

    def test_escapes_backticks(self):
        assert markdown_escape("`code`") == "\\`code\\`"

    def test_escapes_angle_brackets_as_entities(self):
        assert markdown_escape("<b>") == "&lt;b&gt;"

    def test_plain_text_unchanged(self):
        assert markdown_escape("just words, no marks.") == "just words, no marks."

    def test_failure_returns_input(self, caplog):
        with patch("omnivore_mcp.text._escape", side_effect=RuntimeError("boom")):
            assert markdown_escape("#heading_1") == "#heading_1"
        assert "markdown_escape error" in caplog.text

    def test_non_string_input_is_returned(self):
        assert markdown_escape(None) is None


def test_escape_quotation_marks():
    assert escape_quotation_marks('say "hi"') == 'say \\"hi\\"'
    assert escape_quotation_marks("no quotes") == "no quotes"


class TestParseDateTime:
    def test_with_seconds(self):
        assert parse_date_time("2023-01-05T10:30:15") == datetime(2023, 1, 5, 10, 30, 15)

    def test_without_seconds(self):
        assert parse_date_time("2023-01-05T10:30") == datetime(2023, 1, 5, 10, 30)

    @pytest.mark.parametrize(
        "value",
        [
            "not-a-date",
            "",
            "2023-01-05",
            "2023-01-05 10:30",
            "2023-1-5T1:3",
            "2023-01-05T10:30:5",
            "2023-01-05T10:30:00Z",
            "2023-13-05T10:30",
        ],
    )
    def test_invalid(self, value):
        assert parse_date_time(value) is None


class TestFormatDate:
    def test_iso_date(self):
        assert format_date(date(2023, 1, 5), "yyyy-MM-dd") == "[[2023-01-05]]"

    def test_logseq_default_format(self):
        assert format_date(date(2023, 1, 5), "MMM do, yyyy") == "[[Jan 5th, 2023]]"

    def test_ordinals(self):
        assert format_date(date(2023, 3, 1), "do") == "[[1st]]"
        assert format_date(date(2023, 3, 2), "do") == "[[2nd]]"
        assert format_date(date(2023, 3, 3), "do") == "[[3rd]]"
        assert format_date(date(2023, 3, 11), "do") == "[[11th]]"
        assert format_date(date(2023, 3, 22), "do") == "[[22nd]]"

    def test_names(self):
        assert format_date(date(2023, 1, 5), "EEEE, MMMM d") == "[[Thursday, January 5]]"
        assert format_date(date(2023, 1, 5), "EEE") == "[[Thu]]"

    def test_day_of_year(self):
        assert format_date(date(2023, 2, 1), "D") == "[[32]]"
        assert format_date(date(2023, 2, 1), "DDD") == "[[032]]"
        assert format_date(date(2023, 2, 1), "yyyy_DD") == "[[2023_32]]"

    def test_week_year_differs_from_calendar_year(self):
        assert format_date(date(2021, 12, 31), "yyyy") == "[[2021]]"
        assert format_date(date(2021, 12, 31), "YYYY") == "[[2022]]"
        assert format_date(date(2021, 12, 31), "w") == "[[1]]"
        assert format_date(date(2021, 1, 1), "RRRR") == "[[2020]]"

    def test_two_digit_year(self):
        assert format_date(date(2001, 6, 1), "yy") == "[[01]]"

    def test_time_and_literals(self):
        value = datetime(2023, 1, 5, 13, 7)
        assert format_date(value, "yyyy-MM-dd 'at' h:mm a") == "[[2023-01-05 at 1:07 PM]]"
        assert format_date(value, "HH'h' ''yy") == "[[13h '23]]"

    def test_plain_date_renders_midnight(self):
        assert format_date(date(2023, 1, 5), "HH:mm") == "[[00:00]]"
