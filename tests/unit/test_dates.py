"""Tests for date handling."""

import pytest
from datetime import date

from candidates_scraper.core.dates import (
    ElectionDate,
    parse_target_date,
    normalize_display_date,
)
from candidates_scraper.core.errors import InvalidDateFormat, InvalidDateInput


class TestElectionDateFromIso:
    """Tests for strict YYYY-MM-DD parsing."""

    def test_display_label_has_no_padding(self):
        """Test month and day lose their leading zeros."""
        result = ElectionDate.from_iso("2024-03-05")
        assert result.display_label == "3/5/2024"

    def test_display_label_two_digit_parts(self):
        """Test two-digit month and day are kept."""
        result = ElectionDate.from_iso("2024-11-15")
        assert result.display_label == "11/15/2024"

    @pytest.mark.parametrize(
        "text",
        [
            "2024/03/05",
            "03-05-2024",
            "2024-3-5",
            "24-03-05",
            "2024-03-05x",
            "x2024-03-05",
            "",
            " 2024-05-21",
            "2024-05-21\n",
            "\uff12\uff10\uff12\uff14-05-21",
            "\u0662\u0660\u0662\u0664-\u0660\u0665-\u0662\u0661",
        ],
    )
    def test_malformed_rejected(self, text):
        """Test anything but strict YYYY-MM-DD is rejected."""
        with pytest.raises(InvalidDateFormat):
            ElectionDate.from_iso(text)

    def test_impossible_date_rejected(self):
        """Test syntactically valid but impossible date."""
        with pytest.raises(InvalidDateFormat):
            ElectionDate.from_iso("2024-02-30")

    def test_format_error_is_input_error(self):
        """Test InvalidDateFormat is a kind of InvalidDateInput."""
        with pytest.raises(InvalidDateInput):
            ElectionDate.from_iso("2024/03/05")


class TestElectionDateFromDisplay:
    """Tests for M/D/YYYY parsing."""

    def test_unpadded(self):
        result = ElectionDate.from_display("5/21/2024")
        assert result == ElectionDate(2024, 5, 21)

    def test_option_label_prefix(self):
        """Test the date prefix of a full dropdown label."""
        result = ElectionDate.from_display("11/5/2024 - General Election")
        assert result == ElectionDate(2024, 11, 5)

    def test_no_date(self):
        assert ElectionDate.from_display("General Election") is None

    def test_empty(self):
        assert ElectionDate.from_display("") is None

    def test_forms_are_interchangeable(self):
        """Test display label parses back to the same date."""
        original = ElectionDate.from_iso("2023-01-09")
        assert ElectionDate.from_display(original.display_label) == original


class TestSortKey:
    """Tests for zero-padded comparison keys."""

    def test_padding(self):
        assert ElectionDate(2024, 3, 5).sort_key == "2024/03/05"

    def test_lexicographic_order_matches_calendar_order(self):
        """Test that string comparison follows date order across month widths."""
        earlier = ElectionDate(2024, 9, 30)
        later = ElectionDate(2024, 10, 1)
        assert earlier.sort_key < later.sort_key

    def test_from_date(self):
        assert ElectionDate.from_date(date(2024, 7, 1)).sort_key == "2024/07/01"

    def test_isoformat(self):
        assert ElectionDate(2024, 3, 5).isoformat() == "2024-03-05"


class TestNormalizeDisplayDate:
    """Tests for normalize_display_date."""

    def test_normalizes(self):
        assert normalize_display_date("5/21/2024") == "2024/05/21"

    def test_unparseable(self):
        assert normalize_display_date("TBD") is None


class TestParseTargetDate:
    """Tests for the optional date argument."""

    def test_none(self):
        assert parse_target_date(None) is None

    def test_falsy_non_string(self):
        """Test falsy values mean no date."""
        assert parse_target_date(0) is None
        assert parse_target_date(False) is None

    def test_valid_string(self):
        assert parse_target_date("2024-05-21") == ElectionDate(2024, 5, 21)

    def test_empty_string_is_malformed(self):
        with pytest.raises(InvalidDateFormat):
            parse_target_date("")

    def test_surrounding_whitespace_is_malformed(self):
        """Test padded input is not accepted as strict YYYY-MM-DD."""
        with pytest.raises(InvalidDateFormat):
            parse_target_date(" 2024-05-21\n")

    @pytest.mark.parametrize("value", [20240521, ["2024-05-21"], date(2024, 5, 21), True])
    def test_truthy_non_string(self, value):
        """Test truthy non-strings are rejected as input errors."""
        with pytest.raises(InvalidDateInput) as exc_info:
            parse_target_date(value)
        assert not isinstance(exc_info.value, InvalidDateFormat)
