"""Tests for election date resolution."""

import pytest
from unittest.mock import AsyncMock

from candidates_scraper.core.dates import ElectionDate
from candidates_scraper.core.errors import NoMatchingElection
from candidates_scraper.core.models import ElectionOption
from candidates_scraper.core.resolver import (
    DateResolver,
    closest_past_option,
    matching_options,
    pick_year,
)


def make_options(*labels):
    """Helper to build options in presentation order."""
    return [ElectionOption(label=label) for label in labels]


class TestElectionOption:
    """Tests for ElectionOption label parts."""

    def test_date_label(self):
        option = ElectionOption(label="5/21/2024 - General Primary")
        assert option.date_label == "5/21/2024"
        assert option.description == "General Primary"
        assert option.date == ElectionDate(2024, 5, 21)

    def test_label_without_description(self):
        option = ElectionOption(label="5/21/2024")
        assert option.date_label == "5/21/2024"
        assert option.description == ""


class TestPickYear:
    """Tests for pick_year."""

    def test_target_year(self):
        assert pick_year(ElectionDate(2022, 5, 24), ["2024", "2023"]) == "2022"

    def test_newest_year(self):
        assert pick_year(None, ["2024", "2023", "2022"]) == "2024"

    def test_empty_years(self):
        with pytest.raises(NoMatchingElection):
            pick_year(None, [])


class TestClosestPastOption:
    """Tests for closest_past_option."""

    def test_skips_future_elections(self):
        options = make_options("11/5/2024 - General", "5/21/2024 - Primary")
        result = closest_past_option(options, ElectionDate(2024, 7, 1))
        assert result.label == "5/21/2024 - Primary"

    def test_today_counts_as_past(self):
        options = make_options("11/5/2024 - General")
        result = closest_past_option(options, ElectionDate(2024, 11, 5))
        assert result.label == "11/5/2024 - General"

    def test_none_in_past(self):
        options = make_options("11/5/2024 - General", "5/21/2024 - Primary")
        assert closest_past_option(options, ElectionDate(2024, 1, 2)) is None

    def test_ignores_unparseable_labels(self):
        options = make_options("Select an election", "5/21/2024 - Primary")
        result = closest_past_option(options, ElectionDate(2024, 7, 1))
        assert result.label == "5/21/2024 - Primary"


class TestMatchingOptions:
    """Tests for matching_options."""

    def test_multiple_elections_same_day(self):
        options = make_options(
            "11/5/2024 - General",
            "5/21/2024 - Primary",
            "5/21/2024 - Nonpartisan",
        )
        result = matching_options(options, "5/21/2024")
        assert [o.label for o in result] == ["5/21/2024 - Primary", "5/21/2024 - Nonpartisan"]

    def test_date_part_must_match_exactly(self):
        """Test 3/5/2024 does not match 3/15/2024 or 13/5/2024-like prefixes."""
        options = make_options("3/15/2024 - Special", "3/5/2024 - Special")
        result = matching_options(options, "3/5/2024")
        assert [o.label for o in result] == ["3/5/2024 - Special"]

    def test_no_match(self):
        options = make_options("11/5/2024 - General")
        assert matching_options(options, "3/5/2024") == []


class TestDateResolver:
    """Tests for DateResolver.resolve."""

    @pytest.mark.asyncio
    async def test_target_date_returns_display_label(self):
        """Test explicit date becomes its label without a UI search."""
        change_year = AsyncMock()
        resolution = await DateResolver().resolve(
            ElectionDate(2024, 3, 5),
            make_options("11/5/2024 - General"),
            ElectionDate(2024, 7, 1),
            ["2024", "2023"],
            change_year,
        )

        assert resolution.label == "3/5/2024"
        assert resolution.year == "2024"
        assert resolution.fell_back is False
        change_year.assert_not_called()

    @pytest.mark.asyncio
    async def test_auto_selects_closest_past_election(self):
        """Test primary is chosen when the general is still ahead."""
        change_year = AsyncMock()
        resolution = await DateResolver().resolve(
            None,
            make_options("5/21/2024 - Primary", "11/5/2024 - General"),
            ElectionDate(2024, 7, 1),
            ["2024", "2023"],
            change_year,
        )

        assert resolution.label == "5/21/2024"
        assert resolution.year == "2024"
        change_year.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_previous_year(self):
        """Test newest election of last year when none happened this year."""
        past = make_options("12/3/2023 - Runoff", "11/7/2023 - General")
        change_year = AsyncMock(return_value=past)

        resolution = await DateResolver().resolve(
            None,
            make_options("5/21/2024 - Primary"),
            ElectionDate(2024, 1, 10),
            ["2024", "2023"],
            change_year,
        )

        change_year.assert_awaited_once_with("2023")
        assert resolution.label == "12/3/2023"
        assert resolution.year == "2023"
        assert resolution.options == past
        assert resolution.fell_back is True

    @pytest.mark.asyncio
    async def test_fallback_takes_first_option_unvalidated(self):
        """Test the previous year's first option is taken as-is."""
        change_year = AsyncMock(return_value=make_options("6/1/2025 - Odd"))

        resolution = await DateResolver().resolve(
            None,
            [],
            ElectionDate(2024, 1, 10),
            ["2024"],
            change_year,
        )

        assert resolution.label == "6/1/2025"

    @pytest.mark.asyncio
    async def test_fallback_year_empty(self):
        change_year = AsyncMock(return_value=[])

        with pytest.raises(NoMatchingElection):
            await DateResolver().resolve(
                None,
                make_options("5/21/2024 - Primary"),
                ElectionDate(2024, 1, 10),
                ["2024", "2023"],
                change_year,
            )
