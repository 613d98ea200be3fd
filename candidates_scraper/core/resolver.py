"""
Election date resolution.

Decides which election date label to select in the election dropdown:
- explicit date: its M/D/YYYY label, no UI search
- no date: closest past-or-present election of the newest year,
  falling back to the newest election of the previous year
"""

from typing import Awaitable, Callable, Optional, Sequence

import structlog

from .dates import ElectionDate, normalize_display_date
from .errors import NoMatchingElection
from .models import ElectionOption, Resolution

logger = structlog.get_logger(__name__)


YearChangeRequest = Callable[[str], Awaitable[list[ElectionOption]]]


def pick_year(target: Optional[ElectionDate], year_options: Sequence[str]) -> str:
    """
    Choose the election year to select.

    year_options must be in descending order (newest first), which is the
    UI driver's contract for get_year_options().
    """
    if target is not None:
        return str(target.year)

    if not year_options:
        raise NoMatchingElection("election year dropdown is empty")

    return year_options[0]


def closest_past_option(
    options: Sequence[ElectionOption],
    today: ElectionDate,
) -> Optional[ElectionOption]:
    """
    First option (in presentation order) dated on or before today.

    Comparison is done on zero-padded YYYY/MM/DD strings.
    """
    today_key = today.sort_key

    for option in options:
        option_key = normalize_display_date(option.date_label)
        if option_key is None:
            continue
        if option_key <= today_key:
            return option

    return None


def matching_options(
    options: Sequence[ElectionOption],
    label: str,
) -> list[ElectionOption]:
    """All options whose date part equals label (several elections can share a day)."""
    return [option for option in options if option.date_label == label]


class DateResolver:
    """
    Resolves the election date label for a run.

    Usage:
        resolver = DateResolver()
        resolution = await resolver.resolve(
            target, options, today, year_options, driver.change_year
        )
    """

    def __init__(self):
        self.logger = logger.bind(component="date_resolver")

    async def resolve(
        self,
        target_date: Optional[ElectionDate],
        available_options: Sequence[ElectionOption],
        today: ElectionDate,
        year_options: Sequence[str],
        request_year_change: YearChangeRequest,
    ) -> Resolution:
        """
        Resolve the date label to select.

        Args:
            target_date: Requested election date (None = most recent)
            available_options: Election options for the selected year
            today: Current date
            year_options: Year labels, newest first
            request_year_change: Selects another year, returns its options

        Returns:
            Resolution with the label and the options it applies to

        Raises:
            NoMatchingElection: Previous year has no elections either
        """
        options = list(available_options)

        if target_date is not None:
            label = target_date.display_label
            self.logger.info("date_label_from_input", label=label)
            return Resolution(label=label, year=str(target_date.year), options=options)

        year = pick_year(None, year_options)

        option = closest_past_option(options, today)
        if option is not None:
            self.logger.info(
                "election_resolved",
                label=option.date_label,
                election=option.label,
            )
            return Resolution(label=option.date_label, year=year, options=options)

        # Nothing has happened yet this year; take the newest of last year
        past_year = str(today.year - 1)
        self.logger.info("no_past_election_this_year", year=year, fallback_year=past_year)

        past_options = list(await request_year_change(past_year))
        if not past_options:
            raise NoMatchingElection(
                f"no elections listed for {past_year}",
            )

        label = past_options[0].date_label
        self.logger.info("election_resolved", label=label, election=past_options[0].label)
        return Resolution(label=label, year=past_year, options=past_options, fell_back=True)
