"""
Date handling for election dropdown labels.

Handles:
- Strict ISO input dates (2024-03-05)
- Site display dates without zero padding (3/5/2024)
- Zero-padded comparison keys (2024/03/05)
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

import structlog

from .errors import InvalidDateFormat, InvalidDateInput

logger = structlog.get_logger(__name__)


ISO_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
DISPLAY_DATE_PATTERN = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")


@dataclass(frozen=True)
class ElectionDate:
    """Calendar date of an election."""

    year: int
    month: int
    day: int

    @classmethod
    def from_iso(cls, text: str) -> "ElectionDate":
        """
        Parse strict YYYY-MM-DD.

        Raises:
            InvalidDateFormat: If text is not a valid YYYY-MM-DD date
        """
        match = ISO_DATE_PATTERN.fullmatch(text)
        if not match:
            raise InvalidDateFormat(
                f"format for date string should be YYYY-MM-DD, got {text!r}"
            )

        year, month, day = (int(part) for part in match.groups())
        try:
            date(year, month, day)
        except ValueError as e:
            raise InvalidDateFormat(f"not a calendar date: {text!r} ({e})") from e

        return cls(year, month, day)

    @classmethod
    def from_display(cls, text: str) -> Optional["ElectionDate"]:
        """
        Parse the site's M/D/YYYY form.

        Returns None if the text does not start with such a date.
        """
        if not text:
            return None

        match = DISPLAY_DATE_PATTERN.match(text.strip())
        if not match:
            return None

        month, day, year = (int(part) for part in match.groups())
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: date) -> "ElectionDate":
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls) -> "ElectionDate":
        return cls.from_date(date.today())

    @property
    def display_label(self) -> str:
        """Label as rendered in the election dropdown, e.g. 3/5/2024."""
        return f"{self.month}/{self.day}/{self.year}"

    @property
    def sort_key(self) -> str:
        """Zero-padded YYYY/MM/DD, comparable as a string."""
        return f"{self.year}/{self.month:02d}/{self.day:02d}"

    def isoformat(self) -> str:
        return f"{self.year}-{self.month:02d}-{self.day:02d}"


def parse_target_date(value: Any) -> Optional[ElectionDate]:
    """
    Validate the optional date argument.

    Args:
        value: None, or a YYYY-MM-DD string

    Returns:
        ElectionDate, or None when no date was given

    Raises:
        InvalidDateFormat: String that is not strict YYYY-MM-DD
        InvalidDateInput: Any other truthy non-string value
    """
    if isinstance(value, str):
        return ElectionDate.from_iso(value)

    if value:
        raise InvalidDateInput(
            f"date needs to be a YYYY-MM-DD string, got {type(value).__name__}"
        )

    return None


def normalize_display_date(text: str) -> Optional[str]:
    """
    Normalize a dropdown date prefix (M/D/YYYY) to YYYY/MM/DD.

    Returns None for text without a leading date.
    """
    parsed = ElectionDate.from_display(text)
    if parsed is None:
        logger.debug("unparseable_option_date", text=text)
        return None
    return parsed.sort_key
