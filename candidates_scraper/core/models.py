"""
Data models for the candidates scraper.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .dates import ElectionDate


# Separator between the date and the description in election option labels
OPTION_SEPARATOR = " -"


class PayloadKind(str, Enum):
    """Kind of intercepted API payload."""
    RACE_NAMES = "race_names"  # List of valid race names
    RACE_RECORDS = "race_records"  # Race name -> candidates mapping


@dataclass(frozen=True)
class ElectionOption:
    """
    One entry of the election dropdown.

    Label format: "<M>/<D>/<YYYY> - <description>"
    """

    label: str

    @property
    def date_label(self) -> str:
        """Date part of the label, e.g. 5/21/2024."""
        return self.label.split(OPTION_SEPARATOR)[0].strip()

    @property
    def description(self) -> str:
        _, _, rest = self.label.partition(OPTION_SEPARATOR)
        return rest.strip()

    @property
    def date(self) -> Optional[ElectionDate]:
        return ElectionDate.from_display(self.date_label)


@dataclass
class Race:
    """A verified race with its qualified candidates."""

    race: str
    candidates: Any = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"race": self.race, "candidates": self.candidates}


@dataclass
class Resolution:
    """
    Outcome of date resolution.

    options holds the election options listed for the year that ended up
    selected, which changes when resolution falls back to the previous year.
    """

    label: str
    year: str
    options: list[ElectionOption] = field(default_factory=list)
    fell_back: bool = False


def races_to_json(races: list[Race]) -> str:
    """Serialize races as a pretty-printed JSON array."""
    return json.dumps(
        [race.to_dict() for race in races],
        indent=2,
        ensure_ascii=False,
    )
