"""
Core layer - browser-independent logic.

Components:
- models: ElectionOption, Race, Resolution
- dates: ElectionDate parsing and normalization
- resolver: election date resolution
- reconciler: payload filtering and joining
- errors: error kinds
"""

from .dates import ElectionDate, parse_target_date, normalize_display_date
from .errors import (
    ScraperError,
    InvalidDateInput,
    InvalidDateFormat,
    NoMatchingElection,
    ElementNotFound,
    ActionTimeout,
)
from .models import ElectionOption, PayloadKind, Race, Resolution, races_to_json
from .reconciler import (
    ResponseReconciler,
    classify_payload,
    extract_return_value,
    reconcile,
)
from .resolver import DateResolver, closest_past_option, matching_options, pick_year

__all__ = [
    "ElectionDate",
    "parse_target_date",
    "normalize_display_date",
    "ScraperError",
    "InvalidDateInput",
    "InvalidDateFormat",
    "NoMatchingElection",
    "ElementNotFound",
    "ActionTimeout",
    "ElectionOption",
    "PayloadKind",
    "Race",
    "Resolution",
    "races_to_json",
    "ResponseReconciler",
    "classify_payload",
    "extract_return_value",
    "reconcile",
    "DateResolver",
    "closest_past_option",
    "matching_options",
    "pick_year",
]
