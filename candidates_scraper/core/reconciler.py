"""
Reconciliation of intercepted API payloads.

Two payload kinds come back from the site's API channel:
- clicking an election returns a list of race names
- opening the qualified candidates view returns race name -> candidates

Only races present in a name list are trusted; everything else is dropped.
"""

from typing import Any, Iterable, Mapping, Optional, Sequence

import structlog

from .models import PayloadKind, Race

logger = structlog.get_logger(__name__)


def extract_return_value(body: Any) -> Any:
    """
    Read actions[0].returnValue.returnValue from an API response body.

    Returns None when any part of the path is missing or malformed.
    """
    if not isinstance(body, Mapping):
        return None

    actions = body.get("actions")
    if not isinstance(actions, list) or not actions:
        return None

    outer = actions[0].get("returnValue") if isinstance(actions[0], Mapping) else None
    if not isinstance(outer, Mapping):
        return None

    return outer.get("returnValue")


def classify_payload(value: Any) -> Optional[PayloadKind]:
    """Decide whether a return value is a race name list or race records."""
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return PayloadKind.RACE_NAMES
    if isinstance(value, Mapping):
        return PayloadKind.RACE_RECORDS
    return None


def reconcile(
    name_list_payloads: Iterable[Sequence[str]],
    object_payloads: Iterable[Mapping[str, Sequence[Any]]],
    dedupe: bool = False,
) -> list[Race]:
    """
    Join race records against the known race names.

    Args:
        name_list_payloads: Race name lists, in arrival order
        object_payloads: Race name -> candidates mappings, in arrival order
        dedupe: Keep only the first occurrence of each race name

    Returns:
        Races in payload arrival order, then key order within a payload.
        Without dedupe, a race appearing in several payloads is emitted
        once per payload.
    """
    known_names = {name for names in name_list_payloads for name in names}

    races: list[Race] = []
    emitted: set[str] = set()
    dropped = 0

    for payload in object_payloads:
        for key in payload:
            if key not in known_names:
                dropped += 1
                continue
            if dedupe and key in emitted:
                continue
            emitted.add(key)
            races.append(Race(race=key, candidates=payload[key]))

    logger.debug(
        "payloads_reconciled",
        known_names=len(known_names),
        races=len(races),
        dropped_keys=dropped,
    )

    return races


class ResponseReconciler:
    """
    Accumulates payloads over a run and reconciles them at the end.

    Name lists only ever grow during a run.
    """

    def __init__(self, dedupe: bool = False):
        self.dedupe = dedupe
        self.name_lists: list[list[str]] = []
        self.records: list[dict[str, Any]] = []

    def add(self, value: Any) -> Optional[PayloadKind]:
        """Add one API return value; returns its kind or None if ignored."""
        kind = classify_payload(value)
        if kind is PayloadKind.RACE_NAMES:
            self.name_lists.append(list(value))
        elif kind is PayloadKind.RACE_RECORDS:
            self.records.append(dict(value))
        return kind

    def races(self) -> list[Race]:
        return reconcile(self.name_lists, self.records, dedupe=self.dedupe)
