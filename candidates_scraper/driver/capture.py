"""
Network response capture.

Replaces a fixed settling delay with explicit expectations: callers know
how many payloads of each kind an action triggers and wait for exactly
that many, each bounded by a timeout.
"""

import asyncio
from typing import Any

import structlog
from playwright.async_api import Error as PlaywrightError

from candidates_scraper.core.errors import ActionTimeout
from candidates_scraper.core.models import PayloadKind
from candidates_scraper.core.reconciler import ResponseReconciler, extract_return_value

logger = structlog.get_logger(__name__)


class ResponseCapture:
    """
    Routes API responses into a ResponseReconciler and counts them per kind.

    Usage:
        capture = ResponseCapture("aura", reconciler)
        driver.on_network_response(capture.matches, capture.handle)
        expected = capture.count(PayloadKind.RACE_NAMES) + 1
        await driver.select_election_by_exact_label(label)
        await capture.wait_for(PayloadKind.RACE_NAMES, expected, 10000)
    """

    def __init__(self, api_marker: str, reconciler: ResponseReconciler):
        self.api_marker = api_marker
        self.reconciler = reconciler
        self.ignored = 0

        self._counts = {kind: 0 for kind in PayloadKind}
        self._changed = asyncio.Condition()

    def matches(self, response: Any) -> bool:
        """Only the site's API channel carries payloads we care about."""
        return self.api_marker in response.url

    def count(self, kind: PayloadKind) -> int:
        return self._counts[kind]

    async def handle(self, response: Any) -> None:
        """Parse one API response and record its payload."""
        try:
            body = await response.json()
        except (PlaywrightError, ValueError) as e:
            self.ignored += 1
            logger.debug("response_not_json", url=response.url, error=str(e))
            return

        await self.feed(extract_return_value(body), url=response.url)

    async def feed(self, value: Any, url: str = "") -> None:
        """Record an already-extracted return value."""
        kind = self.reconciler.add(value)
        if kind is None:
            self.ignored += 1
            logger.debug("payload_ignored", url=url)
            return

        async with self._changed:
            self._counts[kind] += 1
            self._changed.notify_all()

        logger.debug("payload_captured", kind=kind.value, count=self._counts[kind], url=url)

    async def wait_for(self, kind: PayloadKind, count: int, timeout_ms: int) -> None:
        """
        Wait until at least count payloads of kind have been captured.

        Raises:
            ActionTimeout: If they do not arrive within timeout_ms
        """
        async def _wait():
            async with self._changed:
                await self._changed.wait_for(lambda: self._counts[kind] >= count)

        try:
            await asyncio.wait_for(_wait(), timeout=timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            raise ActionTimeout(
                f"expected {count} {kind.value} responses, got {self._counts[kind]} "
                f"within {timeout_ms} ms",
                timeout_ms=timeout_ms,
            ) from e
