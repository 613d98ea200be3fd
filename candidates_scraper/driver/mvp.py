"""
Playwright driver for the Georgia SOS "MVP" qualifying candidate page.

The page is a Salesforce Lightning community. Each dropdown is a button
whose id is referenced by a visible <label for=...>; the options of
button "combobox-button-<n>" live in "#dropdown-element-<n>".
"""

import re
from contextlib import asynccontextmanager
from typing import Any, Optional

from playwright.async_api import (
    Locator,
    Page,
    Response,
    TimeoutError as PlaywrightTimeoutError,
)

from candidates_scraper.core.errors import ActionTimeout, ElementNotFound
from candidates_scraper.core.models import ElectionOption

from .base import ResponseHandler, ResponsePredicate, UIDriver


YEAR_LABEL = "Election Year"
ELECTION_LABEL = "Election"
QUALIFIED_CANDIDATES_LINK = re.compile(r"view\squalified\scandidate", re.IGNORECASE)


def _year_sort_key(label: str):
    # Numeric years first, newest first; anything else keeps its place after them
    label = label.strip()
    return (0, -int(label)) if label.isdigit() else (1, 0)


class MvpDriver(UIDriver):
    """
    UI driver backed by a Playwright page.

    Usage:
        page = await context.new_page()
        await page.goto(settings.base_url)
        driver = MvpDriver(page, timeout_ms=7000)
        years = await driver.get_year_options()
    """

    def __init__(self, page: Page, timeout_ms: int = 7000):
        super().__init__()
        self.page = page
        self.timeout_ms = timeout_ms
        self._listeners: dict[Any, Any] = {}

    # ------------------------------------------------------------------
    # Error translation
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _locating(self, what: str):
        try:
            yield
        except PlaywrightTimeoutError as e:
            raise ElementNotFound(
                f"could not locate {what} within {self.timeout_ms} ms",
                locator=what,
            ) from e

    @asynccontextmanager
    async def _acting(self, what: str):
        try:
            yield
        except PlaywrightTimeoutError as e:
            raise ActionTimeout(
                f"could not {what} within {self.timeout_ms} ms",
                timeout_ms=self.timeout_ms,
            ) from e

    # ------------------------------------------------------------------
    # Dropdown helpers
    # ------------------------------------------------------------------

    async def _dropdown(self, label_text: str) -> tuple[Locator, Locator]:
        """Return (button, listbox) for the dropdown labelled label_text."""
        label = self.page.locator(f'label:text-is("{label_text}")')

        async with self._locating(f'label "{label_text}"'):
            button_id = await label.evaluate("label => label.htmlFor")

        if not button_id:
            raise ElementNotFound(
                f'label "{label_text}" is not bound to a control',
                locator=label_text,
            )

        parts = button_id.split("-")
        if len(parts) < 3:
            raise ElementNotFound(
                f"unexpected dropdown button id {button_id!r}",
                locator=button_id,
            )

        button = self.page.locator(f"#{button_id}")
        listbox = self.page.locator(f"#dropdown-element-{parts[2]}")
        return button, listbox

    async def _option_texts(self, label_text: str) -> list[str]:
        button, listbox = await self._dropdown(label_text)

        async with self._acting(f'open "{label_text}" dropdown'):
            await button.click()

        # An empty listbox is a valid state (no elections for a year)
        async with self._locating(f'"{label_text}" dropdown list'):
            await listbox.wait_for()
        texts = await listbox.get_by_role("option").all_inner_texts()

        async with self._acting(f'close "{label_text}" dropdown'):
            await button.click()

        return [text.strip() for text in texts if text.strip()]

    async def _choose(self, label_text: str, option_text: str) -> None:
        button, listbox = await self._dropdown(label_text)

        async with self._acting(f'open "{label_text}" dropdown'):
            await button.click()

        option = listbox.get_by_role("option", name=option_text, exact=True)
        async with self._acting(f'select "{option_text}" in "{label_text}"'):
            await option.click()

        self.logger.debug("option_selected", dropdown=label_text, option=option_text)

    # ------------------------------------------------------------------
    # UIDriver interface
    # ------------------------------------------------------------------

    async def get_year_options(self) -> list[str]:
        texts = await self._option_texts(YEAR_LABEL)
        return sorted(texts, key=_year_sort_key)

    async def select_year(self, label: str) -> None:
        await self._choose(YEAR_LABEL, label)

    async def get_election_options(self) -> list[ElectionOption]:
        texts = await self._option_texts(ELECTION_LABEL)
        return [ElectionOption(label=text) for text in texts]

    async def select_election_by_exact_label(self, label: str) -> None:
        await self._choose(ELECTION_LABEL, label)

    async def open_qualified_candidates_view(self) -> None:
        link = self.page.get_by_text(QUALIFIED_CANDIDATES_LINK)
        async with self._acting("open qualified candidates view"):
            await link.click()

    def on_network_response(
        self,
        predicate: ResponsePredicate,
        handler: ResponseHandler,
    ) -> None:
        async def listener(response: Response) -> None:
            if predicate(response):
                await handler(response)

        self._listeners[handler] = listener
        self.page.on("response", listener)

    def off_network_response(self, handler: ResponseHandler) -> None:
        listener: Optional[Any] = self._listeners.pop(handler, None)
        if listener is not None:
            self.page.remove_listener("response", listener)
