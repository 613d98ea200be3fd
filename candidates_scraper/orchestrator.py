"""
Orchestrator for the qualified candidates scrape.

Coordinates:
- Settings loading
- Browser lifecycle
- Year / election selection
- Response capture and reconciliation
"""

from pathlib import Path
from typing import Any, Optional

import structlog
from playwright.async_api import async_playwright

from .config.loader import ScraperSettings, load_settings
from .core.dates import ElectionDate, parse_target_date
from .core.errors import NoMatchingElection
from .core.models import ElectionOption, PayloadKind, Race, races_to_json
from .core.reconciler import ResponseReconciler
from .core.resolver import DateResolver, matching_options, pick_year
from .driver.base import UIDriver
from .driver.capture import ResponseCapture
from .driver.mvp import MvpDriver

logger = structlog.get_logger(__name__)


class CandidatesScraper:
    """
    Runs one scrape for one election date.

    Every UI step is awaited before the next starts; elections sharing a
    date are processed one after another.
    """

    def __init__(
        self,
        settings: Optional[ScraperSettings] = None,
        config_path: Optional[str] = None,
        today: Optional[ElectionDate] = None,
    ):
        """
        Initialize scraper.

        Args:
            settings: Scraper settings (loaded from config_path if not given)
            config_path: Path to a settings YAML file
            today: Override for the current date
        """
        self.settings = settings or load_settings(config_path)
        self.today = today
        self.resolver = DateResolver()

        # Statistics
        self.stats = {
            "elections_processed": 0,
            "payloads_ignored": 0,
            "races_emitted": 0,
        }

    async def run(self, date: Any = None) -> list[Race]:
        """
        Scrape qualified candidates.

        Args:
            date: Optional YYYY-MM-DD string (None = most recent election)

        Returns:
            List of races with their candidates
        """
        # Validate before any browser work
        target = parse_target_date(date)

        logger.info(
            "starting_scrape",
            date=target.isoformat() if target else "most_recent",
            url=self.settings.base_url,
        )

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=self.settings.headless)
            try:
                context = await browser.new_context(user_agent=self.settings.user_agent)
                context.set_default_timeout(self.settings.default_timeout_ms)

                page = await context.new_page()
                await page.goto(self.settings.base_url, wait_until="domcontentloaded")

                driver = MvpDriver(page, timeout_ms=self.settings.default_timeout_ms)
                return await self.scrape(driver, target)
            finally:
                await browser.close()

    async def scrape(
        self,
        driver: UIDriver,
        target: Optional[ElectionDate],
    ) -> list[Race]:
        """
        Drive an already-loaded page through election selection.

        Args:
            driver: UI driver for the loaded page
            target: Requested election date (None = most recent)

        Returns:
            Reconciled races
        """
        today = self.today or ElectionDate.today()

        year_options = await driver.get_year_options()
        year = pick_year(target, year_options)
        self._require_year(year, year_options)

        await driver.select_year(year)
        options = await driver.get_election_options()
        logger.info("year_selected", year=year, elections=len(options))

        async def change_year(label: str) -> list[ElectionOption]:
            self._require_year(label, year_options)
            return await driver.change_year(label)

        resolution = await self.resolver.resolve(
            target, options, today, year_options, change_year
        )

        selected = matching_options(resolution.options, resolution.label)
        if not selected:
            raise NoMatchingElection(
                f"no election exists for {resolution.label}",
                label=resolution.label,
            )

        logger.info(
            "elections_matched",
            label=resolution.label,
            year=resolution.year,
            fell_back=resolution.fell_back,
            elections=[option.label for option in selected],
        )

        reconciler = ResponseReconciler(dedupe=self.settings.dedupe_races)
        capture = ResponseCapture(self.settings.api_marker, reconciler)

        driver.on_network_response(capture.matches, capture.handle)
        try:
            for option in selected:
                await self._process_election(driver, capture, option)
        finally:
            driver.off_network_response(capture.handle)

        races = reconciler.races()

        self.stats["payloads_ignored"] = capture.ignored
        self.stats["races_emitted"] = len(races)
        logger.info("scrape_complete", **self.stats)

        return races

    async def _process_election(
        self,
        driver: UIDriver,
        capture: ResponseCapture,
        option: ElectionOption,
    ) -> None:
        """Select one election and open its candidates, awaiting both responses."""
        timeout_ms = self.settings.response_timeout_ms

        expected_names = capture.count(PayloadKind.RACE_NAMES) + 1
        await driver.select_election_by_exact_label(option.label)
        await capture.wait_for(PayloadKind.RACE_NAMES, expected_names, timeout_ms)

        expected_records = capture.count(PayloadKind.RACE_RECORDS) + 1
        await driver.open_qualified_candidates_view()
        await capture.wait_for(PayloadKind.RACE_RECORDS, expected_records, timeout_ms)

        self.stats["elections_processed"] += 1
        logger.info("election_processed", election=option.label)

    @staticmethod
    def _require_year(year: str, year_options: list[str]) -> None:
        if year not in year_options:
            raise NoMatchingElection(
                f"election year {year} is not offered (available: {', '.join(year_options)})",
            )

    def save_json(self, races: list[Race], path: str) -> Path:
        """Write races as pretty-printed JSON to path."""
        filepath = Path(path)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", encoding="utf-8") as f:
            f.write(races_to_json(races))
            f.write("\n")

        logger.info("saved_json", path=str(filepath), races=len(races))
        return filepath
