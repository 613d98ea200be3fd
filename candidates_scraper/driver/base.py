"""
Base class for UI drivers.

A UI driver owns every selector and markup detail of the target site.
The orchestrator only talks to this interface, so selector breakage is
contained in the driver implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

import structlog

from candidates_scraper.core.models import ElectionOption

logger = structlog.get_logger(__name__)


ResponsePredicate = Callable[[Any], bool]
ResponseHandler = Callable[[Any], Awaitable[None]]


class UIDriver(ABC):
    """
    Abstract base class for UI drivers.

    Every method completes its UI action before returning. Methods raise
    ElementNotFound when a control cannot be located and ActionTimeout
    when an action does not complete within the driver's timeout.
    """

    def __init__(self):
        self.logger = logger.bind(driver=self.__class__.__name__)

    @abstractmethod
    async def get_year_options(self) -> list[str]:
        """
        Return the election year labels in descending order (newest first).
        """
        pass

    @abstractmethod
    async def select_year(self, label: str) -> None:
        """Select a year in the election year dropdown."""
        pass

    @abstractmethod
    async def get_election_options(self) -> list[ElectionOption]:
        """Return the election options for the selected year, in presentation order."""
        pass

    @abstractmethod
    async def select_election_by_exact_label(self, label: str) -> None:
        """Select the election option whose full label equals label."""
        pass

    @abstractmethod
    async def open_qualified_candidates_view(self) -> None:
        """Open the qualified candidates view for the selected election."""
        pass

    @abstractmethod
    def on_network_response(
        self,
        predicate: ResponsePredicate,
        handler: ResponseHandler,
    ) -> None:
        """Call handler for every network response accepted by predicate."""
        pass

    @abstractmethod
    def off_network_response(self, handler: ResponseHandler) -> None:
        """Stop delivering responses to a handler registered earlier."""
        pass

    async def change_year(self, label: str) -> list[ElectionOption]:
        """Select another year and return its election options."""
        await self.select_year(label)
        return await self.get_election_options()
