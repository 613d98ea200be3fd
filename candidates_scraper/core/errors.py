"""
Error kinds raised by the scraper.

Every error is fatal for a run: the CLI logs it and exits without output.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper errors."""


class InvalidDateInput(ScraperError):
    """Date argument is not a YYYY-MM-DD string."""


class InvalidDateFormat(InvalidDateInput):
    """Date string does not match strict YYYY-MM-DD syntax."""


class NoMatchingElection(ScraperError):
    """No election option matches the resolved date."""

    def __init__(self, message: str, label: Optional[str] = None):
        super().__init__(message)
        self.label = label


class ElementNotFound(ScraperError):
    """A required UI control could not be located within the timeout."""

    def __init__(self, message: str, locator: Optional[str] = None):
        super().__init__(message)
        self.locator = locator


class ActionTimeout(ScraperError):
    """A UI action or an expected network response did not complete in time."""

    def __init__(self, message: str, timeout_ms: Optional[int] = None):
        super().__init__(message)
        self.timeout_ms = timeout_ms
