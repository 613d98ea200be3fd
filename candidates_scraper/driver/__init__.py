"""
Browser side of the scraper.

- UIDriver: contract the orchestrator relies on
- MvpDriver: Playwright implementation for the Georgia SOS site
- ResponseCapture: counted capture of intercepted API payloads
"""

from .base import UIDriver
from .capture import ResponseCapture
from .mvp import MvpDriver

__all__ = [
    "UIDriver",
    "ResponseCapture",
    "MvpDriver",
]
