"""
Candidates Scraper - Georgia qualified candidates extraction.

Architecture:
- core/: Stable foundation (models, date handling, resolver, reconciler)
- driver/: Browser side (UI driver contract, Playwright driver, response capture)
- config/: YAML-driven scraper settings
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
