"""
Configuration module for scraper settings.

Provides:
- YAML settings loading with validation
- Environment variable substitution
"""

from .loader import ConfigLoader, ScraperSettings, load_settings

__all__ = ["ConfigLoader", "ScraperSettings", "load_settings"]
