"""
YAML settings loader.

Loads scraper settings from YAML files with:
- Environment variable substitution
- Default values
"""

import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml
import structlog

logger = structlog.get_logger(__name__)


DEFAULT_SETTINGS_FILE = "settings.yml"


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variables in text.

    Supports formats:
    - ${VAR_NAME} - empty string if missing
    - ${VAR_NAME:-default} - optional with default

    Args:
        text: Text with env var placeholders

    Returns:
        Text with substituted values
    """
    def replace(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)
        else:
            value = os.getenv(var_expr)
            if value is None:
                logger.warning("env_var_not_set", var=var_expr)
                return ""
            return value

    return re.sub(r"\$\{([^}]+)\}", replace, text)


@dataclass
class ScraperSettings:
    """Runtime settings for a scrape."""

    base_url: str = "https://mvp.sos.ga.gov/s/qualifying-candidate-information"

    # Responses are only inspected if their URL contains this marker
    api_marker: str = "aura"

    headless: bool = True
    default_timeout_ms: int = 7000  # Locating / clicking UI controls
    response_timeout_ms: int = 10000  # Waiting for each expected API response

    # Emit each race name once instead of once per payload
    dedupe_races: bool = False

    user_agent: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ScraperSettings":
        """Create from dictionary (e.g., from YAML), ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("unknown_settings_ignored", keys=unknown)

        settings = cls(**{k: v for k, v in data.items() if k in known})
        settings.validate()
        return settings

    def validate(self) -> None:
        """
        Raises:
            ValueError: If a setting is out of range
        """
        if not self.base_url:
            raise ValueError("base_url must be set")
        if not self.api_marker:
            raise ValueError("api_marker must be set")
        if int(self.default_timeout_ms) <= 0:
            raise ValueError("default_timeout_ms must be positive")
        if int(self.response_timeout_ms) <= 0:
            raise ValueError("response_timeout_ms must be positive")

        self.default_timeout_ms = int(self.default_timeout_ms)
        self.response_timeout_ms = int(self.response_timeout_ms)
        self.headless = _as_bool(self.headless)
        self.dedupe_races = _as_bool(self.dedupe_races)
        if not self.user_agent:
            self.user_agent = None


def _as_bool(value) -> bool:
    # Env substitution leaves strings like "false" behind
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class ConfigLoader:
    """
    Settings loader.

    Loads YAML config files from a directory (the package config
    directory by default).
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
                       (defaults to package config directory)
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = Path(__file__).parent

    def load_file(self, filename: str) -> dict:
        """
        Load YAML config file.

        Args:
            filename: Config file name (relative to config_dir)

        Returns:
            Parsed config dict
        """
        filepath = self.config_dir / filename

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.info("loading_config", file=str(filepath))

        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()

        content = substitute_env_vars(content)

        config = yaml.safe_load(content)

        return config or {}

    def load_settings(self, filename: str = DEFAULT_SETTINGS_FILE) -> ScraperSettings:
        """
        Load scraper settings from the "scraper" section of a YAML file.
        """
        config = self.load_file(filename)
        return ScraperSettings.from_dict(config.get("scraper") or {})


def load_settings(config_path: Optional[str] = None) -> ScraperSettings:
    """
    Convenience function to load settings.

    Args:
        config_path: Optional path to a settings YAML file

    Returns:
        ScraperSettings object
    """
    if config_path:
        loader = ConfigLoader(str(Path(config_path).parent))
        return loader.load_settings(Path(config_path).name)
    else:
        loader = ConfigLoader()
        return loader.load_settings()
