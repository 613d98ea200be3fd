"""
CLI entry point for candidates-scraper.

Usage:
    python -m candidates_scraper
    python -m candidates_scraper --date 2024-05-21
    python -m candidates_scraper --date 2024-05-21 --output output/races.json
"""

import argparse
import asyncio
import logging
import sys

import structlog

from .core.errors import ScraperError

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", json_output: bool = False):
    """Configure structured logging. Logs go to stderr; stdout is for results."""
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    if json_output:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Georgia qualified candidates scraper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Most recent election on or before today
  python -m candidates_scraper

  # Specific election date
  python -m candidates_scraper --date 2024-05-21

  # Collapse races repeated across same-day elections
  python -m candidates_scraper --date 2024-05-21 --dedupe
        """,
    )

    parser.add_argument(
        "date_arg",
        nargs="?",
        metavar="DATE",
        help="Election date as YYYY-MM-DD (same as --date)",
    )

    parser.add_argument(
        "--date",
        type=str,
        help="Election date as YYYY-MM-DD (default: most recent election)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to settings.yml config file",
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Write JSON to this file instead of stdout",
    )

    parser.add_argument(
        "--dedupe",
        action="store_true",
        help="Emit each race once even if several elections return it",
    )

    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )

    parser.add_argument(
        "--timeout",
        type=int,
        help="Timeout in ms for locating and clicking page controls",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON (for production)",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    return parser.parse_args(argv)


async def main_async(args):
    """Async main function."""
    from .config.loader import load_settings
    from .orchestrator import CandidatesScraper

    settings = load_settings(args.config)
    if args.dedupe:
        settings.dedupe_races = True
    if args.headed:
        settings.headless = False
    if args.timeout:
        settings.default_timeout_ms = args.timeout
    settings.validate()

    scraper = CandidatesScraper(settings=settings)
    races = await scraper.run(args.date if args.date is not None else args.date_arg)

    if args.output:
        scraper.save_json(races, args.output)
    else:
        from .core.models import races_to_json
        print(races_to_json(races))

    return races


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Version check
    if args.version:
        from . import __version__
        print(f"candidates-scraper {__version__}")
        sys.exit(0)

    setup_logging(args.log_level, args.json_logs)

    try:
        asyncio.run(main_async(args))
        sys.exit(0)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except ScraperError as e:
        logger = structlog.get_logger(__name__)
        logger.error("fatal_error", kind=type(e).__name__, error=str(e))
        sys.exit(1)
    except Exception as e:
        logger = structlog.get_logger(__name__)
        logger.exception("fatal_error", kind=type(e).__name__, error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
