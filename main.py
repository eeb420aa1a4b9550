# main.py

"""Entry point for the trendscout application (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from trendscout.config.logging_config import setup_logging
from trendscout.config.settings import Settings

logger = logging.getLogger("trendscout.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    endpoints = ", ".join(sorted(Settings.ENDPOINTS))

    parser = argparse.ArgumentParser(
        prog="trendscout",
        description="Trending-product research for dropshipping.",
        epilog=f"Search endpoints: {endpoints}",
    )
    parser.add_argument(
        "-r",
        "--recommend",
        action="store_true",
        default=False,
        help="Generate recommendations headlessly. Omit all options "
        "to launch the interactive TUI.",
    )
    parser.add_argument(
        "-c",
        "--categories",
        default=None,
        help="Comma-separated categories (default: 3 random trending ones).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Also save the report (JSON + CSV) to this directory.",
    )
    parser.add_argument(
        "--analyze",
        nargs=2,
        metavar=("TITLE", "PRICE"),
        default=None,
        help="Print margins and sourcing options for one product.",
    )
    parser.add_argument(
        "--search",
        nargs=2,
        metavar=("ENDPOINT", "QUERY"),
        default=None,
        help="Pass a query through to one raw upstream endpoint.",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Check upstream connectivity and scoring configuration.",
    )
    parser.add_argument(
        "--set-api-key",
        default=None,
        dest="api_key",
        help="Store the ScrapeCreators API key in config.json.",
    )
    parser.add_argument(
        "--set-openai-key",
        default=None,
        dest="openai_key",
        help="Store the OpenAI API key in config.json.",
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual dashboard."""
    from trendscout.ui.app import TrendScoutApp

    try:
        app = TrendScoutApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("trendscout TUI shutting down")


def _run_recommend(args: argparse.Namespace) -> None:
    """Run one headless recommendation pass and exit."""
    from trendscout.cli.runner import cli_recommend

    try:
        exit_code = asyncio.run(
            cli_recommend(
                category_csv=args.categories,
                output_format=args.output_format,
                output_dir=args.output_dir,
            )
        )
    except Exception as exc:
        logger.error("Recommendation error: %s", exc, exc_info=True)
        exit_code = 1
    sys.exit(exit_code)


def main() -> None:
    """Route to the TUI (no options) or one headless command."""
    log_file = setup_logging()
    logger.info("trendscout starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.api_key is not None or args.openai_key is not None:
        from trendscout.cli.runner import save_keys

        sys.exit(save_keys(args.api_key, args.openai_key))
    elif args.health:
        from trendscout.cli.runner import run_health_check

        sys.exit(asyncio.run(run_health_check()))
    elif args.analyze is not None:
        from trendscout.cli.runner import cli_analyze

        sys.exit(cli_analyze(*args.analyze))
    elif args.search is not None:
        from trendscout.cli.runner import cli_search

        sys.exit(cli_search(*args.search))
    elif args.recommend or args.categories is not None:
        _run_recommend(args)
    else:
        _run_tui()


if __name__ == "__main__":
    main()
