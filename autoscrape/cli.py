"""Command line entry point.

Usage:
    autoscrape run config.yaml [--headless]
    autoscrape inspect https://example.com/search
    autoscrape record example.com/search

Exit codes: 0 on success, 1 when the job file cannot be loaded or the run fails.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from autoscrape import __version__
from autoscrape.core import metrics
from autoscrape.core.logging import get_logger, setup_logging
from autoscrape.schemas.automation import ConfigLoadError, load_config
from autoscrape.services.runner import AutomationRunner, RunReport
from autoscrape.tools.inspector import dump_yaml, inspect_page
from autoscrape.tools.recorder import record_session
from config import Settings, get_settings

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the run, inspect and record commands."""
    parser = argparse.ArgumentParser(
        prog="autoscrape",
        description="Declarative browser automation and list scraping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log_level setting",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run an automation job file")
    run_parser.add_argument("config", help="Path to the YAML job file")
    run_parser.add_argument(
        "--headless",
        action="store_true",
        help="Run the browser headless (overrides HEADLESS)",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Print a job file skeleton for a page's form controls"
    )
    inspect_parser.add_argument("url", help="Page to inspect")

    record_parser = subparsers.add_parser(
        "record", help="Record clicks and form input into a job file"
    )
    record_parser.add_argument("url", help="Page to start recording on")

    return parser


def _print_report(report: RunReport) -> None:
    print(f"Automation finished: {report.steps_executed} steps executed")
    if report.extraction is None:
        return

    print(
        f"Scraped {report.total_items} items from {report.extraction.pages_visited} page(s)"
        f" (stopped: {report.extraction.stop_reason})"
    )
    for outcome in report.sink_outcomes:
        detail = f" - {outcome.detail}" if outcome.detail else ""
        print(f"  {outcome.sink}: {outcome.status.value}{detail}")


async def run_command(config_path: str, settings: Settings) -> int:
    """Load a job file and run it.

    Returns:
        Process exit code
    """
    try:
        config = load_config(config_path)
    except ConfigLoadError as e:
        logger.error("config_load_failed", path=e.path, error=e.detail)
        print(str(e), file=sys.stderr)
        return EXIT_FAILURE

    try:
        report = await AutomationRunner(config, settings=settings).run()
    except Exception as e:
        logger.error("automation_failed", error=str(e), error_type=type(e).__name__, exc_info=True)
        print(f"Automation failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    _print_report(report)
    return EXIT_OK


async def inspect_command(url: str, settings: Settings) -> int:
    try:
        skeleton = await inspect_page(url, settings)
    except Exception as e:
        logger.error("inspector_failed", url=url, error=str(e), exc_info=True)
        print(f"Error generating skeleton: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print("\n--- Generated YAML Skeleton ---\n")
    print(dump_yaml(skeleton))
    print("-------------------------------\n")
    return EXIT_OK


async def record_command(url: str, settings: Settings) -> int:
    print("Perform actions in the browser window.")
    print("Close the browser to finish and print the recorded steps.")
    try:
        document = await record_session(url, settings)
    except Exception as e:
        logger.error("recorder_failed", url=url, error=str(e), exc_info=True)
        print(f"Recording failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print("\n--- Recorded YAML Configuration ---\n")
    print(dump_yaml(document))
    print("-----------------------------------\n")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    if getattr(args, "headless", False):
        settings = settings.model_copy(update={"headless": True})

    setup_logging(log_level=args.log_level)
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        version=settings.app_version,
        command=args.command,
    )

    if settings.metrics_port:
        metrics.start_metrics_server(settings.metrics_port)
        logger.info("metrics_server_started", port=settings.metrics_port)

    if args.command == "run":
        return asyncio.run(run_command(args.config, settings))
    if args.command == "inspect":
        return asyncio.run(inspect_command(args.url, settings))
    return asyncio.run(record_command(args.url, settings))


if __name__ == "__main__":
    sys.exit(main())
