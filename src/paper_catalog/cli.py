"""CLI/bootstrap helpers for the paper catalog."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from rich.console import Console

from paper_catalog.action_messages import (
    build_actionable_error,
    build_build_success_message,
    build_load_failure_message,
    build_skipped_records_warning,
)
from paper_catalog.config import get_config_path, load_config, save_config
from paper_catalog.errors import CatalogError
from paper_catalog.generate import build_site
from paper_catalog.models import CONFIG_APP_NAME, ESCAPER_NAMES, SiteConfig
from paper_catalog.store import RecordStore, load_store

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "data/papers.json"
DEFAULT_OUTPUT_DIR = Path(".")

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_RECORDS_SKIPPED = 2


def _configure_logging(debug: bool, *, interactive: bool = False) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level.

    Without --debug the interactive client suppresses all logging (the TUI
    owns the terminal) and batch commands show warnings on stderr.
    """
    if not debug:
        if interactive:
            logging.disable(logging.CRITICAL)
            return
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _apply_overrides(config: SiteConfig, args: argparse.Namespace) -> SiteConfig:
    """Layer one-run CLI overrides on top of the persisted config."""
    changes: dict[str, Any] = {}
    if getattr(args, "base_url", None):
        changes["base_url"] = args.base_url
    if getattr(args, "feed_limit", None) is not None:
        changes["feed_limit"] = args.feed_limit
    if getattr(args, "listing_escaper", None):
        changes["listing_escaper"] = args.listing_escaper
    # replace() re-runs __post_init__, which clamps feed_limit
    return replace(config, **changes) if changes else config


def _load_or_report(source: str, console: Console) -> RecordStore | None:
    """Load the store; on failure print an actionable message and return None."""
    try:
        return load_store(source)
    except CatalogError as exc:
        logger.error("Load failed: %s", exc)
        console.print(build_load_failure_message(exc))
        return None


def _run_build(args: argparse.Namespace, config: SiteConfig, console: Console) -> int:
    store = _load_or_report(args.input, console)
    if store is None:
        return EXIT_LOAD_FAILED

    console.print("Generating paper pages...\n")
    try:
        report = build_site(store, args.output, config)
    except OSError as exc:
        logger.error("Writing output failed: %s", exc)
        console.print(
            build_actionable_error(
                "write the generated site",
                why=str(exc),
                next_step="check that --output is a writable directory",
            )
        )
        return EXIT_LOAD_FAILED
    for page in report.pages:
        console.print(f"  ✓ {page.name}")
    for error in report.skipped:
        console.print(f"  ✗ {error.record_id} (missing {error.field})")
    console.print("\n  ✓ feed.xml\n  ✓ index.html")

    console.print(build_build_success_message(len(report.pages), str(args.output)))
    if report.skipped:
        console.print(build_skipped_records_warning(report.skipped))
        return EXIT_RECORDS_SKIPPED
    return EXIT_OK


def _run_browse(
    args: argparse.Namespace,
    console: Console,
    app_factory: Callable[..., Any] | None,
) -> int:
    store = _load_or_report(args.input, console)
    if store is None:
        return EXIT_LOAD_FAILED
    if app_factory is None:
        from paper_catalog.app import CatalogBrowser

        app_factory = CatalogBrowser
    app_factory(store).run()
    return EXIT_OK


def _run_config(args: argparse.Namespace, config: SiteConfig, console: Console) -> int:
    config_path = args.config or get_config_path()
    if args.show:
        console.print_json(
            data={
                "path": str(config_path),
                "base_url": config.base_url,
                "feed_limit": config.feed_limit,
                "site_title": config.site_title,
                "feed_title": config.feed_title,
                "feed_description": config.feed_description,
                "language": config.language,
                "listing_escaper": config.listing_escaper,
            }
        )
        return EXIT_OK
    if not save_config(config, config_path):
        console.print(f"Could not save config to {config_path}.")
        return EXIT_LOAD_FAILED
    console.print(f"Saved config to {config_path}")
    return EXIT_OK


def _add_site_overrides(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Site base URL used for feed permalinks and GUIDs",
    )
    parser.add_argument(
        "--feed-limit",
        type=int,
        default=None,
        help="Maximum number of feed entries (default: 20)",
    )
    parser.add_argument(
        "--listing-escaper",
        choices=ESCAPER_NAMES,
        default=None,
        help="Escaper used for the static listing snapshot",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with build/browse/config subcommands."""
    parser = argparse.ArgumentParser(
        prog="paper-catalog",
        description="Browse a catalog of research papers or generate its static site",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/paper-catalog/debug.log)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to an alternate config.json",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Regenerate detail pages, index, and feed")
    build.add_argument(
        "-i",
        "--input",
        type=str,
        default=DEFAULT_INPUT,
        help=f"Paper records JSON file or URL (default: {DEFAULT_INPUT})",
    )
    build.add_argument(
        "-o",
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="Directory receiving papers/, feed.xml, and index.html",
    )
    _add_site_overrides(build)

    browse = subparsers.add_parser("browse", help="Search and filter papers in the terminal")
    browse.add_argument(
        "-i",
        "--input",
        type=str,
        default=DEFAULT_INPUT,
        help=f"Paper records JSON file or URL (default: {DEFAULT_INPUT})",
    )

    config = subparsers.add_parser("config", help="Show or persist site settings")
    config.add_argument("--show", action="store_true", help="Print the effective settings")
    _add_site_overrides(config)
    return parser


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[Path | None], SiteConfig] = load_config,
    configure_logging_fn: Callable[..., None] = _configure_logging,
    console: Console | None = None,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    args = build_parser().parse_args(argv)
    configure_logging_fn(args.debug, interactive=args.command == "browse")
    console = console or Console(markup=False, highlight=False, emoji=False)

    config = _apply_overrides(load_config_fn(args.config), args)

    if args.command == "build":
        return _run_build(args, config, console)
    if args.command == "browse":
        return _run_browse(args, console, app_factory)
    return _run_config(args, config, console)


def cli_entry() -> None:
    """Console-script entry point."""
    sys.exit(main())


__all__ = [
    "EXIT_LOAD_FAILED",
    "EXIT_OK",
    "EXIT_RECORDS_SKIPPED",
    "build_parser",
    "main",
]
