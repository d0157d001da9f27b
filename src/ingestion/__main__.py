#!/usr/bin/env python3
"""
Main entry point for the ingestion package.

Runs the Twitch VOD → episode sync:
    uv run -m src.ingestion [--after YYYY-MM-DD] [--before YYYY-MM-DD] [--force]

All progress, warnings and the final summary are written to stderr.
Exits with code 0 on success (including runs with no videos), 1 on any
error, or 130 when interrupted by the user.
"""

import argparse
import re
import sys
from datetime import datetime
from typing import Optional, Sequence

from src.logger import setup_logging
from src.ingestion.dates import DEFAULT_TIMEZONE
from src.ingestion.sync_videos import (
    ASSETS_DIR,
    CHANNEL_LOGIN,
    CONTENT_DIR,
    SyncConfig,
    format_summary,
    sync_videos,
)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
LOGGER_NAMES = ("sync_videos", "twitch", "thumbnails", "episodes")


class SyncArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with code 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def date_arg(value: str) -> str:
    """argparse type for YYYY-MM-DD dates; no fuzzy parsing."""
    if not DATE_PATTERN.match(value):
        raise argparse.ArgumentTypeError(
            f"requires a date in YYYY-MM-DD format, got {value!r}"
        )
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a valid calendar date: {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = SyncArgumentParser(
        prog="python -m src.ingestion",
        description="Sync Twitch VODs into episode markdown files and thumbnails",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run -m src.ingestion                                   # Full video history
  uv run -m src.ingestion --after 2026-01-01                # Videos after Jan 1st (stops paging early)
  uv run -m src.ingestion --before 2026-02-01               # Videos before Feb 1st
  uv run -m src.ingestion --after 2026-01-01 --before 2026-02-01
  uv run -m src.ingestion --force                           # Re-download existing thumbnails
  uv run -m src.ingestion --dry-run --verbose               # Show what would change
        """,
    )

    parser.add_argument(
        "--after",
        type=date_arg,
        metavar="YYYY-MM-DD",
        help="Only include videos after this date (exclusive)",
    )
    parser.add_argument(
        "--before",
        type=date_arg,
        metavar="YYYY-MM-DD",
        help="Only include videos before this date (exclusive)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-download thumbnails even if they already exist",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be downloaded/created/updated without writing",
    )
    parser.add_argument(
        "--channel",
        default=CHANNEL_LOGIN,
        help=f"Twitch channel login (default: {CHANNEL_LOGIN})",
    )
    parser.add_argument(
        "--env-file", default=".env", help="Credentials file (default: .env)"
    )
    parser.add_argument(
        "--content-dir",
        default=CONTENT_DIR,
        help=f"Episode markdown directory (default: {CONTENT_DIR})",
    )
    parser.add_argument(
        "--assets-dir",
        default=ASSETS_DIR,
        help=f"Thumbnail directory (default: {ASSETS_DIR})",
    )
    parser.add_argument(
        "--timezone",
        default=DEFAULT_TIMEZONE,
        help=f"IANA timezone for episode dates (default: {DEFAULT_TIMEZONE})",
    )
    parser.add_argument(
        "--log-file",
        default="logs/sync_videos.log",
        help="Log file (default: logs/sync_videos.log)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Detailed console output"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None):
    """
    Entry point for the sync CLI.

    Parses command-line arguments, builds a SyncConfig and runs the sync,
    then prints the run summary to stderr.
    """
    args = build_parser().parse_args(argv)

    # Setup logging using centralized utility
    for name in LOGGER_NAMES:
        setup_logging(logger_name=name, log_file=args.log_file, verbose=args.verbose)
    logger = setup_logging(logger_name="sync_videos")
    logger.info("Starting video sync")

    config = SyncConfig(
        channel_login=args.channel,
        env_file=args.env_file,
        content_dir=args.content_dir,
        assets_dir=args.assets_dir,
        timezone=args.timezone,
        after_date=args.after,
        before_date=args.before,
        force=args.force,
        dry_run=args.dry_run,
    )

    try:
        stats = sync_videos(config)
    except KeyboardInterrupt:
        print("\nSync interrupted by user", file=sys.stderr)
        logger.info("Sync interrupted by user")
        sys.exit(130)
    except Exception as e:
        print(f"Error fetching videos: {e}", file=sys.stderr)
        logger.error(f"Sync failed: {e}")
        sys.exit(1)

    print(f"\n{format_summary(stats, config.channel_login)}\n", file=sys.stderr)
    logger.info(f"Operation completed: {stats}")
    sys.exit(0)


if __name__ == "__main__":
    main()
