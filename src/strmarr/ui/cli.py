from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, SIGTERM, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from strmarr.app import ensure_media_root, log_startup, sync_pointer_files
from strmarr.config import ConfigurationError, configure_logging, get_sync_config
from strmarr.scheduler import SyncScheduler

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from strmarr.config import SyncConfig

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep .strm pointer files in sync with a Playarr library"
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="INFO",
        help="Logging verbosity (default: %(default)s)",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Optional .env file to load before reading the environment",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="Sync now, then on the configured schedule (default)")
    subparsers.add_parser("sync", help="Run a single synchronization and exit")

    args = parser.parse_args(list(argv))
    if args.command is None:
        args.command = "serve"
    return args


def _serve(config: SyncConfig) -> None:
    scheduler = SyncScheduler(lambda: sync_pointer_files(config), config.schedule)

    def shutdown_handler(_signal_received: int, _frame: FrameType | None) -> None:
        log.info("Shutting down gracefully...")
        scheduler.stop(timeout=0)

    signal(SIGINT, shutdown_handler)
    signal(SIGTERM, shutdown_handler)

    scheduler.trigger()
    scheduler.serve_forever()


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=parsed_args.log_level)
    load_dotenv(parsed_args.env_file)

    try:
        config = get_sync_config()
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)  # noqa: TRY400
        sys.exit(1)

    try:
        log_startup(config)
        ensure_media_root(config.media_root)
        if parsed_args.command == "sync":
            report = sync_pointer_files(config)
            if not report.completed:
                sys.exit(1)
        else:
            _serve(config)
    except OSError:
        log.exception("Error starting application")
        sys.exit(1)


if __name__ == "__main__":
    main()
