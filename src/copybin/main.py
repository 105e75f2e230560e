#!/usr/bin/env python3

import argparse
import dataclasses
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from copybin.clipboard import get_pasteboard
from copybin.config import HistoryConfig
from copybin.database.base import HistoryStore
from copybin.database.json_store import JsonFileStore
from copybin.models.entry import ClipboardEntry
from copybin.services.clipboard_service import ClipboardService
from copybin.utils.filters import format_timestamp, preview

logger = logging.getLogger(__name__)


def build_store(config: HistoryConfig) -> HistoryStore:
    if config.redis_uri:
        from copybin.database.redis_store import RedisHistoryStore
        logger.info("Using Redis history store")
        return RedisHistoryStore.from_uri(config.redis_uri)
    return JsonFileStore(config.store_path)


def log_latest(entries: List[ClipboardEntry]) -> None:
    if not entries:
        return
    latest = entries[0]
    logger.debug("[%s] %s %s (%d in history)",
                 format_timestamp(latest.created_at), latest.kind.value,
                 preview(latest.content), len(entries))


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Copybin - clipboard history recorder"
    )

    parser.add_argument(
        "-i", "--poll-interval",
        type=float,
        default=None,
        help="Clipboard polling interval in seconds (default: 1.0)"
    )

    parser.add_argument(
        "-m", "--max-items",
        type=int,
        default=None,
        help="Number of entries kept in history (default: 100)"
    )

    parser.add_argument(
        "-s", "--store",
        type=Path,
        default=None,
        help="History file (default: ~/.copybin/history.json)"
    )

    parser.add_argument(
        "--redis",
        metavar="URI",
        default=None,
        help="Keep history in Redis instead of a file, e.g. redis://localhost:6379/0"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose debug logging"
    )

    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace, base: Optional[HistoryConfig] = None) -> HistoryConfig:
    config = base or HistoryConfig.from_env()
    overrides = {}
    if args.poll_interval is not None:
        overrides["poll_interval"] = args.poll_interval
    if args.max_items is not None:
        overrides["max_items"] = args.max_items
    if args.store is not None:
        overrides["store_path"] = args.store.expanduser()
    if args.redis is not None:
        overrides["redis_uri"] = args.redis
    return dataclasses.replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        config = config_from_args(args)
        store = build_store(config)
        pasteboard = get_pasteboard()
    except (ValueError, NotImplementedError) as e:
        logger.error(f"Cannot start: {e}")
        sys.exit(2)

    service = ClipboardService(pasteboard, store, config=config)
    service.add_listener(log_latest)

    def signal_handler(signum, frame):
        service.stop()
        store.close()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Copybin running with %d entries. Press Ctrl+C to stop", len(service.entries))
    try:
        service.run_forever()
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
    finally:
        store.close()


if __name__ == "__main__":
    main()
