"""Application entry point for the bbpush command line."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from contextlib import redirect_stdout
from logging.handlers import RotatingFileHandler
from typing import Iterable, Optional

from art import tprint
from rich.console import Console

from bbpush import settings
from bbpush.adapters.delivery import LoggingDelivery, StreamDelivery, serialize_delivery
from bbpush.adapters.jsonl_events import JsonlEventSource, ReplayStats
from bbpush.adapters.localizer import GettextLocalizer
from bbpush.adapters.sqlite_site import SQLiteSite
from bbpush.core.classifier import ContentClassifier
from bbpush.core.config import EntityTypeMap, NotificationConfig
from bbpush.core.extractor import MessageExtractor
from bbpush.core.gate import InsertionGate
from bbpush.core.pipeline import NotificationPipeline
from bbpush.core.ports import DeliveryService
from bbpush.core.targets import TargetResolver, load_threading_config

NAME = "BBPUSH"
FONT = "tarty-1"


def _print_banner() -> None:
    # The banner goes to stderr so stdout stays clean for JSON lines.
    with redirect_stdout(sys.stderr):
        tprint(NAME, FONT, space=1)


def _log_level(config: dict) -> int:
    level_name = str(config.get("level", "INFO")).upper()
    return getattr(logging, level_name, logging.INFO)


def _build_log_handlers(config: dict) -> list[logging.Handler]:
    level = _log_level(config)
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        # stderr keeps log lines apart from the stdout delivery stream.
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/bbpush.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.CONFIG_DIR, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    handlers = _build_log_handlers(config)
    if not handlers:
        return

    logging.basicConfig(level=_log_level(config), handlers=handlers)


def _entity_types() -> EntityTypeMap:
    return EntityTypeMap(
        section=settings.ENTITY_SECTION,
        post=settings.ENTITY_POST,
        comment=settings.ENTITY_COMMENT,
    )


def _build_delivery() -> DeliveryService:
    # Select the delivery adapter from configuration to keep the core
    # pipeline independent from where notifications end up.
    if settings.DELIVERY_METHOD == "log":
        return LoggingDelivery()
    if settings.DELIVERY_METHOD == "stdout":
        return StreamDelivery(sys.stdout)
    raise RuntimeError("notifications.delivery_method must be 'log' or 'stdout'")


def _build_pipeline(site: SQLiteSite, delivery: DeliveryService) -> NotificationPipeline:
    entity_types = _entity_types()
    extractor = MessageExtractor(
        users=site,
        metadata=site.metadata,
        titles=site,
        localizer=GettextLocalizer(settings.LOCALE_DIR, settings.LANGUAGES),
        config=NotificationConfig(snippet_chars=settings.SNIPPET_CHARS),
    )
    return NotificationPipeline(
        gate=InsertionGate(),
        classifier=ContentClassifier(),
        extractor=extractor,
        resolver=TargetResolver(entity_types, site.metadata),
        options=site.options,
        delivery=delivery,
    )


def _open_site() -> SQLiteSite:
    site = SQLiteSite(settings.DB_PATH)
    site.init_db()
    return site


def _init_db(snapshot_path: Optional[str]) -> None:
    logger = logging.getLogger(__name__)
    site = _open_site()
    logger.info("Site database ready at %s", settings.DB_PATH)
    if not snapshot_path:
        return
    with open(snapshot_path, "r", encoding="utf-8") as handle:
        snapshot = json.load(handle)
    count = site.load_snapshot(snapshot)
    logger.info("Imported %s posts from %s", count, snapshot_path)


def _run(events_path: Optional[str]) -> None:
    logger = logging.getLogger(__name__)
    logger.info("Starting bbpush")

    site = _open_site()
    delivery = _build_delivery()
    logger.info("Selected delivery method - %s", settings.DELIVERY_METHOD)
    pipeline = _build_pipeline(site, delivery)

    if events_path and events_path != "-":
        with open(events_path, "r", encoding="utf-8") as handle:
            stats = _replay(pipeline, handle)
    else:
        stats = _replay(pipeline, sys.stdin)

    logger.info(
        "Replay complete: events=%s, malformed=%s, failed=%s",
        stats.events,
        stats.malformed,
        stats.failed,
    )


def _replay(pipeline: NotificationPipeline, lines: Iterable[str]) -> ReplayStats:
    source = JsonlEventSource(lines, _entity_types())
    pipeline.register(source)
    return source.run()


def _resolve(post_id: int) -> int:
    console = Console()
    site = _open_site()
    entity_types = _entity_types()
    item = site.get_post(post_id, entity_types)
    if item is None:
        console.print(f"[red]No post with id {post_id}[/red]")
        return 1

    classifier = ContentClassifier()
    if not classifier.is_eligible(item):
        console.print(f"[yellow]Post {post_id} ({item.post_type}, {item.status}) is not eligible[/yellow]")
        return 1

    pipeline = _build_pipeline(site, LoggingDelivery())
    threading = load_threading_config(site.options)
    console.print(
        f"Threading: enabled={threading.enabled} max_depth={threading.max_depth}",
        highlight=False,
    )
    delivery = pipeline.handle_content_insertion(item)
    if delivery is None:
        console.print("[yellow]No subscription target[/yellow]")
        return 1
    console.print_json(data=serialize_delivery(delivery.payload, delivery.targets))
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="bbpush")
    subparsers = parser.add_subparsers(dest="command")

    init_parser = subparsers.add_parser("init-db", help="Create the site database tables")
    init_parser.add_argument("--snapshot", help="JSON site snapshot to import")

    run_parser = subparsers.add_parser("run", help="Replay content-save events through the pipeline")
    run_parser.add_argument("--events", help="JSON-lines event file (default: stdin)")

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Show the payload and targets for a stored topic or reply.",
    )
    resolve_parser.add_argument("post_id", type=int)

    args = parser.parse_args(argv)
    _print_banner()
    _configure_logging()

    if args.command == "init-db":
        _init_db(args.snapshot)
        return
    if args.command == "resolve":
        raise SystemExit(_resolve(args.post_id))
    _run(getattr(args, "events", None))


if __name__ == "__main__":
    main()
