"""Headless commands for inspecting and repairing the stored dashboard state."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from safety_dashboard.core.enums import DayStatus
from safety_dashboard.core.services import KeyValueStorage
from safety_dashboard.core.time import ManualScheduler
from safety_dashboard.dashboard.codecs import (
    encode_layout,
    encode_safety_record,
    encode_slots,
)
from safety_dashboard.dashboard.config import DashboardConfig, load_config_from_env
from safety_dashboard.dashboard.controller import DashboardController
from safety_dashboard.dashboard.db import open_db
from safety_dashboard.dashboard.kv_store import SqliteKeyValueStore
from safety_dashboard.dashboard.logging_setup import (
    install_storage_warning_recorder,
    remove_handler,
)

logger = logging.getLogger(__name__)

STATUS_CHOICES = [str(status) for status in DayStatus] + ["none"]


def register_subcommands(sub: argparse._SubParsersAction) -> None:
    def add_global_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--db", default=None, help="Database path (default: XDG state dir)")
        p.add_argument(
            "--debug",
            dest="debug",
            action="store_true",
            help="Print tracebacks on failure",
        )

    show = sub.add_parser("show", help="Print the stored records as they would be loaded")
    add_global_args(show)
    show.add_argument("--year", type=int, default=None, help="Safety record year (default: now)")

    reset = sub.add_parser("reset-layout", help="Restore the default proportions and slots")
    add_global_args(reset)

    set_day = sub.add_parser("set-day", help="Record the status of one calendar day")
    add_global_args(set_day)
    set_day.add_argument("year", type=int)
    set_day.add_argument("month", type=int, help="1-12")
    set_day.add_argument("day", type=int)
    set_day.add_argument("status", choices=STATUS_CHOICES)

    export = sub.add_parser("export-logs", help="Export application logs for bug reports")
    export.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write logs to file (default: stdout)",
    )


def _config(args: argparse.Namespace) -> DashboardConfig:
    config = load_config_from_env()
    if getattr(args, "db", None):
        config.db_path = Path(args.db).expanduser()
    return config


def _open_storage(config: DashboardConfig) -> SqliteKeyValueStore:
    return SqliteKeyValueStore(open_db(config.db_path))


def _controller(
    args: argparse.Namespace,
    year: int | None = None,
    storage: KeyValueStorage | None = None,
) -> DashboardController:
    config = _config(args)
    if storage is None:
        storage = _open_storage(config)
    controller = DashboardController(
        storage, scheduler=ManualScheduler(), config=config, year=year
    )
    controller.load()
    return controller


def _show(args: argparse.Namespace) -> int:
    storage = _open_storage(_config(args))
    recorder = install_storage_warning_recorder()
    try:
        controller = _controller(args, args.year, storage)
    finally:
        remove_handler(recorder)
    # Showing must not write back what load() derived (auto-safe, defaults).
    controller.close(flush=False)

    payload: dict[str, Any] = {
        "stored": storage.keys(),
        "states": controller.record_states(),
        "layout": encode_layout(controller.get_layout()),
        "slots": encode_slots(controller.get_slots()),
        "uiScale": controller.get_ui_scale(),
        "safety": encode_safety_record(controller.get_safety_record()),
        "warnings": recorder.messages,
    }
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    print()
    return 0


def _reset_layout(args: argparse.Namespace) -> int:
    controller = _controller(args)
    controller.reset_layout()
    controller.close(flush=True)
    print("Layout reset to defaults")
    return 0


def _set_day(args: argparse.Namespace) -> int:
    if not 1 <= args.month <= 12:
        print(f"error: month must be 1-12, got {args.month}", file=sys.stderr)
        return 2
    controller = _controller(args, args.year)
    month = controller.get_safety_record().monthly_data[args.month - 1]
    if not 1 <= args.day <= len(month.days):
        controller.close(flush=False)
        print(f"error: {args.year}-{args.month:02d} has {len(month.days)} days", file=sys.stderr)
        return 2
    status = None if args.status == "none" else DayStatus(args.status)
    controller.set_day_status(args.month - 1, args.day, status)
    controller.close(flush=True)
    print(f"{args.year}-{args.month:02d}-{args.day:02d}: {args.status}")
    return 0


def _export_logs(output: str | None) -> int:
    from safety_dashboard.dashboard.logging_setup import export_logs_to_path, export_logs_to_stdout

    if output:
        export_logs_to_path(output)
        print(f"Logs written to {output}")
    else:
        export_logs_to_stdout()
    return 0


def run_command(args: argparse.Namespace) -> int:
    if args.command == "export-logs":
        return _export_logs(args.output)
    if args.command == "show":
        return _show(args)
    if args.command == "reset-layout":
        return _reset_layout(args)
    if args.command == "set-day":
        return _set_day(args)
    print(f"error: unknown command {args.command!r}", file=sys.stderr)
    return 2
