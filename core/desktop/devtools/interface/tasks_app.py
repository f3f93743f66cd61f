#!/usr/bin/env python3
"""
taskdeck: keyboard-driven terminal task manager.

All projects, tasks and tags live in one YAML document
(~/.taskdeck/taskdeck.yaml unless overridden).

This is a thin facade: argument parsing, logging setup, storage opening.
"""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from pathlib import Path

from application.errors import AppError
from config import get_data_path, get_log_level, get_status_ttl, get_theme
from core.desktop.devtools.interface.tui_app import TaskDeckTUI, cmd_tui
from core.desktop.devtools.interface.tui_log_view import LogState, install_log_capture
from core.desktop.devtools.interface.tui_themes import DEFAULT_THEME, THEMES
from infrastructure.yaml_storage import DEFAULT_DATA_PATH, YamlStorage

logger = logging.getLogger("taskdeck.app")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskdeck", description="Terminal task manager")
    parser.add_argument("--version", action="store_true", help="print version and exit")
    parser.add_argument("--data", type=Path, default=None, help=f"data file (default: {DEFAULT_DATA_PATH})")
    parser.add_argument("--memory", action="store_true", help="keep data in memory only")
    parser.add_argument("--theme", choices=sorted(THEMES), default=None, help="color theme")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="minimum level captured for the debug log view",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="also append log records to this file")
    parser.add_argument("--status-ttl", type=float, default=None, help="seconds a status message stays visible")
    return parser


def resolve_settings(args: argparse.Namespace) -> argparse.Namespace:
    """Fill unset options from the user config (and its env overrides)."""
    if args.theme is None:
        configured = get_theme()
        args.theme = configured if configured in THEMES else DEFAULT_THEME
    if args.log_level is None:
        args.log_level = get_log_level()
    if args.status_ttl is None:
        args.status_ttl = get_status_ttl()
    if args.data is None and not args.memory:
        args.data = get_data_path() or DEFAULT_DATA_PATH
    return args


def setup_logging(level_name: str, log_file=None) -> LogState:
    """Capture `taskdeck.*` records for the debug view; optionally mirror them to a file.

    Nothing goes to stderr: the terminal belongs to the full-screen UI.
    """
    level = logging.getLevelName(level_name)
    handler = install_log_capture(level=logging.DEBUG)
    root = logging.getLogger("taskdeck")
    root.propagate = False
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
    state = LogState(handler)
    state.set_display_level(level)
    return state


def open_storage(args: argparse.Namespace) -> YamlStorage:
    if args.memory:
        logger.info("Using in-memory storage")
        return YamlStorage.in_memory()
    logger.info("Opening %s", args.data)
    return YamlStorage(args.data)


def main() -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()
    if args.version:
        try:
            print(pkg_version("taskdeck"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    args = resolve_settings(args)
    log_state = setup_logging(args.log_level, args.log_file)
    try:
        storage = open_storage(args)
    except AppError as exc:
        logger.error("Cannot open storage: %s", exc)
        print(f"taskdeck: {exc}", file=sys.stderr)
        return 1
    return cmd_tui(args, storage, log_state)


__all__ = ["build_parser", "resolve_settings", "setup_logging", "open_storage", "main", "TaskDeckTUI"]


if __name__ == "__main__":
    sys.exit(main())
