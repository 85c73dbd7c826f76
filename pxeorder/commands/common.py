"""Options and helpers shared by commands."""

import argparse
from pathlib import Path

from pxeorder.core.config import Settings, load_settings
from pxeorder.core.context import Context
from pxeorder.core.logging import LOG_FORMATS, EventLogger
from pxeorder.core.planner import Snapshot


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Options every command accepts."""
    parser.add_argument(
        "--config",
        type=Path,
        help="Additional YAML config file (overrides system and user config)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        dest="log_path",
        help="Event log path (default: /var/log/boot-order-fix.log)",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        help="Event log format (default: text)",
    )
    parser.add_argument(
        "--efibootmgr",
        help="efibootmgr command or path",
    )


def settings_from_args(opts: argparse.Namespace) -> Settings:
    """Load layered settings with command-line overrides on top."""
    return load_settings(
        opts.config,
        overrides={
            "log_path": opts.log_path,
            "log_format": opts.log_format,
            "efibootmgr": opts.efibootmgr,
        },
    )


def make_logger(settings: Settings, context: Context) -> EventLogger:
    """Event logger configured from settings."""
    return EventLogger(
        log_path=settings.log_path,
        fmt=settings.log_format,
        syslog_tag=settings.syslog_tag,
        context=context,
    )


def describe_entries(snapshot: Snapshot) -> list[dict[str, str]]:
    """Boot entries as rows for output."""
    return [
        {
            "id": f"Boot{entry.id}{'*' if entry.active else ''}",
            "category": entry.category.value,
            "description": entry.description,
        }
        for entry in snapshot.entries
    ]
