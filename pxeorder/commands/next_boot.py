"""
Boot from the PXE entry once, via BootNext, leaving BootOrder alone.

Picks the entry fix would put first (PXE IPv4 before IPv6 before other
PXE entries) unless one is given with --entry. Without --entry nothing is
written when a PXE IPv4 entry already heads BootOrder.

Exit codes:
    0 - BootNext set, or PXE IPv4 already first
    1 - No PXE entry, unknown entry, efibootmgr failed, or the event log
        could not be written
    2 - Usage error, not root, or efibootmgr not available
"""

import argparse

from pxeorder.commands.common import add_common_arguments, make_logger, settings_from_args
from pxeorder.core.bootmgr import BootManager
from pxeorder.core.config import ConfigError
from pxeorder.core.context import Context
from pxeorder.core.logging import EventLogger
from pxeorder.core.output import Output
from pxeorder.core.planner import Category, preferred_pxe
from pxeorder.core.report import parse_boot_id
from pxeorder.lib.process import CommandError


def run(args: list[str], output: Output, context: Context) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context

    Returns:
        0 = BootNext set, 1 = failure, 2 = error
    """
    parser = argparse.ArgumentParser(
        prog="pxeorder next",
        description="Set a one-time BootNext to the PXE boot entry",
    )
    add_common_arguments(parser)
    parser.add_argument("-e", "--entry", help="Boot entry id to use instead of the preferred PXE entry")
    opts = parser.parse_args(args)

    entry_id = None
    if opts.entry is not None:
        entry_id = parse_boot_id(opts.entry)
        if entry_id is None:
            output.error(f"Invalid boot entry id: {opts.entry} (expected 4 hex digits)")
            return 2

    try:
        settings = settings_from_args(opts)
    except ConfigError as e:
        output.error(f"Invalid configuration: {e}")
        return 2

    if not context.is_root():
        output.error("This command must be run as root")
        return 2

    manager = BootManager(context, binary=settings.efibootmgr)
    if not manager.available():
        output.error(f"{settings.efibootmgr} not found")
        return 2

    try:
        with make_logger(settings, context) as logger:
            return _set_next(entry_id, manager, logger, output)
    except OSError as e:
        output.error(f"Cannot write event log {settings.log_path}: {e}")
        return 1


def _set_next(entry_id: str | None, manager: BootManager, logger: EventLogger, output: Output) -> int:
    try:
        snapshot = manager.snapshot()
    except CommandError as e:
        logger.error(f"Could not retrieve EFI boot data: {e}")
        output.error(str(e))
        return 1

    first = snapshot.order[0] if snapshot.order else None
    if entry_id is None and first is not None and snapshot.category_of(first) == Category.PXE_IPV4:
        logger.info(f"PXE boot is already the first option in the boot order ({first}), BootNext not set")
        output.emit({
            "status": "already-first",
            "boot_next": snapshot.boot_next,
            "boot_order": list(snapshot.order),
        })
        output.set_summary(f"PXE entry {first} already first")
        return 0

    target = entry_id or preferred_pxe(snapshot)
    if target is None:
        logger.error("No PXE boot entries found")
        output.error("No PXE boot entries found")
        return 1
    entry = snapshot.entry(target)
    if entry is None:
        output.error(f"Boot entry {target} does not exist")
        return 1

    logger.info(f"Setting BootNext to {target} ({entry.description})")
    try:
        manager.set_next(target)
    except CommandError as e:
        logger.error(f"Failed to set BootNext to {target}: {e}")
        output.error(str(e))
        return 1

    logger.info(f"BootNext set to {target} ({entry.description})")
    output.emit({
        "status": "ok",
        "boot_next": target,
        "previous_boot_next": snapshot.boot_next,
        "description": entry.description,
        "boot_order": list(snapshot.order),
    })
    output.set_summary(f"next boot from {target}")
    return 0


if __name__ == "__main__":
    import sys

    out = Output()
    code = run(sys.argv[1:], out, Context())
    out.render()
    sys.exit(code)
