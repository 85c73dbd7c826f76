"""
Put PXE network boot entries first in the UEFI boot order.

Meant to run once at early startup from a oneshot service. Orders PXE
IPv4, PXE IPv6 and other PXE entries first, then the entry the running
OS booted from, then every remaining entry except generic "Hard Drive"
entries. The new order is applied with retries and verified.

Exit codes:
    0 - Boot order already optimal, corrected, or not an EFI system
    1 - Boot order could not be planned, applied or verified, or the
        event log could not be written
    2 - Usage error, not root, or efibootmgr not available
"""

import argparse

from pxeorder.commands.common import add_common_arguments, make_logger, settings_from_args
from pxeorder.core.bootmgr import BootManager
from pxeorder.core.config import ConfigError
from pxeorder.core.context import Context
from pxeorder.core.errors import BootOrderError
from pxeorder.core.fixer import BootOrderFixer
from pxeorder.core.output import Output
from pxeorder.lib.process import CommandError


def run(args: list[str], output: Output, context: Context) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context

    Returns:
        0 = success or nothing to do, 1 = failure, 2 = error
    """
    parser = argparse.ArgumentParser(
        prog="pxeorder fix",
        description="Put PXE network boot entries first in the UEFI boot order",
    )
    add_common_arguments(parser)
    parser.add_argument(
        "-n", "--dry-run", action="store_true", help="Compute and log the new order without applying it"
    )
    opts = parser.parse_args(args)

    try:
        settings = settings_from_args(opts)
    except ConfigError as e:
        output.error(f"Invalid configuration: {e}")
        return 2

    if not context.is_root():
        output.error("This command must be run as root")
        return 2

    manager = BootManager(context, binary=settings.efibootmgr)

    if not manager.is_efi_system():
        output.emit({"status": "skipped"})
        output.warning("This system is not using EFI/UEFI boot. Skipping boot order setup.")
        return 0

    if not manager.available():
        output.error(f"{settings.efibootmgr} not found")
        return 2

    try:
        with make_logger(settings, context) as logger:
            fixer = BootOrderFixer(manager, logger, settings, sleep=context.sleep)
            try:
                result = fixer.run(dry_run=opts.dry_run)
            except (BootOrderError, CommandError) as e:
                output.emit({"status": "failed", "error": type(e).__name__})
                output.error(str(e))
                return 1
    except OSError as e:
        output.emit({"status": "failed", "error": type(e).__name__})
        output.error(f"Cannot write event log {settings.log_path}: {e}")
        return 1

    output.emit(result.to_dict())
    if result.status == "applied":
        output.set_summary(f"boot order set to {result.plan.as_argument()}")
    else:
        output.set_summary(result.status)
    return 0


if __name__ == "__main__":
    import sys

    out = Output()
    code = run(sys.argv[1:], out, Context())
    out.render()
    sys.exit(code)
