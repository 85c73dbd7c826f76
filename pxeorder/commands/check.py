"""
Report whether the boot order has PXE first and the current OS second.

Read-only companion of fix: shows the service state, BootCurrent, the
PXE entries, the first two entries of BootOrder, all boot entries and
the tail of the event log.

Exit codes:
    0 - PXE entry is first (or not an EFI system)
    1 - PXE is not first, or EFI boot data could not be read
    2 - Usage error or efibootmgr not available
"""

import argparse
from typing import Any

from pxeorder.commands.common import add_common_arguments, describe_entries, settings_from_args
from pxeorder.core.bootmgr import BootManager
from pxeorder.core.config import ConfigError
from pxeorder.core.context import Context
from pxeorder.core.logging import tail_log
from pxeorder.core.output import Output
from pxeorder.core.planner import Snapshot, first_is_pxe, pxe_ids
from pxeorder.lib.process import CommandError, run_command


DEFAULT_UNIT = "fix-boot-order.service"


def service_state(unit: str, context: Context) -> dict[str, str] | None:
    """Enabled/active state of the boot-time unit, or None without systemctl."""
    if not context.check_tool("systemctl"):
        return None
    state = {}
    for query in ("is-enabled", "is-active"):
        try:
            value = run_command(["systemctl", query, unit], context=context).strip()
        except CommandError:
            value = ""
        state[query.replace("is-", "")] = value or "unknown"
    return state


def build_findings(snapshot: Snapshot) -> list[dict[str, Any]]:
    """Findings about PXE-first and OS-second."""
    findings = []
    order = snapshot.order
    second = order[1] if len(order) > 1 else None

    if first_is_pxe(snapshot):
        findings.append({"level": "ok", "message": "PXE entry is first in boot order"})
        if snapshot.current and second == snapshot.current:
            findings.append({"level": "ok", "message": "Current OS is second in boot order"})
        else:
            findings.append({
                "level": "warning",
                "message": f"Second entry ({second or 'none'}) is not current OS ({snapshot.current or 'unknown'})",
            })
    else:
        findings.append({"level": "critical", "message": "PXE is NOT first in boot order"})

    return findings


def run(args: list[str], output: Output, context: Context) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context

    Returns:
        0 = PXE first, 1 = PXE not first or unreadable, 2 = error
    """
    parser = argparse.ArgumentParser(
        prog="pxeorder check",
        description="Report whether PXE is first and the current OS second in the boot order",
    )
    add_common_arguments(parser)
    parser.add_argument(
        "-l", "--lines", type=int, default=20, help="Number of recent log lines to show (default: 20)"
    )
    parser.add_argument(
        "--unit", default=DEFAULT_UNIT, help=f"Boot-time service unit (default: {DEFAULT_UNIT})"
    )
    opts = parser.parse_args(args)

    if opts.lines < 0:
        output.error("--lines must be 0 or greater")
        return 2

    try:
        settings = settings_from_args(opts)
    except ConfigError as e:
        output.error(f"Invalid configuration: {e}")
        return 2

    manager = BootManager(context, binary=settings.efibootmgr)

    if not manager.is_efi_system():
        output.emit({"status": "skipped"})
        output.warning("This is not an EFI system")
        return 0

    if not manager.available():
        output.error(f"{settings.efibootmgr} not found")
        return 2

    try:
        snapshot = manager.snapshot()
    except CommandError as e:
        output.error(f"Could not read EFI boot data: {e}")
        return 1

    order = snapshot.order
    findings = build_findings(snapshot)
    pxe_first = first_is_pxe(snapshot)

    output.emit({
        "status": "ok" if pxe_first else "critical",
        "service": service_state(opts.unit, context),
        "boot_current": snapshot.current,
        "boot_next": snapshot.boot_next,
        "timeout": snapshot.timeout,
        "pxe_entries": pxe_ids(snapshot),
        "first_entry": order[0] if order else None,
        "second_entry": order[1] if len(order) > 1 else None,
        "boot_order": list(order),
        "entries": describe_entries(snapshot),
        "findings": findings,
        "log": tail_log(settings.log_path, opts.lines) if opts.lines else [],
    })
    output.set_summary("PXE first" if pxe_first else "PXE not first")

    return 0 if pxe_first else 1


if __name__ == "__main__":
    import sys

    out = Output()
    code = run(sys.argv[1:], out, Context())
    out.render()
    sys.exit(code)
