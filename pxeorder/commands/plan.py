"""
Show the boot order that fix would apply, without applying it.

Reads the live efibootmgr report, or a saved one with --report, which
makes it usable on any machine to check how a report would be handled.

Exit codes:
    0 - Plan computed (whether or not a change is needed)
    1 - No PXE entry, no usable BootOrder, or the report could not be read
    2 - Usage error or efibootmgr not available
"""

import argparse
from pathlib import Path

from pxeorder.commands.common import add_common_arguments, describe_entries, settings_from_args
from pxeorder.core.bootmgr import BootManager
from pxeorder.core.config import ConfigError
from pxeorder.core.context import Context
from pxeorder.core.errors import BootOrderError
from pxeorder.core.output import Output
from pxeorder.core.planner import compute_plan, hard_drive_ids, is_already_optimal
from pxeorder.core.report import parse_report
from pxeorder.lib.process import CommandError


def run(args: list[str], output: Output, context: Context) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context

    Returns:
        0 = plan computed, 1 = cannot plan, 2 = error
    """
    parser = argparse.ArgumentParser(
        prog="pxeorder plan",
        description="Show the PXE-first boot order without applying it",
    )
    add_common_arguments(parser)
    parser.add_argument(
        "-r", "--report", type=Path, help="Read a saved efibootmgr report instead of the live one"
    )
    opts = parser.parse_args(args)

    try:
        settings = settings_from_args(opts)
    except ConfigError as e:
        output.error(f"Invalid configuration: {e}")
        return 2

    if opts.report is not None:
        try:
            text = context.read_file(str(opts.report))
        except OSError as e:
            output.error(f"Unable to read report {opts.report}: {e}")
            return 2
        snapshot = parse_report(text)
    else:
        manager = BootManager(context, binary=settings.efibootmgr)
        if not manager.available():
            output.error(f"{settings.efibootmgr} not found")
            return 2
        try:
            snapshot = manager.snapshot()
        except CommandError as e:
            output.error(str(e))
            return 1

    output.emit({
        "boot_current": snapshot.current,
        "boot_order": list(snapshot.order),
        "entries": describe_entries(snapshot),
    })

    try:
        optimal = is_already_optimal(snapshot)
        plan = compute_plan(snapshot)
    except BootOrderError as e:
        output.emit({"status": "failed", "error": type(e).__name__})
        output.error(str(e))
        return 1

    output.emit({
        "status": "already-optimal" if optimal else "planned",
        "already_optimal": optimal,
        "new_order": list(plan.order),
        "changed": plan.changed,
        "dropped": [i for i in hard_drive_ids(snapshot) if i not in plan.order],
    })
    if optimal:
        output.set_summary("boot order already optimal")
    else:
        output.set_summary(f"would set boot order to {plan.as_argument()}")
    return 0


if __name__ == "__main__":
    import sys

    out = Output()
    code = run(sys.argv[1:], out, Context())
    out.render()
    sys.exit(code)
