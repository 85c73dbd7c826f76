"""pxeorder commands.

Each module exposes ``run(args, output, context) -> int``.
"""

from pxeorder.commands import check, fix, logs, next_boot, plan

COMMANDS = {
    "fix": (fix, "Put PXE entries first in the boot order (boot-time service)"),
    "plan": (plan, "Show the boot order fix would apply, without applying it"),
    "check": (check, "Report whether PXE is first and the current OS second"),
    "next": (next_boot, "Boot from the PXE entry once via BootNext"),
    "logs": (logs, "Show recent entries from the event log"),
}

__all__ = ["COMMANDS"]
