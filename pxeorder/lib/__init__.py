"""Shared utility library for pxeorder."""

from pxeorder.lib.process import CommandError, check_tool, run_command

__all__ = [
    "CommandError",
    "check_tool",
    "run_command",
]
