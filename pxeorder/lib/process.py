"""Process utilities for commands."""

import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pxeorder.core.context import Context


class CommandError(Exception):
    """Error running a command."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def run_command(
    cmd: list[str],
    context: "Context | None" = None,
    check: bool = False,
) -> str:
    """
    Run a command and return its output.

    Args:
        cmd: Command and arguments
        context: Execution context (for testing)
        check: Raise on non-zero exit

    Returns:
        Command stdout

    Raises:
        CommandError: If the command cannot be started, or if check=True
            and it exits non-zero
    """
    if context is None:
        from pxeorder.core.context import Context
        context = Context()

    try:
        result = context.run(cmd)
    except (OSError, subprocess.SubprocessError) as e:
        raise CommandError(f"Command failed: {' '.join(cmd)}: {e}") from e

    if check and result.returncode != 0:
        stderr = (result.stderr or "").strip()
        detail = f": {stderr}" if stderr else ""
        raise CommandError(
            f"Command failed with exit code {result.returncode}: {' '.join(cmd)}{detail}",
            returncode=result.returncode,
            stderr=stderr,
        )

    return result.stdout


def check_tool(
    name: str,
    context: "Context | None" = None,
    required: bool = False,
) -> bool:
    """
    Check if a tool exists in PATH.

    Args:
        name: Tool name to check
        context: Execution context (for testing)
        required: Raise if tool is missing

    Returns:
        True if tool exists

    Raises:
        CommandError: If required=True and tool is missing
    """
    if context is None:
        from pxeorder.core.context import Context
        context = Context()

    exists = context.check_tool(name)

    if required and not exists:
        raise CommandError(f"Required tool not found: {name}")

    return exists
