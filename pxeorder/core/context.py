"""Execution context for testability."""

import os
import shutil
import subprocess
import sys
import time
from pathlib import Path


class Context:
    """
    Wraps external calls for testability.

    In production: executes real commands
    In tests: can be replaced with MockContext
    """

    def check_tool(self, name: str) -> bool:
        """Check if a tool exists in PATH."""
        return shutil.which(name) is not None

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        timeout: int | None = 60,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """
        Run a command and return result.

        Args:
            cmd: Command and arguments as list
            check: Raise on non-zero exit code
            timeout: Timeout in seconds
            **kwargs: Additional subprocess.run arguments

        Returns:
            CompletedProcess with stdout, stderr, returncode
        """
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=check,
            timeout=timeout,
            **kwargs,
        )

    def read_file(self, path: str) -> str:
        """Read file contents."""
        return Path(path).read_text()

    def file_exists(self, path: str) -> bool:
        """Check if file exists."""
        return Path(path).exists()

    def is_root(self) -> bool:
        """True when running with an effective uid of 0."""
        return os.geteuid() == 0

    def is_tty(self) -> bool:
        """True when stdout is attached to a terminal."""
        return sys.stdout.isatty()

    def sleep(self, seconds: float) -> None:
        """Sleep between polls and retries."""
        time.sleep(seconds)
