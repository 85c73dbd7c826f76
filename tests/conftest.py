"""Shared test fixtures."""

import subprocess
import sys
from pathlib import Path

import pytest

# Add project root to path for package imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures"

EFI_FILES = {
    "/sys/firmware/efi": "",
    "/sys/firmware/efi/efivars": "",
}


class MockContext:
    """Mock Context for testing commands without real system access."""

    def __init__(
        self,
        tools_available: list[str] | None = None,
        command_outputs: dict[tuple, object] | None = None,
        file_contents: dict[str, str] | None = None,
        root: bool = True,
        tty: bool = False,
    ):
        self.tools_available = set(tools_available or [])
        self.command_outputs = command_outputs or {}
        self.file_contents = file_contents or {}
        self.root = root
        self.tty = tty
        self.commands_run: list[list[str]] = []
        self.sleeps: list[float] = []

    def check_tool(self, name: str) -> bool:
        """Check if tool is in mocked available list."""
        return name in self.tools_available

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """
        Return mocked command output.

        An output may be a string, an Exception to raise, a CompletedProcess
        (e.g. for a non-zero returncode), or a list of those consumed one
        per call, the last one repeating.
        """
        self.commands_run.append(cmd)
        key = tuple(cmd)
        if key not in self.command_outputs:
            raise KeyError(f"No mock output for command: {cmd}")

        output = self.command_outputs[key]
        if isinstance(output, list):
            output = output.pop(0) if len(output) > 1 else output[0]

        if isinstance(output, Exception):
            raise output

        if isinstance(output, subprocess.CompletedProcess):
            return output

        return subprocess.CompletedProcess(
            cmd,
            returncode=0,
            stdout=output,
            stderr="",
        )

    def read_file(self, path: str) -> str:
        """Return mocked file content."""
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        return self.file_contents[path]

    def file_exists(self, path: str) -> bool:
        """Check if path is in mocked files."""
        return path in self.file_contents

    def is_root(self) -> bool:
        return self.root

    def is_tty(self) -> bool:
        return self.tty

    def sleep(self, seconds: float) -> None:
        """Record the sleep instead of sleeping."""
        self.sleeps.append(seconds)


def failed(cmd: list[str], returncode: int = 1, stderr: str = "") -> subprocess.CompletedProcess:
    """A CompletedProcess for a command that exited non-zero."""
    return subprocess.CompletedProcess(cmd, returncode=returncode, stdout="", stderr=stderr)


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep the user's own pxeorder config out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr("pxeorder.core.config.SYSTEM_CONFIG", tmp_path / "etc" / "config.yaml")
    return home


def load_fixture(category: str, name: str) -> str:
    """Load a fixture file by category and name."""
    fixture_path = FIXTURES_DIR / category / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()


def load_report(name: str) -> str:
    """Load an efibootmgr report fixture."""
    return load_fixture("efibootmgr", name)
