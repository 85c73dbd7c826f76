"""Structured output helper for commands."""

import json
from typing import Any


COLORS = {
    "ok": "\033[0;32m",
    "warning": "\033[1;33m",
    "critical": "\033[0;31m",
}
RESET = "\033[0m"


class Output:
    """Helper for structured command output."""

    def __init__(self, color: bool = False):
        self.data: dict[str, Any] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.color = color
        self._summary: str | None = None
        self._printed: bool = False

    def emit(self, data: dict[str, Any]) -> None:
        """Store structured output data."""
        self.data.update(data)

    def error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    def warning(self, message: str) -> None:
        """Record a warning message."""
        self.warnings.append(message)

    def set_summary(self, summary: str) -> None:
        """Set a one-line summary."""
        self._summary = summary

    @property
    def summary(self) -> str:
        """Get summary or generate from data."""
        if self._summary:
            return self._summary
        if self.errors:
            return f"Error: {self.errors[0]}"
        if self.warnings:
            return f"Warning: {self.warnings[0]}"
        return "ok"

    def marker(self, level: str) -> str:
        """Status marker such as ``[OK]``, colored when color is enabled."""
        label = {"ok": "OK", "warning": "WARNING", "critical": "CRITICAL"}.get(level, level.upper())
        text = f"[{label}]"
        if self.color and level in COLORS:
            return f"{COLORS[level]}{text}{RESET}"
        return text

    def to_json(self) -> str:
        """Return data, errors and warnings as a JSON string."""
        payload = dict(self.data)
        if self.errors:
            payload.setdefault("errors", self.errors)
        if self.warnings:
            payload.setdefault("warnings", self.warnings)
        return json.dumps(payload, indent=2, default=str)

    def render(self, format: str = "plain", title: str | None = None) -> None:
        """Print output in the specified format.

        Args:
            format: Output format - "json" or "plain"
            title: Optional title for plain text output
        """
        if self._printed:
            return
        self._printed = True

        if format == "json":
            print(self.to_json())
            return

        if not self.data and not self.errors and not self.warnings:
            return
        print(self.render_plain(title))

    def render_plain(self, title: str | None = None) -> str:
        """Format output as plain text."""
        lines = []

        if title:
            lines.append(title)
            lines.append("=" * len(title))
            lines.append("")

        status = self.data.get("status")
        if status:
            status_upper = status.upper()
            if status in ("ok", "already-optimal", "unchanged", "applied", "planned", "already-first"):
                lines.append(f"{self.marker('ok')} Status: {status_upper}")
            elif status in ("warning", "skipped"):
                lines.append(f"{self.marker('warning')} Status: {status_upper}")
            else:
                lines.append(f"{self.marker('critical')} Status: {status_upper}")
            lines.append("")

        # status, findings and messages are rendered in their own sections
        skip_keys = {"status", "findings", "errors", "warnings", "log"}
        for key, value in self.data.items():
            if key in skip_keys:
                continue
            self._render_value(lines, key, value, indent=0)

        findings = self.data.get("findings", [])
        if findings:
            lines.append("")
            for finding in findings:
                level = finding.get("level", "warning")
                lines.append(f"{self.marker(level)} {finding['message']}")

        log = self.data.get("log", [])
        if log:
            lines.append("")
            lines.append("Recent Log Entries:")
            for line in log:
                lines.append(f"  {line}")

        if self.errors:
            lines.append("")
            for message in self.errors:
                lines.append(f"{self.marker('critical')} {message}")

        if self.warnings:
            lines.append("")
            for message in self.warnings:
                lines.append(f"{self.marker('warning')} {message}")

        return "\n".join(lines)

    def _render_value(self, lines: list, key: str, value: Any, indent: int = 0) -> None:
        """Recursively render a value with proper formatting."""
        prefix = "  " * indent
        display_key = str(key).replace("_", " ").title()

        if isinstance(value, dict):
            lines.append(f"{prefix}{display_key}:")
            for k, v in value.items():
                self._render_value(lines, k, v, indent + 1)
        elif isinstance(value, list):
            if not value:
                lines.append(f"{prefix}{display_key}: (none)")
            elif all(isinstance(x, (str, int, float, bool)) for x in value):
                lines.append(f"{prefix}{display_key}: {', '.join(str(x) for x in value)}")
            else:
                lines.append(f"{prefix}{display_key}:")
                for item in value:
                    if isinstance(item, dict):
                        summary = "  ".join(str(v) for v in item.values())
                        lines.append(f"{prefix}  {summary}")
                    else:
                        lines.append(f"{prefix}  - {item}")
        elif isinstance(value, bool):
            lines.append(f"{prefix}{display_key}: {'yes' if value else 'no'}")
        elif value is None:
            lines.append(f"{prefix}{display_key}: (unknown)")
        else:
            lines.append(f"{prefix}{display_key}: {value}")
