"""Append-only event log for boot order runs."""

import json
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pxeorder.core.context import Context


DEFAULT_LOG_PATH = Path("/var/log/boot-order-fix.log")

LOG_FORMATS = ("text", "jsonl")

# Log level ordering
LOG_LEVELS = {"debug": 0, "info": 1, "warning": 2, "error": 3}

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class EventLogger:
    """
    Logger for boot order runs.

    Text format writes ``YYYY-MM-DD HH:MM:SS - message`` lines, jsonl
    writes one JSON object per line. The file is opened lazily in append
    mode and flushed after every entry, since a boot-time run may be
    killed by its service timeout at any point.
    """

    def __init__(
        self,
        log_path: Path | None = None,
        fmt: str = "text",
        syslog_tag: str | None = None,
        context: "Context | None" = None,
    ):
        """
        Initialize logger.

        Args:
            log_path: Path to log file (default: /var/log/boot-order-fix.log)
            fmt: "text" or "jsonl"
            syslog_tag: Also send messages to syslog under this tag
            context: Execution context used for the syslog forwarder
        """
        if fmt not in LOG_FORMATS:
            raise ValueError(f"Unknown log format: {fmt}")
        self.log_path = log_path or DEFAULT_LOG_PATH
        self.fmt = fmt
        self.syslog_tag = syslog_tag
        self.context = context
        self._file = None
        self._syslog_checked = False
        self._syslog_available = False

    def _ensure_file(self) -> None:
        """Ensure log file is open."""
        if self._file is None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_path, "a")

    def _write(self, text: str) -> None:
        self._ensure_file()
        self._file.write(text)
        self._file.flush()

    def _syslog(self, level: str, message: str) -> None:
        if not self.syslog_tag or self.context is None:
            return
        if not self._syslog_checked:
            self._syslog_available = self.context.check_tool("logger")
            self._syslog_checked = True
        if not self._syslog_available:
            return
        priority = "user.err" if level == "error" else f"user.{level}"
        self.context.run(["logger", "-t", self.syslog_tag, "-p", priority, message])

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        now = datetime.now(timezone.utc)
        if self.fmt == "jsonl":
            entry = {
                "timestamp": now.isoformat(),
                "level": level,
                "message": message,
                **extra,
            }
            self._write(json.dumps(entry, default=str) + "\n")
        else:
            prefix = f"{level.upper()}: " if level in ("warning", "error") else ""
            details = "".join(f" {key}={value}" for key, value in extra.items())
            stamp = now.astimezone().strftime(TIMESTAMP_FORMAT)
            self._write(f"{stamp} - {prefix}{message}{details}\n")

        self._syslog(level, message)

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message."""
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message."""
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def block(self, title: str, text: str) -> None:
        """Log a title line followed by a verbatim block, such as a full report."""
        if self.fmt == "jsonl":
            self._log("debug", title, block=text)
            return
        self._log("debug", title)
        body = text if text.endswith("\n") else text + "\n"
        self._write(body)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "EventLogger":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


def tail_log(log_path: Path, limit: int = 20) -> list[str]:
    """
    Return the last lines of a log file.

    Args:
        log_path: Log file to read
        limit: Maximum number of lines to return

    Returns:
        Up to ``limit`` lines, oldest first; empty if the file is missing
    """
    if not log_path.exists():
        return []

    with open(log_path) as f:
        lines = deque((line.rstrip("\n") for line in f if line.strip()), maxlen=limit)
    return list(lines)


def query_logs(
    log_path: Path,
    min_level: str = "debug",
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """
    Query entries of a jsonl event log.

    Args:
        log_path: Log file written with fmt="jsonl"
        min_level: Minimum log level to include
        limit: Keep only the most recent entries

    Returns:
        List of log entries matching criteria, oldest first
    """
    if not log_path.exists():
        return []

    min_level_num = LOG_LEVELS.get(min_level, 0)
    results = []

    with open(log_path) as f:
        for line in f:
            if not line.strip():
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(entry, dict):
                continue
            entry_level = LOG_LEVELS.get(entry.get("level", "debug"), 0)
            if entry_level >= min_level_num:
                results.append(entry)

    if limit:
        results = results[-limit:]
    return results
