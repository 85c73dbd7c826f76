"""Tests for pxeorder.core.logging module."""

import json
import re

import pytest

from pxeorder.core.logging import EventLogger, query_logs, tail_log
from tests.conftest import MockContext


LINE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - ")


class TestEventLogger:
    """Tests for EventLogger."""

    def test_text_format(self, tmp_path):
        """Text entries are timestamped lines."""
        log_path = tmp_path / "fix.log"
        with EventLogger(log_path=log_path) as logger:
            logger.info("Current BootOrder: 0003,0001")

        line = log_path.read_text().splitlines()[0]
        assert LINE_PATTERN.match(line)
        assert line.endswith(" - Current BootOrder: 0003,0001")

    def test_level_prefixes(self, tmp_path):
        """Warnings and errors are prefixed, info and debug are not."""
        log_path = tmp_path / "fix.log"
        with EventLogger(log_path=log_path) as logger:
            logger.debug("debug message")
            logger.info("info message")
            logger.warning("warning message")
            logger.error("error message")

        lines = log_path.read_text().splitlines()
        assert lines[0].endswith(" - debug message")
        assert lines[1].endswith(" - info message")
        assert lines[2].endswith(" - WARNING: warning message")
        assert lines[3].endswith(" - ERROR: error message")

    def test_extra_fields_in_text(self, tmp_path):
        """Extra fields are appended as key=value."""
        log_path = tmp_path / "fix.log"
        with EventLogger(log_path=log_path) as logger:
            logger.error("apply failed", order="0002,0001", attempts=3)

        assert log_path.read_text().rstrip().endswith("ERROR: apply failed order=0002,0001 attempts=3")

    def test_appends(self, tmp_path):
        """Each run appends to the existing file."""
        log_path = tmp_path / "fix.log"
        log_path.write_text("earlier run\n")

        with EventLogger(log_path=log_path) as logger:
            logger.info("later run")

        lines = log_path.read_text().splitlines()
        assert lines[0] == "earlier run"
        assert lines[1].endswith("later run")

    def test_creates_parent_directory(self, tmp_path):
        """Missing parent directories are created."""
        log_path = tmp_path / "var" / "log" / "fix.log"
        with EventLogger(log_path=log_path) as logger:
            logger.info("hello")
        assert log_path.exists()

    def test_lazy_open(self, tmp_path):
        """Nothing is created until the first entry."""
        log_path = tmp_path / "fix.log"
        with EventLogger(log_path=log_path):
            pass
        assert not log_path.exists()

    def test_flushed_per_entry(self, tmp_path):
        """Entries are readable before the logger is closed."""
        log_path = tmp_path / "fix.log"
        logger = EventLogger(log_path=log_path)
        logger.info("first")
        assert "first" in log_path.read_text()
        logger.close()

    def test_block_text(self, tmp_path):
        """Blocks are written verbatim after a title line."""
        log_path = tmp_path / "fix.log"
        with EventLogger(log_path=log_path) as logger:
            logger.block("Full efibootmgr output:", "BootCurrent: 0003\nBootOrder: 0003,0001")

        lines = log_path.read_text().splitlines()
        assert lines[0].endswith(" - Full efibootmgr output:")
        assert lines[1] == "BootCurrent: 0003"
        assert lines[2] == "BootOrder: 0003,0001"

    def test_jsonl_format(self, tmp_path):
        """jsonl entries are JSON objects."""
        log_path = tmp_path / "fix.jsonl"
        with EventLogger(log_path=log_path, fmt="jsonl") as logger:
            logger.warning("efibootmgr command failed", attempt=1)
            logger.block("Full efibootmgr output:", "BootOrder: 0001")

        entries = [json.loads(line) for line in log_path.read_text().splitlines()]
        assert entries[0]["level"] == "warning"
        assert entries[0]["message"] == "efibootmgr command failed"
        assert entries[0]["attempt"] == 1
        assert "timestamp" in entries[0]
        assert entries[1]["level"] == "debug"
        assert entries[1]["block"] == "BootOrder: 0001"

    def test_unknown_format(self, tmp_path):
        """Unknown formats are rejected."""
        with pytest.raises(ValueError):
            EventLogger(log_path=tmp_path / "fix.log", fmt="xml")

    def test_syslog_forwarding(self, tmp_path):
        """Messages are also sent through logger(1) when it exists."""
        ctx = MockContext(
            tools_available=["logger"],
            command_outputs={
                ("logger", "-t", "boot-order-fix", "-p", "user.info", "started"): "",
                ("logger", "-t", "boot-order-fix", "-p", "user.err", "failed"): "",
            },
        )
        with EventLogger(log_path=tmp_path / "fix.log", syslog_tag="boot-order-fix", context=ctx) as logger:
            logger.info("started")
            logger.error("failed")

        assert ctx.commands_run == [
            ["logger", "-t", "boot-order-fix", "-p", "user.info", "started"],
            ["logger", "-t", "boot-order-fix", "-p", "user.err", "failed"],
        ]

    def test_syslog_skipped_without_logger(self, tmp_path):
        """No syslog calls when logger(1) is missing."""
        ctx = MockContext()
        with EventLogger(log_path=tmp_path / "fix.log", syslog_tag="boot-order-fix", context=ctx) as logger:
            logger.info("started")
        assert ctx.commands_run == []

    def test_syslog_disabled_without_tag(self, tmp_path):
        """No tag, no syslog."""
        ctx = MockContext(tools_available=["logger"])
        with EventLogger(log_path=tmp_path / "fix.log", context=ctx) as logger:
            logger.info("started")
        assert ctx.commands_run == []


class TestTailLog:
    """Tests for tail_log."""

    def test_missing_file(self, tmp_path):
        """A missing log has no lines."""
        assert tail_log(tmp_path / "missing.log") == []

    def test_last_lines(self, tmp_path):
        """Only the last lines are returned, oldest first."""
        log_path = tmp_path / "fix.log"
        log_path.write_text("".join(f"line {i}\n" for i in range(30)))

        lines = tail_log(log_path, limit=3)

        assert lines == ["line 27", "line 28", "line 29"]

    def test_blank_lines_skipped(self, tmp_path):
        """Blank lines do not count."""
        log_path = tmp_path / "fix.log"
        log_path.write_text("one\n\n\ntwo\n")
        assert tail_log(log_path) == ["one", "two"]


class TestQueryLogs:
    """Tests for query_logs."""

    def write_entries(self, path, levels):
        with open(path, "w") as f:
            for i, level in enumerate(levels):
                f.write(json.dumps({"timestamp": str(i), "level": level, "message": f"m{i}"}) + "\n")

    def test_filters_by_level(self, tmp_path):
        """Entries below the minimum level are dropped."""
        log_path = tmp_path / "fix.jsonl"
        self.write_entries(log_path, ["debug", "info", "warning", "error"])

        entries = query_logs(log_path, min_level="warning")

        assert [e["message"] for e in entries] == ["m2", "m3"]

    def test_limit_keeps_latest(self, tmp_path):
        """limit keeps the most recent entries."""
        log_path = tmp_path / "fix.jsonl"
        self.write_entries(log_path, ["info"] * 5)

        entries = query_logs(log_path, limit=2)

        assert [e["message"] for e in entries] == ["m3", "m4"]

    def test_skips_invalid_lines(self, tmp_path):
        """Lines that are not JSON objects are skipped."""
        log_path = tmp_path / "fix.jsonl"
        log_path.write_text('not json\n[1, 2]\n{"level": "info", "message": "ok"}\n')

        entries = query_logs(log_path)

        assert entries == [{"level": "info", "message": "ok"}]

    def test_missing_file(self, tmp_path):
        """A missing log has no entries."""
        assert query_logs(tmp_path / "missing.jsonl") == []
