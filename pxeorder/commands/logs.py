"""
Show recent entries from the boot order event log.

Exit codes:
    0 - Entries shown (possibly none)
    2 - Usage error
"""

import argparse

from pxeorder.commands.common import add_common_arguments, settings_from_args
from pxeorder.core.config import ConfigError
from pxeorder.core.context import Context
from pxeorder.core.logging import LOG_LEVELS, query_logs, tail_log
from pxeorder.core.output import Output


def run(args: list[str], output: Output, context: Context) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context

    Returns:
        0 = success, 2 = error
    """
    parser = argparse.ArgumentParser(
        prog="pxeorder logs",
        description="Show recent entries from the boot order event log",
    )
    add_common_arguments(parser)
    parser.add_argument(
        "-l", "--lines", type=int, default=20, help="Number of entries to show (default: 20)"
    )
    parser.add_argument(
        "--level",
        choices=list(LOG_LEVELS),
        default="debug",
        help="Minimum level to show (jsonl logs only)",
    )
    opts = parser.parse_args(args)

    if opts.lines < 1:
        output.error("--lines must be 1 or greater")
        return 2

    try:
        settings = settings_from_args(opts)
    except ConfigError as e:
        output.error(f"Invalid configuration: {e}")
        return 2

    if settings.log_format == "jsonl":
        entries = query_logs(settings.log_path, min_level=opts.level, limit=opts.lines)
        lines = [
            f"{e.get('timestamp', '')} [{e.get('level', 'debug')}] {e.get('message', '')}"
            for e in entries
        ]
    else:
        lines = tail_log(settings.log_path, opts.lines)

    if not lines:
        output.warning(f"No log entries in {settings.log_path}")

    output.emit({"log_path": str(settings.log_path), "log": lines})
    output.set_summary(f"{len(lines)} log entries")
    return 0


if __name__ == "__main__":
    import sys

    out = Output()
    code = run(sys.argv[1:], out, Context())
    out.render()
    sys.exit(code)
