"""Command-line interface for pxeorder."""

import argparse
import sys

from pxeorder import __version__
from pxeorder.commands import COMMANDS
from pxeorder.core.context import Context
from pxeorder.core.output import Output


TITLES = {
    "fix": "Boot Order Fix",
    "plan": "Boot Order Plan",
    "check": "Boot Order Verification",
    "next": "Next Boot",
    "logs": "Boot Order Log",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pxeorder",
        description="Keep PXE network boot entries first in the UEFI boot order",
        epilog="Global options go before the command; run 'pxeorder COMMAND --help' for command options.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pxeorder {__version__}",
    )
    parser.add_argument(
        "--format",
        choices=["plain", "json"],
        default="plain",
        help="Output format (default: plain)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored status markers",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for name, (_, help_text) in COMMANDS.items():
        # command options are parsed by the command itself
        subparsers.add_parser(name, help=help_text, add_help=False)

    return parser


def main(argv: list[str] | None = None, context: Context | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args, rest = parser.parse_known_args(argv)

    if args.command is None:
        if rest:
            parser.error(f"unrecognized arguments: {' '.join(rest)}")
        parser.print_help()
        return 0

    if context is None:
        context = Context()

    module, _ = COMMANDS[args.command]
    color = args.format == "plain" and not args.no_color and context.is_tty()
    output = Output(color=color)

    code = module.run(rest, output, context)
    output.render(args.format, title=TITLES.get(args.command))
    return code


if __name__ == "__main__":
    sys.exit(main())
