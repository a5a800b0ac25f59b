"""Command-line interface for apetag-reader (apetag).

This package provides the 'apetag' command-line tool with subcommands:
    show: List the text items of APE tagged files
    inspect: Display the raw header/footer block of a file
    scan: Find APE tagged files below a directory

Modules:
    commands/: Command implementations
    schemas.py: Pydantic models for --json output
    utils.py: CLI utility functions
"""

import argparse
import logging
import sys

from rich_argparse import RichHelpFormatter

from .. import __version__
from .utils import setup_logging
from .commands import (
    cmd_show,
    cmd_inspect,
    cmd_scan,
)

__all__ = [
    "main",
    "cmd_show",
    "cmd_inspect",
    "cmd_scan",
    "setup_logging",
]


class RichRawHelpFormatter(RichHelpFormatter, argparse.RawDescriptionHelpFormatter):
    """Combines Rich formatting with the ability to keep line breaks (Raw)."""
    pass


def main() -> None:
    """Main CLI entry point."""

    # Shared options are accepted before and after the command. The copies on
    # the subcommands use SUPPRESS so they do not overwrite a value given
    # before the command with their own default.
    def shared_options(default):
        shared = argparse.ArgumentParser(add_help=False)
        shared.add_argument(
            "-v",
            "--version",
            action="version",
            version=f"%(prog)s {__version__}",
        )
        shared.add_argument(
            "-l",
            "--log-level",
            default=default,
            help="Set logging level (disabled by default)",
        )
        shared.add_argument(
            "-c", "--config", default=default, help="Path to configuration file"
        )
        return shared

    parent_parser = shared_options(None)
    sub_parent_parser = shared_options(argparse.SUPPRESS)

    # Options shared by every command that reads tags
    tag_parser = argparse.ArgumentParser(add_help=False)
    tag_parser.add_argument(
        "--slow",
        action="store_true",
        help="Scan the whole file when there is no footer at the very end",
    )
    tag_parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON instead of tables",
    )

    parser = argparse.ArgumentParser(
        prog="apetag",
        usage="apetag <command> [options]",
        description="APE Tag Reader - Locate and decode APEv1/APEv2 tags in media files",
        formatter_class=RichRawHelpFormatter,
        parents=[parent_parser],
    )

    subparsers = parser.add_subparsers(
        title="Commands",
        dest="command",
        metavar="",
    )

    # ──────────────────────────────
    # show
    # ──────────────────────────────
    show_parser = subparsers.add_parser(
        "show",
        help="List the items of APE tagged files",
        usage="apetag show <file> [<file> ...] [options]",
        description="Read the APE tag of each file and list its text items",
        parents=[sub_parent_parser, tag_parser],
        formatter_class=RichHelpFormatter,
    )
    show_parser.add_argument("files", nargs="+", help="Files to read")
    show_parser.add_argument(
        "--raw",
        action="store_true",
        help="Show values as raw byte strings",
    )
    show_parser.set_defaults(func=cmd_show)

    # ──────────────────────────────
    # inspect
    # ──────────────────────────────
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Inspect the raw tag header/footer",
        usage="apetag inspect <file> [options]",
        description="Locate the APE tag block of a file and display its fields",
        parents=[sub_parent_parser, tag_parser],
        formatter_class=RichHelpFormatter,
    )
    inspect_parser.add_argument("file", help="File to inspect")
    inspect_parser.set_defaults(func=cmd_inspect)

    # ──────────────────────────────
    # scan
    # ──────────────────────────────
    scan_parser = subparsers.add_parser(
        "scan",
        help="Find APE tagged files in a directory",
        usage="apetag scan <directory> [options]",
        description="Walk a directory tree and report files carrying an APE tag",
        parents=[sub_parent_parser, tag_parser],
        formatter_class=RichHelpFormatter,
    )
    scan_parser.add_argument("directory", help="Directory to scan recursively")
    scan_parser.set_defaults(func=cmd_scan)

    # Parse args
    args = parser.parse_args()

    # Show help if no command is provided
    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Logging setup
    if args.log_level:
        setup_logging(args.log_level)
    else:
        setup_logging("critical")

    # Execute command
    try:
        args.func(args)
    except KeyboardInterrupt:
        logging.info("Operation cancelled by user")
        sys.exit(130)
    except Exception as e:
        logging.error(f"Error: {e}", exc_info=args.log_level == "debug")
        sys.exit(1)


if __name__ == "__main__":
    main()
