"""Show command - List the text items of APE tagged files."""

import argparse
import logging
import sys

from rich.console import Console
from rich.table import Table

from ...errors import ApeTagError
from ...loader import ApeTag
from ..schemas import ErrorResponse, ItemInfo, ItemsResponse
from ..utils import allow_slow_scan, error_code, format_value, load_config


def cmd_show(args: argparse.Namespace) -> None:
    """List the items of every file given on the command line.

    Args:
        args: Parsed command-line arguments
    """
    console = Console()
    config = load_config(args)
    slow = allow_slow_scan(args, config)
    max_length = config.get_max_value_length()
    failed = 0

    for path in args.files:
        try:
            with ApeTag.read(path, slow, config.get_chunk_size()) as tag:
                count = tag.count
                items = tag.items()
        except (ApeTagError, OSError) as e:
            failed += 1
            logging.debug("Failed to load %s: %s", path, e)
            if args.json:
                print(ErrorResponse(error=error_code(e), message=str(e), file=path).model_dump_json(exclude_none=True))
            else:
                console.print(f"[red]Error: {e}[/red]")
            continue

        if args.json:
            response = ItemsResponse(
                file=path,
                declared_count=count,
                items=[ItemInfo(key=key, value=value.decode("utf-8", errors="replace")) for key, value in items],
            )
            print(response.model_dump_json(exclude_none=True))
            continue

        table = Table(title=f"{path} ({len(items)}/{count} items)")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="magenta")
        for key, value in items:
            table.add_row(key, format_value(value, max_length, raw=args.raw))
        console.print(table)

    if failed:
        sys.exit(1)
