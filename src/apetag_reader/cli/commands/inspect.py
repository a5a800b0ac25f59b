"""Inspect command - Display the raw APE header/footer block of a file."""

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.table import Table

from ...constants import FLAG_HAS_HEADER, FLAG_HAS_NO_FOOTER, FLAG_IS_HEADER
from ...errors import ApeTagError, TagNotFoundError
from ...fileio import get_file_size
from ...loader import load_tag
from ...locator import find_tag
from ..schemas import ErrorResponse, HeaderInfo, HeaderResponse
from ..utils import allow_slow_scan, error_code, hex_preview, load_config


def describe_flags(flags: int) -> str:
    names = []
    if flags & FLAG_HAS_HEADER:
        names.append("has header")
    if flags & FLAG_HAS_NO_FOOTER:
        names.append("no footer")
    if flags & FLAG_IS_HEADER:
        names.append("is header")
    return ", ".join(names) if names else "-"


def cmd_inspect(args: argparse.Namespace) -> None:
    """Inspect the tag block of a single file.

    Args:
        args: Parsed command-line arguments
    """
    console = Console()
    config = load_config(args)
    slow = allow_slow_scan(args, config)
    file_path = Path(args.file)

    def fail(exc: BaseException) -> NoReturn:
        if args.json:
            print(ErrorResponse(error=error_code(exc), message=str(exc), file=str(file_path)).model_dump_json(exclude_none=True))
        else:
            console.print(f"[red]Error: {exc}[/red]")
        sys.exit(1)

    try:
        with open(file_path, "rb") as f:
            file_size = get_file_size(f)
            found = find_tag(f, slow, config.get_chunk_size())
            if found is None:
                fail(TagNotFoundError(f"No APE tag found in {file_path}"))
            offset, header = found
            body = None
            if config.get_show_binary() and not args.json:
                with load_tag(f, slow, config.get_chunk_size()) as tag:
                    body = tag.data
    except (ApeTagError, OSError) as e:
        if logging.getLogger().level <= logging.DEBUG:
            console.print(traceback.format_exc())
        fail(e)

    if args.json:
        response = HeaderResponse(
            file=str(file_path),
            file_size=file_size,
            header=HeaderInfo(
                offset=offset,
                version=header.version,
                size=header.size,
                count=header.count,
                flags=header.flags,
                is_footer=header.is_footer,
            ),
        )
        print(response.model_dump_json(exclude_none=True))
        return

    console.print(f"[cyan]Reading file: {file_path}[/cyan]")
    console.print(f"[cyan]File size: {file_size:,} bytes[/cyan]\n")

    table = Table(title="APE Tag " + ("Footer" if header.is_footer else "Header"), show_header=False)
    table.add_column("Field", style="cyan", width=15)
    table.add_column("Value", style="magenta")

    table.add_row("Offset", f"0x{offset:x} ({offset:,})")
    table.add_row("Version", f"{header.version} (APEv{header.version_string})")
    table.add_row("Tag Size", f"{header.size:,} bytes")
    table.add_row("Item Count", str(header.count))
    table.add_row("Flags", f"0x{header.flags:08x} ({describe_flags(header.flags)})")

    console.print(table)

    if body is not None:
        console.print()
        console.print("[cyan]Tag body:[/cyan]")
        console.print(hex_preview(body), markup=False, highlight=False)
