"""Scan command - Find APE tagged files below a directory."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ...loader import read_tag
from ..schemas import ErrorResponse, ScanEntry, ScanResponse
from ..utils import allow_slow_scan, load_config


def cmd_scan(args: argparse.Namespace) -> None:
    """Report every file below a directory that carries a loadable APE tag.

    Args:
        args: Parsed command-line arguments
    """
    scan_dir = Path(args.directory)
    console = Console()
    config = load_config(args)
    slow = allow_slow_scan(args, config)

    if not scan_dir.is_dir():
        message = f"Not a directory: {scan_dir}"
        if args.json:
            print(ErrorResponse(error="invalid_input", message=message, file=str(scan_dir)).model_dump_json(exclude_none=True))
        else:
            logging.error(message)
            console.print(f"[red]Error: {message}[/red]")
        sys.exit(1)

    tagged: List[ScanEntry] = []
    files_scanned = 0
    failed = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[cyan]{task.description}"),
        console=console,
        disable=args.json,
    ) as progress:
        task = progress.add_task("Scanning files...", total=None)

        for path in sorted(scan_dir.rglob("*")):
            if not path.is_file():
                continue
            files_scanned += 1
            progress.update(task, description=f"Scanning: {path.name}")
            try:
                with open(path, "rb") as f:
                    tag = read_tag(f, slow, config.get_chunk_size())
            except OSError as e:
                failed += 1
                logging.warning("Cannot read %s: %s", path, e)
                continue
            if tag is None:
                continue
            with tag:
                tagged.append(
                    ScanEntry(
                        file=str(path),
                        version=tag.version,
                        declared_count=tag.count,
                        items=len(tag.items()),
                    )
                )

        progress.update(task, description=f"[green]✓ Scanned {files_scanned} files")

    if args.json:
        response = ScanResponse(
            directory=str(scan_dir),
            files_scanned=files_scanned,
            failed=failed,
            tagged=tagged,
        )
        print(response.model_dump_json(exclude_none=True))
        return

    console.print()
    if not tagged:
        console.print("[yellow]No APE tagged files found[/yellow]")
        return

    table = Table(title=f"APE tagged files ({len(tagged)}/{files_scanned})")
    table.add_column("File", style="cyan")
    table.add_column("Version", justify="right", style="green")
    table.add_column("Items", justify="right", style="magenta")
    for entry in tagged:
        table.add_row(
            str(Path(entry.file).relative_to(scan_dir)),
            str(entry.version),
            f"{entry.items}/{entry.declared_count}",
        )
    console.print(table)
