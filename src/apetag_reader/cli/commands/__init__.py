"""CLI command implementations.

Each module in this package implements a specific apetag subcommand:
    show.py: List the text items of one or more files
    inspect.py: Show the raw header/footer block of a file
    scan.py: Find tagged files below a directory
"""

from .show import cmd_show
from .inspect import cmd_inspect
from .scan import cmd_scan

__all__ = [
    "cmd_show",
    "cmd_inspect",
    "cmd_scan",
]
