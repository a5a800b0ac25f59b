"""apetag-reader.

Locates and decodes APEv1/APEv2 tags stored at the end of media files
(Monkey's Audio, Musepack, WavPack, MP3 and others) and exposes their text
items as key/value pairs. Read-only.

Main modules:
    loader: load_tag(), ApeTag session, read_items()
    items: ItemIterator over a loaded tag body
    locator: Finding the tag block (end of file check and full scan)
    header: 32 byte header/footer decoding
    cli: Command-line interface (apetag command)

Core modules:
    config: Configuration management
    constants: Format constants
    errors: Exception hierarchy
"""

try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("apetag-reader")
except PackageNotFoundError:
    # Package not installed, read directly from pyproject.toml
    try:
        from pathlib import Path
        import tomllib

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, ValueError):
        __version__ = "unknown"

from .errors import ApeTagError, TagNotFoundError, TagOversizeError, TagCorruptError, TagReadError
from .header import ApeHeader, parse_header
from .items import ItemIterator, parse_item, normalize_item
from .locator import find_tag, find_tag_slow
from .loader import ApeTag, load_tag, read_tag, read_items

__all__ = [
    # Sub-packages
    "cli",
    # Core API
    "ApeTag",
    "ApeHeader",
    "ItemIterator",
    "load_tag",
    "read_tag",
    "read_items",
    "find_tag",
    "find_tag_slow",
    "parse_header",
    "parse_item",
    "normalize_item",
    # Errors
    "ApeTagError",
    "TagNotFoundError",
    "TagOversizeError",
    "TagCorruptError",
    "TagReadError",
]
