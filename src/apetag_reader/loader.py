"""Loading an APE tag body into memory.

load_tag() locates the tag, reads its body into a buffer and hands back an
ApeTag session that owns the buffer. The caller's file position is left
exactly where it was, whether or not a tag was found.
"""

import logging
import os
from typing import BinaryIO, Dict, List, Optional

from .constants import MAX_TAG_SIZE, SCAN_CHUNK_SIZE
from .errors import ApeTagError, TagNotFoundError, TagOversizeError, TagReadError
from .fileio import get_file_size, read_exactly
from .header import ApeHeader
from .items import Item, ItemIterator
from .locator import find_tag

logger = logging.getLogger(__name__)


class ApeTag:
    """A loaded tag: the decoded header plus the raw tag body.

    Iterating the tag yields (key, value) pairs through a fresh
    ItemIterator. The body is released by close() or when leaving a
    ``with`` block.
    """

    def __init__(self, header: ApeHeader, data: bytes, offset: Optional[int] = None):
        self.header = header
        self.offset = offset
        self._data: Optional[bytes] = data

    def __enter__(self) -> "ApeTag":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __iter__(self) -> ItemIterator:
        return ItemIterator(self.data)

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{self.size} bytes"
        return f"ApeTag(version={self.header.version}, count={self.count}, {state})"

    @property
    def data(self) -> bytes:
        if self._data is None:
            raise ValueError("I/O operation on closed tag")
        return self._data

    @property
    def closed(self) -> bool:
        return self._data is None

    @property
    def count(self) -> int:
        """Item count declared by the tag. Not checked against the body."""
        return self.header.count

    @property
    def size(self) -> int:
        return self.header.size

    @property
    def version(self) -> int:
        return self.header.version

    def close(self) -> None:
        self._data = None

    def items(self) -> List[Item]:
        return list(self)

    def as_dict(self) -> Dict[str, bytes]:
        """Return the items as a dict. Later duplicates win."""
        return dict(self)

    @staticmethod
    def from_file(f: BinaryIO, allow_slow_scan: bool = False) -> "ApeTag":
        return load_tag(f, allow_slow_scan)

    @staticmethod
    def read(
        filename, allow_slow_scan: bool = False, chunk_size: int = SCAN_CHUNK_SIZE
    ) -> "ApeTag":
        """Return an ApeTag given a file name.

        Raises:
            FileNotFoundError: If file doesn't exist
            PermissionError: If file cannot be read
            ApeTagError: If no usable tag could be loaded
        """
        try:
            with open(filename, "rb") as f:
                return load_tag(f, allow_slow_scan, chunk_size)
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {filename}")
        except PermissionError:
            raise PermissionError(f"Permission denied reading file: {filename}")
        except TagOversizeError:
            raise
        except ApeTagError as e:
            # Re-raise with filename context
            raise type(e)(f"Error reading {filename}: {e}") from e


def load_tag(
    f: BinaryIO, allow_slow_scan: bool = False, chunk_size: int = SCAN_CHUNK_SIZE
) -> ApeTag:
    """Locate the APE tag in f and load its body.

    Args:
        f: Binary file object opened for reading
        allow_slow_scan: Scan the whole file when there is no footer at the
            very end
        chunk_size: Read size for the slow scan

    Returns:
        ApeTag session owning the tag body

    Raises:
        TagNotFoundError: No tag block could be located
        TagOversizeError: The tag claims more than MAX_TAG_SIZE bytes
        TagReadError: Seeking or reading the body failed
    """
    try:
        old_pos = f.tell()
    except (OSError, ValueError) as e:
        raise TagReadError(f"Cannot get file position: {e}") from e

    try:
        found = find_tag(f, allow_slow_scan, chunk_size)
        if found is None:
            raise TagNotFoundError("No APE tag found")
        offset, header = found

        if header.size > MAX_TAG_SIZE:
            raise TagOversizeError(header.size)

        if header.is_footer:
            # Seek back to the start of the items
            try:
                f.seek(get_file_size(f) - header.size, os.SEEK_SET)
            except (OSError, ValueError) as e:
                raise TagReadError(f"Cannot seek to tag body: {e}") from e

        try:
            data = read_exactly(f, header.size)
        except OSError as e:
            raise TagReadError(f"Reading tag body failed: {e}") from e
        if data is None:
            raise TagReadError(f"Tag body truncated: expected {header.size} bytes")

        logger.debug(
            "Loaded APE tag v%s at offset %d: %d bytes, %d items",
            header.version_string, offset, header.size, header.count,
        )
        return ApeTag(header, data, offset)
    finally:
        try:
            f.seek(old_pos, os.SEEK_SET)
        except (OSError, ValueError) as e:
            raise TagReadError(f"Cannot restore file position {old_pos}: {e}") from e


def read_tag(
    f: BinaryIO, allow_slow_scan: bool = False, chunk_size: int = SCAN_CHUNK_SIZE
) -> Optional[ApeTag]:
    """Like load_tag(), but return None instead of raising ApeTagError."""
    try:
        return load_tag(f, allow_slow_scan, chunk_size)
    except ApeTagError as e:
        logger.debug("No usable APE tag: %s", e)
        return None


def read_items(filename, allow_slow_scan: bool = False) -> List[Item]:
    """Return all text items of the APE tag in filename.

    Files without a usable tag give an empty list.
    """
    try:
        with ApeTag.read(filename, allow_slow_scan) as tag:
            return tag.items()
    except ApeTagError as e:
        logger.debug("%s", e)
        return []
