"""Iterating over the items of a loaded APE tag body.

Each item is laid out as::

    val_len (u32 LE) | flags (u32 LE) | key (ASCII, NUL terminated) | value

All keys are ASCII and 2..255 characters long. Values are not NUL
terminated. Keys Artist, Album, Title and Genre carry UTF-8 text, Track is
"N" or "N/M", and Year or "Record Date" hold a date in one of the forms::

    1999-08-11 12:34:56
    1999-08-11 12:34
    1999-08-11
    1999-08
    1999
    1999-W34

Both date keys are reported as "date" and shortened to the year.

Damaged bodies never raise from the iterator: it simply stops after the
last well formed item.
"""

import logging
import struct
from typing import Iterator, Optional, Tuple

from .constants import (
    DATE_KEY,
    DATE_KEY_ALIASES,
    ITEM_ENCODING_MASK,
    ITEM_ENCODING_UTF8,
    ITEM_PREFIX_FORMAT,
    ITEM_PREFIX_SIZE,
    KEY_ENCODING,
    YEAR_LENGTH,
)
from .errors import TagCorruptError

logger = logging.getLogger(__name__)

Item = Tuple[str, bytes]


def is_utf8(flags: int) -> bool:
    return (flags & ITEM_ENCODING_MASK) == ITEM_ENCODING_UTF8


def normalize_item(key: str, value: bytes) -> Item:
    """Fold date style keys into "date" and keep only the year."""
    if key.lower() in DATE_KEY_ALIASES:
        key = DATE_KEY
    if key.lower() == DATE_KEY and len(value) > YEAR_LENGTH:
        value = value[:YEAR_LENGTH]
    return key, value


def parse_item(data: bytes, pos: int = 0, strict: bool = False) -> Optional[Tuple[int, str, bytes]]:
    """Parse the next text item in data starting at pos.

    Binary and external items in front of it are skipped, but still count
    towards the bytes consumed.

    Args:
        data: Tag body
        pos: Offset of the item inside data
        strict: Raise TagCorruptError instead of returning None on damage

    Returns:
        Tuple of (bytes consumed, key, value), or None when no further item
        could be read
    """
    size = len(data)
    off = pos

    while size - off > ITEM_PREFIX_SIZE:
        val_len, flags = struct.unpack_from(ITEM_PREFIX_FORMAT, data, off)
        off += ITEM_PREFIX_SIZE

        # Room left for the key and its terminator once the value is placed
        max_key_len = size - off - val_len - 1
        if max_key_len < 0:
            return _corrupt(f"value length {val_len} overruns tag body at offset {off - ITEM_PREFIX_SIZE}", strict)

        key_len = data.find(b"\x00", off, off + max_key_len + 1) - off
        if key_len < 0:
            return _corrupt(f"unterminated key at offset {off}", strict)

        if not is_utf8(flags):
            logger.debug("Skipping non-text item at offset %d (flags 0x%08x)", off - ITEM_PREFIX_SIZE, flags)
            off += key_len + 1 + val_len
            continue

        try:
            key = data[off:off + key_len].decode(KEY_ENCODING)
        except UnicodeDecodeError:
            return _corrupt(f"non-ASCII key at offset {off}", strict)
        off += key_len + 1

        value = data[off:off + val_len]
        off += val_len

        key, value = normalize_item(key, value)
        return off - pos, key, value

    if strict and off < size:
        raise TagCorruptError(f"{size - off} trailing bytes at offset {off} are too short for an item")
    return None


def _corrupt(message: str, strict: bool) -> None:
    if strict:
        raise TagCorruptError(message)
    logger.debug("Corrupt tag item: %s", message)
    return None


class ItemIterator:
    """Cursor over a tag body yielding (key, value) pairs.

    The cursor only moves forward. After the first exhausted or failed
    read the iterator stays finished, so a damaged body produces exactly
    the items that came before the damage.
    """

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0
        self.finished = False

    def __iter__(self) -> Iterator[Item]:
        return self

    def __next__(self) -> Item:
        if self.finished or self.pos >= len(self.data):
            self.finished = True
            raise StopIteration

        result = parse_item(self.data, self.pos)
        if result is None:
            self.finished = True
            raise StopIteration

        consumed, key, value = result
        self.pos += consumed
        return key, value

    def next(self) -> Optional[Item]:
        """Return the next item, or None once the sequence has ended."""
        return next(self, None)
