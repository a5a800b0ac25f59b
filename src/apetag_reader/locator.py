"""Finding the APE tag block inside a file.

Two strategies are used. The fast one only looks at the last 32 bytes of
the file, where a footer normally lives. The slow one reads the whole file
from the start and stops at the first APETAGEX preamble, which also finds
tags followed by other data such as an ID3v1 block.
"""

import logging
import os
from typing import BinaryIO, Optional, Tuple

from .constants import HEADER_SIZE, PREAMBLE, SCAN_CHUNK_SIZE
from .fileio import read_chunk
from .header import ApeHeader

logger = logging.getLogger(__name__)


def find_tag_slow(f: BinaryIO, chunk_size: int = SCAN_CHUNK_SIZE) -> Optional[int]:
    """Return the absolute offset of the first preamble in f, or None.

    The last len(PREAMBLE) - 1 bytes of each chunk are carried over into
    the next search window so matches spanning two chunks are found.
    """
    if chunk_size < len(PREAMBLE):
        raise ValueError(f"Chunk size must be at least {len(PREAMBLE)} bytes, got {chunk_size}")

    try:
        f.seek(0, os.SEEK_SET)
    except OSError as e:
        logger.debug("Cannot rewind for slow scan: %s", e)
        return None

    keep = len(PREAMBLE) - 1
    carry = b""
    # Absolute offset of carry[0]
    base = 0
    while True:
        try:
            chunk = read_chunk(f, chunk_size)
        except OSError as e:
            logger.debug("Slow scan aborted at offset %d: %s", base + len(carry), e)
            return None
        if not chunk:
            return None

        window = carry + chunk
        idx = window.find(PREAMBLE)
        if idx != -1:
            return base + idx

        carry = window[-keep:] if keep else b""
        base += len(window) - len(carry)


def find_tag(
    f: BinaryIO, allow_slow_scan: bool = False, chunk_size: int = SCAN_CHUNK_SIZE
) -> Optional[Tuple[int, ApeHeader]]:
    """Locate an APE header or footer block in f.

    On success the file is positioned right after the decoded block.

    Args:
        f: Binary file object opened for reading
        allow_slow_scan: Fall back to a linear scan from the start of the
            file when the last 32 bytes are not a tag block
        chunk_size: Read size for the slow scan

    Returns:
        Tuple of (block offset, header) or None if no tag was found
    """
    try:
        offset = f.seek(-HEADER_SIZE, os.SEEK_END)
        header = ApeHeader.read(f)
    except (OSError, ValueError) as e:
        # Files shorter than one block cannot seek there
        logger.debug("No footer block: %s", e)
        header = None
    if header is not None:
        return offset, header

    if not allow_slow_scan:
        return None

    logger.debug("No footer at end of file, scanning from the start")
    offset = find_tag_slow(f, chunk_size)
    if offset is None:
        return None
    logger.debug("Found preamble at offset %d", offset)

    try:
        f.seek(offset, os.SEEK_SET)
        header = ApeHeader.read(f)
    except OSError as e:
        logger.debug("Reading block at offset %d failed: %s", offset, e)
        return None
    if header is None:
        return None
    return offset, header
