"""Low level file helpers shared by the locator and the loader."""

import io
import logging
import os
import stat
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)


def read_chunk(f: BinaryIO, size: int) -> bytes:
    """Read up to size bytes, retrying transient errors.

    Interrupted calls, would-block errors and the None returned by a
    non-blocking raw stream are retried. Any other OSError propagates.
    """
    while True:
        try:
            chunk = f.read(size)
        except (InterruptedError, BlockingIOError):
            continue
        if chunk is None:
            continue
        return chunk


def read_exactly(f: BinaryIO, size: int) -> Optional[bytes]:
    """Read exactly size bytes from f.

    Short reads are continued until either size bytes have been collected
    or the end of file is reached.

    Returns:
        The bytes read, or None if the file ended first
    """
    parts = []
    remaining = size
    while remaining > 0:
        chunk = read_chunk(f, remaining)
        if not chunk:
            logger.debug("Short read: wanted %d bytes, got %d", size, size - remaining)
            return None
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def get_file_size(f: BinaryIO) -> int:
    """Return the size of the file behind f.

    Only regular files have a size; pipes, sockets and devices report 0,
    which makes every offset computed from it fail safely. In-memory
    streams without a file descriptor are measured by seeking to the end.
    """
    try:
        fd = f.fileno()
    except (AttributeError, io.UnsupportedOperation):
        pos = f.tell()
        try:
            return f.seek(0, os.SEEK_END)
        finally:
            f.seek(pos)

    try:
        st = os.fstat(fd)
    except OSError:
        return 0
    if not stat.S_ISREG(st.st_mode):
        return 0
    return st.st_size
