import struct
from typing import BinaryIO, NamedTuple, Optional

from .constants import (
    HEADER_FORMAT,
    HEADER_SIZE,
    PREAMBLE,
    FLAG_HAS_HEADER,
    FLAG_IS_HEADER,
    APE_VERSION_1,
    APE_VERSION_2,
)
from .fileio import read_exactly


class ApeHeader(NamedTuple):
    """Decoded 32 byte APE header or footer block."""

    version: int
    size: int
    count: int
    flags: int

    @property
    def is_footer(self) -> bool:
        """True when bit 29 is clear, i.e. the block trails the tag body."""
        return not self.flags & FLAG_IS_HEADER

    @property
    def has_header(self) -> bool:
        return bool(self.flags & FLAG_HAS_HEADER)

    @property
    def version_string(self) -> str:
        if self.version == APE_VERSION_1:
            return "1.0"
        if self.version == APE_VERSION_2:
            return "2.0"
        return str(self.version)

    @staticmethod
    def from_bytes(block: bytes) -> Optional["ApeHeader"]:
        """Return an ApeHeader for block, or None if it is not a tag block.

        Only the preamble is checked. Range checks on size and count are
        left to the loader.
        """
        if len(block) < HEADER_SIZE:
            return None
        preamble, version, size, count, flags = struct.unpack_from(HEADER_FORMAT, block)
        if preamble != PREAMBLE:
            return None
        return ApeHeader(version, size, count, flags)

    @staticmethod
    def read(f: BinaryIO) -> Optional["ApeHeader"]:
        """Read one block from the current position of f and decode it."""
        block = read_exactly(f, HEADER_SIZE)
        if block is None:
            return None
        return ApeHeader.from_bytes(block)


parse_header = ApeHeader.from_bytes
