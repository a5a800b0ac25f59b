"""Exceptions raised while locating and loading APE tags.

All of them derive from ApeTagError, so a caller that only cares whether a
tag could be loaded can catch that single type.
"""

from .constants import MAX_TAG_SIZE


class ApeTagError(ValueError):
    """Base class for all tag loading failures."""


class TagNotFoundError(ApeTagError):
    """No APETAGEX preamble could be located in the file."""


class TagOversizeError(ApeTagError):
    """The declared tag size exceeds the sanity cap."""

    def __init__(self, size: int, limit: int = MAX_TAG_SIZE):
        self.size = size
        self.limit = limit
        super().__init__(f"Tag size {size:,} bytes exceeds limit of {limit:,} bytes")


class TagCorruptError(ApeTagError):
    """An item violates its length bound or lacks a key terminator."""


class TagReadError(ApeTagError, OSError):
    """Seeking or reading the tag body failed."""
