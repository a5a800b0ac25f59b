"""Utility functions for CLI operations."""

import logging


def setup_logging(level: str) -> None:
    """Configure logging based on user-specified level.

    Args:
        level: Logging level (debug, info, warning, error, critical)
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger().setLevel(numeric_level)


def format_value(value: bytes, max_length: int = 60, raw: bool = False) -> str:
    """Render a raw item value for display.

    Args:
        value: Raw value bytes
        max_length: Longer strings are cut and end with "..."
        raw: Show the Python bytes literal instead of decoded text
    """
    text = repr(value) if raw else value.decode("utf-8", errors="replace")
    if len(text) > max_length:
        text = text[: max_length - 3] + "..."
    return text


def hex_preview(data: bytes, width: int = 16, limit: int = 256) -> str:
    """Return a hexdump style preview of the first limit bytes of data."""
    lines = []
    for offset in range(0, min(len(data), limit), width):
        row = data[offset:offset + width]
        hex_part = " ".join(f"{b:02x}" for b in row)
        text_part = "".join(chr(b) if 32 <= b < 127 else "." for b in row)
        lines.append(f"{offset:08x}  {hex_part:<{width * 3}} {text_part}")
    if len(data) > limit:
        lines.append(f"... {len(data) - limit} more bytes")
    return "\n".join(lines)


def error_code(exc: BaseException) -> str:
    """Map an exception to the machine-readable code used in JSON output."""
    # Imported here so the logging helpers stay free of package imports
    from ..errors import TagNotFoundError, TagOversizeError, TagReadError, ApeTagError

    if isinstance(exc, TagNotFoundError):
        return "not_found"
    if isinstance(exc, TagOversizeError):
        return "oversize"
    if isinstance(exc, TagReadError):
        return "read_failed"
    if isinstance(exc, ApeTagError):
        return "invalid_tag"
    if isinstance(exc, FileNotFoundError):
        return "file_not_found"
    if isinstance(exc, PermissionError):
        return "permission_denied"
    return "io_error"


def load_config(args):
    """Return the Config selected by -c/--config, or the default one."""
    from ..config import Config

    return Config(getattr(args, "config", None))


def allow_slow_scan(args, config) -> bool:
    """--slow on the command line wins over the config file."""
    return bool(getattr(args, "slow", False)) or config.get_allow_slow_scan()
