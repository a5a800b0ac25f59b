"""Configuration management for apetag-reader.

Handles saving and loading user preferences such as whether the slow
whole-file scan is used and how values are displayed by the CLI.
"""

import copy
import logging
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional

import tomli_w

from .constants import PREAMBLE, SCAN_CHUNK_SIZE

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Get the configuration directory.

    Returns:
        Path to config directory (~/.apetag on all platforms)
    """
    config_dir = Path.home() / ".apetag"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Get the full path to the config file."""
    return get_config_dir() / ".apetag_config.toml"


class Config:
    """Configuration manager for application settings."""

    DEFAULT_CONFIG: Dict[str, Any] = {
        "scan": {
            # Read the whole file looking for APETAGEX when there is no
            # footer in the last 32 bytes (e.g. an ID3v1 tag follows)
            "allow_slow_scan": False,
            "chunk_size": SCAN_CHUNK_SIZE,
        },
        "display": {
            # Longer values are cut and end with "..."
            "max_value_length": 60,
            # Hex preview of the raw tag body in `apetag inspect`
            "show_binary": False,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Explicit config file, defaults to get_config_path()
        """
        self.config_path = Path(config_path) if config_path is not None else get_config_path()
        self.data: Dict[str, Any] = copy.deepcopy(self.DEFAULT_CONFIG)
        self._dirty = False
        self.load()

    def load(self) -> bool:
        """Load configuration from file.

        Returns:
            True if loaded successfully, False if file doesn't exist or error occurred
        """
        if not self.config_path.exists():
            return False

        try:
            with open(self.config_path, "rb") as f:
                loaded_data = tomllib.load(f)
            # Merge with defaults (in case new keys were added)
            self._merge_config(self.data, loaded_data)
            self._dirty = False
            return True
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Error loading config %s: %s", self.config_path, e)
            return False

    def save(self, force: bool = False) -> bool:
        """Save configuration to file.

        Args:
            force: If True, save even if config hasn't been modified

        Returns:
            True if saved successfully, False otherwise
        """
        if not force and not self._dirty:
            return True

        try:
            with open(self.config_path, "wb") as f:
                tomli_w.dump(self.data, f)
            self._dirty = False
            return True
        except OSError as e:
            logger.error("Error saving config %s: %s", self.config_path, e)
            return False

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        """Recursively merge override dict into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def is_dirty(self) -> bool:
        return self._dirty

    # Scan settings
    def get_allow_slow_scan(self) -> bool:
        return bool(self.data["scan"].get("allow_slow_scan", False))

    def set_allow_slow_scan(self, enabled: bool) -> None:
        self.data["scan"]["allow_slow_scan"] = enabled
        self._dirty = True

    def get_chunk_size(self) -> int:
        """Get the read size used by the slow scan.

        Values from the config file that are not integers or are smaller
        than the preamble fall back to the default.
        """
        chunk_size = self.data["scan"].get("chunk_size", SCAN_CHUNK_SIZE)
        if (
            isinstance(chunk_size, bool)
            or not isinstance(chunk_size, int)
            or chunk_size < len(PREAMBLE)
        ):
            logger.warning(
                "Invalid scan.chunk_size %r in config, using %d",
                chunk_size, SCAN_CHUNK_SIZE,
            )
            return SCAN_CHUNK_SIZE
        return chunk_size

    def set_chunk_size(self, chunk_size: int) -> None:
        """Set the read size used by the slow scan.

        Raises:
            ValueError: If chunk_size is smaller than the preamble
        """
        if chunk_size < len(PREAMBLE):
            raise ValueError(f"Chunk size must be at least {len(PREAMBLE)} bytes")
        self.data["scan"]["chunk_size"] = chunk_size
        self._dirty = True

    # Display settings
    def get_max_value_length(self) -> int:
        return self.data["display"].get("max_value_length", 60)

    def set_max_value_length(self, length: int) -> None:
        if length < 4:
            raise ValueError("Maximum value length must be at least 4")
        self.data["display"]["max_value_length"] = length
        self._dirty = True

    def get_show_binary(self) -> bool:
        return bool(self.data["display"].get("show_binary", False))

    def set_show_binary(self, enabled: bool) -> None:
        self.data["display"]["show_binary"] = enabled
        self._dirty = True
