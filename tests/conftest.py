"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
import pytest

from tagbuilder import build_tag

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


SAMPLE_ITEMS = [
    ("Artist", "Queen"),
    ("Album", "Innuendo"),
    ("Title", "The Show Must Go On"),
    ("Year", "1991-02-04"),
    ("Track", "12/12"),
]

# Stand-in for compressed audio frames
AUDIO_DATA = bytes(range(256)) * 16


@pytest.fixture
def sample_items():
    return list(SAMPLE_ITEMS)


@pytest.fixture
def tagged_file(tmp_path):
    """An audio-like file ending with a complete APEv2 tag."""
    path = tmp_path / "track.mpc"
    path.write_bytes(AUDIO_DATA + build_tag(SAMPLE_ITEMS))
    return path


@pytest.fixture
def untagged_file(tmp_path):
    path = tmp_path / "plain.mpc"
    path.write_bytes(AUDIO_DATA)
    return path


@pytest.fixture
def id3v1_file(tmp_path):
    """APEv2 tag followed by a 128 byte ID3v1 block."""
    path = tmp_path / "track.mp3"
    id3v1 = b"TAG" + b"\x00" * 125
    path.write_bytes(AUDIO_DATA + build_tag(SAMPLE_ITEMS) + id3v1)
    return path


@pytest.fixture
def config_path(tmp_path):
    """Path of a not yet existing config file."""
    return tmp_path / ".apetag_config.toml"
