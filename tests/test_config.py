"""Tests for the Config class."""

import pytest

from apetag_reader.config import Config
from apetag_reader.constants import SCAN_CHUNK_SIZE


class TestConfigDefaults:
    """Test default values."""

    def test_defaults(self, config_path):
        config = Config(config_path)
        assert config.get_allow_slow_scan() is False
        assert config.get_chunk_size() == SCAN_CHUNK_SIZE
        assert config.get_max_value_length() == 60
        assert config.get_show_binary() is False
        assert not config.is_dirty()

    def test_missing_file_not_loaded(self, config_path):
        config = Config(config_path)
        assert config.load() is False

    def test_defaults_not_shared(self, config_path):
        """Test that changing one instance leaves the class defaults alone."""
        config = Config(config_path)
        config.set_allow_slow_scan(True)
        assert Config.DEFAULT_CONFIG["scan"]["allow_slow_scan"] is False


class TestConfigSetters:
    """Test setters and validation."""

    def test_set_marks_dirty(self, config_path):
        config = Config(config_path)
        config.set_show_binary(True)
        assert config.is_dirty()
        assert config.get_show_binary() is True

    def test_chunk_size_validation(self, config_path):
        config = Config(config_path)
        with pytest.raises(ValueError, match="at least 8 bytes"):
            config.set_chunk_size(4)
        config.set_chunk_size(8)
        assert config.get_chunk_size() == 8

    def test_max_value_length_validation(self, config_path):
        config = Config(config_path)
        with pytest.raises(ValueError):
            config.set_max_value_length(2)


class TestConfigPersistence:
    """Test saving to and loading from TOML."""

    def test_round_trip(self, config_path):
        config1 = Config(config_path)
        config1.set_allow_slow_scan(True)
        config1.set_chunk_size(65536)
        assert config1.save()
        assert not config1.is_dirty()

        config2 = Config(config_path)
        assert config2.get_allow_slow_scan() is True
        assert config2.get_chunk_size() == 65536

    def test_save_clean_is_noop(self, config_path):
        config = Config(config_path)
        assert config.save()
        assert not config_path.exists()
        assert config.save(force=True)
        assert config_path.exists()

    def test_partial_file_merged_with_defaults(self, config_path):
        config_path.write_text("[display]\nmax_value_length = 20\n")
        config = Config(config_path)
        assert config.get_max_value_length() == 20
        assert config.get_show_binary() is False
        assert config.get_chunk_size() == SCAN_CHUNK_SIZE

    def test_invalid_toml(self, config_path):
        config_path.write_text("[scan\nallow_slow_scan = ")
        config = Config(config_path)
        assert config.load() is False
        assert config.get_allow_slow_scan() is False


class TestConfigFileValidation:
    """Test values read from a hand-edited config file."""

    @pytest.mark.parametrize("value", ["2", "0", "-4096", '"big"', "true", "4096.0"])
    def test_invalid_chunk_size_falls_back(self, config_path, value, caplog):
        config_path.write_text(f"[scan]\nchunk_size = {value}\n")
        config = Config(config_path)
        with caplog.at_level("WARNING", logger="apetag_reader.config"):
            assert config.get_chunk_size() == SCAN_CHUNK_SIZE
        assert "Invalid scan.chunk_size" in caplog.text

    def test_valid_chunk_size_kept(self, config_path):
        config_path.write_text("[scan]\nchunk_size = 8\n")
        assert Config(config_path).get_chunk_size() == 8
