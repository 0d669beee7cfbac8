"""Tests for configuration loading and environment overrides."""

import json

import pytest

from carpool_tracker.config import (
    AppConfig,
    CarpoolConfig,
    ConfigManager,
    StorageConfig,
    get_config,
    get_data_file_path,
)


@pytest.mark.unit
class TestCarpoolConfig:
    """Test the configuration dataclasses."""

    def test_defaults(self):
        config = CarpoolConfig()
        assert config.storage.data_file == "addressbook.json"
        assert config.storage.seed_sample_data is True
        assert config.app.log_level == "INFO"

    def test_dict_round_trip(self):
        config = CarpoolConfig(
            app=AppConfig(debug=True, log_level="DEBUG"),
            storage=StorageConfig(data_file="other.json", seed_sample_data=False),
        )
        assert CarpoolConfig.from_dict(config.to_dict()) == config

    def test_from_partial_dict(self):
        config = CarpoolConfig.from_dict({"storage": {"data_file": "x.json"}})
        assert config.storage.data_file == "x.json"
        assert config.app == AppConfig()


@pytest.mark.unit
class TestConfigManager:
    """Test loading, saving and environment handling."""

    def test_home_from_environment(self, isolated_home):
        assert ConfigManager().get_home_directory() == isolated_home

    def test_default_config_when_no_file(self, isolated_home):
        config = ConfigManager().load_config()
        assert config.app.home_dir == str(isolated_home)
        assert config.app.log_to_file is False

    def test_load_from_file(self, isolated_home):
        (isolated_home / "config.json").write_text(
            json.dumps({"storage": {"data_file": "custom.json", "seed_sample_data": False}})
        )
        manager = ConfigManager()
        config = manager.load_config()

        assert config.storage.seed_sample_data is False
        assert manager.get_data_file_path() == isolated_home / "custom.json"

    def test_broken_file_falls_back_to_defaults(self, isolated_home):
        (isolated_home / "config.json").write_text("{not json")
        config = ConfigManager().load_config()
        assert config.storage.data_file == "addressbook.json"

    def test_unknown_keys_fall_back_to_defaults(self, isolated_home):
        (isolated_home / "config.json").write_text(json.dumps({"app": {"colour": "blue"}}))
        config = ConfigManager().load_config()
        assert config.app == ConfigManager().create_default_config().app

    def test_environment_overrides(self, isolated_home, monkeypatch):
        monkeypatch.setenv("CARPOOL_TRACKER_DATA_FILE", "/tmp/elsewhere.json")
        monkeypatch.setenv("CARPOOL_TRACKER_DEBUG", "1")
        manager = ConfigManager()
        config = manager.load_config()

        assert config.app.debug is True
        assert config.app.log_level == "DEBUG"
        assert str(manager.get_data_file_path()) == "/tmp/elsewhere.json"

    def test_save_and_update(self, isolated_home):
        manager = ConfigManager()
        manager.load_config()

        assert manager.update_config({"storage.seed_sample_data": False})

        saved = json.loads((isolated_home / "config.json").read_text())
        assert saved["storage"]["seed_sample_data"] is False
        assert ConfigManager().load_config().storage.seed_sample_data is False

    def test_validate_config(self, isolated_home):
        manager = ConfigManager()
        manager.load_config()
        assert manager.validate_config() == []

        manager.config.app.log_level = "LOUD"
        assert any("log level" in issue for issue in manager.validate_config())

    def test_data_file_that_is_a_directory(self, isolated_home):
        (isolated_home / "addressbook.json").mkdir()
        manager = ConfigManager()
        manager.load_config()
        assert any("not a file" in issue for issue in manager.validate_config())


@pytest.mark.unit
def test_module_level_helpers(isolated_home):
    """Test the process-wide config accessors."""
    assert get_config() is get_config()
    assert get_data_file_path() == isolated_home / "addressbook.json"
