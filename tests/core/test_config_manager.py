"""
Tests for loading router settings from YAML and the environment.
"""

import pytest

from log_router.core.config_manager import ConfigManager, RouterSettings, DEFAULT_CONFIG
from log_router.core.logging import LEVEL_INFO, LEVEL_WARNING, LEVEL_ERROR, LEVEL_TRACE


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("LOG_ROUTER_LEVEL", raising=False)
    monkeypatch.delenv("LOG_ROUTER_DIR", raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "logging.yaml"
    path.write_text(
        "logging:\n"
        "  level: info\n"
        "  directory: /var/log/app\n"
        "  show_caller: false\n"
    )
    return path


class TestConfigManager:
    def test_loads_yaml(self, config_file):
        settings = ConfigManager(str(config_file)).get_settings()
        assert settings == RouterSettings(level_mask=LEVEL_INFO, base_directory="/var/log/app", show_caller=False)

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = ConfigManager(str(tmp_path / "absent.yaml")).get_settings()
        assert settings.level_mask == LEVEL_WARNING | LEVEL_ERROR
        assert settings.base_directory == "logs"
        assert settings.show_caller is True

    def test_partial_file_is_merged_over_defaults(self, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text("logging:\n  level: [trace]\n")
        settings = ConfigManager(str(path)).get_settings()
        assert settings.level_mask == LEVEL_TRACE
        assert settings.base_directory == "logs"

    def test_malformed_yaml_is_ignored(self, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text("logging: [unclosed\n")
        manager = ConfigManager(str(path))
        assert manager.get_config() == DEFAULT_CONFIG

    def test_environment_overrides(self, config_file, monkeypatch):
        monkeypatch.setenv("LOG_ROUTER_LEVEL", "error")
        monkeypatch.setenv("LOG_ROUTER_DIR", "/tmp/override")
        settings = ConfigManager(str(config_file)).get_settings()
        assert settings.level_mask == LEVEL_ERROR
        assert settings.base_directory == "/tmp/override"

    def test_invalid_level_raises(self, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text("logging:\n  level: chatty\n")
        with pytest.raises(ValueError):
            ConfigManager(str(path)).get_settings()

    def test_reload_picks_up_changes(self, config_file):
        manager = ConfigManager(str(config_file))
        config_file.write_text("logging:\n  level: 8\n")
        settings = manager.reload_config()
        assert settings.level_mask == LEVEL_ERROR
        assert settings.base_directory == "logs"

    def test_defaults_are_not_mutated(self, config_file, monkeypatch):
        monkeypatch.setenv("LOG_ROUTER_LEVEL", "trace")
        ConfigManager(str(config_file))
        assert DEFAULT_CONFIG["logging"]["level"] == "warning|error"

    def test_non_mapping_section_falls_back_to_defaults(self, tmp_path, monkeypatch):
        path = tmp_path / "logging.yaml"
        path.write_text("logging: verbose\n")
        monkeypatch.setenv("LOG_ROUTER_LEVEL", "info")

        manager = ConfigManager(str(path))
        settings = manager.get_settings()
        assert settings.level_mask == LEVEL_INFO
        assert settings.base_directory == "logs"
        assert settings.show_caller is True

    def test_non_mapping_section_without_env(self, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text("logging: verbose\n")
        assert ConfigManager(str(path)).get_config() == DEFAULT_CONFIG

    def test_null_directory_uses_default(self, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text("logging:\n  directory:\n")
        settings = ConfigManager(str(path)).get_settings()
        assert settings.base_directory == "logs"
        assert settings.level_mask == LEVEL_WARNING | LEVEL_ERROR
