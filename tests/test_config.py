"""
Config Loader and Settings Tests

Tests for config loading, environment overrides, defaults, and error handling.
Uses temp config files to test various scenarios.
"""

import pytest

from config.config_loader import ConfigLoader
from config.settings import Settings, load_settings
from helpers.constants import DEFAULT_CHANNEL_NAMES
from tests.factories.config_factories import make_config, temp_config_file
from utils.errors import ConfigError


class TestConfigLoaderBasics:
    """Test basic config loading functionality."""

    def test_load_valid_config(self):
        config = make_config(voice={"create_channel_id": 42})

        with temp_config_file(config) as path:
            result = ConfigLoader.load_config(path)

        assert result["voice"]["create_channel_id"] == 42
        assert ConfigLoader.status == "ok"

    def test_missing_file_is_degraded(self, tmp_path):
        result = ConfigLoader.load_config(str(tmp_path / "absent.yaml"))

        assert result == {}
        assert ConfigLoader.status == "degraded"

    def test_invalid_yaml_is_error(self):
        with temp_config_file(content="voice: [unclosed") as path:
            result = ConfigLoader.load_config(path)

        assert result == {}
        assert ConfigLoader.status == "error"

    def test_config_path_env_override(self, monkeypatch):
        with temp_config_file(make_config(voice={"category_id": 7})) as path:
            monkeypatch.setenv("CONFIG_PATH", path)
            result = ConfigLoader.load_config()

        assert result["voice"]["category_id"] == 7
        assert ConfigLoader.path == path

    def test_invalid_logging_level_defaults_to_info(self):
        with temp_config_file(make_config(logging_level="SUPER_DEBUG")) as path:
            result = ConfigLoader.load_config(path)

        assert result["logging"]["level"] == "INFO"

    def test_non_mapping_file_is_degraded(self):
        with temp_config_file(content="- just\n- a list\n") as path:
            result = ConfigLoader.load_config(path)

        assert result == {}
        assert ConfigLoader.status == "degraded"

    def test_summary_names_path_and_status(self):
        with temp_config_file(make_config()) as path:
            ConfigLoader.load_config(path)

        assert ConfigLoader.summary() == f"{path} (ok)"

    def test_summary_before_load(self):
        assert ConfigLoader.summary() == "unset (not_loaded)"


class TestLoadSettings:
    def test_defaults_from_empty_config(self):
        settings = load_settings({}, env={})

        assert settings.create_channel_id is None
        assert settings.delete_delay_ms == 1000
        assert settings.channel_names == DEFAULT_CHANNEL_NAMES
        assert settings.ignore_bots is True
        assert settings.database_url is None

    def test_yaml_values(self):
        config = make_config(
            voice={
                "create_channel_id": 11,
                "category_id": 22,
                "delete_delay_ms": 2500,
                "protected_channel_ids": [33, 44],
                "channel_names": ["One", "Two"],
            },
            admin={"role_id": 55},
            database={"url": "sqlite:///voice.db"},
        )

        settings = load_settings(config, env={})

        assert settings.create_channel_id == 11
        assert settings.category_id == 22
        assert settings.delete_delay_seconds == 2.5
        assert settings.protected_channel_ids == frozenset({33, 44})
        assert settings.channel_names == ("One", "Two")
        assert settings.admin_role_id == 55
        assert settings.database_url == "sqlite:///voice.db"

    def test_environment_overrides_yaml(self):
        config = make_config(voice={"create_channel_id": 11, "delete_delay_ms": 2500})
        env = {
            "CREATE_CHANNEL_ID": "99",
            "CATEGORY_ID": "98",
            "DELETE_DELAY": "500",
            "PROTECTED_CHANNEL_IDS": "1, 2,,3",
            "ADMIN_ROLE_ID": "97",
            "ENABLE_VOICE_LOGGING": "true",
            "VOICE_LOG_CHANNEL_ID": "96",
            "DATABASE_URL": "sqlite:///env.db",
        }

        settings = load_settings(config, env=env)

        assert settings.create_channel_id == 99
        assert settings.category_id == 98
        assert settings.delete_delay_ms == 500
        assert settings.protected_channel_ids == frozenset({1, 2, 3})
        assert settings.admin_role_id == 97
        assert settings.voice_logging_enabled is True
        assert settings.voice_log_channel_id == 96
        assert settings.database_url == "sqlite:///env.db"

    def test_blank_env_values_fall_back_to_yaml(self):
        config = make_config(voice={"create_channel_id": 11})

        settings = load_settings(config, env={"CREATE_CHANNEL_ID": "  "})

        assert settings.create_channel_id == 11

    def test_invalid_numbers_use_defaults(self):
        settings = load_settings({}, env={"DELETE_DELAY": "soon", "CATEGORY_ID": "abc"})

        assert settings.delete_delay_ms == 1000
        assert settings.category_id is None

    def test_negative_delay_uses_default(self):
        settings = load_settings({}, env={"DELETE_DELAY": "-5"})

        assert settings.delete_delay_ms == 1000

    def test_invalid_protected_ids_are_skipped(self):
        settings = load_settings({}, env={"PROTECTED_CHANNEL_IDS": "12,nope,13"})

        assert settings.protected_channel_ids == frozenset({12, 13})

    def test_audio_volume_is_clamped(self):
        assert load_settings({}, env={"AUDIO_VOLUME": "3"}).audio_volume == 1.0
        assert load_settings({}, env={"AUDIO_VOLUME": "-1"}).audio_volume == 0.0

    def test_empty_name_pool_is_rejected(self):
        with pytest.raises(ConfigError):
            load_settings(make_config(voice={"channel_names": []}), env={})

    def test_loads_yaml_through_config_loader(self, monkeypatch):
        with temp_config_file(make_config(voice={"create_channel_id": 321})) as path:
            monkeypatch.setenv("CONFIG_PATH", path)
            settings = load_settings(env={})

        assert settings.create_channel_id == 321


class TestSettingsProtection:
    def test_trigger_channel_is_protected(self):
        settings = Settings(create_channel_id=1)

        assert settings.is_protected(1)
        assert not settings.is_protected(2)

    def test_configured_ids_are_protected(self):
        settings = Settings(create_channel_id=1, protected_channel_ids=frozenset({5}))

        assert settings.is_protected(5)
