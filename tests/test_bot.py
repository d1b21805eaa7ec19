"""
Tests for the bot entry point.
"""

import pytest

import bot as bot_module
from utils.errors import ConfigError, TempVoiceError


def _raise_config_error(*args, **kwargs):
    raise ConfigError("voice.channel_names must contain at least one name")


class TestMain:
    def test_missing_token_is_rejected(self, monkeypatch):
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)

        with pytest.raises(ValueError):
            bot_module.main()

    def test_bad_settings_abort_startup(self, monkeypatch, caplog):
        monkeypatch.setenv("DISCORD_TOKEN", "token")
        monkeypatch.setattr(bot_module, "load_settings", _raise_config_error)

        with pytest.raises(ConfigError):
            bot_module.main()

        assert "Bot could not be configured" in caplog.text


def test_config_error_is_a_temp_voice_error():
    assert issubclass(ConfigError, TempVoiceError)
