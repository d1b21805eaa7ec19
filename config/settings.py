"""
Runtime settings for the voice channel bot.

Values come from config.yaml (via ConfigLoader) and are overridden by
environment variables, so a container deployment only needs env vars.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from helpers.constants import DEFAULT_CHANNEL_NAMES
from utils.errors import ConfigError

from .config_loader import ConfigLoader

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # ---------------- Temporary channels ----------------
    create_channel_id: int | None = None
    category_id: int | None = None
    delete_delay_ms: int = 1000
    protected_channel_ids: frozenset[int] = frozenset()
    ignore_bots: bool = True
    channel_names: tuple[str, ...] = DEFAULT_CHANNEL_NAMES

    # ---------------- Report command ----------------
    admin_role_id: int | None = None

    # ---------------- Welcome audio ----------------
    welcome_audio_path: str = "welcome.ogg"
    audio_volume: float = 0.4
    audio_start_delay_ms: int = 1000
    audio_playback_limit_ms: int = 5000
    audio_emergency_ms: int = 10000

    # ---------------- Activity log ----------------
    voice_logging_enabled: bool = False
    voice_log_channel_id: int | None = None

    # ---------------- Persistence ----------------
    database_url: str | None = None

    @property
    def delete_delay_seconds(self) -> float:
        return self.delete_delay_ms / 1000.0

    def is_protected(self, channel_id: int) -> bool:
        """True for channels that must never be auto-deleted."""
        return channel_id == self.create_channel_id or channel_id in self.protected_channel_ids


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = config.get(name) or {}
    return value if isinstance(value, Mapping) else {}


def _to_int(value: Any, name: str, default: int | None) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        logger.warning("Invalid integer for %s: %r; using default %r", name, value, default)
        return default


def _to_float(value: Any, name: str, default: float) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        return float(str(value).strip())
    except ValueError:
        logger.warning("Invalid number for %s: %r; using default %r", name, value, default)
        return default


def _to_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _parse_id_list(raw: Any, name: str) -> frozenset[int]:
    """Parse a comma separated string or a YAML list of snowflakes."""
    if raw is None:
        return frozenset()
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    ids: set[int] = set()
    for item in items:
        text = str(item).strip()
        if not text:
            continue
        try:
            ids.add(int(text))
        except ValueError:
            logger.warning("Ignoring invalid channel id %r in %s", text, name)
    return frozenset(ids)


def _pick(env: Mapping[str, str], env_name: str, fallback: Any) -> Any:
    value = env.get(env_name)
    return value if value is not None and value.strip() else fallback


def load_settings(
    config: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from YAML config layered under environment variables.

    Args:
        config: Parsed YAML mapping; defaults to ConfigLoader.load_config().
        env: Environment mapping; defaults to os.environ.

    Raises:
        ConfigError: If the configured channel name pool is empty.
    """
    if config is None:
        config = ConfigLoader.load_config()
    if env is None:
        env = os.environ

    voice = _section(config, "voice")
    admin = _section(config, "admin")
    audio = _section(config, "audio")
    voice_logging = _section(config, "voice_logging")
    database = _section(config, "database")

    names_raw = voice.get("channel_names")
    if names_raw is None:
        channel_names = DEFAULT_CHANNEL_NAMES
    else:
        channel_names = tuple(str(n) for n in names_raw if str(n).strip())
        if not channel_names:
            raise ConfigError("voice.channel_names must contain at least one name")

    volume = _to_float(_pick(env, "AUDIO_VOLUME", audio.get("volume")), "AUDIO_VOLUME", 0.4)
    if not 0.0 <= volume <= 1.0:
        logger.warning("AUDIO_VOLUME %s outside 0.0-1.0; clamping", volume)
        volume = min(max(volume, 0.0), 1.0)

    delete_delay_ms = _to_int(
        _pick(env, "DELETE_DELAY", voice.get("delete_delay_ms")), "DELETE_DELAY", 1000
    )
    if delete_delay_ms is None or delete_delay_ms < 0:
        delete_delay_ms = 1000

    database_url = _pick(env, "DATABASE_URL", database.get("url"))

    settings = Settings(
        create_channel_id=_to_int(
            _pick(env, "CREATE_CHANNEL_ID", voice.get("create_channel_id")),
            "CREATE_CHANNEL_ID",
            None,
        ),
        category_id=_to_int(
            _pick(env, "CATEGORY_ID", voice.get("category_id")), "CATEGORY_ID", None
        ),
        delete_delay_ms=delete_delay_ms,
        protected_channel_ids=_parse_id_list(
            _pick(env, "PROTECTED_CHANNEL_IDS", voice.get("protected_channel_ids")),
            "PROTECTED_CHANNEL_IDS",
        ),
        ignore_bots=_to_bool(voice.get("ignore_bots"), True),
        channel_names=channel_names,
        admin_role_id=_to_int(
            _pick(env, "ADMIN_ROLE_ID", admin.get("role_id")), "ADMIN_ROLE_ID", None
        ),
        welcome_audio_path=str(
            _pick(env, "WELCOME_AUDIO_PATH", audio.get("welcome_file")) or "welcome.ogg"
        ),
        audio_volume=volume,
        audio_start_delay_ms=_to_int(audio.get("start_delay_ms"), "audio.start_delay_ms", 1000) or 0,
        audio_playback_limit_ms=_to_int(
            audio.get("playback_limit_ms"), "audio.playback_limit_ms", 5000
        ) or 5000,
        audio_emergency_ms=_to_int(
            audio.get("emergency_disconnect_ms"), "audio.emergency_disconnect_ms", 10000
        ) or 10000,
        voice_logging_enabled=_to_bool(
            _pick(env, "ENABLE_VOICE_LOGGING", voice_logging.get("enabled")), False
        ),
        voice_log_channel_id=_to_int(
            _pick(env, "VOICE_LOG_CHANNEL_ID", voice_logging.get("channel_id")),
            "VOICE_LOG_CHANNEL_ID",
            None,
        ),
        database_url=str(database_url).strip() if database_url else None,
    )

    if settings.create_channel_id is None:
        logger.warning(
            "CREATE_CHANNEL_ID is not configured; temporary channel creation is disabled"
        )
    return settings
