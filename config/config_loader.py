# config/config_loader.py

import logging
import os
from pathlib import Path
from typing import Any, ClassVar

import yaml

LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_config_path() -> Path:
    return Path(__file__).resolve().parent / "config.yaml"


class ConfigLoader:
    """
    Reads config.yaml once per process and caches the mapping.

    A missing file leaves the bot on built-in defaults ("degraded"); a file
    that cannot be parsed does the same but is reported as "error". Either
    way the bot still starts, since every voice setting also has an env var.
    """

    _config: ClassVar[dict[str, Any]] = {}
    status: ClassVar[str] = "not_loaded"
    path: ClassVar[str | None] = None

    @classmethod
    def load_config(cls, config_path: str | None = None) -> dict[str, Any]:
        """Return the cached config, reading it on first use.

        The file is taken from ``config_path``, then ``CONFIG_PATH``, then
        config/config.yaml next to this module.
        """
        if cls._config:
            return cls._config

        if config_path is None:
            config_path = os.environ.get("CONFIG_PATH")
            if config_path:
                logging.info("Using config file from CONFIG_PATH: %s", config_path)
        cls.path = config_path or str(_default_config_path())

        try:
            with Path(cls.path).open(encoding="utf-8") as file:
                loaded = yaml.safe_load(file)
        except FileNotFoundError:
            logging.warning("No config file at %s; running on defaults", cls.path)
            cls._config, cls.status = {}, "degraded"
            return cls._config
        except yaml.YAMLError as e:
            logging.exception("Could not parse config file %s", cls.path, exc_info=e)
            cls._config, cls.status = {}, "error"
            return cls._config

        if isinstance(loaded, dict):
            cls._config, cls.status = loaded, "ok"
            logging.info("Loaded config from %s", cls.path)
        else:
            logging.warning("Config file %s is not a mapping; ignoring it", cls.path)
            cls._config, cls.status = {}, "degraded"

        cls._validate_logging_level()
        return cls._config

    @classmethod
    def summary(cls) -> str:
        """One-line description for the startup log."""
        return f"{cls.path or 'unset'} ({cls.status})"

    @classmethod
    def _validate_logging_level(cls) -> None:
        section = cls._config.get("logging") or {}
        level = str(section.get("level", "INFO")).upper()
        if level not in LOGGING_LEVELS:
            logging.warning("Unknown logging level %r; falling back to INFO", level)
            cls._config.setdefault("logging", {})["level"] = "INFO"

    @classmethod
    def reset(cls) -> None:
        """Forget the cached config so the next load reads the file again."""
        cls._config = {}
        cls.status = "not_loaded"
        cls.path = None
