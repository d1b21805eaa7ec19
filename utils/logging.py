import atexit
import json
import logging
import logging.handlers
import queue
from pathlib import Path

from config.config_loader import ConfigLoader

_listener: logging.handlers.QueueListener | None = None
_atexit_registered = False

# Attributes passed through ``extra=`` that end up in the JSON line
_EXTRA_FIELDS = ("user_id", "guild_id", "channel_id", "command_name", "duration_ms")


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, with any voice ids passed via ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.name,
            "funcName": record.funcName,
            "lineno": record.lineno,
            "message": record.getMessage(),
        }
        payload.update(
            (field, getattr(record, field))
            for field in _EXTRA_FIELDS
            if hasattr(record, field)
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _daily_file(path: Path, level: int) -> logging.handlers.TimedRotatingFileHandler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(path), when="midnight", backupCount=30, utc=True, encoding="utf-8"
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(level)
    return handler


def _rotated_error_name(default_name: str) -> str:
    """errors.jsonl.2024-01-31 -> errors_2024-01-31.jsonl"""
    stem, date = default_name.rsplit(".", 1)
    return str(Path(stem).with_name(f"errors_{date}.jsonl"))


def setup_logging(log_file: str | None = None) -> None:
    """
    Route every record through a queue to the console, a daily log file and
    an errors-only JSONL file next to it.

    Level and file come from the ``logging`` section of config.yaml; the
    ``discord`` library logger is held at WARNING so gateway chatter stays out.
    """
    global _listener

    section = ConfigLoader.load_config().get("logging") or {}
    level = getattr(logging, str(section.get("level", "INFO")).upper(), logging.INFO)
    log_path = Path(log_file or section.get("file", "logs/bot.log"))
    errors_dir = log_path.parent / "errors"
    errors_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    if _listener:
        _listener.stop()
        _listener = None

    formatter = JsonLineFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    main_file = _daily_file(log_path, level)
    error_file = _daily_file(errors_dir / "errors.jsonl", logging.ERROR)
    error_file.namer = _rotated_error_name  # type: ignore[assignment]
    console = logging.StreamHandler()
    console.setLevel(level)
    for handler in (main_file, error_file, console):
        handler.setFormatter(formatter)

    records: queue.Queue[logging.LogRecord] = queue.Queue(maxsize=1000)
    queue_handler = logging.handlers.QueueHandler(records)
    queue_handler.setLevel(level)
    root.addHandler(queue_handler)

    _listener = logging.handlers.QueueListener(
        records, main_file, console, error_file, respect_handler_level=True
    )
    _listener.start()
    _stop_listener_at_exit()

    logging.getLogger("discord").setLevel(logging.WARNING)


def _stop_listener_at_exit() -> None:
    global _atexit_registered
    if _atexit_registered:
        return

    def _stop() -> None:
        global _listener
        if _listener:
            _listener.stop()
            _listener = None

    atexit.register(_stop)
    _atexit_registered = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# Logging is configured as soon as any module asks for a logger
setup_logging()
