"""
Utilities Package

Common utilities and helper functions for the Discord bot.
"""

from .errors import ConfigError, DatabaseError, ServiceError, TempVoiceError
from .logging import get_logger, setup_logging
from .tasks import spawn
from .types import (
    ManagedChannel,
    Session,
    VoiceEventKind,
    VoiceRecord,
)

__all__ = [
    "ConfigError",
    "DatabaseError",
    "ManagedChannel",
    "ServiceError",
    "Session",
    "TempVoiceError",
    "VoiceEventKind",
    "VoiceRecord",
    "get_logger",
    "setup_logging",
    "spawn",
]
