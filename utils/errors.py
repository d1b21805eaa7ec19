"""
Exceptions raised by the temp voice bot.

Anything the bot raises on purpose derives from TempVoiceError, so startup
can tell a misconfiguration apart from a crash in discord.py.
"""


class TempVoiceError(Exception):
    """Root of the bot's own exceptions."""


class ConfigError(TempVoiceError):
    """Settings are unusable (e.g. an empty channel name pool)."""


class DatabaseError(TempVoiceError):
    """The voice statistics store is unavailable or a query failed."""


class ServiceError(TempVoiceError):
    """A service was requested before the container built it."""
