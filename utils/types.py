"""
Type definitions and common data structures for the Discord bot.
"""

from dataclasses import dataclass
from enum import Enum


class VoiceEventKind(Enum):
    """Shape of a single voice-state transition."""

    JOIN = "join"
    LEAVE = "leave"
    MOVE = "move"


@dataclass
class Session:
    """An open voice session for one user."""

    channel_id: int
    joined_at: float  # clock reading, seconds


@dataclass(frozen=True)
class ManagedChannel:
    """A temporary voice channel created by the bot."""

    channel_id: int
    name: str
    created_at: float  # unix seconds


@dataclass(frozen=True)
class VoiceRecord:
    """Cumulative voice statistics for one user, as stored."""

    user_id: int
    username: str
    total_voice_time: int  # milliseconds
    session_count: int
    last_updated: str | None = None

    @property
    def average_time(self) -> int:
        return self.total_voice_time // max(self.session_count, 1)
