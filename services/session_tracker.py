"""
In-memory voice session tracking.

One open session per user; closing a session yields the elapsed time in
milliseconds so the caller can hand it to the stats store.
"""

import time
from collections.abc import Callable

from utils.types import Session


class SessionTracker:
    """Maps a user id to the channel they are in and when they got there."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._sessions: dict[int, Session] = {}

    def on_join(self, user_id: int, channel_id: int) -> None:
        """Open a session for ``user_id`` in ``channel_id``.

        A leftover session for the same user is replaced, never merged.
        """
        self._sessions[user_id] = Session(channel_id=channel_id, joined_at=self._clock())

    def on_leave_or_move(self, user_id: int) -> int | None:
        """Close the user's session and return its length in milliseconds.

        Returns None when the user has no open session.
        """
        session = self._sessions.pop(user_id, None)
        if session is None:
            return None
        elapsed = self._clock() - session.joined_at
        return max(0, int(elapsed * 1000))

    def get(self, user_id: int) -> Session | None:
        return self._sessions.get(user_id)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
