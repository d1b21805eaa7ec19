"""
Cumulative voice statistics store.

Each closed session is folded into a per-user row with a single
INSERT ... ON CONFLICT DO UPDATE, so concurrent flushes never lose time.
When no database is configured or it cannot be opened, every write is a
no-op and the voice channel lifecycle carries on unaffected.
"""

import aiosqlite

from helpers.constants import LEADERBOARD_LIMIT
from utils.errors import DatabaseError
from utils.types import VoiceRecord

from .base import BaseService
from .db.database import Database, resolve_database_path

_UPSERT_SQL = """
    INSERT INTO voice_logs (discord_id, username, total_voice_time, session_count, last_updated)
    VALUES (?, ?, ?, 1, CURRENT_TIMESTAMP)
    ON CONFLICT(discord_id) DO UPDATE SET
        username = excluded.username,
        total_voice_time = voice_logs.total_voice_time + excluded.total_voice_time,
        session_count = voice_logs.session_count + 1,
        last_updated = CURRENT_TIMESTAMP
"""

_TOP_SQL = """
    SELECT discord_id, username, total_voice_time, session_count, last_updated
    FROM voice_logs
    ORDER BY total_voice_time DESC
    LIMIT ?
"""


class StatsService(BaseService):
    """Persists per-user voice time. Unavailable means silent no-op writes."""

    def __init__(self, database_url: str | None) -> None:
        super().__init__("stats")
        self.database_url = database_url
        self.available = False

    async def _initialize_impl(self) -> None:
        try:
            path = resolve_database_path(self.database_url)
        except DatabaseError as e:
            self.logger.warning("Voice statistics disabled: %s", e)
            return

        if path is None:
            self.logger.warning(
                "DATABASE_URL not set; voice statistics are disabled"
            )
            return

        try:
            await Database.initialize(path)
        except (aiosqlite.Error, OSError, DatabaseError) as e:
            self.logger.exception(
                "Database initialization failed; continuing without voice statistics",
                exc_info=e,
            )
            return

        self.available = True

    async def _shutdown_impl(self) -> None:
        self.available = False

    async def flush(self, user_id: int, username: str, elapsed_ms: int) -> None:
        """Add one finished session to the user's running totals."""
        if not self.available:
            self.logger.debug(
                "Database not available, skipping voice time update",
                extra={"user_id": user_id},
            )
            return

        elapsed_ms = max(0, int(elapsed_ms))
        try:
            async with Database.get_connection() as db:
                await db.execute(_UPSERT_SQL, (user_id, username, elapsed_ms))
                await db.commit()
        except (aiosqlite.Error, OSError) as e:
            self.logger.exception(
                "Error updating voice time",
                exc_info=e,
                extra={"user_id": user_id, "duration_ms": elapsed_ms},
            )

    async def top_records(self, limit: int = LEADERBOARD_LIMIT) -> list[VoiceRecord]:
        """
        Return the users with the most accumulated voice time.

        Raises:
            DatabaseError: If the store is unavailable or the query fails.
        """
        if not self.available:
            raise DatabaseError("Voice statistics database is not available")
        try:
            async with Database.get_connection() as db:
                cursor = await db.execute(_TOP_SQL, (limit,))
                rows = await cursor.fetchall()
        except (aiosqlite.Error, OSError) as e:
            raise DatabaseError(f"Failed to fetch voice statistics: {e}") from e
        return [_row_to_record(row) for row in rows]


def _row_to_record(row: aiosqlite.Row) -> VoiceRecord:
    return VoiceRecord(
        user_id=int(row["discord_id"]),
        username=row["username"],
        total_voice_time=int(row["total_voice_time"]),
        session_count=int(row["session_count"]),
        last_updated=row["last_updated"],
    )
