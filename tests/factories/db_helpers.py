"""
Direct reads from the voice statistics table for asserting on stored totals.
"""

from services.db.database import Database
from services.stats_service import _row_to_record
from utils.types import VoiceRecord


async def fetch_voice_record(user_id: int) -> VoiceRecord | None:
    """Return the stored totals for ``user_id``, or None if no row exists."""
    async with Database.get_connection() as db:
        cursor = await db.execute(
            "SELECT discord_id, username, total_voice_time, session_count, last_updated "
            "FROM voice_logs WHERE discord_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
    return _row_to_record(row) if row else None
