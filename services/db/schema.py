"""
Canonical schema definition (version=1).

Schema definitions for the voice statistics database. This module centralizes
all table creation logic to ensure consistency and avoid duplication.
"""

import aiosqlite

from utils.logging import get_logger

logger = get_logger(__name__)

SCHEMA_VERSION = 1


async def init_schema(db: aiosqlite.Connection) -> None:
    """
    Initialize the database schema with all required tables.

    Args:
        db: An open database connection
    """
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version INTEGER PRIMARY KEY,
            applied_at INTEGER DEFAULT (strftime('%s','now'))
        )
        """
    )

    await db.execute(
        """
        INSERT OR IGNORE INTO schema_migrations (version, applied_at)
        VALUES (?, strftime('%s','now'))
        """,
        (SCHEMA_VERSION,),
    )

    # One row per user; durations are milliseconds
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS voice_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            discord_id INTEGER NOT NULL UNIQUE,
            username TEXT NOT NULL,
            total_voice_time INTEGER NOT NULL DEFAULT 0,
            session_count INTEGER NOT NULL DEFAULT 0,
            last_updated TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """
    )

    await db.execute(
        "CREATE INDEX IF NOT EXISTS idx_voice_logs_total ON voice_logs(total_voice_time DESC)"
    )

    await db.commit()
    logger.debug("Schema initialized (version %s)", SCHEMA_VERSION)
