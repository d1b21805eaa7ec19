"""
Database Helper Module

Provides a centralized database interface for the Discord bot using aiosqlite.
Handles connection settings and schema initialization.
"""

import asyncio
import sqlite3
from contextlib import asynccontextmanager

import aiosqlite

from utils.errors import DatabaseError
from utils.logging import get_logger

from .schema import init_schema

logger = get_logger(__name__)

_SQLITE_PREFIXES = ("sqlite+aiosqlite:///", "sqlite:///", "file:")


def resolve_database_path(url: str | None) -> str | None:
    """
    Turn a configured connection string into a SQLite file path.

    Accepts ``sqlite:///path``, ``sqlite+aiosqlite:///path``, ``file:path``
    or a bare path. Returns None for an empty value.

    Raises:
        DatabaseError: For URLs with a scheme other than SQLite.
    """
    if not url or not url.strip():
        return None
    url = url.strip()
    for prefix in _SQLITE_PREFIXES:
        if url.startswith(prefix):
            path = url[len(prefix):]
            if not path:
                raise DatabaseError(f"Database URL {url!r} has no path")
            return path
    if "://" in url:
        scheme = url.split("://", 1)[0]
        raise DatabaseError(f"Unsupported database scheme {scheme!r}; only SQLite is supported")
    return url


class Database:
    _db_path: str | None = None
    _lock = asyncio.Lock()  # Ensures that only one initialization happens
    _initialized = False

    @classmethod
    async def initialize(cls, db_path: str | None = None) -> None:
        async with cls._lock:
            if cls._initialized:
                return
            if db_path:
                cls._db_path = db_path
            if not cls._db_path:
                raise DatabaseError("No database path configured")
            async with aiosqlite.connect(cls._db_path) as db:
                await init_schema(db)
            cls._initialized = True
            logger.info("Database initialized.")

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized

    @classmethod
    def reset(cls) -> None:
        """Forget the configured path (useful for testing)."""
        cls._db_path = None
        cls._initialized = False

    @classmethod
    @asynccontextmanager
    async def get_connection(cls):
        """
        Get a connection to the database with optimized settings.

        Usage:
            async with Database.get_connection() as db:
                await db.execute("SELECT * FROM table")
        """
        if not cls._initialized:
            await cls.initialize()
        async with aiosqlite.connect(cls._db_path) as db:
            await db.execute("PRAGMA busy_timeout=5000")
            try:
                await db.execute("PRAGMA journal_mode=WAL")
            except sqlite3.OperationalError as exc:
                # WAL transition can fail briefly if another writer holds a lock; retry once
                if "database is locked" in str(exc).lower():
                    await asyncio.sleep(0.05)
                    await db.execute("PRAGMA journal_mode=WAL")
                else:
                    raise
            await db.execute("PRAGMA synchronous=NORMAL")
            db.row_factory = aiosqlite.Row
            yield db
