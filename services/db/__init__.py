"""
Database Package

Database access layer for the Discord bot.
"""

from .database import Database, resolve_database_path
from .schema import init_schema

__all__ = [
    "Database",
    "init_schema",
    "resolve_database_path",
]
