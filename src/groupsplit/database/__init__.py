"""Database layer for groupsplit application."""

from groupsplit.database.base import Database
from groupsplit.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
