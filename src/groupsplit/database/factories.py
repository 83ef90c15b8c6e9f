"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from groupsplit.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "GROUPSPLIT_DB_PATH"


def default_database_path() -> str:
    """Return ~/.groupsplit/groupsplit.db, creating the directory if needed."""
    db_dir = Path.home() / ".groupsplit"
    db_dir.mkdir(parents=True, exist_ok=True)
    return str(db_dir / "groupsplit.db")


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    The path is resolved from, in order: the argument, the GROUPSPLIT_DB_PATH
    environment variable, and ``default_database_path()``.
    """
    database_path = database_path or os.environ.get(DB_PATH_ENV) or default_database_path()
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
