"""Blob store factory functions."""

import os
from pathlib import Path
from typing import Optional

from smartspend.storage.sqlalchemy_store import SQLAlchemyBlobStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyBlobStore:
    """Create a SQLite-backed blob store.

    Args:
        database_path: Path to SQLite database file. If None, checks
            SMARTSPEND_DB_PATH environment variable, then defaults to
            ~/.smartspend/smartspend.db

    Returns:
        SQLAlchemyBlobStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("SMARTSPEND_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".smartspend"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "smartspend.db")

    return SQLAlchemyBlobStore(f"sqlite:///{database_path}")
