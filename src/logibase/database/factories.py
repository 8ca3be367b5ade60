"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from logibase.database.sqlalchemy_db import DEFAULT_TRANSACTION_TIMEOUT, SQLAlchemyDatabase


def transaction_timeout_from_env() -> float:
    """Read LOGIBASE_TX_TIMEOUT (seconds), falling back to the default."""
    raw = os.environ.get("LOGIBASE_TX_TIMEOUT")
    if not raw:
        return DEFAULT_TRANSACTION_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ValueError(f"LOGIBASE_TX_TIMEOUT must be a number of seconds, got '{raw}'") from e
    if timeout <= 0:
        raise ValueError(f"LOGIBASE_TX_TIMEOUT must be positive, got '{raw}'")
    return timeout


def create_sqlite_database(
    database_path: Optional[str] = None, transaction_timeout: Optional[float] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LOGIBASE_DB_PATH
            environment variable, then defaults to ~/.logibase/logibase.db
        transaction_timeout: Seconds a transaction may take. If None, checks
            LOGIBASE_TX_TIMEOUT, then defaults to 20 seconds

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("LOGIBASE_DB_PATH")

    if database_path is None:
        # Default to ~/.logibase/logibase.db
        home = Path.home()
        db_dir = home / ".logibase"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "logibase.db")

    if transaction_timeout is None:
        transaction_timeout = transaction_timeout_from_env()

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url, transaction_timeout=transaction_timeout)
