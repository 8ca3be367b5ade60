"""Database layer for logibase application."""

from logibase.database.base import (
    Database,
    DuplicateCodeError,
    StorageError,
    TransactionTimeoutError,
)
from logibase.database.factories import create_sqlite_database

__all__ = [
    "Database",
    "DuplicateCodeError",
    "StorageError",
    "TransactionTimeoutError",
    "create_sqlite_database",
]
