"""Storage layer for shopledger application."""

from shopledger.database.base import STORAGE_KEY, Storage
from shopledger.database.factories import create_sqlite_storage

__all__ = ["STORAGE_KEY", "Storage", "create_sqlite_storage"]
