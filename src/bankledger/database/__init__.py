"""Database layer for bankledger application."""

from bankledger.database.base import Database
from bankledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
