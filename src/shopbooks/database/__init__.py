"""Database layer for shopbooks application."""

from shopbooks.database.base import Database
from shopbooks.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
