"""Database layer — SQLite with ACID transactions and repository pattern."""

from fintrack.db.database import Database
from fintrack.db.schema import SCHEMA_DDL, TABLE_NAMES

__all__ = ["Database", "SCHEMA_DDL", "TABLE_NAMES"]
