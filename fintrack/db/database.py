"""Core database connection with ACID transaction support."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from fintrack.db.schema import SCHEMA_DDL
from fintrack.errors import StoreError

logger = logging.getLogger(__name__)


class Database:
    """
    SQLite database wrapper with explicit ACID transaction support.

    Implements the Unit-of-Work pattern: every mutation goes through
    ``transaction()``, which commits on success and rolls back on failure.
    Driver errors leave this class as ``StoreError`` carrying the driver's
    message.
    """

    def __init__(self, path: Optional[Path | str] = None):
        from fintrack.config import get_db_path
        if path is None:
            self.path: Path = get_db_path()
        elif isinstance(path, str):
            self.path = Path(path)
        else:
            self.path = path
        self._conn: Optional[sqlite3.Connection] = None

    # -- connection lifecycle --------------------------------------------------

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._ensure_dir()
            try:
                self._conn = sqlite3.connect(str(self.path), check_same_thread=False)
                self._conn.row_factory = sqlite3.Row
                # Mapping foreign keys are declared for documentation only.
                self._conn.execute("PRAGMA foreign_keys = OFF")
                self._conn.execute("PRAGMA journal_mode = WAL")
            except sqlite3.Error as exc:
                logger.error(f"Cannot open database at {self.path}: {exc}")
                self._conn = None
                raise StoreError(str(exc)) from exc
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def init(self) -> None:
        """Create all tables (idempotent)."""
        conn = self.connection()
        try:
            conn.executescript(SCHEMA_DDL)
            conn.commit()
        except sqlite3.Error as exc:
            logger.error(f"Schema provisioning failed: {exc}")
            raise StoreError(str(exc)) from exc
        logger.info(f"Schema ready at {self.path}")

    # -- transaction helpers ---------------------------------------------------

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """ACID transaction: commits on success, rolls back on exception."""
        conn = self.connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error(f"Transaction rolled back: {exc}")
            raise StoreError(str(exc)) from exc
        except Exception:
            conn.rollback()
            raise

    # -- low-level query helpers -----------------------------------------------

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            return self.connection().execute(sql, params)
        except sqlite3.Error as exc:
            logger.error(f"Statement failed: {exc}")
            raise StoreError(str(exc)) from exc

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        row = self.execute(sql, params).fetchone()
        return dict(row) if row else None

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        rows = self.execute(sql, params).fetchall()
        return [dict(r) for r in rows]

    def ping(self) -> bool:
        """Run a trivial query; ``True`` when the store answers."""
        try:
            self.fetchone("SELECT 1")
        except StoreError:
            return False
        return True
