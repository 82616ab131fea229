"""Repository for the ``users`` table."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fintrack.db.database import Database
from fintrack.errors import NotFoundError
from fintrack.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Single-Responsibility repository for user persistence.

    Users are never deleted here; they are created on signup and mutated by
    password updates and reset-token assignment.
    """

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def create(self, username: Optional[str], password: Optional[str], email: Optional[str]) -> User:
        """Insert a new user stamped with the current time.

        Username and email uniqueness is not checked.
        """
        user = User(username=username, password=password, email=email)
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO users (username, password, email, timestamp)
                   VALUES (?, ?, ?, ?)""",
                (user.username, user.password, user.email, user.timestamp),
            )
        user.userid = cursor.lastrowid
        logger.info(f"Created user {user.userid}: {user.username}")
        return user

    # -- Read ------------------------------------------------------------------

    def list_all(self) -> list[User]:
        rows = self._db.fetchall("SELECT * FROM users")
        return [User.from_row(r) for r in rows]

    def get_by_id(self, userid: int) -> Optional[User]:
        row = self._db.fetchone("SELECT * FROM users WHERE userid = ?", (userid,))
        return User.from_row(row) if row else None

    # -- Update ----------------------------------------------------------------

    def assign_reset_token(self, userid: Any, tokenid: Any) -> tuple[Any, Any]:
        """Point ``users.resetTokenId`` at a reset token.

        The token id is not checked against ``resetTokens``. Raises
        ``NotFoundError`` when no user row matched.
        """
        self._update_one(userid, "UPDATE users SET resetTokenId = ? WHERE userid = ?", (tokenid, userid))
        logger.info(f"Assigned reset token {tokenid} to user {userid}")
        return userid, tokenid

    def update_password(self, userid: Any, password: Any) -> tuple[Any, Any]:
        self._update_one(userid, "UPDATE users SET password = ? WHERE userid = ?", (password, userid))
        logger.info(f"Updated password for user {userid}")
        return userid, password

    def _update_one(self, userid: Any, sql: str, params: tuple) -> None:
        with self._db.transaction() as conn:
            cursor = conn.execute(sql, params)
            if cursor.rowcount == 0:
                raise NotFoundError(f"User {userid} not found")
