"""Repository for the ``resetTokens`` table."""

from __future__ import annotations

import logging
from typing import Optional

from fintrack.db.database import Database
from fintrack.models.reset_token import ResetToken

logger = logging.getLogger(__name__)


class ResetTokenRepository:
    def __init__(self, db: Database):
        self._db = db

    def create(self, token: Optional[str], expires_at: Optional[str]) -> ResetToken:
        reset_token = ResetToken(token=token, expires_at=expires_at)
        with self._db.transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO resetTokens (token, expiresAt) VALUES (?, ?)",
                (reset_token.token, reset_token.expires_at),
            )
        reset_token.id = cursor.lastrowid
        logger.info(f"Created reset token {reset_token.id} (expires {reset_token.expires_at})")
        return reset_token

    def find_by_token(self, token: Optional[str]) -> list[ResetToken]:
        """Exact match on the token string; duplicates are all returned."""
        rows = self._db.fetchall("SELECT * FROM resetTokens WHERE token = ?", (token,))
        return [ResetToken.from_row(r) for r in rows]
