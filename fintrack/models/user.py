"""User domain model — an account that owns transactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from fintrack.utils.clock import utc_timestamp


@dataclass
class User:
    """A bookkeeping user. ``password`` is an opaque string."""

    username: Optional[str]
    password: Optional[str]
    email: Optional[str]
    userid: Optional[int] = None
    timestamp: str = field(default_factory=utc_timestamp)
    reset_token_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "userid": self.userid,
            "username": self.username,
            "password": self.password,
            "email": self.email,
            "timestamp": self.timestamp,
            "resetTokenId": self.reset_token_id,
        }

    def to_public_dict(self) -> dict[str, Any]:
        """Shape returned on signup: no password, no reset token."""
        return {
            "userid": self.userid,
            "username": self.username,
            "email": self.email,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            userid=row["userid"],
            username=row["username"],
            password=row["password"],
            email=row["email"],
            timestamp=row["timestamp"],
            reset_token_id=row.get("resetTokenId"),
        )
