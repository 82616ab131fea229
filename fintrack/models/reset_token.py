"""Password-reset token model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ResetToken:
    token: Optional[str]
    expires_at: Optional[str]
    id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "token": self.token,
            "expiresAt": self.expires_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ResetToken":
        return cls(
            id=row["id"],
            token=row["token"],
            expires_at=row["expiresAt"],
        )
