"""Transaction domain model — a single income or expense entry.

A transaction carries no owner column; ownership lives in the
``user_transaction_mapping`` join table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from fintrack.utils.clock import utc_timestamp


@dataclass
class Transaction:
    """Amounts are integers in the smallest currency unit."""

    is_expense: Optional[bool]
    amount: Optional[int]
    categoryid: Optional[int]
    description: Optional[str] = None
    transactionid: Optional[int] = None
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactionid": self.transactionid,
            "isExpense": self.is_expense,
            "amount": self.amount,
            "categoryid": self.categoryid,
            "description": self.description,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Transaction":
        # SQLite has no boolean storage class; isExpense comes back as 0/1.
        raw_expense = row["isExpense"]
        return cls(
            transactionid=row["transactionid"],
            is_expense=bool(raw_expense) if raw_expense is not None else None,
            amount=row["amount"],
            categoryid=row["categoryid"],
            description=row.get("description"),
            timestamp=row["timestamp"],
        )
