"""Repository for ``transactions`` and their ``user_transaction_mapping`` rows.

Creating and deleting a transaction each touch two tables. Both statements
run inside a single unit of work, so a failure in the second statement rolls
back the first and never leaves an orphan transaction or a dangling mapping.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fintrack.db.database import Database
from fintrack.errors import NotFoundError
from fintrack.models.transaction import Transaction

logger = logging.getLogger(__name__)


class TransactionRepository:
    """Single-Responsibility repository for transaction persistence."""

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def create(
        self,
        userid: Any,
        is_expense: Optional[bool],
        amount: Optional[int],
        categoryid: Optional[int],
        description: Optional[str] = None,
    ) -> Transaction:
        """Insert a transaction and its ownership mapping for *userid*.

        The mapping insert only runs once the transaction insert has produced
        a ``transactionid``.
        """
        txn = Transaction(
            is_expense=is_expense,
            amount=amount,
            categoryid=categoryid,
            description=description,
        )
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO transactions
                   (isExpense, amount, categoryid, description, timestamp)
                   VALUES (?, ?, ?, ?, ?)""",
                (txn.is_expense, txn.amount, txn.categoryid, txn.description, txn.timestamp),
            )
            txn.transactionid = cursor.lastrowid
            conn.execute(
                "INSERT INTO user_transaction_mapping (userid, transactionid) VALUES (?, ?)",
                (userid, txn.transactionid),
            )
        logger.info(f"Created transaction {txn.transactionid} for user {userid}")
        return txn

    # -- Read ------------------------------------------------------------------

    def list_for_user(self, userid: Any) -> list[Transaction]:
        rows = self._db.fetchall(
            """SELECT t.*
               FROM transactions t
               INNER JOIN user_transaction_mapping utm ON t.transactionid = utm.transactionid
               WHERE utm.userid = ?""",
            (userid,),
        )
        return [Transaction.from_row(r) for r in rows]

    def find_orphans(self) -> list[Transaction]:
        """Transactions with no owning mapping row."""
        rows = self._db.fetchall(
            """SELECT t.*
               FROM transactions t
               LEFT JOIN user_transaction_mapping utm ON t.transactionid = utm.transactionid
               WHERE utm.transactionid IS NULL
               ORDER BY t.transactionid"""
        )
        return [Transaction.from_row(r) for r in rows]

    # -- Delete ----------------------------------------------------------------

    def delete(self, transactionid: Any) -> str:
        """Delete a transaction and every mapping row that references it.

        Raises ``NotFoundError`` when the transaction row does not exist; in
        that case mapping rows are left untouched.
        """
        with self._db.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM transactions WHERE transactionid = ?", (transactionid,)
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Transaction not found")
            conn.execute(
                "DELETE FROM user_transaction_mapping WHERE transactionid = ?",
                (transactionid,),
            )
        logger.info(f"Deleted transaction {transactionid}")
        return f"Transaction {transactionid} deleted successfully"
