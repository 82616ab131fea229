"""Domain models for the bookkeeping backend."""

from fintrack.models.user import User
from fintrack.models.transaction import Transaction
from fintrack.models.reset_token import ResetToken

__all__ = ["User", "Transaction", "ResetToken"]
