"""HTTP layer for fintrack."""
