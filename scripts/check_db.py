#!/usr/bin/env python3
"""Quick check of database state: row counts and orphan transactions."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from fintrack.db.database import Database
from fintrack.db.schema import TABLE_NAMES
from fintrack.db.transaction_repo import TransactionRepository


def table_counts(db: Database) -> dict[str, int]:
    return {
        name: db.fetchone(f"SELECT COUNT(*) AS n FROM {name}")["n"]  # type: ignore[index]
        for name in TABLE_NAMES
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect the database")
    parser.add_argument("--db-path", type=str, help="Override database path")
    args = parser.parse_args(argv)

    db = Database(path=Path(args.db_path) if args.db_path else None)
    db.init()

    print("=== Tables ===")
    for name, count in table_counts(db).items():
        print(f"  {name:<26} {count}")

    orphans = TransactionRepository(db).find_orphans()
    print("\n=== Orphan transactions ===")
    print(f"Total: {len(orphans)}")
    for t in orphans:
        kind = "expense" if t.is_expense else "income"
        print(f"  #{t.transactionid:<6} | {kind:<7} | {t.amount:>10} | {t.timestamp}")

    db.close()
    return 1 if orphans else 0


if __name__ == "__main__":
    sys.exit(main())
