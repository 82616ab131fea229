"""Database schema DDL — the four bookkeeping tables.

Every statement is ``IF NOT EXISTS``: provisioning never alters or drops
an existing table.
"""

SCHEMA_DDL = """
-- ==========================================================================
-- Users
-- ==========================================================================
CREATE TABLE IF NOT EXISTS users (
    userid          INTEGER PRIMARY KEY AUTOINCREMENT,
    username        TEXT NOT NULL,
    password        TEXT NOT NULL,
    email           TEXT NOT NULL,
    timestamp       TEXT NOT NULL,
    resetTokenId    TEXT NULL
);

-- ==========================================================================
-- Transactions (ownership lives in user_transaction_mapping)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS transactions (
    transactionid   INTEGER PRIMARY KEY AUTOINCREMENT,
    isExpense       BOOLEAN NOT NULL,
    amount          INTEGER NOT NULL,
    categoryid      INTEGER NOT NULL,
    description     TEXT,
    timestamp       TEXT NOT NULL
);

-- ==========================================================================
-- User <-> Transaction ownership edge (no uniqueness constraint)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS user_transaction_mapping (
    userid          INTEGER NOT NULL,
    transactionid   INTEGER NOT NULL,
    FOREIGN KEY(userid) REFERENCES users(userid),
    FOREIGN KEY(transactionid) REFERENCES transactions(transactionid)
);

CREATE INDEX IF NOT EXISTS idx_utm_userid ON user_transaction_mapping(userid);
CREATE INDEX IF NOT EXISTS idx_utm_transactionid ON user_transaction_mapping(transactionid);

-- ==========================================================================
-- Password reset tokens
-- ==========================================================================
CREATE TABLE IF NOT EXISTS resetTokens (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    token           TEXT NOT NULL,
    expiresAt       TEXT NOT NULL
);
"""

TABLE_NAMES = ("users", "transactions", "user_transaction_mapping", "resetTokens")
