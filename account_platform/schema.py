"""Database schema for the account platform.

Timestamps are ISO-8601 TEXT (UTC, with 'Z') in both engines.
Only password hashes are stored. Sessions are stateless JWTs, so there is no
sessions table.
"""

from __future__ import annotations


SCHEMA_SQLITE = r"""
PRAGMA foreign_keys = ON;

CREATE TABLE IF NOT EXISTS users (
    user_id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    full_name TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""

SCHEMA_POSTGRES = r"""
CREATE TABLE IF NOT EXISTS users (
    user_id BIGSERIAL PRIMARY KEY,
    username TEXT NOT NULL UNIQUE,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    full_name TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def get_schema_sql(dialect: str) -> str:
    if (dialect or "").lower().startswith("post"):
        return SCHEMA_POSTGRES
    return SCHEMA_SQLITE
