from __future__ import annotations

from typing import Any, Dict, List, Optional

from account_platform.db import is_unique_violation
from account_platform.errors import ConflictError
from account_platform.models import Account, AccountPatch
from account_platform.util.time import utcnow_iso


def _conflict_message(exc: BaseException) -> str:
    text = str(exc).lower()
    if "email" in text:
        return "Email already registered"
    if "username" in text:
        return "Username already taken"
    return "Username or email already exists"


def public_user(row: Any | Account) -> Dict[str, Any]:
    acct = row if isinstance(row, Account) else Account.from_row(row)
    return acct.public()


def get_user_by_id(conn: Any, user_id: int) -> Optional[Account]:
    row = conn.execute(
        "SELECT * FROM users WHERE user_id=?",
        (int(user_id),),
    ).fetchone()
    return Account.from_row(row) if row is not None else None


def get_user_by_username(conn: Any, username: str) -> Optional[Account]:
    # Exact match: usernames are stored and compared as given.
    if not username:
        return None
    row = conn.execute(
        "SELECT * FROM users WHERE username=?",
        (username,),
    ).fetchone()
    return Account.from_row(row) if row is not None else None


def get_user_by_email(conn: Any, email: str) -> Optional[Account]:
    if not email:
        return None
    row = conn.execute(
        "SELECT * FROM users WHERE email=?",
        (email,),
    ).fetchone()
    return Account.from_row(row) if row is not None else None


def list_users(conn: Any) -> List[Account]:
    rows = conn.execute("SELECT * FROM users ORDER BY user_id").fetchall()
    return [Account.from_row(r) for r in rows]


def insert_user(
    conn: Any,
    *,
    username: str,
    email: str,
    password_hash: str,
    full_name: str | None = None,
) -> Account:
    """Insert a new account row.

    Raises ConflictError when username or email is already taken. Callers that
    want a specific message should check get_user_by_username/email first; this
    is the backstop for concurrent registrations.
    """
    now = utcnow_iso()
    try:
        conn.execute(
            """
            INSERT INTO users (username, email, password_hash, full_name, created_at, updated_at)
            VALUES (?,?,?,?,?,?)
            """,
            (username, email, password_hash, full_name, now, now),
        )
    except Exception as e:
        if is_unique_violation(e):
            raise ConflictError(_conflict_message(e)) from e
        raise
    acct = get_user_by_username(conn, username)
    assert acct is not None
    return acct


def update_user(conn: Any, user_id: int, patch: AccountPatch) -> bool:
    """Apply only the fields present in `patch`.

    Returns False without touching the DB when the patch is empty, and False
    when no row has `user_id`.
    """
    fields = patch.present()
    if not fields:
        return False

    fields.append(("updated_at", utcnow_iso()))
    sets = ", ".join([f"{k}=?" for k, _ in fields])
    params = [v for _, v in fields] + [int(user_id)]
    try:
        cur = conn.execute(
            f"UPDATE users SET {sets} WHERE user_id=?",
            params,
        )
    except Exception as e:
        if is_unique_violation(e):
            raise ConflictError(_conflict_message(e)) from e
        raise
    return int(cur.rowcount or 0) > 0


def delete_user(conn: Any, user_id: int) -> bool:
    cur = conn.execute("DELETE FROM users WHERE user_id=?", (int(user_id),))
    return int(cur.rowcount or 0) > 0


def count_users(conn: Any) -> int:
    row = conn.execute("SELECT COUNT(*) AS n FROM users").fetchone()
    return int(row["n"])
