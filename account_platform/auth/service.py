"""Credential verification: registration, login and account lookups.

All store access goes through the connection pool. Driver failures are turned
into UnexpectedError here so nothing driver-specific reaches the HTTP layer.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from account_platform.db import ConnectionPool, StoreError
from account_platform.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from account_platform.models import AccountPatch

from . import crud
from .security import dummy_verify, hash_password, verify_password
from .tokens import TokenAuthority


INVALID_CREDENTIALS = "Invalid credentials"


def _debug(msg: str) -> None:
    print(f"[auth] {msg}")


class AccountService:
    def __init__(self, pool: ConnectionPool, tokens: TokenAuthority):
        self.pool = pool
        self.tokens = tokens

    @contextmanager
    def _store(self) -> Iterator[Any]:
        try:
            with self.pool.connection() as conn:
                yield conn
        except StoreError as e:
            _debug(f"store failure: {e}")
            raise UnexpectedError() from e

    # -----------------------------
    # Registration / login
    # -----------------------------

    def register(
        self,
        username: str | None,
        email: str | None,
        password: str | None,
        full_name: str | None = None,
    ) -> Tuple[Dict[str, Any], str]:
        """Create an account and return (public view, token)."""
        if not username or not email or not password:
            raise ValidationError("Username, email, and password are required")

        with self._store() as conn:
            if crud.get_user_by_username(conn, username) is not None:
                raise ConflictError("Username already taken")
            if crud.get_user_by_email(conn, email) is not None:
                raise ConflictError("Email already registered")

            acct = crud.insert_user(
                conn,
                username=username,
                email=email,
                password_hash=hash_password(password),
                full_name=full_name or None,
            )

        _debug(f"registered user_id={acct.user_id}")
        return acct.public(), self.tokens.issue(acct.user_id)

    def login(self, username: str | None, password: str | None) -> Tuple[Dict[str, Any], str]:
        if not username or not password:
            raise ValidationError("Username and password are required")

        with self._store() as conn:
            acct = crud.get_user_by_username(conn, username)

        if acct is None:
            # Keep timing close to the wrong-password path.
            dummy_verify()
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not verify_password(password, acct.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)

        return acct.public(), self.tokens.issue(acct.user_id)

    # -----------------------------
    # Account lookups / CRUD
    # -----------------------------

    def get_account(self, user_id: int) -> Dict[str, Any]:
        with self._store() as conn:
            acct = crud.get_user_by_id(conn, user_id)
        if acct is None:
            raise NotFoundError("User not found")
        return acct.public()

    def list_accounts(self) -> List[Dict[str, Any]]:
        with self._store() as conn:
            return [a.public() for a in crud.list_users(conn)]

    def update_account(
        self,
        user_id: int,
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        full_name: Optional[str] = None,
    ) -> bool:
        """Update only the supplied fields. Returns False when nothing was supplied."""
        if username is not None and not username:
            raise ValidationError("Username cannot be empty")
        if email is not None and not email:
            raise ValidationError("Email cannot be empty")
        if password is not None and not password:
            raise ValidationError("Password cannot be empty")

        patch = AccountPatch(
            username=username,
            email=email,
            password_hash=hash_password(password) if password else None,
            full_name=full_name,
        )

        with self._store() as conn:
            if crud.get_user_by_id(conn, user_id) is None:
                raise NotFoundError(f"User with ID {user_id} not found")
            if patch.is_empty():
                return False
            changed = crud.update_user(conn, user_id, patch)

        if changed:
            _debug(f"updated user_id={user_id} fields={[k for k, _ in patch.present()]}")
        return changed

    def delete_account(self, user_id: int) -> None:
        with self._store() as conn:
            if not crud.delete_user(conn, user_id):
                raise NotFoundError(f"User with ID {user_id} not found")
        _debug(f"deleted user_id={user_id}")
