from __future__ import annotations

from passlib.context import CryptContext


# Salted adaptive hash; verify() does the constant-time comparison.
_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password_blank")
    return _pwd.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return _pwd.verify(password, password_hash)
    except (ValueError, TypeError):
        # Unrecognized or corrupt hash string.
        return False


def dummy_verify() -> None:
    """Spend roughly the same time as a real verify (unknown-username path)."""
    _pwd.dummy_verify()
