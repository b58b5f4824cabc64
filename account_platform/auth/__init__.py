"""Authentication helpers.

Auth is intentionally lightweight:

- Users table (username/email/password hash)
- Stateless JWT access tokens, sent as `Authorization: Bearer <token>`

Tokens are not stored server-side and cannot be revoked before they expire.
"""

from .deps import Identity, extract_token, get_current_identity
from .service import AccountService
from .tokens import TokenAuthority, TokenError, TokenExpired, TokenInvalid

__all__ = [
    "AccountService",
    "Identity",
    "TokenAuthority",
    "TokenError",
    "TokenExpired",
    "TokenInvalid",
    "extract_token",
    "get_current_identity",
]
