"""Session tokens: HS256 JWTs with subject + issued-at + expiry.

Tokens are stateless. Nothing is stored server-side, so a token stays valid
until it expires; there is no revocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict

import jwt

from account_platform.util.time import utcnow


_JWT_ALG = "HS256"


class TokenError(Exception):
    """Base for token verification failures."""


class TokenInvalid(TokenError):
    """Bad signature, malformed token or unusable claims."""


class TokenExpired(TokenError):
    """Signature is valid but the token is past its expiry."""


@dataclass(frozen=True)
class TokenAuthority:
    secret: str
    ttl_minutes: int = 1440
    algorithm: str = _JWT_ALG

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("jwt_secret_blank")

    def issue(self, user_id: int, *, now: datetime | None = None) -> str:
        issued = now or utcnow()
        exp = issued + timedelta(minutes=max(1, int(self.ttl_minutes)))
        payload: Dict[str, Any] = {
            "sub": str(int(user_id)),
            "iat": int(issued.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the account id carried by `token`."""
        if not token:
            raise TokenInvalid("token_blank")
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired("token_expired") from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalid("token_invalid") from e

        try:
            return int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise TokenInvalid("token_sub_not_int") from e


__all__ = ["TokenAuthority", "TokenError", "TokenInvalid", "TokenExpired"]
