from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from account_platform.errors import AuthenticationError, UnexpectedError

from .tokens import TokenAuthority, TokenError


_BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Identity:
    """What the gate attaches to a request: the token subject and nothing else."""

    user_id: int


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """Strip a literal "Bearer " prefix if present; bare tokens are accepted as-is."""
    raw = authorization or ""
    if raw.startswith(_BEARER_PREFIX):
        raw = raw[len(_BEARER_PREFIX) :]
    return raw.strip() or None


def get_current_identity(request: Request) -> Identity:
    """Authenticate a request from its Authorization header.

    Verification is signature + expiry only; the account table is not consulted.
    """

    tokens: TokenAuthority | None = getattr(request.app.state, "tokens", None)
    if tokens is None:
        raise UnexpectedError("server_config_missing")

    token = extract_token(request.headers.get("Authorization"))
    if not token:
        raise AuthenticationError("Authentication required")

    try:
        user_id = tokens.verify(token)
    except TokenError:
        # Expired vs invalid is not exposed to clients.
        raise AuthenticationError("Invalid or expired token")

    request.state.user_id = user_id
    return Identity(user_id=user_id)
