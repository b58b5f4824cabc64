from datetime import timedelta

import jwt
import pytest

from account_platform.auth.tokens import TokenAuthority, TokenExpired, TokenInvalid
from account_platform.util.time import utcnow


def test_issue_then_verify_returns_subject(tokens):
    token = tokens.issue(42)
    assert tokens.verify(token) == 42

    claims = jwt.decode(token, options={"verify_signature": False})
    assert claims["sub"] == "42"
    assert claims["exp"] - claims["iat"] == 1440 * 60


def test_token_past_ttl_is_expired_even_with_valid_signature(tokens):
    token = tokens.issue(7, now=utcnow() - timedelta(days=2))
    with pytest.raises(TokenExpired):
        tokens.verify(token)


def test_token_signed_with_other_secret_is_invalid(tokens):
    other = TokenAuthority(secret="someone-else", ttl_minutes=60)
    with pytest.raises(TokenInvalid):
        tokens.verify(other.issue(7))


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_invalid(tokens, token):
    with pytest.raises(TokenInvalid):
        tokens.verify(token)


def test_non_integer_subject_is_invalid(tokens):
    now = utcnow()
    token = jwt.encode(
        {"sub": "alice", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        tokens.secret,
        algorithm="HS256",
    )
    with pytest.raises(TokenInvalid):
        tokens.verify(token)


def test_token_without_expiry_is_invalid(tokens):
    token = jwt.encode({"sub": "1"}, tokens.secret, algorithm="HS256")
    with pytest.raises(TokenInvalid):
        tokens.verify(token)


def test_tokens_issued_at_different_times_are_both_valid(tokens):
    earlier = tokens.issue(1, now=utcnow() - timedelta(hours=1))
    later = tokens.issue(1)

    assert earlier != later
    assert tokens.verify(earlier) == 1
    assert tokens.verify(later) == 1


def test_blank_secret_is_rejected():
    with pytest.raises(ValueError):
        TokenAuthority(secret="")
