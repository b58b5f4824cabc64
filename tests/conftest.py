from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from account_platform.api.server import create_app
from account_platform.auth import AccountService, TokenAuthority
from account_platform.config import Config
from account_platform.db import ConnectionPool, init_db


TEST_SECRET = "test-secret-please-ignore"


@pytest.fixture()
def cfg(tmp_path: Path) -> Config:
    return Config(
        APP_ENV="test",
        DB_DSN=str(tmp_path / "accounts.sqlite"),
        DB_CONNECTION_LIMIT=4,
        AUTH_JWT_SECRET=TEST_SECRET,
        AUTH_TOKEN_EXPIRE_MINUTES=1440,
        CORS_ALLOW_ORIGINS="*",
        SESSION_API_BASE_URL="http://testserver",
        SESSION_TOKEN_PATH=str(tmp_path / "client" / "session.json"),
    )


@pytest.fixture()
def tokens() -> TokenAuthority:
    return TokenAuthority(secret=TEST_SECRET, ttl_minutes=1440)


@pytest.fixture()
def pool(cfg: Config) -> ConnectionPool:
    init_db(cfg.DB_DSN)
    return ConnectionPool(cfg.DB_DSN, max_connections=cfg.DB_CONNECTION_LIMIT)


@pytest.fixture()
def accounts(pool: ConnectionPool, tokens: TokenAuthority) -> AccountService:
    return AccountService(pool, tokens)


@pytest.fixture()
def client(cfg: Config):
    app = create_app(cfg)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def alice(client) -> dict:
    r = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "a@x.com", "password": "secret1", "fullName": "Alice A"},
    )
    assert r.status_code == 201
    return r.json()
