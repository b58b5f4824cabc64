from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from account_platform import __version__
from account_platform.auth import AccountService, Identity, TokenAuthority, get_current_identity
from account_platform.config import Config, load_config, resolve_jwt_secret, validate_config
from account_platform.db import ConnectionPool, init_db
from account_platform.errors import ValidationError

from .errors import register_error_handlers


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


# -----------------------------
# Request bodies
# -----------------------------
# Fields are optional at the schema level so missing-field errors come from the
# service with the messages the SPA displays.


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")


def _accounts(request: Request) -> AccountService:
    return request.app.state.accounts


def create_app(cfg: Config | None = None) -> FastAPI:
    """Build the API. Raises ConfigError for unusable (e.g. production w/o secret) config."""
    cfg = validate_config(cfg or load_config())

    app = FastAPI(title="Account Platform API", version=__version__)

    pool = ConnectionPool(cfg.DB_DSN, max_connections=cfg.DB_CONNECTION_LIMIT)
    tokens = TokenAuthority(
        secret=resolve_jwt_secret(cfg),
        ttl_minutes=int(cfg.AUTH_TOKEN_EXPIRE_MINUTES),
    )
    app.state.cfg = cfg
    app.state.pool = pool
    app.state.tokens = tokens
    app.state.accounts = AccountService(pool, tokens)

    _cors_origins = [o.strip() for o in (cfg.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]
    if _cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=_cors_origins,
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)

    @app.on_event("startup")
    def _on_startup() -> None:
        # Ensure schema exists.
        init_db(cfg.DB_DSN)
        _debug(f"API ready (env={cfg.APP_ENV}, db pool size={pool.max_connections})")

    # -----------------------------
    # Health
    # -----------------------------

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"status": "ok", "message": "Server is running"}

    @app.get("/db-status")
    def db_status() -> Dict[str, Any]:
        ok = pool.ping()
        return {
            "status": "connected" if ok else "disconnected",
            "dialect": pool.dialect,
            "connections_in_use": pool.in_use,
            "connection_limit": pool.max_connections,
        }

    # -----------------------------
    # Auth
    # -----------------------------

    @app.post("/api/auth/register", status_code=201)
    def auth_register(
        payload: RegisterRequest,
        accounts: AccountService = Depends(_accounts),
    ) -> Dict[str, Any]:
        user, token = accounts.register(
            payload.username,
            payload.email,
            payload.password,
            payload.full_name,
        )
        return {"message": "User registered successfully", "user": user, "token": token}

    @app.post("/api/auth/login")
    def auth_login(
        payload: LoginRequest,
        accounts: AccountService = Depends(_accounts),
    ) -> Dict[str, Any]:
        user, token = accounts.login(payload.username, payload.password)
        return {"message": "Login successful", "user": user, "token": token}

    @app.get("/api/auth/me")
    def auth_me(
        identity: Identity = Depends(get_current_identity),
        accounts: AccountService = Depends(_accounts),
    ) -> Dict[str, Any]:
        return {"user": accounts.get_account(identity.user_id)}

    # -----------------------------
    # Users
    # -----------------------------

    @app.get("/api/users")
    def list_users(
        _identity: Identity = Depends(get_current_identity),
        accounts: AccountService = Depends(_accounts),
    ) -> List[Dict[str, Any]]:
        return accounts.list_accounts()

    @app.get("/api/users/{user_id}")
    def get_user(
        user_id: int,
        _identity: Identity = Depends(get_current_identity),
        accounts: AccountService = Depends(_accounts),
    ) -> Dict[str, Any]:
        return accounts.get_account(user_id)

    @app.put("/api/users/{user_id}")
    def update_user(
        user_id: int,
        payload: UpdateUserRequest,
        _identity: Identity = Depends(get_current_identity),
        accounts: AccountService = Depends(_accounts),
    ) -> Dict[str, Any]:
        changed = accounts.update_account(
            user_id,
            username=payload.username,
            email=payload.email,
            password=payload.password,
            full_name=payload.full_name,
        )
        if not changed:
            raise ValidationError("No changes were made")
        return {"message": "User updated successfully"}

    @app.delete("/api/users/{user_id}")
    def delete_user(
        user_id: int,
        _identity: Identity = Depends(get_current_identity),
        accounts: AccountService = Depends(_accounts),
    ) -> Dict[str, Any]:
        accounts.delete_account(user_id)
        return {"message": "User deleted successfully"}

    return app
