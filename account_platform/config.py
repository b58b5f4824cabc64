import os
from dataclasses import dataclass

# Optional: load a local .env file if present.
try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    # If python-dotenv isn't installed or .env isn't present, that's fine.
    pass


# Used only outside production when AUTH_JWT_SECRET is unset.
DEV_FALLBACK_JWT_SECRET = "dev_change_me"


class ConfigError(RuntimeError):
    """Raised at startup when the configuration cannot be used."""


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    IMPORTANT: Provide secrets via environment variables or a .env file.
    Do not hardcode secrets in source code.
    """

    # -----------------
    # Core
    # -----------------
    # development | test | production
    APP_ENV: str = os.environ.get("APP_ENV", "development")

    # Preferred: set ACCOUNTS_DATABASE_URL (or DATABASE_URL) to use Postgres.
    # Fallback: ACCOUNTS_DB_PATH for SQLite.
    DB_DSN: str = (
        os.environ.get("ACCOUNTS_DATABASE_URL")
        or os.environ.get("DATABASE_URL")
        or os.environ.get("ACCOUNTS_DB_PATH", "./account_platform.sqlite")
    )

    # Upper bound on concurrently open DB connections. Excess requests wait.
    DB_CONNECTION_LIMIT: int = int(os.environ.get("DB_CONNECTION_LIMIT", "10"))

    # -----------------
    # Auth (JWT)
    # -----------------
    # NOTE: Required in production. Outside production a fixed dev secret is used
    # when this is unset (see resolve_jwt_secret).
    AUTH_JWT_SECRET: str | None = (os.environ.get("AUTH_JWT_SECRET") or "").strip() or None
    AUTH_TOKEN_EXPIRE_MINUTES: int = int(os.environ.get("AUTH_TOKEN_EXPIRE_MINUTES", "1440"))  # 1 day

    # -----------------
    # CORS
    # -----------------
    CORS_ALLOW_ORIGINS: str = os.environ.get("CORS_ALLOW_ORIGINS", "*")

    # -----------------
    # Session client
    # -----------------
    SESSION_API_BASE_URL: str = os.environ.get("SESSION_API_BASE_URL", "http://localhost:5000")
    SESSION_TOKEN_PATH: str = os.environ.get("SESSION_TOKEN_PATH", "./.session_token.json")

    @property
    def is_production(self) -> bool:
        return (self.APP_ENV or "").strip().lower() in ("production", "prod")


def _debug(msg: str) -> None:
    print(f"[config] {msg}")


def resolve_jwt_secret(cfg: Config) -> str:
    """Return the signing secret, falling back to a dev secret outside production."""
    if cfg.AUTH_JWT_SECRET:
        return cfg.AUTH_JWT_SECRET
    if cfg.is_production:
        raise ConfigError("AUTH_JWT_SECRET must be set when APP_ENV=production")
    _debug("AUTH_JWT_SECRET is not set; using the development fallback secret")
    return DEV_FALLBACK_JWT_SECRET


def validate_config(cfg: Config) -> Config:
    """Fail fast on settings that would make the API unsafe or unusable."""
    if cfg.is_production and not cfg.AUTH_JWT_SECRET:
        raise ConfigError("AUTH_JWT_SECRET must be set when APP_ENV=production")
    if int(cfg.DB_CONNECTION_LIMIT) < 1:
        raise ConfigError("DB_CONNECTION_LIMIT must be >= 1")
    if int(cfg.AUTH_TOKEN_EXPIRE_MINUTES) < 1:
        raise ConfigError("AUTH_TOKEN_EXPIRE_MINUTES must be >= 1")
    return cfg


def load_config() -> Config:
    return Config()
