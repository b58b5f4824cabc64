"""Create an account directly in the DB.

Usage:
  python scripts/create_user.py --username alice --email alice@example.com --password '...'

NOTE: This is intended for local/dev. It goes through the same service as
/api/auth/register, so the same validation and uniqueness rules apply.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from account_platform.auth import AccountService, TokenAuthority
from account_platform.config import load_config, resolve_jwt_secret, validate_config
from account_platform.db import ConnectionPool, init_db
from account_platform.errors import AppError


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--username", required=True)
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", required=True)
    ap.add_argument("--full-name", default=None)
    args = ap.parse_args()

    cfg = validate_config(load_config())
    init_db(cfg.DB_DSN)

    accounts = AccountService(
        ConnectionPool(cfg.DB_DSN, max_connections=1),
        TokenAuthority(secret=resolve_jwt_secret(cfg), ttl_minutes=cfg.AUTH_TOKEN_EXPIRE_MINUTES),
    )
    try:
        user, _token = accounts.register(args.username, args.email, args.password, args.full_name)
    except AppError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    print("Created user:")
    print(user)


if __name__ == "__main__":
    main()
