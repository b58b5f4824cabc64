import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from account_platform.auth.crud import count_users
from account_platform.config import load_config
from account_platform.db import connect, init_db


def main() -> None:
    cfg = load_config()
    init_db(cfg.DB_DSN)
    with connect(cfg.DB_DSN) as conn:
        n = count_users(conn)

    print(f"DB initialized: {cfg.DB_DSN} ({n} users)")


if __name__ == "__main__":
    main()
