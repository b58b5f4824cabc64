"""Command-line session client.

Usage:
  python scripts/session_cli.py login --username alice --password '...'
  python scripts/session_cli.py register --username alice --email a@x.com --password '...'
  python scripts/session_cli.py whoami
  python scripts/session_cli.py logout

The token is kept in SESSION_TOKEN_PATH between runs; `whoami` rehydrates from it.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from account_platform.client import RouteDecision, guard_route, session_client_from_config
from account_platform.config import load_config


def main() -> None:
    ap = argparse.ArgumentParser()
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_login = sub.add_parser("login")
    p_login.add_argument("--username", required=True)
    p_login.add_argument("--password", required=True)

    p_reg = sub.add_parser("register")
    p_reg.add_argument("--username", required=True)
    p_reg.add_argument("--email", required=True)
    p_reg.add_argument("--password", required=True)
    p_reg.add_argument("--full-name", default=None)

    sub.add_parser("whoami")
    sub.add_parser("logout")

    args = ap.parse_args()
    client = session_client_from_config(load_config())

    if args.cmd == "logout":
        client.logout()
        print("Logged out.")
        return

    if args.cmd == "login":
        ok = client.login(args.username, args.password)
    elif args.cmd == "register":
        ok = client.register(args.username, args.email, args.password, args.full_name)
    else:
        ok = client.rehydrate()

    outcome = guard_route(client.state)
    if outcome.decision is RouteDecision.RENDER:
        print(f"Logged in as: {client.state.user}")
        return

    print(f"Not authenticated: {client.state.error or 'no stored session'}")
    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
