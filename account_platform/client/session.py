"""Client-side session holder.

One SessionClient owns the session state for an application and is passed to
whatever needs it. It exposes read access (`state`) and four transitions:
rehydrate, login, register and logout.

Rules:
  - token and user are set together and cleared together
  - auth/network failures never raise; they set `state.error` and return False
  - a failed login/register leaves an existing session as it was
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import requests

from .storage import FileTokenStorage


TOKEN_KEY = "token"
REHYDRATE_FAILED = "Authentication failed. Please login again."


def _debug(msg: str) -> None:
    print(f"[session] {msg}")


@dataclass
class SessionState:
    user: Optional[Dict[str, Any]] = None
    token: Optional[str] = None
    is_authenticated: bool = False
    loading: bool = True
    error: Optional[str] = None


class SessionClient:
    def __init__(
        self,
        base_url: str,
        storage: FileTokenStorage,
        *,
        http: Any = None,
        timeout: float = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        # Anything with requests-style get/post returning objects with
        # .status_code and .json() works here.
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout
        self.state = SessionState(token=storage.get(TOKEN_KEY))

    # -----------------------------
    # Internals
    # -----------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _set_session(self, token: str, user: Dict[str, Any]) -> None:
        self.storage.set(TOKEN_KEY, token)
        self.state.token = token
        self.state.user = user
        self.state.is_authenticated = True

    def _clear_session(self) -> None:
        self.storage.remove(TOKEN_KEY)
        self.state.token = None
        self.state.user = None
        self.state.is_authenticated = False

    def _post_credentials(self, path: str, body: Dict[str, Any], fallback: str) -> Tuple[str, Dict[str, Any]]:
        """POST and return (token, user); raise RuntimeError(message) on any failure."""
        try:
            r = self.http.post(self._url(path), json=body, timeout=self.timeout)
        except requests.RequestException as e:
            _debug(f"POST {path} failed: {e}")
            raise RuntimeError(fallback) from e

        try:
            data = r.json()
        except ValueError:
            data = None

        if r.status_code < 200 or r.status_code >= 300:
            message = data.get("error") if isinstance(data, dict) else None
            raise RuntimeError(message or fallback)

        token = data.get("token") if isinstance(data, dict) else None
        user = data.get("user") if isinstance(data, dict) else None
        if not token or not isinstance(user, dict):
            raise RuntimeError(fallback)
        return str(token), user

    # -----------------------------
    # Transitions
    # -----------------------------

    def rehydrate(self) -> bool:
        """Rebuild the session from the stored token (call once on startup).

        Without a stored token this makes no network call.
        """
        token = self.state.token
        if not token:
            self.state.loading = False
            return False

        self.state.loading = True
        try:
            r = self.http.get(
                self._url("/api/auth/me"),
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
            if r.status_code != 200:
                raise RuntimeError(f"Session expired ({r.status_code})")
            data = r.json()
            user = data.get("user") if isinstance(data, dict) else None
            if not isinstance(user, dict):
                raise RuntimeError("Malformed identity response")
        except (requests.RequestException, ValueError, RuntimeError) as e:
            _debug(f"rehydrate failed: {e}")
            self._clear_session()
            self.state.error = REHYDRATE_FAILED
            return False
        else:
            self.state.user = user
            self.state.is_authenticated = True
            self.state.error = None
            return True
        finally:
            self.state.loading = False

    def login(self, username: str, password: str) -> bool:
        return self._authenticate(
            "/api/auth/login",
            {"username": username, "password": password},
            "Login failed",
        )

    def register(
        self,
        username: str,
        email: str,
        password: str,
        full_name: str | None = None,
    ) -> bool:
        return self._authenticate(
            "/api/auth/register",
            {"username": username, "email": email, "password": password, "fullName": full_name},
            "Registration failed",
        )

    def _authenticate(self, path: str, body: Dict[str, Any], fallback: str) -> bool:
        self.state.loading = True
        self.state.error = None
        try:
            token, user = self._post_credentials(path, body, fallback)
        except RuntimeError as e:
            self.state.error = str(e)
            return False
        finally:
            self.state.loading = False

        self._set_session(token, user)
        return True

    def logout(self) -> None:
        """Forget the session locally. Tokens are stateless, so the server isn't told."""
        self._clear_session()
        self.state.error = None


def session_client_from_config(cfg: Any, *, http: Any = None) -> SessionClient:
    """Build a client from Config.SESSION_API_BASE_URL / SESSION_TOKEN_PATH."""
    return SessionClient(
        cfg.SESSION_API_BASE_URL,
        FileTokenStorage(cfg.SESSION_TOKEN_PATH),
        http=http,
    )
