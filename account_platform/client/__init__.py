"""Session client for the account API.

Holds the current token/user, persists the token across restarts and decides
what protected views render.
"""

from .guard import RouteDecision, RouteOutcome, guard_route, render_protected
from .session import SessionClient, SessionState, session_client_from_config
from .storage import FileTokenStorage

__all__ = [
    "FileTokenStorage",
    "RouteDecision",
    "RouteOutcome",
    "SessionClient",
    "SessionState",
    "guard_route",
    "render_protected",
    "session_client_from_config",
]
