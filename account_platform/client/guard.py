from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TypeVar

from .session import SessionState


T = TypeVar("T")


class RouteDecision(str, Enum):
    LOADING = "loading"
    REDIRECT = "redirect"
    RENDER = "render"


@dataclass(frozen=True)
class RouteOutcome:
    decision: RouteDecision
    redirect_to: Optional[str] = None


def guard_route(state: SessionState, *, redirect_path: str = "/login") -> RouteOutcome:
    """Decide what a protected view shows.

    Loading is checked first so nothing protected renders, and no redirect
    happens, before rehydration settles.
    """
    if state.loading:
        return RouteOutcome(RouteDecision.LOADING)
    if not state.is_authenticated:
        return RouteOutcome(RouteDecision.REDIRECT, redirect_to=redirect_path)
    return RouteOutcome(RouteDecision.RENDER)


def render_protected(
    state: SessionState,
    render: Callable[[], T],
    *,
    loading: Callable[[], T],
    redirect: Callable[[str], T],
    redirect_path: str = "/login",
) -> T:
    """Call exactly one of `loading`, `redirect` or `render` per guard_route."""
    outcome = guard_route(state, redirect_path=redirect_path)
    if outcome.decision is RouteDecision.LOADING:
        return loading()
    if outcome.decision is RouteDecision.REDIRECT:
        return redirect(outcome.redirect_to or redirect_path)
    return render()
