"""
Role-gated navigation

A fixed state machine: the session state (loading, unauthenticated,
superadmin, company) and the requested path decide whether a view is
rendered or the client is redirected.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from saas_console.core.principal import (
    CompanyPrincipal,
    Principal,
    SuperAdminPrincipal,
    Unauthenticated,
)


class RouteState(str, Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    SUPERADMIN = "superadmin"
    COMPANY = "company"


class View(str, Enum):
    LOADING = "loading"
    LOGIN = "login"
    SUPERADMIN_DASHBOARD = "superadmin_dashboard"
    COMPANY_DASHBOARD = "company_dashboard"


ROOT = "/"
LOGIN = "/login"
SUPERADMIN_HOME = "/superadmin"
COMPANY_HOME = "/company"

HOME_BY_STATE = {
    RouteState.SUPERADMIN: SUPERADMIN_HOME,
    RouteState.COMPANY: COMPANY_HOME,
}
DASHBOARD_BY_HOME = {
    SUPERADMIN_HOME: View.SUPERADMIN_DASHBOARD,
    COMPANY_HOME: View.COMPANY_DASHBOARD,
}


@dataclass(frozen=True)
class RouteDecision:
    path: str
    state: RouteState
    view: Optional[View] = None
    redirect_to: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.redirect_to is not None


def normalize_path(path: Optional[str]) -> str:
    path = (path or ROOT).split("?", 1)[0].split("#", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or ROOT
    return path


def route_state(principal: Optional[Principal], loading: bool = False) -> RouteState:
    if loading:
        return RouteState.LOADING
    if principal is None or isinstance(principal, Unauthenticated):
        return RouteState.UNAUTHENTICATED
    if isinstance(principal, SuperAdminPrincipal):
        return RouteState.SUPERADMIN
    if isinstance(principal, CompanyPrincipal):
        return RouteState.COMPANY
    raise TypeError(f"Unknown principal type: {type(principal).__name__}")


def resolve_route(principal: Optional[Principal], path: Optional[str], loading: bool = False) -> RouteDecision:
    """Decide what the client shows for ``path`` in the current session state"""
    path = normalize_path(path)
    state = route_state(principal, loading)

    if state is RouteState.LOADING:
        return RouteDecision(path=path, state=state, view=View.LOADING)
    if state is RouteState.UNAUTHENTICATED:
        return RouteDecision(path=path, state=state, view=View.LOGIN)

    home = HOME_BY_STATE[state]
    if path == ROOT:
        return RouteDecision(path=path, state=state, redirect_to=home)
    if path == LOGIN:
        return RouteDecision(path=path, state=state, redirect_to=ROOT)
    if path == home:
        return RouteDecision(path=path, state=state, view=DASHBOARD_BY_HOME[home])
    if path in DASHBOARD_BY_HOME:
        return RouteDecision(path=path, state=state, redirect_to=home)
    return RouteDecision(path=path, state=state, redirect_to=ROOT)
