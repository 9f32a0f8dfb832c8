from fastapi import APIRouter, Depends, Query

from saas_console.core.principal import Principal
from saas_console.core.security import get_optional_principal
from saas_console.schemas.navigation import RouteDecisionResponse
from saas_console.services.navigation import resolve_route

router = APIRouter(prefix="/navigation", tags=["Navigation"])


@router.get("", response_model=RouteDecisionResponse)
def navigate(
    path: str = Query("/", max_length=255),
    loading: bool = False,
    principal: Principal = Depends(get_optional_principal),
):
    """Which view to render, or where to redirect, for ``path``"""
    decision = resolve_route(principal, path, loading=loading)
    return RouteDecisionResponse(
        path=decision.path,
        state=decision.state.value,
        view=decision.view.value if decision.view else None,
        redirectTo=decision.redirect_to,
    )
