"""
Authentication API endpoints
Handles login, token refresh, logout and the current session
"""
from typing import Any
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from saas_console.core.database import get_db, get_tenant_session_factory, TenantSessionFactory
from saas_console.core.principal import AuthenticatedPrincipal
from saas_console.core.security import get_current_principal
from saas_console.schemas.auth import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RefreshTokenRequest,
    RefreshTokenResponse,
    SessionDescriptor,
)
from saas_console.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])

RESOLUTION_ERRORS = {
    403: {"model": ErrorResponse, "description": "Access denied; every session of the account is revoked"},
    503: {"model": ErrorResponse, "description": "Tenant resolution failed"},
}
LOGIN_ERRORS = {
    401: {"model": ErrorResponse, "description": "Invalid email or password"},
    **RESOLUTION_ERRORS,
}


def get_auth_service(
    db: Session = Depends(get_db),
    open_tenant: TenantSessionFactory = Depends(get_tenant_session_factory),
) -> AuthService:
    return AuthService(db, open_tenant)


@router.post("/login", response_model=LoginResponse, responses=LOGIN_ERRORS)
def login(
    request_data: LoginRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """
    Authenticate and resolve the caller to super-admin or a company
    """
    return auth_service.login(
        request_data,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


@router.post("/refresh", response_model=RefreshTokenResponse, responses=RESOLUTION_ERRORS)
def refresh_token(
    request_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """Issue a new access token from a refresh token"""
    return auth_service.refresh(request_data.refresh_token)


@router.post("/logout", response_model=LogoutResponse)
def logout(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """Revoke the current session"""
    auth_service.logout(principal.session_id)
    return LogoutResponse(message="Logged out successfully")


@router.get("/session", response_model=SessionDescriptor)
def get_session(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """Current session state"""
    return auth_service.current_session(principal)
