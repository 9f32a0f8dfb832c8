# saas_console/services/auth_service.py
"""
Authentication service with business logic
"""
import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from saas_console.core.config import settings
from saas_console.core.database import TenantSessionFactory
from saas_console.core.exceptions import AccessDeniedError
from saas_console.core.principal import AuthenticatedPrincipal, CompanyPrincipal
from saas_console.core.security import (
    create_access_token,
    create_refresh_token,
    verify_password,
    verify_token,
    load_active_session,
)
from saas_console.models.user import AuthAccount, AuthSession
from saas_console.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RefreshTokenResponse,
    SessionDescriptor,
    TokenResponse,
)
from saas_console.services.session_resolver import SessionResolver, normalize_email
from saas_console.services.system_settings import get_system_settings

logger = logging.getLogger(__name__)


def revoke_sessions(
    db: Session,
    account_id: uuid.UUID,
    company_id: Optional[uuid.UUID] = None,
) -> int:
    """
    Mark live sessions of an account as revoked, optionally only those
    resolved to one company. The caller commits.
    """
    query = db.query(AuthSession).filter(
        AuthSession.account_id == account_id,
        AuthSession.is_active.is_(True),
    )
    if company_id is not None:
        query = query.filter(AuthSession.company_id == company_id)

    now = datetime.utcnow()
    sessions = query.all()
    for auth_session in sessions:
        auth_session.is_active = False
        auth_session.revoked_at = now
    return len(sessions)


class AuthService:
    """Service class for authentication operations"""

    def __init__(self, db: Session, open_tenant: TenantSessionFactory):
        self.db = db
        self.resolver = SessionResolver(db, open_tenant)

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    def _token_claims(self, auth_session: AuthSession, principal: AuthenticatedPrincipal) -> dict:
        company_id = principal.tenant.id if isinstance(principal, CompanyPrincipal) else None
        return {
            "sub": auth_session.account_id,
            "sid": auth_session.id,
            "email": principal.email,
            "userType": principal.user_type.value,
            "companyId": company_id,
        }

    def _session_lifetime(self) -> timedelta:
        system = get_system_settings(self.db)
        return min(
            timedelta(hours=system.session_timeout),
            timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    def _resolve(self, account: AuthAccount) -> AuthenticatedPrincipal:
        """
        Run tenant resolution; an unresolvable identity is signed out everywhere
        """
        try:
            return self.resolver.resolve(account.email)
        except AccessDeniedError as e:
            self.force_sign_out(account.id)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"error": {"code": "ACCESS_DENIED", "message": e.message}}
            )
        except SQLAlchemyError as e:
            logger.error("Tenant resolution failed for %s: %s", account.email, e)
            self.db.rollback()
            self.force_sign_out(account.id)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail={"error": {"code": "RESOLUTION_FAILED", "message": "Session could not be established"}}
            )

    @staticmethod
    def describe(auth_session: AuthSession, principal: AuthenticatedPrincipal) -> SessionDescriptor:
        """Session state under the fixed client keys"""
        tenant = principal.tenant
        return SessionDescriptor(
            userId=str(auth_session.account_id),
            token=auth_session.access_token or "",
            userEmail=principal.email,
            userType=principal.user_type.value,
            company=tenant.to_dict() if tenant else None,
        )

    # ========================================================================
    # SIGN OUT
    # ========================================================================

    def force_sign_out(self, account_id: uuid.UUID) -> int:
        """Revoke every live session of an account"""
        revoked = revoke_sessions(self.db, account_id)
        self.db.commit()
        logger.warning("Signed out account %s (%d sessions)", account_id, revoked)
        return revoked

    def logout(self, session_id: uuid.UUID) -> None:
        auth_session = self.db.query(AuthSession).filter(AuthSession.id == session_id).first()
        if auth_session and auth_session.is_active:
            auth_session.is_active = False
            auth_session.revoked_at = datetime.utcnow()
            self.db.commit()

    # ========================================================================
    # LOGIN
    # ========================================================================

    def authenticate(self, email: str, password: str) -> AuthAccount:
        """Check credentials against the login account store"""
        account = self.db.query(AuthAccount).filter(
            AuthAccount.email == normalize_email(email)
        ).first()

        if not account or not verify_password(password, account.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"error": {"code": "INVALID_CREDENTIALS", "message": "Invalid email or password"}}
            )

        if not account.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"error": {"code": "ACCOUNT_INACTIVE", "message": "Your account has been deactivated"}}
            )

        return account

    def establish_session(
        self,
        account: AuthAccount,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Tuple[AuthSession, AuthenticatedPrincipal, TokenResponse]:
        """Resolve role and tenant, then persist a session with fresh tokens"""
        principal = self._resolve(account)
        lifetime = self._session_lifetime()

        auth_session = AuthSession(
            id=uuid.uuid4(),
            account_id=account.id,
            user_type=principal.user_type.value,
            company_id=principal.tenant.id if principal.tenant else None,
            expires_at=datetime.utcnow() + lifetime,
            ip_address=ip_address,
            user_agent=user_agent,
            is_active=True,
        )

        claims = self._token_claims(auth_session, principal)
        access_token = create_access_token(claims)
        refresh_token = create_refresh_token(claims, expires_delta=lifetime)
        auth_session.access_token = access_token
        auth_session.refresh_token = refresh_token
        account.last_login_at = datetime.utcnow()

        try:
            self.db.add(auth_session)
            self.db.commit()
            self.db.refresh(auth_session)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to persist session for %s: %s", account.email, e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"error": {"code": "DATABASE_ERROR", "message": "Failed to create session"}}
            )

        tokens = TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )
        return auth_session, principal, tokens

    def login(
        self,
        data: LoginRequest,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> LoginResponse:
        """
        Authenticate, resolve the tenant and open a session
        """
        account = self.authenticate(data.email, data.password)
        auth_session, principal, tokens = self.establish_session(account, ip_address, user_agent)
        logger.info("Login %s as %s", account.email, principal.user_type.value)
        return LoginResponse(session=self.describe(auth_session, principal), tokens=tokens)

    # ========================================================================
    # REFRESH
    # ========================================================================

    def refresh(self, refresh_token: str) -> RefreshTokenResponse:
        """
        Issue a new access token; role and tenant are resolved again
        """
        payload = verify_token(refresh_token, token_type="refresh")
        auth_session = load_active_session(self.db, payload)

        if auth_session.refresh_token != refresh_token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Refresh token has been superseded"
            )

        principal = self._resolve(auth_session.account)
        auth_session.user_type = principal.user_type.value
        auth_session.company_id = principal.tenant.id if principal.tenant else None

        access_token = create_access_token(self._token_claims(auth_session, principal))
        auth_session.access_token = access_token
        self.db.commit()
        self.db.refresh(auth_session)

        return RefreshTokenResponse(
            access_token=access_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            session=self.describe(auth_session, principal),
        )

    def current_session(self, principal: AuthenticatedPrincipal) -> SessionDescriptor:
        auth_session = self.db.query(AuthSession).filter(AuthSession.id == principal.session_id).first()
        return self.describe(auth_session, principal)
