from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID
from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from saas_console.core.database import get_db
from saas_console.core.config import settings
from saas_console.core.principal import (
    AuthenticatedPrincipal,
    CompanyPrincipal,
    Principal,
    SuperAdminPrincipal,
    TenantInfo,
    Unauthenticated,
    UserType,
)
from saas_console.models.company import Company
from saas_console.models.user import AuthAccount, AuthSession, SuperAdmin

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# HTTP Bearer authentication
security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


# -------------------------
# PASSWORD UTILITIES
# -------------------------
def hash_password(password: str) -> str:
    """Hash a plain password"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hash"""
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------
# TOKEN CREATION
# -------------------------
def _stringify_ids(data: dict) -> dict:
    return {key: str(value) if isinstance(value, UUID) else value for key, value in data.items()}


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token"""
    to_encode = _stringify_ids(data)

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_refresh_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT refresh token"""
    to_encode = _stringify_ids(data)

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode.update({"exp": expire, "type": "refresh"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# -------------------------
# TOKEN VERIFICATION
# -------------------------
def verify_token(token: str, token_type: str = "access") -> dict:
    """
    Verify and decode a JWT token

    Args:
        token: JWT token string
        token_type: Expected token type ('access' or 'refresh')

    Returns:
        Decoded token payload

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.get("type") != token_type:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token type. Expected {token_type}"
        )

    return payload


def parse_uuid_claim(payload: dict, claim: str) -> UUID:
    raw = payload.get(claim)
    if raw is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {claim} missing"
        )
    try:
        return UUID(str(raw))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: malformed {claim}"
        )


# -------------------------
# SESSION LOOKUP
# -------------------------
def load_active_session(db: Session, payload: dict) -> AuthSession:
    """
    Find the live session a token belongs to

    Raises:
        HTTPException: If the session was revoked, expired or its account disabled
    """
    session_id = parse_uuid_claim(payload, "sid")
    account_id = parse_uuid_claim(payload, "sub")

    auth_session = db.query(AuthSession).filter(
        AuthSession.id == session_id,
        AuthSession.account_id == account_id,
        AuthSession.is_active.is_(True),
    ).first()

    if not auth_session or auth_session.expires_at < datetime.utcnow():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired or signed out"
        )

    account = db.query(AuthAccount).filter(AuthAccount.id == account_id).first()
    if not account or not account.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found or inactive"
        )

    return auth_session


def principal_for_session(db: Session, auth_session: AuthSession) -> AuthenticatedPrincipal:
    """Rebuild the principal a session was resolved to"""
    account = auth_session.account

    if auth_session.user_type == UserType.SUPERADMIN.value:
        registry = db.query(SuperAdmin).filter(
            SuperAdmin.email == account.email,
            SuperAdmin.is_active.is_(True),
        ).first()
        if not registry:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Super-admin access revoked"
            )

        return SuperAdminPrincipal(
            email=account.email,
            account_id=account.id,
            session_id=auth_session.id,
        )

    company = db.query(Company).filter(Company.id == auth_session.company_id).first()
    if not company or not company.is_verified:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Company is not verified"
        )

    return CompanyPrincipal(
        email=account.email,
        tenant=TenantInfo.from_company(company),
        account_id=account.id,
        session_id=auth_session.id,
    )


# -------------------------
# DEPENDENCY FUNCTIONS
# -------------------------
def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> AuthenticatedPrincipal:
    """
    Extract the caller's principal from the bearer token

    Raises:
        HTTPException: If token is invalid or the session is gone
    """
    payload = verify_token(credentials.credentials, token_type="access")
    auth_session = load_active_session(db, payload)
    return principal_for_session(db, auth_session)


def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: Session = Depends(get_db)
) -> Principal:
    """
    Principal if a valid token is presented, Unauthenticated otherwise
    """
    if not credentials:
        return Unauthenticated()

    try:
        return get_current_principal(credentials, db)
    except HTTPException:
        return Unauthenticated()


# -------------------------
# ROLE-BASED ACCESS CONTROL
# -------------------------
def require_superadmin(
    principal: AuthenticatedPrincipal = Depends(get_current_principal)
) -> SuperAdminPrincipal:
    """Shortcut dependency for super-admin only access"""
    if not isinstance(principal, SuperAdminPrincipal):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super-admin access required"
        )
    return principal


def require_company(
    principal: AuthenticatedPrincipal = Depends(get_current_principal)
) -> CompanyPrincipal:
    """Shortcut dependency for company dashboard access"""
    if not isinstance(principal, CompanyPrincipal):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Company access required"
        )
    return principal
