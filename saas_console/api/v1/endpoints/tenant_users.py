"""Company user endpoints (tenant schema)"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from saas_console.core.database import get_db
from saas_console.core.dependencies import enforce_limit, get_tenant_db, require_entitlement
from saas_console.core.principal import CompanyPrincipal
from saas_console.core.security import require_company
from saas_console.models.tenant import User
from saas_console.models.user import AuthAccount
from saas_console.schemas.user import UserCreate, UserUpdate, UserResponse, UserListResponse
from saas_console.services.auth_service import revoke_sessions
from saas_console.services.entitlements import Entitlements
from saas_console.services.provisioning import ensure_login_account
from saas_console.services.session_resolver import normalize_email
from saas_console.utils.date import isoformat_or_none
from saas_console.api.v1.endpoints.helpers import commit_or_conflict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/company/users", tags=["Company Users"])


def _to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        isActive=user.is_active,
        createdAt=isoformat_or_none(user.created_at),
    )


def _get_user_or_404(tenant_db: Session, user_id: UUID) -> User:
    user = tenant_db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _ensure_email_free(tenant_db: Session, email: str, exclude_id: UUID = None) -> None:
    query = tenant_db.query(User).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )


def _sign_out_member(db: Session, email: str, principal: CompanyPrincipal) -> None:
    """Revoke the member's sessions in this company"""
    account = db.query(AuthAccount).filter(AuthAccount.email == email).first()
    if account is None:
        return
    revoked = revoke_sessions(db, account.id, company_id=principal.tenant.id)
    db.commit()
    if revoked:
        logger.info("Signed out %s from %s (%d sessions)", email, principal.tenant.slug, revoked)


@router.get("", response_model=UserListResponse)
def list_users(
    tenant_db: Session = Depends(get_tenant_db),
):
    users = tenant_db.query(User).order_by(User.created_at.desc()).all()
    return UserListResponse(data=[_to_user_response(u) for u in users])


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: UUID,
    tenant_db: Session = Depends(get_tenant_db),
):
    return _to_user_response(_get_user_or_404(tenant_db, user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    tenant_db: Session = Depends(get_tenant_db),
    principal: CompanyPrincipal = Depends(require_company),
    entitlements: Entitlements = Depends(require_entitlement("create")),
):
    """
    Add a member to the company
    Members sign in with a login account, created with the temporary password if missing
    """
    email = normalize_email(payload.email)

    current_count = tenant_db.query(func.count(User.id)).scalar() or 0
    enforce_limit(entitlements, "users", current_count)
    _ensure_email_free(tenant_db, email)

    user = User(
        name=payload.name,
        email=email,
        role=payload.role.value,
        is_active=payload.isActive,
    )
    tenant_db.add(user)
    commit_or_conflict(tenant_db, "User with this email already exists")
    tenant_db.refresh(user)

    ensure_login_account(db, email)
    db.commit()
    logger.info("User %s added to %s", email, principal.tenant.slug)

    return _to_user_response(user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UUID,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    tenant_db: Session = Depends(get_tenant_db),
    principal: CompanyPrincipal = Depends(require_company),
    entitlements: Entitlements = Depends(require_entitlement("edit")),
):
    user = _get_user_or_404(tenant_db, user_id)
    previous_email = user.email

    if payload.email is not None:
        email = normalize_email(payload.email)
        if email != user.email:
            _ensure_email_free(tenant_db, email, exclude_id=user.id)
            user.email = email
            ensure_login_account(db, email)
            db.commit()
    if payload.name is not None:
        user.name = payload.name
    if payload.role is not None:
        user.role = payload.role.value
    if payload.isActive is not None:
        user.is_active = payload.isActive

    commit_or_conflict(tenant_db, "User with this email already exists")
    tenant_db.refresh(user)

    if not user.is_active or user.email != previous_email:
        _sign_out_member(db, previous_email, principal)

    return _to_user_response(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    tenant_db: Session = Depends(get_tenant_db),
    principal: CompanyPrincipal = Depends(require_company),
    entitlements: Entitlements = Depends(require_entitlement("delete")),
):
    user = _get_user_or_404(tenant_db, user_id)

    if user.email == principal.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot remove yourself",
        )

    email = user.email
    tenant_db.delete(user)
    tenant_db.commit()
    _sign_out_member(db, email, principal)

    return None
