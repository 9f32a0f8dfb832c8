"""Platform user directory endpoints (super-admin)"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from saas_console.core.database import get_db
from saas_console.core.principal import SuperAdminPrincipal
from saas_console.core.security import hash_password, require_superadmin
from saas_console.models.company import Company
from saas_console.models.user import AuthAccount, PlatformUser, SuperAdmin
from saas_console.schemas.user import (
    MessageResponse,
    PasswordChangeRequest,
    PlatformUserCreate,
    PlatformUserListResponse,
    PlatformUserResponse,
    PlatformUserType,
    PlatformUserUpdate,
    UserCompanyRef,
)
from saas_console.services.provisioning import ensure_login_account
from saas_console.services.session_resolver import normalize_email
from saas_console.utils.date import isoformat_or_none
from saas_console.api.v1.endpoints.helpers import commit_or_conflict, parse_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/superadmin/users", tags=["Platform Users"])


def _to_user_response(user: PlatformUser) -> PlatformUserResponse:
    company = user.company
    return PlatformUserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        user_type=user.user_type,
        company_id=str(user.company_id) if user.company_id else None,
        is_active=user.is_active,
        company=UserCompanyRef(name=company.name, slug=company.slug) if company else None,
        createdAt=isoformat_or_none(user.created_at),
    )


def _get_user_or_404(db: Session, user_id: UUID) -> PlatformUser:
    user = db.query(PlatformUser).filter(PlatformUser.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _verified_company_id(db: Session, company_id: Optional[str]) -> Optional[UUID]:
    """A company reference must point to a verified company"""
    parsed = parse_uuid(company_id, "company_id")
    if parsed is None:
        return None
    company = db.query(Company).filter(Company.id == parsed).first()
    if not company or not company.is_verified:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Company not found or not verified",
        )
    return company.id


def _register_superadmin(db: Session, user: PlatformUser) -> None:
    registry = db.query(SuperAdmin).filter(SuperAdmin.email == user.email).first()
    if registry is None:
        db.add(SuperAdmin(email=user.email, name=user.name, is_active=user.is_active))
    else:
        registry.is_active = user.is_active


def _unregister_superadmin(db: Session, email: str) -> None:
    registry = db.query(SuperAdmin).filter(SuperAdmin.email == email).first()
    if registry is not None:
        db.delete(registry)


@router.get("", response_model=PlatformUserListResponse)
def list_users(
    userType: Optional[PlatformUserType] = None,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    query = db.query(PlatformUser).options(joinedload(PlatformUser.company))

    if userType is not None:
        query = query.filter(PlatformUser.user_type == userType.value)

    users = query.order_by(PlatformUser.created_at.desc()).all()
    return PlatformUserListResponse(data=[_to_user_response(u) for u in users])


@router.get("/{user_id}", response_model=PlatformUserResponse)
def get_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    return _to_user_response(_get_user_or_404(db, user_id))


@router.post("", response_model=PlatformUserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: PlatformUserCreate,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    """
    Add a user to the platform directory
    A login account with the temporary password is created alongside
    """
    email = normalize_email(payload.email)

    if db.query(PlatformUser).filter(PlatformUser.email == email).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )

    user = PlatformUser(
        name=payload.name,
        email=email,
        user_type=payload.user_type.value,
        company_id=_verified_company_id(db, payload.company_id),
        is_active=payload.is_active,
    )
    db.add(user)
    ensure_login_account(db, email)

    if user.user_type == PlatformUserType.SUPERADMIN.value:
        _register_superadmin(db, user)

    commit_or_conflict(db, "User with this email already exists")
    db.refresh(user)
    logger.info("Platform user %s (%s) created by %s", user.email, user.user_type, admin.email)

    return _to_user_response(user)


@router.put("/{user_id}", response_model=PlatformUserResponse)
def update_user(
    user_id: UUID,
    payload: PlatformUserUpdate,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    user = _get_user_or_404(db, user_id)
    was_superadmin = user.user_type == PlatformUserType.SUPERADMIN.value
    previous_email = user.email

    if payload.name is not None:
        user.name = payload.name
    if payload.email is not None:
        user.email = normalize_email(payload.email)
    if payload.is_active is not None:
        user.is_active = payload.is_active
    if payload.user_type is not None:
        user.user_type = payload.user_type.value
    if payload.company_id is not None:
        user.company_id = _verified_company_id(db, payload.company_id)

    if user.user_type == PlatformUserType.SUPERADMIN.value:
        user.company_id = None
    elif user.company_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Company users must belong to a company",
        )

    if was_superadmin:
        _unregister_superadmin(db, previous_email)
        db.flush()
    if user.user_type == PlatformUserType.SUPERADMIN.value:
        _register_superadmin(db, user)
    if user.email != previous_email:
        ensure_login_account(db, user.email)

    commit_or_conflict(db, "User with this email already exists")
    db.refresh(user)

    return _to_user_response(user)


@router.patch("/{user_id}/status", response_model=PlatformUserResponse)
def toggle_user_status(
    user_id: UUID,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    """Flip the active flag; the login account follows it"""
    user = _get_user_or_404(db, user_id)
    user.is_active = not user.is_active

    account = db.query(AuthAccount).filter(AuthAccount.email == user.email).first()
    if account is not None:
        account.is_active = user.is_active
    if user.user_type == PlatformUserType.SUPERADMIN.value:
        _register_superadmin(db, user)

    db.commit()
    db.refresh(user)

    return _to_user_response(user)


@router.put("/{user_id}/password", response_model=MessageResponse)
def change_user_password(
    user_id: UUID,
    payload: PasswordChangeRequest,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    user = _get_user_or_404(db, user_id)

    account = ensure_login_account(db, user.email)
    account.password_hash = hash_password(payload.password)

    db.commit()
    logger.info("Password reset for %s by %s", user.email, admin.email)

    return MessageResponse(message="Password updated successfully")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    user = _get_user_or_404(db, user_id)

    if user.user_type == PlatformUserType.SUPERADMIN.value:
        _unregister_superadmin(db, user.email)

    db.delete(user)
    db.commit()

    return None
