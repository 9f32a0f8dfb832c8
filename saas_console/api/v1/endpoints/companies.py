"""Company management endpoints (super-admin)"""
import logging
from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from saas_console.core.database import (
    get_db,
    get_tenant_session_factory,
    provision_tenant_schema,
    TenantSessionFactory,
)
from saas_console.core.exceptions import TenantSchemaError
from saas_console.core.principal import SuperAdminPrincipal
from saas_console.core.security import require_superadmin
from saas_console.models.company import Company
from saas_console.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyListResponse,
)
from saas_console.services.provisioning import (
    ensure_login_account,
    schema_name_for,
    seed_company_admin,
)
from saas_console.services.session_resolver import normalize_email
from saas_console.utils.date import isoformat_or_none
from saas_console.api.v1.endpoints.helpers import commit_or_conflict, flush_or_conflict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/superadmin/companies", tags=["Companies"])


def _to_company_response(company: Company) -> CompanyResponse:
    return CompanyResponse(
        id=str(company.id),
        name=company.name,
        slug=company.slug,
        schemaName=company.schema_name,
        adminEmail=company.admin_email,
        isVerified=company.is_verified,
        createdAt=isoformat_or_none(company.created_at),
        updatedAt=isoformat_or_none(company.updated_at),
    )


def _get_company_or_404(db: Session, company_id: UUID) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
    return company


@router.get("", response_model=CompanyListResponse)
def list_companies(
    isVerified: Optional[bool] = None,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    query = db.query(Company)

    if isVerified is not None:
        query = query.filter(Company.is_verified == isVerified)

    companies = query.order_by(Company.created_at.desc()).all()
    return CompanyListResponse(data=[_to_company_response(c) for c in companies])


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(
    company_id: UUID,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    return _to_company_response(_get_company_or_404(db, company_id))


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company(
    payload: CompanyCreate,
    db: Session = Depends(get_db),
    open_tenant: TenantSessionFactory = Depends(get_tenant_session_factory),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    """
    Register a company and provision its isolated schema
    New companies start unverified
    """
    existing = db.query(Company).filter(Company.slug == payload.slug).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Company slug already taken",
        )

    try:
        schema_name = schema_name_for(payload.slug)
    except TenantSchemaError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        )

    admin_email = normalize_email(payload.adminEmail)
    ensure_login_account(db, admin_email)

    company = Company(
        name=payload.name,
        slug=payload.slug,
        schema_name=schema_name,
        admin_email=admin_email,
        is_verified=False,
    )
    db.add(company)
    # Unique slug and schema are claimed before the schema exists
    flush_or_conflict(db, "Company slug or schema already exists")

    try:
        provision_tenant_schema(schema_name)
    except TenantSchemaError as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        )

    commit_or_conflict(db, "Company slug or schema already exists")
    db.refresh(company)

    seed_company_admin(open_tenant, company)
    logger.info("Company %s registered by %s", company.slug, admin.email)

    return _to_company_response(company)


@router.patch("/{company_id}", response_model=CompanyResponse)
def update_company(
    company_id: UUID,
    payload: CompanyUpdate,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    company = _get_company_or_404(db, company_id)

    if payload.name is not None:
        company.name = payload.name
    if payload.adminEmail is not None:
        company.admin_email = normalize_email(payload.adminEmail)

    db.commit()
    db.refresh(company)
    return _to_company_response(company)


@router.patch("/{company_id}/verification", response_model=CompanyResponse)
def toggle_verification(
    company_id: UUID,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    """Flip the verified flag; only verified companies can sign in"""
    company = _get_company_or_404(db, company_id)
    company.is_verified = not company.is_verified

    db.commit()
    db.refresh(company)
    logger.info(
        "Company %s %s by %s",
        company.slug,
        "verified" if company.is_verified else "unverified",
        admin.email,
    )
    return _to_company_response(company)


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_company(
    company_id: UUID,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    """Remove the registry entry; the company's schema is left in place"""
    company = _get_company_or_404(db, company_id)

    db.delete(company)
    db.commit()

    return None
