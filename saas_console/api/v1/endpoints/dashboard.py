"""
Dashboard API Endpoints
Summary counts for the super-admin and company home views
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from saas_console.core.database import get_db
from saas_console.core.dependencies import get_tenant_db
from saas_console.core.principal import CompanyPrincipal, SuperAdminPrincipal
from saas_console.core.security import require_company, require_superadmin
from saas_console.schemas.dashboard import CompanyStats, SuperAdminStats
from saas_console.services.dashboard import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get("/superadmin/dashboard", response_model=SuperAdminStats)
def get_superadmin_dashboard(
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    """
    Platform overview cards:
    - companies (total and verified)
    - packages
    - subscriptions (total and currently active)
    - platform users
    """
    try:
        return DashboardService.get_superadmin_stats(db)
    except SQLAlchemyError as e:
        logger.error("Super-admin dashboard error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch dashboard metrics",
        )


@router.get("/company/dashboard", response_model=CompanyStats)
def get_company_dashboard(
    db: Session = Depends(get_db),
    tenant_db: Session = Depends(get_tenant_db),
    principal: CompanyPrincipal = Depends(require_company),
):
    try:
        return DashboardService.get_company_stats(db, tenant_db, principal.tenant.id)
    except SQLAlchemyError as e:
        logger.error("Company dashboard error for %s: %s", principal.tenant.slug, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch dashboard metrics",
        )
