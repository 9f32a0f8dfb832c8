from typing import Generator
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from saas_console.core.database import get_db, get_tenant_session_factory, TenantSessionFactory
from saas_console.core.exceptions import EntitlementError
from saas_console.core.principal import CompanyPrincipal
from saas_console.core.security import require_company
from saas_console.services.entitlements import Entitlements, entitlements_for


# -------------------------
# TENANT DEPENDENCIES
# -------------------------
def get_tenant_db(
    principal: CompanyPrincipal = Depends(require_company),
    open_tenant: TenantSessionFactory = Depends(get_tenant_session_factory),
) -> Generator[Session, None, None]:
    """
    Session pinned to the caller's company schema
    """
    with open_tenant(principal.tenant.schema_name) as tenant_db:
        yield tenant_db


def get_entitlements(
    principal: CompanyPrincipal = Depends(require_company),
    db: Session = Depends(get_db),
) -> Entitlements:
    """
    Entitlements of the caller's company, from its active subscription
    """
    return entitlements_for(db, principal.tenant.id)


# -------------------------
# PACKAGE-BASED ACCESS
# -------------------------
def require_entitlement(action: str):
    """
    Dependency factory gating a tenant write on the company's package

    Usage:
        @router.post("", dependencies=[Depends(require_entitlement("create"))])
    """
    def entitlement_checker(entitlements: Entitlements = Depends(get_entitlements)) -> Entitlements:
        try:
            entitlements.check(action)
        except EntitlementError as e:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=e.message
            )
        return entitlements

    return entitlement_checker


def enforce_limit(entitlements: Entitlements, resource: str, current_count: int) -> None:
    """Raise 403 when the company already holds its package's maximum"""
    try:
        entitlements.check_limit(resource, current_count)
    except EntitlementError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message
        )
