"""
Session/tenant resolution

Decides, for an authenticated email, whether the caller is a super-admin or a
user of one verified company. Company membership lives in each company's
isolated schema, so membership is found by probing the verified companies one
schema at a time.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from saas_console.core.database import TenantSessionFactory
from saas_console.core.exceptions import AccessDeniedError
from saas_console.core.principal import (
    AuthenticatedPrincipal,
    CompanyPrincipal,
    SuperAdminPrincipal,
    TenantInfo,
)
from saas_console.models.company import Company
from saas_console.models.tenant import User
from saas_console.models.user import SuperAdmin

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class SessionResolver:
    """
    Resolves an email to a principal

    Args:
        db: platform session (global registry)
        open_tenant: opens a session pinned to a company schema
    """

    def __init__(self, db: Session, open_tenant: TenantSessionFactory):
        self.db = db
        self.open_tenant = open_tenant

    def find_superadmin(self, email: str):
        return (
            self.db.query(SuperAdmin)
            .filter(SuperAdmin.email == email, SuperAdmin.is_active.is_(True))
            .first()
        )

    def verified_companies(self) -> List[Company]:
        # Enumeration order decides which company wins when an email is
        # registered in several schemas
        return (
            self.db.query(Company)
            .filter(Company.is_verified.is_(True))
            .order_by(Company.created_at.asc(), Company.id.asc())
            .all()
        )

    def tenant_has_user(self, company: Company, email: str) -> bool:
        with self.open_tenant(company.schema_name) as tenant_db:
            user = (
                tenant_db.query(User.id)
                .filter(User.email == email, User.is_active.is_(True))
                .first()
            )
        return user is not None

    def resolve(self, email: str) -> AuthenticatedPrincipal:
        """
        Resolve role and tenant for ``email``

        Raises:
            AccessDeniedError: email matches no super-admin and no verified company
        """
        email = normalize_email(email)

        if self.find_superadmin(email):
            logger.info("Resolved %s as superadmin", email)
            return SuperAdminPrincipal(email=email)

        for company in self.verified_companies():
            logger.debug("Probing schema %s for %s", company.schema_name, email)
            if self.tenant_has_user(company, email):
                logger.info("Resolved %s to company %s", email, company.slug)
                return CompanyPrincipal(email=email, tenant=TenantInfo.from_company(company))

        logger.warning("No verified company has a user %s", email)
        raise AccessDeniedError(email=email)
