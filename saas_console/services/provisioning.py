"""
Company onboarding: schema naming, the company's first admin and login accounts
"""
import logging

from sqlalchemy.orm import Session

from saas_console.core.config import settings
from saas_console.core.database import TenantSessionFactory, validate_schema_name
from saas_console.core.security import hash_password
from saas_console.models.company import Company
from saas_console.models.tenant import User
from saas_console.models.user import AuthAccount
from saas_console.services.session_resolver import normalize_email

logger = logging.getLogger(__name__)


def schema_name_for(slug: str) -> str:
    """Isolated schema name of the company with ``slug``"""
    return validate_schema_name(f"{settings.TENANT_SCHEMA_PREFIX}{slug.replace('-', '_')}")


def ensure_login_account(db: Session, email: str) -> AuthAccount:
    """
    Login account for ``email``, created with the temporary password if missing
    The caller commits
    """
    email = normalize_email(email)
    account = db.query(AuthAccount).filter(AuthAccount.email == email).first()
    if account is None:
        account = AuthAccount(
            email=email,
            password_hash=hash_password(settings.TEMPORARY_PASSWORD),
            is_active=True,
        )
        db.add(account)
        logger.info("Created login account for %s", email)
    return account


def seed_company_admin(open_tenant: TenantSessionFactory, company: Company) -> None:
    """Register the company's admin contact as an admin user in its schema"""
    email = normalize_email(company.admin_email)
    with open_tenant(company.schema_name) as tenant_db:
        existing = tenant_db.query(User).filter(User.email == email).first()
        if existing is None:
            tenant_db.add(User(name=f"{company.name} Admin", email=email, role="admin"))
            tenant_db.commit()
            logger.info("Seeded admin %s in %s", email, company.schema_name)
