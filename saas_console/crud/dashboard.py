"""
Dashboard CRUD Operations
Count queries behind the super-admin and company dashboards
"""
from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from saas_console.models.company import Company
from saas_console.models.package import Package, Subscription
from saas_console.models.tenant import Category, Item, User
from saas_console.models.user import PlatformUser


class DashboardCRUD:
    """
    Platform-wide counts run on the platform session,
    tenant counts on a session pinned to the company schema
    """

    @staticmethod
    def count_companies(db: Session, verified: Optional[bool] = None) -> int:
        query = db.query(func.count(Company.id))
        if verified is not None:
            query = query.filter(Company.is_verified == verified)
        return query.scalar() or 0

    @staticmethod
    def count_packages(db: Session) -> int:
        return db.query(func.count(Package.id)).scalar() or 0

    @staticmethod
    def count_subscriptions(db: Session, active_on: Optional[date] = None) -> int:
        """All subscriptions, or those still running on ``active_on``"""
        query = db.query(func.count(Subscription.id))
        if active_on is not None:
            query = query.filter(Subscription.end_date > active_on)
        return query.scalar() or 0

    @staticmethod
    def count_platform_users(db: Session) -> int:
        return db.query(func.count(PlatformUser.id)).scalar() or 0

    # ------------------------------------------------------------------
    # Tenant schema
    # ------------------------------------------------------------------

    @staticmethod
    def count_tenant_users(tenant_db: Session) -> int:
        return tenant_db.query(func.count(User.id)).scalar() or 0

    @staticmethod
    def count_categories(tenant_db: Session) -> int:
        return tenant_db.query(func.count(Category.id)).scalar() or 0

    @staticmethod
    def count_items(tenant_db: Session) -> int:
        return tenant_db.query(func.count(Item.id)).scalar() or 0
