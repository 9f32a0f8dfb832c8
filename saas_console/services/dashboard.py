"""
Dashboard Service Layer
Turns the dashboard counts into response schemas
"""
import uuid
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from saas_console.crud.dashboard import DashboardCRUD
from saas_console.schemas.dashboard import (
    ActiveSubscriptionSummary,
    CompanyStats,
    SuperAdminStats,
)
from saas_console.services.entitlements import active_subscription


class DashboardService:

    @staticmethod
    def get_superadmin_stats(db: Session, today: Optional[date] = None) -> SuperAdminStats:
        today = today or date.today()
        return SuperAdminStats(
            totalCompanies=DashboardCRUD.count_companies(db),
            verifiedCompanies=DashboardCRUD.count_companies(db, verified=True),
            totalPackages=DashboardCRUD.count_packages(db),
            totalSubscriptions=DashboardCRUD.count_subscriptions(db),
            activeSubscriptions=DashboardCRUD.count_subscriptions(db, active_on=today),
            totalUsers=DashboardCRUD.count_platform_users(db),
        )

    @staticmethod
    def get_company_stats(db: Session, tenant_db: Session, company_id: uuid.UUID) -> CompanyStats:
        """
        Counts from the company schema plus the active subscription
        from the platform schema
        """
        subscription = active_subscription(db, company_id)
        summary = None
        if subscription is not None:
            summary = ActiveSubscriptionSummary(
                packageName=subscription.package.name,
                endDate=subscription.end_date.isoformat(),
            )

        return CompanyStats(
            totalUsers=DashboardCRUD.count_tenant_users(tenant_db),
            totalCategories=DashboardCRUD.count_categories(tenant_db),
            totalItems=DashboardCRUD.count_items(tenant_db),
            subscription=summary,
        )
