"""
Dashboard statistics schemas
"""
from typing import Optional
from pydantic import BaseModel


class SuperAdminStats(BaseModel):
    totalCompanies: int
    verifiedCompanies: int
    totalPackages: int
    totalSubscriptions: int
    activeSubscriptions: int
    totalUsers: int


class ActiveSubscriptionSummary(BaseModel):
    packageName: str
    endDate: str


class CompanyStats(BaseModel):
    totalUsers: int
    totalCategories: int
    totalItems: int
    subscription: Optional[ActiveSubscriptionSummary]
