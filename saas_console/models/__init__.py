"""
SQLAlchemy models for the application
"""
from saas_console.models.base import TimestampMixin, PlatformTableMixin, TenantTableMixin
from saas_console.models.company import Company
from saas_console.models.package import Package, Subscription, DEFAULT_PACKAGE_OPTIONS
from saas_console.models.user import SuperAdmin, PlatformUser, AuthAccount, AuthSession
from saas_console.models.settings import SystemSettings
from saas_console.models.tenant import User, Category, Item

__all__ = [
    "TimestampMixin",
    "PlatformTableMixin",
    "TenantTableMixin",
    "Company",
    "Package",
    "Subscription",
    "DEFAULT_PACKAGE_OPTIONS",
    "SuperAdmin",
    "PlatformUser",
    "AuthAccount",
    "AuthSession",
    "SystemSettings",
    "User",
    "Category",
    "Item",
]
