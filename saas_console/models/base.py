"""
Base model classes and mixins
"""
from datetime import datetime
from sqlalchemy import Column, DateTime

from saas_console.core.database import PLATFORM, TENANT


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps"""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class PlatformTableMixin:
    """Places the table in the global registry schema"""

    __table_args__ = {"schema": PLATFORM}


class TenantTableMixin:
    """Places the table in the company schema bound at session time"""

    __table_args__ = {"schema": TENANT}
