"""
Package and Subscription models
"""
import uuid
from sqlalchemy import Column, String, Integer, Date, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship

from saas_console.core.database import PlatformBase
from saas_console.models.base import TimestampMixin, PlatformTableMixin
from saas_console.utils.date import is_active as period_is_active

DEFAULT_PACKAGE_OPTIONS = {
    "can_create": True,
    "can_edit": True,
    "can_delete": True,
    "max_users": 10,
    "max_items": 1000,
}


class Package(PlatformBase, TimestampMixin, PlatformTableMixin):
    """
    Subscription package - duration in months plus permission/limit options
    """

    __tablename__ = "packages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False)
    duration = Column(Integer, default=12, nullable=False)  # months
    options_json = Column(JSON, nullable=False, default=lambda: dict(DEFAULT_PACKAGE_OPTIONS))

    subscriptions = relationship("Subscription", back_populates="package")

    def __repr__(self):
        return f"<Package {self.name} ({self.duration} months)>"


class Subscription(PlatformBase, TimestampMixin, PlatformTableMixin):
    """
    Links a company to a package for a date range
    """

    __tablename__ = "subscriptions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(
        Uuid,
        ForeignKey("platform.companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    package_id = Column(
        Uuid,
        ForeignKey("platform.packages.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    # Relationships
    company = relationship("Company", back_populates="subscriptions")
    package = relationship("Package", back_populates="subscriptions")

    @property
    def is_active(self) -> bool:
        return period_is_active(self.end_date)

    def __repr__(self):
        return f"<Subscription {self.company_id} - {self.package_id} until {self.end_date}>"
