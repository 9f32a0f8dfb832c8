"""
Company model - a tenant account with its own isolated schema
"""
import uuid
from sqlalchemy import Column, String, Boolean, Uuid
from sqlalchemy.orm import relationship

from saas_console.core.database import PlatformBase
from saas_console.models.base import TimestampMixin, PlatformTableMixin


class Company(PlatformBase, TimestampMixin, PlatformTableMixin):
    """
    Company registered on the platform
    Users of a company live in the schema named by ``schema_name``; only
    verified companies take part in login resolution
    """

    __tablename__ = "companies"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    schema_name = Column(String(63), unique=True, nullable=False)
    admin_email = Column(String(255), nullable=False)

    # Approved by a super-admin
    is_verified = Column(Boolean, default=False, nullable=False)

    # Relationships
    subscriptions = relationship(
        "Subscription", back_populates="company", cascade="all, delete-orphan"
    )
    users = relationship("PlatformUser", back_populates="company")

    def __repr__(self):
        return f"<Company {self.name} ({self.schema_name})>"
