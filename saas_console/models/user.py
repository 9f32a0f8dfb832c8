"""
Platform identity models: super-admin registry, global user registry,
login accounts and their sessions
"""
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from saas_console.core.database import PlatformBase
from saas_console.models.base import TimestampMixin, PlatformTableMixin


class SuperAdmin(PlatformBase, TimestampMixin, PlatformTableMixin):
    """
    Registry of platform operators
    An authenticated email found here resolves to the superadmin role
    """

    __tablename__ = "superadmins"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<SuperAdmin {self.email}>"


class PlatformUser(PlatformBase, TimestampMixin, PlatformTableMixin):
    """
    Global user directory maintained by super-admins (``all_users``)
    """

    __tablename__ = "all_users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # superadmin, company_admin, company_user
    user_type = Column(String(50), nullable=False, default="company_user")
    company_id = Column(
        Uuid,
        ForeignKey("platform.companies.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active = Column(Boolean, default=True, nullable=False)

    company = relationship("Company", back_populates="users")

    def __repr__(self):
        return f"<PlatformUser {self.email} ({self.user_type})>"


class AuthAccount(PlatformBase, TimestampMixin, PlatformTableMixin):
    """
    Login credentials, independent of role and tenant
    Role and tenant are resolved on every new session
    """

    __tablename__ = "auth_accounts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login_at = Column(DateTime, nullable=True)

    sessions = relationship("AuthSession", back_populates="account", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<AuthAccount {self.email}>"


class AuthSession(PlatformBase, TimestampMixin, PlatformTableMixin):
    """
    Established session with the role and tenant it resolved to
    """

    __tablename__ = "auth_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id = Column(
        Uuid,
        ForeignKey("platform.auth_accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Resolved identity
    user_type = Column(String(50), nullable=False)
    company_id = Column(
        Uuid,
        ForeignKey("platform.companies.id", ondelete="CASCADE"),
        nullable=True,
    )

    # Tokens
    refresh_token = Column(String(1000), nullable=True, unique=True, index=True)
    access_token = Column(String(1000), nullable=True)
    expires_at = Column(DateTime, nullable=False)

    # Device/client information
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)

    # Status
    is_active = Column(Boolean, default=True, nullable=False)
    revoked_at = Column(DateTime, nullable=True)

    account = relationship("AuthAccount", back_populates="sessions")
    company = relationship("Company")

    def __repr__(self):
        return f"<AuthSession {self.account_id} - {self.user_type} active:{self.is_active}>"
