"""
System-wide settings managed by super-admins
"""
from sqlalchemy import Column, String, Boolean, Integer

from saas_console.core.database import PlatformBase
from saas_console.models.base import TimestampMixin, PlatformTableMixin

SETTINGS_ROW_ID = 1


class SystemSettings(PlatformBase, TimestampMixin, PlatformTableMixin):
    """Single-row table holding security and session policy"""

    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    otp_enabled = Column(Boolean, default=False, nullable=False)
    otp_method = Column(String(10), default="email", nullable=False)  # email, sms
    session_timeout = Column(Integer, default=24, nullable=False)  # hours
    max_login_attempts = Column(Integer, default=5, nullable=False)
    require_password_change = Column(Boolean, default=False, nullable=False)
    password_expiry_days = Column(Integer, default=90, nullable=False)

    def __repr__(self):
        return f"<SystemSettings otp:{self.otp_enabled} timeout:{self.session_timeout}h>"
