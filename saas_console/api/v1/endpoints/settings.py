from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from saas_console.core.database import get_db
from saas_console.core.principal import SuperAdminPrincipal
from saas_console.core.security import require_superadmin
from saas_console.models.settings import SystemSettings
from saas_console.schemas.settings import SystemSettingsResponse, SystemSettingsUpdate
from saas_console.services.system_settings import get_system_settings
from saas_console.utils.date import isoformat_or_none

router = APIRouter(prefix="/superadmin/settings", tags=["System Settings"])

# request key -> column
FIELD_MAP = {
    "otpEnabled": "otp_enabled",
    "otpMethod": "otp_method",
    "sessionTimeout": "session_timeout",
    "maxLoginAttempts": "max_login_attempts",
    "requirePasswordChange": "require_password_change",
    "passwordExpiryDays": "password_expiry_days",
}


def build_settings_response(row: SystemSettings) -> SystemSettingsResponse:
    return SystemSettingsResponse(
        otpEnabled=row.otp_enabled,
        otpMethod=row.otp_method,
        sessionTimeout=row.session_timeout,
        maxLoginAttempts=row.max_login_attempts,
        requirePasswordChange=row.require_password_change,
        passwordExpiryDays=row.password_expiry_days,
        updatedAt=isoformat_or_none(row.updated_at),
    )


@router.get("", response_model=SystemSettingsResponse)
def get_settings(
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    """Get the platform security and session policy"""
    return build_settings_response(get_system_settings(db))


@router.put("", response_model=SystemSettingsResponse)
def update_settings(
    payload: SystemSettingsUpdate,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    """Update only the provided fields"""
    row = get_system_settings(db)

    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(row, FIELD_MAP[key], value.value if key == "otpMethod" else value)

    db.commit()
    db.refresh(row)

    return build_settings_response(row)
