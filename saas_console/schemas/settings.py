from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class OtpMethod(str, Enum):
    EMAIL = "email"
    SMS = "sms"


class SystemSettingsResponse(BaseModel):
    otpEnabled: bool
    otpMethod: OtpMethod
    sessionTimeout: int = Field(..., description="Session timeout in hours")
    maxLoginAttempts: int
    requirePasswordChange: bool
    passwordExpiryDays: int
    updatedAt: Optional[str]


class SystemSettingsUpdate(BaseModel):
    otpEnabled: Optional[bool] = None
    otpMethod: Optional[OtpMethod] = None
    sessionTimeout: Optional[int] = Field(None, ge=1, le=720)
    maxLoginAttempts: Optional[int] = Field(None, ge=1, le=100)
    requirePasswordChange: Optional[bool] = None
    passwordExpiryDays: Optional[int] = Field(None, ge=1, le=3650)
