# saas_console/schemas/auth.py
"""
Authentication request and response schemas
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, EmailStr, Field


# ============================================================================
# LOGIN SCHEMAS
# ============================================================================

class LoginRequest(BaseModel):
    """Request schema for user login"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "admin@system.com",
                "password": "SecurePassword123!"
            }
        }


class TokenResponse(BaseModel):
    """JWT tokens response schema"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(default=1800, description="Access token expiration in seconds")


class SessionDescriptor(BaseModel):
    """
    Session state under the fixed keys clients persist
    ``company`` is null for super-admins
    """
    userId: str
    token: str
    userEmail: str
    userType: str
    company: Optional[Dict[str, Any]] = None


class LoginResponse(BaseModel):
    """Response schema for successful login"""
    session: SessionDescriptor
    tokens: TokenResponse


# ============================================================================
# REFRESH TOKEN SCHEMAS
# ============================================================================

class RefreshTokenRequest(BaseModel):
    """Request schema for token refresh"""
    refresh_token: str = Field(..., description="Refresh token")


class RefreshTokenResponse(BaseModel):
    """Response schema for token refresh"""
    access_token: str = Field(..., description="New access token")
    token_type: str = "bearer"
    expires_in: int = Field(default=1800, description="Token expiration in seconds")
    session: SessionDescriptor


# ============================================================================
# LOGOUT SCHEMAS
# ============================================================================

class LogoutResponse(BaseModel):
    """Response schema for logout"""
    message: str


# ============================================================================
# ERROR RESPONSE SCHEMAS
# ============================================================================

class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorDetail(BaseModel):
    error: ErrorBody


class ErrorResponse(BaseModel):
    """Standard error response schema"""
    detail: ErrorDetail

    class Config:
        json_schema_extra = {
            "example": {
                "detail": {
                    "error": {
                        "code": "ACCESS_DENIED",
                        "message": "Access denied. User not authorized."
                    }
                }
            }
        }
