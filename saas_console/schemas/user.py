from enum import Enum
from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, List


# ============================================================================
# PLATFORM USERS (super-admin directory)
# ============================================================================

class PlatformUserType(str, Enum):
    SUPERADMIN = "superadmin"
    COMPANY_ADMIN = "company_admin"
    COMPANY_USER = "company_user"


class PlatformUserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    user_type: PlatformUserType = PlatformUserType.COMPANY_USER
    company_id: Optional[str] = None
    is_active: bool = True

    @model_validator(mode="after")
    def check_company(self):
        if self.user_type == PlatformUserType.SUPERADMIN:
            self.company_id = None
        elif not self.company_id:
            raise ValueError("Company users must belong to a company")
        return self


class PlatformUserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    user_type: Optional[PlatformUserType] = None
    company_id: Optional[str] = None
    is_active: Optional[bool] = None


class PasswordChangeRequest(BaseModel):
    password: str = Field(..., min_length=8, description="At least 8 characters")
    confirmPassword: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirmPassword:
            raise ValueError("Passwords do not match")
        return self


class UserCompanyRef(BaseModel):
    name: str
    slug: str


class PlatformUserResponse(BaseModel):
    id: str
    name: str
    email: str
    user_type: str
    company_id: Optional[str]
    is_active: bool
    company: Optional[UserCompanyRef]
    createdAt: Optional[str]


class PlatformUserListResponse(BaseModel):
    data: List[PlatformUserResponse]


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# COMPANY USERS (tenant schema)
# ============================================================================

class TenantRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    role: TenantRole = TenantRole.USER
    isActive: bool = True


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[TenantRole] = None
    isActive: Optional[bool] = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    isActive: bool
    createdAt: Optional[str]


class UserListResponse(BaseModel):
    data: List[UserResponse]
