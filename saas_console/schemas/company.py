from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
import re

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class CompanyCreate(BaseModel):
    """Schema for registering a company"""
    name: str = Field(..., min_length=2, max_length=255)
    slug: str = Field(..., min_length=2, max_length=50)
    adminEmail: EmailStr

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        """Lowercase letters, numbers and single hyphens"""
        v = v.strip().lower()
        if not SLUG_RE.match(v):
            raise ValueError("Slug must contain only lowercase letters, numbers, and hyphens")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Test Company 01",
                "slug": "testco01",
                "adminEmail": "admin01@testco01.com"
            }
        }


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    adminEmail: Optional[EmailStr] = None


class CompanyResponse(BaseModel):
    id: str
    name: str
    slug: str
    schemaName: str
    adminEmail: str
    isVerified: bool
    createdAt: Optional[str]
    updatedAt: Optional[str]


class CompanyListResponse(BaseModel):
    data: List[CompanyResponse]
