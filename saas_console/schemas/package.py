"""Pydantic schemas for packages and subscriptions"""
from datetime import date
from typing import Optional, List
from pydantic import BaseModel, Field, model_validator


class PackageOptions(BaseModel):
    """Permission and limit flags granted by a package"""
    can_create: bool = True
    can_edit: bool = True
    can_delete: bool = True
    max_users: int = Field(10, ge=0)
    max_items: int = Field(1000, ge=0)


class PackageBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    duration: int = Field(12, ge=1, le=120, description="Duration in months")
    options_json: PackageOptions = Field(default_factory=PackageOptions)


class PackageCreate(PackageBase):
    pass


class PackageUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    duration: Optional[int] = Field(None, ge=1, le=120)
    options_json: Optional[PackageOptions] = None


class PackageResponse(BaseModel):
    id: str
    name: str
    duration: int
    options_json: PackageOptions
    createdAt: Optional[str]
    updatedAt: Optional[str]


class PackageListResponse(BaseModel):
    data: List[PackageResponse]


class SubscriptionCreate(BaseModel):
    companyId: str
    packageId: str
    startDate: date = Field(default_factory=date.today)
    endDate: Optional[date] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.endDate is not None and self.endDate <= self.startDate:
            raise ValueError("End date must be after start date")
        return self


class SubscriptionCompany(BaseModel):
    name: str
    slug: str


class SubscriptionPackage(BaseModel):
    name: str
    duration: int


class SubscriptionResponse(BaseModel):
    id: str
    companyId: str
    packageId: str
    startDate: str
    endDate: str
    isActive: bool
    company: Optional[SubscriptionCompany]
    package: Optional[SubscriptionPackage]
    createdAt: Optional[str]


class SubscriptionListResponse(BaseModel):
    data: List[SubscriptionResponse]
