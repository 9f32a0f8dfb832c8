"""Pydantic schemas for categories and items"""
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: Optional[str]
    createdAt: Optional[str]


class CategoryListResponse(BaseModel):
    data: List[CategoryResponse]


class ItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category_id: Optional[str] = None
    price: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    quantity: int = Field(0, ge=0)


class ItemCreate(ItemBase):
    pass


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category_id: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    quantity: Optional[int] = Field(None, ge=0)


class ItemCategoryRef(BaseModel):
    name: str


class ItemResponse(BaseModel):
    id: str
    name: str
    description: Optional[str]
    category_id: Optional[str]
    price: float
    quantity: int
    categories: Optional[ItemCategoryRef]
    createdAt: Optional[str]


class ItemListResponse(BaseModel):
    data: List[ItemResponse]
