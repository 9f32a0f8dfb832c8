"""
Tenant schema models
These tables exist once per company schema; the session decides which one
"""
import uuid
from sqlalchemy import Column, String, Boolean, Integer, Numeric, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from saas_console.core.database import TenantBase
from saas_console.models.base import TimestampMixin, TenantTableMixin


class User(TenantBase, TimestampMixin, TenantTableMixin):
    """
    Company user - membership of an email in this tenant
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # Role within the company (admin, user)
    role = Column(String(50), nullable=False, default="user")
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"


class Category(TenantBase, TimestampMixin, TenantTableMixin):
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    items = relationship("Item", back_populates="category")

    def __repr__(self):
        return f"<Category {self.name}>"


class Item(TenantBase, TimestampMixin, TenantTableMixin):
    """
    Inventory item, optionally filed under a category
    """

    __tablename__ = "items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(
        Uuid,
        ForeignKey("tenant.categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    price = Column(Numeric(12, 2), nullable=False, default=0)
    quantity = Column(Integer, nullable=False, default=0)

    category = relationship("Category", back_populates="items")

    def __repr__(self):
        return f"<Item {self.name} x{self.quantity}>"
