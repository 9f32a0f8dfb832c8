"""Category endpoints (tenant schema)"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from saas_console.core.dependencies import get_tenant_db, require_entitlement
from saas_console.models.tenant import Category
from saas_console.schemas.catalog import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse,
)
from saas_console.utils.date import isoformat_or_none

router = APIRouter(prefix="/company/categories", tags=["Categories"])


def _to_category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        description=category.description,
        createdAt=isoformat_or_none(category.created_at),
    )


def _get_category_or_404(tenant_db: Session, category_id: UUID) -> Category:
    category = tenant_db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


@router.get("", response_model=CategoryListResponse)
def list_categories(tenant_db: Session = Depends(get_tenant_db)):
    categories = tenant_db.query(Category).order_by(Category.created_at.desc()).all()
    return CategoryListResponse(data=[_to_category_response(c) for c in categories])


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: UUID, tenant_db: Session = Depends(get_tenant_db)):
    return _to_category_response(_get_category_or_404(tenant_db, category_id))


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_entitlement("create"))],
)
def create_category(payload: CategoryCreate, tenant_db: Session = Depends(get_tenant_db)):
    category = Category(name=payload.name, description=payload.description)

    tenant_db.add(category)
    tenant_db.commit()
    tenant_db.refresh(category)

    return _to_category_response(category)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    dependencies=[Depends(require_entitlement("edit"))],
)
def update_category(
    category_id: UUID,
    payload: CategoryUpdate,
    tenant_db: Session = Depends(get_tenant_db),
):
    category = _get_category_or_404(tenant_db, category_id)

    update_data = payload.model_dump(exclude_unset=True)
    if update_data.get("name") is not None:
        category.name = update_data["name"]
    if "description" in update_data:
        category.description = update_data["description"]

    tenant_db.commit()
    tenant_db.refresh(category)

    return _to_category_response(category)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_entitlement("delete"))],
)
def delete_category(category_id: UUID, tenant_db: Session = Depends(get_tenant_db)):
    """Items filed under the category are kept without one"""
    category = _get_category_or_404(tenant_db, category_id)

    tenant_db.delete(category)
    tenant_db.commit()

    return None
