"""Item endpoints (tenant schema)"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from saas_console.core.dependencies import enforce_limit, get_tenant_db, require_entitlement
from saas_console.models.tenant import Category, Item
from saas_console.schemas.catalog import (
    ItemCategoryRef,
    ItemCreate,
    ItemListResponse,
    ItemResponse,
    ItemUpdate,
)
from saas_console.services.entitlements import Entitlements
from saas_console.utils.date import isoformat_or_none
from saas_console.api.v1.endpoints.helpers import parse_uuid

router = APIRouter(prefix="/company/items", tags=["Items"])


def _to_item_response(item: Item) -> ItemResponse:
    return ItemResponse(
        id=str(item.id),
        name=item.name,
        description=item.description,
        category_id=str(item.category_id) if item.category_id else None,
        price=float(item.price or 0),
        quantity=item.quantity,
        categories=ItemCategoryRef(name=item.category.name) if item.category else None,
        createdAt=isoformat_or_none(item.created_at),
    )


def _get_item_or_404(tenant_db: Session, item_id: UUID) -> Item:
    item = tenant_db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


def _resolve_category(tenant_db: Session, category_id: Optional[str]) -> Optional[UUID]:
    """The referenced category must live in the same company schema"""
    parsed = parse_uuid(category_id, "category_id")
    if parsed is None:
        return None
    if not tenant_db.query(Category).filter(Category.id == parsed).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category not found",
        )
    return parsed


@router.get("", response_model=ItemListResponse)
def list_items(
    category_id: Optional[UUID] = None,
    tenant_db: Session = Depends(get_tenant_db),
):
    query = tenant_db.query(Item).options(joinedload(Item.category))

    if category_id is not None:
        query = query.filter(Item.category_id == category_id)

    items = query.order_by(Item.created_at.desc()).all()
    return ItemListResponse(data=[_to_item_response(i) for i in items])


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: UUID, tenant_db: Session = Depends(get_tenant_db)):
    return _to_item_response(_get_item_or_404(tenant_db, item_id))


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: ItemCreate,
    tenant_db: Session = Depends(get_tenant_db),
    entitlements: Entitlements = Depends(require_entitlement("create")),
):
    current_count = tenant_db.query(func.count(Item.id)).scalar() or 0
    enforce_limit(entitlements, "items", current_count)

    item = Item(
        name=payload.name,
        description=payload.description,
        category_id=_resolve_category(tenant_db, payload.category_id),
        price=payload.price,
        quantity=payload.quantity,
    )

    tenant_db.add(item)
    tenant_db.commit()
    tenant_db.refresh(item)

    return _to_item_response(item)


@router.put(
    "/{item_id}",
    response_model=ItemResponse,
    dependencies=[Depends(require_entitlement("edit"))],
)
def update_item(
    item_id: UUID,
    payload: ItemUpdate,
    tenant_db: Session = Depends(get_tenant_db),
):
    item = _get_item_or_404(tenant_db, item_id)

    update_data = payload.model_dump(exclude_unset=True)
    if update_data.get("name") is not None:
        item.name = update_data["name"]
    if "description" in update_data:
        item.description = update_data["description"]
    if "category_id" in update_data:
        item.category_id = _resolve_category(tenant_db, update_data["category_id"])
    if update_data.get("price") is not None:
        item.price = update_data["price"]
    if update_data.get("quantity") is not None:
        item.quantity = update_data["quantity"]

    tenant_db.commit()
    tenant_db.refresh(item)

    return _to_item_response(item)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_entitlement("delete"))],
)
def delete_item(item_id: UUID, tenant_db: Session = Depends(get_tenant_db)):
    item = _get_item_or_404(tenant_db, item_id)

    tenant_db.delete(item)
    tenant_db.commit()

    return None
