"""Subscription management endpoints (super-admin)"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from saas_console.core.database import get_db
from saas_console.core.principal import SuperAdminPrincipal
from saas_console.core.security import require_superadmin
from saas_console.models.company import Company
from saas_console.models.package import Package, Subscription
from saas_console.schemas.package import (
    SubscriptionCreate,
    SubscriptionResponse,
    SubscriptionListResponse,
    SubscriptionCompany,
    SubscriptionPackage,
)
from saas_console.utils.date import add_months, isoformat_or_none
from saas_console.api.v1.endpoints.helpers import parse_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/superadmin/subscriptions", tags=["Subscriptions"])


def _to_subscription_response(subscription: Subscription) -> SubscriptionResponse:
    company = subscription.company
    package = subscription.package
    return SubscriptionResponse(
        id=str(subscription.id),
        companyId=str(subscription.company_id),
        packageId=str(subscription.package_id),
        startDate=subscription.start_date.isoformat(),
        endDate=subscription.end_date.isoformat(),
        isActive=subscription.is_active,
        company=SubscriptionCompany(name=company.name, slug=company.slug) if company else None,
        package=SubscriptionPackage(name=package.name, duration=package.duration) if package else None,
        createdAt=isoformat_or_none(subscription.created_at),
    )


@router.get("", response_model=SubscriptionListResponse)
def list_subscriptions(
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    subscriptions = (
        db.query(Subscription)
        .options(joinedload(Subscription.company), joinedload(Subscription.package))
        .order_by(Subscription.created_at.desc())
        .all()
    )
    return SubscriptionListResponse(data=[_to_subscription_response(s) for s in subscriptions])


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
def create_subscription(
    payload: SubscriptionCreate,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    """
    Assign a package to a verified company
    Without an end date the period runs for the package duration
    """
    company_id = parse_uuid(payload.companyId, "companyId")
    package_id = parse_uuid(payload.packageId, "packageId")

    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
    if not company.is_verified:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only verified companies can be subscribed",
        )

    package = db.query(Package).filter(Package.id == package_id).first()
    if not package:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Package not found")

    end_date = payload.endDate or add_months(payload.startDate, package.duration)
    if end_date <= payload.startDate:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="End date must be after start date",
        )

    subscription = Subscription(
        company_id=company.id,
        package_id=package.id,
        start_date=payload.startDate,
        end_date=end_date,
    )

    db.add(subscription)
    db.commit()
    db.refresh(subscription)
    logger.info("Subscribed %s to %s until %s", company.slug, package.name, end_date)

    return _to_subscription_response(subscription)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(
    subscription_id: UUID,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    subscription = db.query(Subscription).filter(Subscription.id == subscription_id).first()
    if not subscription:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscription not found")

    db.delete(subscription)
    db.commit()

    return None
