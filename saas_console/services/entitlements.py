"""
What a company may do, derived from its active subscription's package
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from saas_console.core.config import settings
from saas_console.core.exceptions import EntitlementError
from saas_console.models.package import DEFAULT_PACKAGE_OPTIONS, Subscription

ACTIONS = ("create", "edit", "delete")


@dataclass(frozen=True)
class Entitlements:
    can_create: bool = True
    can_edit: bool = True
    can_delete: bool = True
    max_users: int = DEFAULT_PACKAGE_OPTIONS["max_users"]
    max_items: int = DEFAULT_PACKAGE_OPTIONS["max_items"]
    package_name: Optional[str] = None
    subscription_end: Optional[date] = None

    def allows(self, action: str) -> bool:
        if action not in ACTIONS:
            raise ValueError(f"Unknown action: {action}")
        return getattr(self, f"can_{action}")

    def check(self, action: str) -> None:
        if not self.allows(action):
            plan = self.package_name or "current plan"
            raise EntitlementError(f"The {plan} package does not allow {action} operations")

    def check_limit(self, resource: str, current_count: int) -> None:
        limit = getattr(self, f"max_{resource}")
        if current_count >= limit:
            raise EntitlementError(f"Package limit reached: at most {limit} {resource}")


def active_subscription(
    db: Session, company_id: uuid.UUID, today: Optional[date] = None
) -> Optional[Subscription]:
    """Latest-ending subscription whose end date is still in the future"""
    today = today or date.today()
    return (
        db.query(Subscription)
        .filter(Subscription.company_id == company_id, Subscription.end_date > today)
        .order_by(Subscription.end_date.desc())
        .first()
    )


def entitlements_for(db: Session, company_id: uuid.UUID, today: Optional[date] = None) -> Entitlements:
    subscription = active_subscription(db, company_id, today)
    if subscription is None:
        return Entitlements(
            max_users=settings.DEFAULT_MAX_USERS,
            max_items=settings.DEFAULT_MAX_ITEMS,
        )

    options = {**DEFAULT_PACKAGE_OPTIONS, **(subscription.package.options_json or {})}
    return Entitlements(
        can_create=bool(options["can_create"]),
        can_edit=bool(options["can_edit"]),
        can_delete=bool(options["can_delete"]),
        max_users=int(options["max_users"]),
        max_items=int(options["max_items"]),
        package_name=subscription.package.name,
        subscription_end=subscription.end_date,
    )
