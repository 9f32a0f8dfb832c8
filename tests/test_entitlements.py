"""Package-derived entitlements"""
from datetime import date, timedelta

import pytest

from saas_console.core.exceptions import EntitlementError
from saas_console.models.package import Package, Subscription
from saas_console.services.entitlements import Entitlements, active_subscription, entitlements_for


def test_allows_and_check():
    entitlements = Entitlements(can_delete=False, package_name="Basic")

    assert entitlements.allows("create")
    assert not entitlements.allows("delete")
    with pytest.raises(EntitlementError, match="Basic"):
        entitlements.check("delete")


def test_unknown_action():
    with pytest.raises(ValueError):
        Entitlements().allows("archive")


def test_check_limit():
    entitlements = Entitlements(max_users=2)

    entitlements.check_limit("users", 1)
    with pytest.raises(EntitlementError):
        entitlements.check_limit("users", 2)


def test_defaults_without_subscription(db, make_company):
    company = make_company("acme")

    entitlements = entitlements_for(db, company.id)

    assert entitlements.can_create and entitlements.can_edit and entitlements.can_delete
    assert entitlements.max_users == 10
    assert entitlements.max_items == 1000
    assert entitlements.package_name is None


def test_latest_ending_active_subscription_wins(db, make_company):
    company = make_company("acme")
    today = date(2026, 6, 1)
    short = Package(name="Short", duration=1, options_json={"max_items": 5})
    long = Package(name="Long", duration=12, options_json={"max_items": 50, "can_edit": False})
    db.add_all([short, long])
    db.commit()
    db.add_all([
        Subscription(company_id=company.id, package_id=short.id,
                     start_date=today, end_date=today + timedelta(days=10)),
        Subscription(company_id=company.id, package_id=long.id,
                     start_date=today, end_date=today + timedelta(days=300)),
    ])
    db.commit()

    entitlements = entitlements_for(db, company.id, today=today)

    assert entitlements.package_name == "Long"
    assert entitlements.max_items == 50
    assert entitlements.can_edit is False
    assert entitlements.max_users == 10


def test_subscription_ending_today_is_inactive(db, make_company):
    company = make_company("acme")
    today = date(2026, 6, 1)
    package = Package(name="Basic", duration=1)
    db.add(package)
    db.commit()
    db.add(Subscription(company_id=company.id, package_id=package.id,
                        start_date=today - timedelta(days=30), end_date=today))
    db.commit()

    assert active_subscription(db, company.id, today=today) is None
