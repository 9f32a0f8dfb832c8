"""Role-gated routing"""
import uuid

import pytest

from saas_console.core.principal import (
    CompanyPrincipal,
    SuperAdminPrincipal,
    TenantInfo,
    Unauthenticated,
)
from saas_console.services.navigation import (
    COMPANY_HOME,
    SUPERADMIN_HOME,
    RouteState,
    View,
    normalize_path,
    resolve_route,
    route_state,
)

ADMIN = SuperAdminPrincipal(email="root@platform.io")
MEMBER = CompanyPrincipal(
    email="owner@acme.com",
    tenant=TenantInfo(id=uuid.uuid4(), name="Acme", slug="acme", schema_name="saas01_acme"),
)
ANONYMOUS = Unauthenticated()

ALL_PATHS = ["/", "/login", SUPERADMIN_HOME, COMPANY_HOME, "/reports", "/superadmin/extra"]


@pytest.mark.parametrize("path", ALL_PATHS)
@pytest.mark.parametrize("principal", [ADMIN, MEMBER, ANONYMOUS])
def test_loading_always_renders_loading_view(principal, path):
    decision = resolve_route(principal, path, loading=True)

    assert decision.state is RouteState.LOADING
    assert decision.view is View.LOADING
    assert not decision.is_redirect


@pytest.mark.parametrize("path", ALL_PATHS)
def test_unauthenticated_always_sees_login(path):
    decision = resolve_route(ANONYMOUS, path)

    assert decision.view is View.LOGIN
    assert not decision.is_redirect


def test_superadmin_routes():
    assert resolve_route(ADMIN, "/").redirect_to == SUPERADMIN_HOME
    assert resolve_route(ADMIN, "/login").redirect_to == "/"
    assert resolve_route(ADMIN, SUPERADMIN_HOME).view is View.SUPERADMIN_DASHBOARD
    assert resolve_route(ADMIN, COMPANY_HOME).redirect_to == SUPERADMIN_HOME
    assert resolve_route(ADMIN, "/reports").redirect_to == "/"


def test_company_routes():
    assert resolve_route(MEMBER, "/").redirect_to == COMPANY_HOME
    assert resolve_route(MEMBER, "/login").redirect_to == "/"
    assert resolve_route(MEMBER, COMPANY_HOME).view is View.COMPANY_DASHBOARD
    assert resolve_route(MEMBER, SUPERADMIN_HOME).redirect_to == COMPANY_HOME
    assert resolve_route(MEMBER, "/reports").redirect_to == "/"


@pytest.mark.parametrize("principal", [ADMIN, MEMBER])
def test_no_role_reaches_the_other_dashboard(principal):
    for path in ALL_PATHS:
        decision = resolve_route(principal, path)
        if principal is ADMIN:
            assert decision.view is not View.COMPANY_DASHBOARD
        else:
            assert decision.view is not View.SUPERADMIN_DASHBOARD


@pytest.mark.parametrize("principal", [ADMIN, MEMBER])
def test_redirects_settle_on_a_dashboard(principal):
    decision = resolve_route(principal, "/anything/else")
    hops = 0
    while decision.is_redirect:
        decision = resolve_route(principal, decision.redirect_to)
        hops += 1
        assert hops <= 3

    expected = View.SUPERADMIN_DASHBOARD if principal is ADMIN else View.COMPANY_DASHBOARD
    assert decision.view is expected


def test_normalize_path():
    assert normalize_path(None) == "/"
    assert normalize_path("") == "/"
    assert normalize_path("superadmin/") == "/superadmin"
    assert normalize_path("/company?tab=items") == "/company"
    assert normalize_path("/#top") == "/"


def test_route_state_rejects_unknown_principal():
    with pytest.raises(TypeError):
        route_state(object())


class TestNavigationEndpoint:

    def test_anonymous(self, client):
        response = client.get("/api/v1/navigation", params={"path": "/superadmin"})

        assert response.status_code == 200
        assert response.json() == {
            "path": "/superadmin",
            "state": "unauthenticated",
            "view": "login",
            "redirectTo": None,
        }

    def test_invalid_token_counts_as_anonymous(self, client):
        response = client.get(
            "/api/v1/navigation",
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.json()["state"] == "unauthenticated"

    def test_superadmin_root_redirects_home(self, client, superadmin_headers):
        response = client.get("/api/v1/navigation", params={"path": "/"}, headers=superadmin_headers)

        body = response.json()
        assert body["state"] == "superadmin"
        assert body["redirectTo"] == "/superadmin"

    def test_loading_flag(self, client, superadmin_headers):
        response = client.get(
            "/api/v1/navigation",
            params={"path": "/company", "loading": True},
            headers=superadmin_headers,
        )

        assert response.json()["view"] == "loading"


def test_missing_principal_is_unauthenticated():
    assert resolve_route(None, "/company").view is View.LOGIN
