"""Company management (super-admin)"""
from saas_console.core.exceptions import TenantSchemaError
from saas_console.models.company import Company
from saas_console.models.tenant import User
from saas_console.models.user import AuthAccount

BASE = "/api/v1/superadmin/companies"


def create(client, headers, **overrides):
    payload = {"name": "Test Company 01", "slug": "testco01", "adminEmail": "Admin01@TestCo01.com"}
    payload.update(overrides)
    return client.post(BASE, json=payload, headers=headers)


class TestCreateCompany:

    def test_create_provisions_schema(self, client, superadmin_headers, tenants):
        response = create(client, superadmin_headers, slug="test-co")

        assert response.status_code == 201
        body = response.json()
        assert body["slug"] == "test-co"
        assert body["schemaName"] == "saas01_test_co"
        assert body["adminEmail"] == "admin01@testco01.com"
        assert body["isVerified"] is False
        assert "saas01_test_co" in tenants.engines

    def test_create_seeds_admin_and_login_account(self, client, db, superadmin_headers, tenants):
        create(client, superadmin_headers)

        with tenants.open("saas01_testco01") as tenant_db:
            admin = tenant_db.query(User).one()
        assert admin.email == "admin01@testco01.com"
        assert admin.role == "admin"

        db.expire_all()
        assert db.query(AuthAccount).filter(AuthAccount.email == "admin01@testco01.com").first()

    def test_duplicate_slug(self, client, superadmin_headers):
        create(client, superadmin_headers)

        response = create(client, superadmin_headers, name="Other")

        assert response.status_code == 409

    def test_invalid_slug(self, client, superadmin_headers):
        response = create(client, superadmin_headers, slug="Bad Slug!")

        assert response.status_code == 422

    def test_requires_superadmin(self, client):
        assert create(client, {}).status_code in (401, 403)

    def test_schema_conflict_provisions_nothing(self, client, db, superadmin_headers, tenants):
        db.add(Company(
            name="Legacy",
            slug="legacy",
            schema_name="saas01_testco01",
            admin_email="admin@legacy.com",
        ))
        db.commit()

        response = create(client, superadmin_headers)

        assert response.status_code == 409
        assert "saas01_testco01" not in tenants.engines

    def test_failed_provisioning_keeps_no_company(self, client, db, superadmin_headers, monkeypatch):
        def fail(schema_name):
            raise TenantSchemaError(f"Could not provision schema {schema_name}")

        monkeypatch.setattr("saas_console.api.v1.endpoints.companies.provision_tenant_schema", fail)

        response = create(client, superadmin_headers)

        assert response.status_code == 500
        db.expire_all()
        assert db.query(Company).filter(Company.slug == "testco01").first() is None
        assert db.query(AuthAccount).filter(AuthAccount.email == "admin01@testco01.com").first() is None


class TestManageCompany:

    def test_list_filters_on_verification(self, client, superadmin_headers, make_company):
        make_company("verified-co")
        make_company("pending-co", verified=False)

        everything = client.get(BASE, headers=superadmin_headers).json()["data"]
        pending = client.get(BASE, params={"isVerified": False}, headers=superadmin_headers).json()["data"]

        assert {c["slug"] for c in everything} == {"verified-co", "pending-co"}
        assert [c["slug"] for c in pending] == ["pending-co"]

    def test_toggle_verification(self, client, superadmin_headers):
        company_id = create(client, superadmin_headers).json()["id"]

        first = client.patch(f"{BASE}/{company_id}/verification", headers=superadmin_headers)
        second = client.patch(f"{BASE}/{company_id}/verification", headers=superadmin_headers)

        assert first.json()["isVerified"] is True
        assert second.json()["isVerified"] is False

    def test_verified_company_admin_can_sign_in(self, client, superadmin_headers, login):
        company_id = create(client, superadmin_headers).json()["id"]
        client.patch(f"{BASE}/{company_id}/verification", headers=superadmin_headers)

        response = login("admin01@testco01.com", "TempPassword123!")

        assert response.status_code == 200
        assert response.json()["session"]["company"]["slug"] == "testco01"

    def test_update(self, client, superadmin_headers):
        company_id = create(client, superadmin_headers).json()["id"]

        response = client.patch(
            f"{BASE}/{company_id}",
            json={"name": "Renamed Co"},
            headers=superadmin_headers,
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed Co"
        assert response.json()["slug"] == "testco01"

    def test_get_and_delete(self, client, superadmin_headers):
        company_id = create(client, superadmin_headers).json()["id"]

        assert client.get(f"{BASE}/{company_id}", headers=superadmin_headers).status_code == 200
        assert client.delete(f"{BASE}/{company_id}", headers=superadmin_headers).status_code == 204
        assert client.get(f"{BASE}/{company_id}", headers=superadmin_headers).status_code == 404
