"""Platform user directory (super-admin)"""
from saas_console.models.user import AuthAccount, SuperAdmin

from conftest import bearer

BASE = "/api/v1/superadmin/users"
COMPANIES = "/api/v1/superadmin/companies"


class TestCreateUser:

    def test_company_user_gets_login_account(self, client, db, superadmin_headers, make_company):
        company = make_company("acme")

        response = client.post(
            BASE,
            json={"name": "Jane Doe", "email": "Jane@Acme.com", "company_id": str(company.id)},
            headers=superadmin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "jane@acme.com"
        assert body["user_type"] == "company_user"
        assert body["company"] == {"name": "Acme", "slug": "acme"}

        db.expire_all()
        assert db.query(AuthAccount).filter(AuthAccount.email == "jane@acme.com").first()

    def test_company_user_requires_company(self, client, superadmin_headers):
        response = client.post(
            BASE,
            json={"name": "Jane Doe", "email": "jane@acme.com"},
            headers=superadmin_headers,
        )

        assert response.status_code == 422

    def test_company_must_be_verified(self, client, superadmin_headers, make_company):
        company = make_company("pending", verified=False)

        response = client.post(
            BASE,
            json={"name": "Jane Doe", "email": "jane@pending.com", "company_id": str(company.id)},
            headers=superadmin_headers,
        )

        assert response.status_code == 400

    def test_superadmin_type_is_registered(self, client, db, superadmin_headers, login):
        response = client.post(
            BASE,
            json={"name": "Second Admin", "email": "ops@platform.io", "user_type": "superadmin"},
            headers=superadmin_headers,
        )

        assert response.status_code == 201
        assert response.json()["company_id"] is None

        db.expire_all()
        assert db.query(SuperAdmin).filter(SuperAdmin.email == "ops@platform.io").first()
        signed_in = login("ops@platform.io", "TempPassword123!")
        assert signed_in.json()["session"]["userType"] == "superadmin"

    def test_duplicate_email(self, client, superadmin_headers):
        payload = {"name": "Ops", "email": "ops@platform.io", "user_type": "superadmin"}
        client.post(BASE, json=payload, headers=superadmin_headers)

        assert client.post(BASE, json=payload, headers=superadmin_headers).status_code == 409


class TestManageUser:

    def _create(self, client, headers):
        return client.post(
            BASE,
            json={"name": "Ops", "email": "ops@platform.io", "user_type": "superadmin"},
            headers=headers,
        ).json()["id"]

    def test_toggle_status_follows_login_account(self, client, db, superadmin_headers):
        user_id = self._create(client, superadmin_headers)

        response = client.patch(f"{BASE}/{user_id}/status", headers=superadmin_headers)

        assert response.json()["is_active"] is False
        db.expire_all()
        account = db.query(AuthAccount).filter(AuthAccount.email == "ops@platform.io").one()
        assert account.is_active is False

    def test_password_change(self, client, superadmin_headers, login):
        user_id = self._create(client, superadmin_headers)

        response = client.put(
            f"{BASE}/{user_id}/password",
            json={"password": "BrandNew123", "confirmPassword": "BrandNew123"},
            headers=superadmin_headers,
        )

        assert response.status_code == 200
        assert login("ops@platform.io", "BrandNew123").status_code == 200

    def test_password_mismatch(self, client, superadmin_headers):
        user_id = self._create(client, superadmin_headers)

        response = client.put(
            f"{BASE}/{user_id}/password",
            json={"password": "BrandNew123", "confirmPassword": "BrandNew124"},
            headers=superadmin_headers,
        )

        assert response.status_code == 422

    def test_password_too_short(self, client, superadmin_headers):
        user_id = self._create(client, superadmin_headers)

        response = client.put(
            f"{BASE}/{user_id}/password",
            json={"password": "short", "confirmPassword": "short"},
            headers=superadmin_headers,
        )

        assert response.status_code == 422

    def test_update_and_delete(self, client, db, superadmin_headers, make_company):
        company = make_company("acme")
        user_id = self._create(client, superadmin_headers)

        updated = client.put(
            f"{BASE}/{user_id}",
            json={"user_type": "company_admin", "company_id": str(company.id)},
            headers=superadmin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["user_type"] == "company_admin"

        db.expire_all()
        assert db.query(SuperAdmin).filter(SuperAdmin.email == "ops@platform.io").first() is None

        assert client.delete(f"{BASE}/{user_id}", headers=superadmin_headers).status_code == 204
        assert client.get(f"{BASE}/{user_id}", headers=superadmin_headers).status_code == 404

    def test_list(self, client, superadmin_headers):
        self._create(client, superadmin_headers)

        users = client.get(BASE, headers=superadmin_headers).json()["data"]

        assert [u["email"] for u in users] == ["ops@platform.io"]


class TestRevokedSuperadmin:

    def _signed_in_ops(self, client, superadmin_headers, login):
        user_id = client.post(
            BASE,
            json={"name": "Ops", "email": "ops@platform.io", "user_type": "superadmin"},
            headers=superadmin_headers,
        ).json()["id"]
        headers = bearer(login("ops@platform.io", "TempPassword123!"))
        assert client.get(COMPANIES, headers=headers).status_code == 200
        return user_id, headers

    def test_deleted_superadmin_loses_access(self, client, superadmin_headers, login):
        user_id, headers = self._signed_in_ops(client, superadmin_headers, login)

        client.delete(f"{BASE}/{user_id}", headers=superadmin_headers)

        response = client.get(COMPANIES, headers=headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Super-admin access revoked"

    def test_demoted_superadmin_loses_access(self, client, superadmin_headers, login, make_company):
        company = make_company("acme")
        user_id, headers = self._signed_in_ops(client, superadmin_headers, login)

        client.put(
            f"{BASE}/{user_id}",
            json={"user_type": "company_user", "company_id": str(company.id)},
            headers=superadmin_headers,
        )

        assert client.get(COMPANIES, headers=headers).status_code == 403
        assert client.get(COMPANIES, headers=superadmin_headers).status_code == 200
