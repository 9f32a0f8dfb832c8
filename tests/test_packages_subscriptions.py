"""Packages and subscriptions (super-admin)"""
from datetime import date, timedelta

PACKAGES = "/api/v1/superadmin/packages"
SUBSCRIPTIONS = "/api/v1/superadmin/subscriptions"


def create_package(client, headers, **overrides):
    payload = {"name": "Starter"}
    payload.update(overrides)
    return client.post(PACKAGES, json=payload, headers=headers)


class TestPackages:

    def test_defaults(self, client, superadmin_headers):
        response = create_package(client, superadmin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["duration"] == 12
        assert body["options_json"] == {
            "can_create": True,
            "can_edit": True,
            "can_delete": True,
            "max_users": 10,
            "max_items": 1000,
        }

    def test_duplicate_name(self, client, superadmin_headers):
        create_package(client, superadmin_headers)

        assert create_package(client, superadmin_headers).status_code == 409

    def test_update_options(self, client, superadmin_headers):
        package_id = create_package(client, superadmin_headers).json()["id"]

        response = client.put(
            f"{PACKAGES}/{package_id}",
            json={"duration": 6, "options_json": {"can_delete": False, "max_users": 3}},
            headers=superadmin_headers,
        )

        body = response.json()
        assert body["duration"] == 6
        assert body["options_json"]["can_delete"] is False
        assert body["options_json"]["max_users"] == 3
        assert body["options_json"]["max_items"] == 1000

    def test_list(self, client, superadmin_headers):
        create_package(client, superadmin_headers, name="Starter")
        create_package(client, superadmin_headers, name="Business")

        names = {p["name"] for p in client.get(PACKAGES, headers=superadmin_headers).json()["data"]}

        assert names == {"Starter", "Business"}

    def test_delete_unused(self, client, superadmin_headers):
        package_id = create_package(client, superadmin_headers).json()["id"]

        assert client.delete(f"{PACKAGES}/{package_id}", headers=superadmin_headers).status_code == 204
        assert client.get(f"{PACKAGES}/{package_id}", headers=superadmin_headers).status_code == 404

    def test_package_in_use_cannot_be_deleted(self, client, superadmin_headers, make_company):
        company = make_company("acme")
        package_id = create_package(client, superadmin_headers).json()["id"]
        client.post(
            SUBSCRIPTIONS,
            json={"companyId": str(company.id), "packageId": package_id},
            headers=superadmin_headers,
        )

        response = client.delete(f"{PACKAGES}/{package_id}", headers=superadmin_headers)

        assert response.status_code == 409


class TestSubscriptions:

    def test_end_date_defaults_to_package_duration(self, client, superadmin_headers, make_company):
        company = make_company("acme")
        package_id = create_package(client, superadmin_headers, duration=3).json()["id"]

        response = client.post(
            SUBSCRIPTIONS,
            json={"companyId": str(company.id), "packageId": package_id, "startDate": "2026-01-31"},
            headers=superadmin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["startDate"] == "2026-01-31"
        assert body["endDate"] == "2026-04-30"
        assert body["company"] == {"name": "Acme", "slug": "acme"}
        assert body["package"] == {"name": "Starter", "duration": 3}

    def test_is_active_follows_end_date(self, client, superadmin_headers, make_company):
        company = make_company("acme")
        package_id = create_package(client, superadmin_headers).json()["id"]
        today = date.today()

        past = client.post(
            SUBSCRIPTIONS,
            json={
                "companyId": str(company.id),
                "packageId": package_id,
                "startDate": (today - timedelta(days=60)).isoformat(),
                "endDate": (today - timedelta(days=1)).isoformat(),
            },
            headers=superadmin_headers,
        ).json()
        current = client.post(
            SUBSCRIPTIONS,
            json={"companyId": str(company.id), "packageId": package_id},
            headers=superadmin_headers,
        ).json()

        assert past["isActive"] is False
        assert current["isActive"] is True

    def test_end_must_follow_start(self, client, superadmin_headers, make_company):
        company = make_company("acme")
        package_id = create_package(client, superadmin_headers).json()["id"]

        response = client.post(
            SUBSCRIPTIONS,
            json={
                "companyId": str(company.id),
                "packageId": package_id,
                "startDate": "2026-05-01",
                "endDate": "2026-05-01",
            },
            headers=superadmin_headers,
        )

        assert response.status_code == 422

    def test_unverified_company_rejected(self, client, superadmin_headers, make_company):
        company = make_company("pending", verified=False)
        package_id = create_package(client, superadmin_headers).json()["id"]

        response = client.post(
            SUBSCRIPTIONS,
            json={"companyId": str(company.id), "packageId": package_id},
            headers=superadmin_headers,
        )

        assert response.status_code == 400

    def test_unknown_package(self, client, superadmin_headers, make_company):
        company = make_company("acme")

        response = client.post(
            SUBSCRIPTIONS,
            json={"companyId": str(company.id), "packageId": "00000000-0000-0000-0000-000000000000"},
            headers=superadmin_headers,
        )

        assert response.status_code == 404

    def test_list_and_delete(self, client, superadmin_headers, make_company):
        company = make_company("acme")
        package_id = create_package(client, superadmin_headers).json()["id"]
        subscription_id = client.post(
            SUBSCRIPTIONS,
            json={"companyId": str(company.id), "packageId": package_id},
            headers=superadmin_headers,
        ).json()["id"]

        listed = client.get(SUBSCRIPTIONS, headers=superadmin_headers).json()["data"]
        assert [s["id"] for s in listed] == [subscription_id]

        assert client.delete(f"{SUBSCRIPTIONS}/{subscription_id}", headers=superadmin_headers).status_code == 204
        assert client.get(SUBSCRIPTIONS, headers=superadmin_headers).json()["data"] == []
