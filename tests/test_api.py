"""End-to-end tests of the HTTP API against an in-memory database."""

from datetime import datetime, timezone

from fleet_ledger.models.cost import Cost
from fleet_ledger.models.photo import Photo

API = "/api/v1"

VEHICLE = {
    "make": "Renault",
    "model": "Clio",
    "year": 2018,
    "purchasePrice": 1_000_000,
    "mileage": 65_000,
}


def _create_vehicle(client, headers, **overrides):
    response = client.post(f"{API}/vehicles/", json={**VEHICLE, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _add_cost(client, headers, vehicle_id, amount, label="Repair", category="repair"):
    response = client.post(
        f"{API}/vehicles/{vehicle_id}/costs/",
        json={"label": label, "amount": amount, "category": category, "incurredAt": "2024-04-03T09:00:00"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestHealthAndAuth:
    def test_health(self, client):
        response = client.get(f"{API}/health/")
        assert response.status_code == 200
        assert response.json()["database"] == "online"

    def test_signup_then_login(self, client):
        signup = client.post(f"{API}/auth/signup", json={"email": "Ann@Example.com", "password": "long-enough"})
        assert signup.status_code == 201
        assert signup.json()["user"]["email"] == "ann@example.com"
        assert signup.json()["token_type"] == "bearer"

        login = client.post(f"{API}/auth/login", json={"email": "ann@example.com", "password": "long-enough"})
        assert login.status_code == 200
        token = login.json()["access_token"]

        me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "ann@example.com"
        assert me.json()["role"] == "seller"

    def test_duplicate_email(self, client, auth_headers):
        response = client.post(f"{API}/auth/signup", json={"email": "owner@example.com", "password": "another-pass"})
        assert response.status_code == 409

    def test_wrong_password(self, client, auth_headers):
        response = client.post(f"{API}/auth/login", json={"email": "owner@example.com", "password": "wrong-pass"})
        assert response.status_code == 401

    def test_short_password(self, client):
        response = client.post(f"{API}/auth/signup", json={"email": "a@b.io", "password": "short"})
        assert response.status_code == 422

    def test_missing_token(self, client):
        response = client.get(f"{API}/vehicles/")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_non_bearer_scheme(self, client):
        response = client.get(f"{API}/vehicles/", headers={"Authorization": "Basic b3duZXI6cGFzcw=="})
        assert response.status_code == 401

    def test_multibyte_password_within_72_bytes(self, client):
        password = "\u00e9" * 36  # 72 bytes in UTF-8
        signup = client.post(f"{API}/auth/signup", json={"email": "eve@example.com", "password": password})
        assert signup.status_code == 201

        login = client.post(f"{API}/auth/login", json={"email": "eve@example.com", "password": password})
        assert login.status_code == 200

    def test_password_over_72_bytes_is_rejected(self, client, auth_headers):
        password = "\u00e9" * 40  # 40 characters, 80 bytes
        signup = client.post(f"{API}/auth/signup", json={"email": "eve@example.com", "password": password})
        assert signup.status_code == 422

        login = client.post(f"{API}/auth/login", json={"email": "owner@example.com", "password": password})
        assert login.status_code == 422

    def test_invalid_token(self, client):
        response = client.get(f"{API}/vehicles/", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


class TestVehicles:
    def test_create_uses_camel_case_and_defaults(self, client, auth_headers):
        vehicle = _create_vehicle(client, auth_headers)

        assert vehicle["purchasePrice"] == 1_000_000
        assert vehicle["salePrice"] is None
        assert vehicle["status"] == "in_stock"
        assert "ownerId" in vehicle and "createdAt" in vehicle

    def test_negative_price_is_rejected(self, client, auth_headers):
        response = client.post(f"{API}/vehicles/", json={**VEHICLE, "purchasePrice": -1}, headers=auth_headers)
        assert response.status_code == 422

    def test_year_out_of_range_is_rejected(self, client, auth_headers):
        response = client.post(f"{API}/vehicles/", json={**VEHICLE, "year": 1850}, headers=auth_headers)
        assert response.status_code == 422

    def test_list_includes_totals_and_filters(self, client, auth_headers):
        clio = _create_vehicle(client, auth_headers)
        _create_vehicle(client, auth_headers, make="Peugeot", model="208", status="in_preparation")
        _add_cost(client, auth_headers, clio["id"], 20_000)

        vehicles = client.get(f"{API}/vehicles/", headers=auth_headers).json()
        assert len(vehicles) == 2
        listed_clio = next(v for v in vehicles if v["id"] == clio["id"])
        assert listed_clio["totalCost"] == 1_020_000
        assert listed_clio["margin"] is None

        by_status = client.get(f"{API}/vehicles/?status=in_preparation", headers=auth_headers).json()
        assert [v["make"] for v in by_status] == ["Peugeot"]

        by_make = client.get(f"{API}/vehicles/?make=REN", headers=auth_headers).json()
        assert [v["id"] for v in by_make] == [clio["id"]]

    def test_detail_with_costs_photos_and_margin(self, client, auth_headers):
        vehicle = _create_vehicle(client, auth_headers, salePrice=1_300_000)
        _add_cost(client, auth_headers, vehicle["id"], 50_000)
        _add_cost(client, auth_headers, vehicle["id"], 25_000, label="Truck", category="transport")
        client.post(f"{API}/vehicles/{vehicle['id']}/photos/",
                    json={"url": "https://img.example.com/front.jpg"}, headers=auth_headers)

        detail = client.get(f"{API}/vehicles/{vehicle['id']}", headers=auth_headers).json()

        assert detail["variableCosts"] == 75_000
        assert detail["totalCost"] == 1_075_000
        assert detail["margin"] == 225_000
        assert len(detail["costs"]) == 2
        assert detail["photos"][0]["url"] == "https://img.example.com/front.jpg"

    def test_update_and_clear_sale_price(self, client, auth_headers):
        vehicle = _create_vehicle(client, auth_headers, salePrice=1_300_000)
        url = f"{API}/vehicles/{vehicle['id']}"

        updated = client.put(url, json={"status": "sold", "make": None}, headers=auth_headers).json()
        assert updated["status"] == "sold"
        assert updated["make"] == "Renault"
        assert updated["salePrice"] == 1_300_000

        cleared = client.put(url, json={"salePrice": None}, headers=auth_headers).json()
        assert cleared["salePrice"] is None

    def test_delete_cascades_to_costs_and_photos(self, client, auth_headers, db_session):
        vehicle = _create_vehicle(client, auth_headers)
        _add_cost(client, auth_headers, vehicle["id"], 1_000)
        client.post(f"{API}/vehicles/{vehicle['id']}/photos/",
                    json={"url": "https://img.example.com/a.jpg"}, headers=auth_headers)

        response = client.delete(f"{API}/vehicles/{vehicle['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get(f"{API}/vehicles/{vehicle['id']}", headers=auth_headers).status_code == 404
        assert db_session.query(Cost).count() == 0
        assert db_session.query(Photo).count() == 0

    def test_vehicles_are_owner_scoped(self, client, auth_headers, other_auth_headers):
        vehicle = _create_vehicle(client, auth_headers)

        assert client.get(f"{API}/vehicles/", headers=other_auth_headers).json() == []
        for method, path in [
            ("get", f"/vehicles/{vehicle['id']}"),
            ("delete", f"/vehicles/{vehicle['id']}"),
            ("get", f"/vehicles/{vehicle['id']}/costs/"),
            ("get", f"/export/{vehicle['id']}/pdf"),
        ]:
            response = getattr(client, method)(f"{API}{path}", headers=other_auth_headers)
            assert response.status_code == 404, path


class TestCosts:
    def test_update_and_delete_cost(self, client, auth_headers):
        vehicle = _create_vehicle(client, auth_headers)
        cost = _add_cost(client, auth_headers, vehicle["id"], 10_000)
        url = f"{API}/vehicles/{vehicle['id']}/costs/{cost['id']}"

        updated = client.put(url, json={"amount": 12_500, "category": "admin"}, headers=auth_headers).json()
        assert updated["amount"] == 12_500
        assert updated["category"] == "admin"
        assert updated["label"] == "Repair"

        assert client.delete(url, headers=auth_headers).status_code == 204
        assert client.get(f"{API}/vehicles/{vehicle['id']}/costs/", headers=auth_headers).json() == []

    def test_unknown_category_is_rejected(self, client, auth_headers):
        vehicle = _create_vehicle(client, auth_headers)
        response = client.post(
            f"{API}/vehicles/{vehicle['id']}/costs/",
            json={"label": "Fuel", "amount": 100, "category": "fuel", "incurredAt": "2024-04-03T09:00:00"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_cost_of_another_vehicle_is_not_found(self, client, auth_headers):
        first = _create_vehicle(client, auth_headers)
        second = _create_vehicle(client, auth_headers)
        cost = _add_cost(client, auth_headers, first["id"], 10_000)

        response = client.delete(f"{API}/vehicles/{second['id']}/costs/{cost['id']}", headers=auth_headers)
        assert response.status_code == 404


class TestDashboard:
    def test_empty_dashboard(self, client, auth_headers):
        response = client.get(f"{API}/dashboard/", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "totalVehicles": 0,
            "statusBreakdown": [],
            "totals": {"purchase": 0, "sale": 0, "cost": 0, "potentialMargin": 0},
            "sales": {"totalRevenue": 0, "totalCosts": 0, "totalMargin": 0, "history": []},
        }

    def test_dashboard_after_a_sale(self, client, auth_headers, other_auth_headers):
        sold = _create_vehicle(client, auth_headers, salePrice=1_500_000)
        _add_cost(client, auth_headers, sold["id"], 200_000)
        client.put(f"{API}/vehicles/{sold['id']}", json={"status": "sold"}, headers=auth_headers)
        _create_vehicle(client, auth_headers, purchasePrice=500_000)
        # another merchant's fleet never leaks in
        _create_vehicle(client, other_auth_headers, salePrice=9_999_999)

        report = client.get(f"{API}/dashboard/?period=last_week", headers=auth_headers).json()

        month = datetime.now(timezone.utc).strftime("%Y-%m")
        assert report["totalVehicles"] == 2
        assert report["statusBreakdown"] == [
            {"status": "in_stock", "count": 1},
            {"status": "sold", "count": 1},
        ]
        assert report["totals"] == {"purchase": 500_000, "sale": 0, "cost": 1_700_000, "potentialMargin": 0}
        assert report["sales"] == {
            "totalRevenue": 1_500_000,
            "totalCosts": 1_200_000,
            "totalMargin": 300_000,
            "history": [{"month": month, "revenue": 1_500_000, "costs": 1_200_000, "margin": 300_000}],
        }

    def test_unknown_period(self, client, auth_headers):
        response = client.get(f"{API}/dashboard/?period=year", headers=auth_headers)
        assert response.status_code == 422


class TestExport:
    def test_pdf_download(self, client, auth_headers):
        vehicle = _create_vehicle(client, auth_headers, salePrice=1_100_000)
        _add_cost(client, auth_headers, vehicle["id"], 40_000)

        response = client.get(f"{API}/export/{vehicle['id']}/pdf", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == f'attachment; filename="vehicle-{vehicle["id"]}.pdf"'
        assert response.content.startswith(b"%PDF")


def test_inconsistent_financial_data_is_a_server_error(client, auth_headers, monkeypatch):
    from fleet_ledger.api.endpoints import dashboard
    from fleet_ledger.services.financials import InvalidFinancialInput

    def broken(*args, **kwargs):
        raise InvalidFinancialInput("amount must not be negative, got -1")

    monkeypatch.setattr(dashboard, "compute_dashboard", broken)

    response = client.get(f"{API}/dashboard/", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "Financial data is inconsistent"}
