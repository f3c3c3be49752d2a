"""HTTP-level tests: authentication, role gating and error mapping."""
from __future__ import annotations

from funeral_desk.core.security import AuthenticatedUser


def test_health_and_root_need_no_token(client) -> None:
    assert client.get("/health").json()["status"] == "ok"
    assert client.get("/").status_code == 200


def test_login_returns_token_and_profile(client) -> None:
    response = client.post("/auth/login", json={"username": "admin@example.com", "password": "secret"})

    assert response.status_code == 200
    body = response.json()
    assert body["user"] == {"staff_id": "S001", "name": "Admin", "role": "Administrator"}

    cases = client.get("/cases", headers={"Authorization": f"Bearer {body['token']}"})
    assert cases.status_code == 200
    assert cases.json()["cases"] == []


def test_login_with_bad_password_is_unauthorized(client) -> None:
    response = client.post("/auth/login", json={"username": "S001", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid username or password."


def test_missing_or_invalid_token_is_unauthorized(client) -> None:
    assert client.get("/cases").status_code == 401
    response = client.get("/cases", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token."


def test_admin_routes_require_administrator_role(client, auth_headers, staff_user, admin_user) -> None:
    assert client.get("/admin/vendors", headers=auth_headers(staff_user)).status_code == 403

    response = client.get("/admin/vendors", headers=auth_headers(admin_user))
    assert response.status_code == 200
    assert response.json()["data"][0]["vendor_id"] == "V25-001"


def test_admin_can_add_vendor_and_update_material(client, auth_headers, admin_user) -> None:
    headers = auth_headers(admin_user)

    created = client.post(
        "/admin/vendors", json={"name": "Harmony Supplies", "contact_person": "Ms. Lee"}, headers=headers
    )
    assert created.status_code == 201
    assert created.json()["vendor_id"] == "V25-002"

    updated = client.put(
        "/admin/inventory/master", json={"material_id": "M01", "current_cost": "120"}, headers=headers
    )
    assert updated.status_code == 200
    assert updated.json()["updated_cost"] == "120"


def test_case_to_report_flow(client, auth_headers, staff_user) -> None:
    headers = auth_headers(staff_user)

    created = client.post("/cases/add", json={"informer": "Mrs. Lee", "staff": "Lin Mei"}, headers=headers)
    assert created.status_code == 201
    case_id = created.json()["case_id"]
    assert case_id == "P25-001"

    contract = client.post(
        "/contracts/add",
        json={"case_id": case_id, "items": [{"description": "Package A", "price": 50000}]},
        headers=headers,
    )
    assert contract.status_code == 201
    assert contract.json()["total_fee"] == "50000"

    for amount in ("20000", "10000"):
        paid = client.post(
            "/payment/record",
            json={"case_id": case_id, "amount": amount, "type": "Deposit", "payment_method": "Cash"},
            headers=headers,
        )
        assert paid.status_code == 201

    consumed = client.post(
        "/inventory/consume",
        json={"case_id": case_id, "items": [{"material_id": "M01", "quantity": 5}]},
        headers=headers,
    )
    assert consumed.status_code == 201
    assert consumed.json()["total_cost"] == "500"

    report = client.get("/report/query", params={"case_id": "p25"}, headers=headers)
    assert report.status_code == 200
    [record] = report.json()["data"]
    assert record["collected"] == "30000"
    assert record["outstanding"] == "20000"
    assert record["net_profit"] == "49500"
    assert record["profit_margin"] == "99.00%"


def test_report_query_without_match_is_not_found(client, auth_headers, staff_user) -> None:
    response = client.get("/report/query", params={"case_id": "X"}, headers=auth_headers(staff_user))
    assert response.status_code == 404
    assert response.json()["message"] == "No cases match the query."


def test_missing_body_field_is_bad_request(client, auth_headers, staff_user) -> None:
    response = client.post("/cases/add", json={"staff": "Lin Mei"}, headers=auth_headers(staff_user))

    assert response.status_code == 400
    assert response.json()["field"] == "informer"


def test_unknown_case_reference_is_not_found(client, auth_headers, staff_user) -> None:
    response = client.post(
        "/payment/record",
        json={"case_id": "P25-404", "amount": "100", "type": "Deposit", "payment_method": "Cash"},
        headers=auth_headers(staff_user),
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Case P25-404 does not exist."


def test_schedule_apply_uses_token_identity(client, auth_headers) -> None:
    user = AuthenticatedUser(staff_id="S002", name="Lin Mei", role="Funeral director")
    headers = auth_headers(user)

    created = client.post("/schedule/apply", json={"date": "2025-03-20", "shift_type": "Leave"}, headers=headers)
    assert created.status_code == 201

    entries = client.get("/schedule", headers=headers).json()["data"]
    assert entries[0]["staff_id"] == "S002"


def test_memorial_date_endpoint(client, auth_headers, staff_user) -> None:
    response = client.post(
        "/reminder/calculate-date",
        json={"start_date": "2025-01-01", "type": "forty_nine_days"},
        headers=auth_headers(staff_user),
    )
    assert response.status_code == 200
    assert response.json()["result_date"] == "2025-02-18"


def test_very_large_contract_fee_survives_report_listing(client, auth_headers, staff_user) -> None:
    headers = auth_headers(staff_user)
    case_id = client.post(
        "/cases/add", json={"informer": "Mrs. Lee", "staff": "Lin Mei"}, headers=headers
    ).json()["case_id"]

    contract = client.post(
        "/contracts/add",
        json={"case_id": case_id, "items": [{"description": "Estate", "price": "1e29"}]},
        headers=headers,
    )
    assert contract.status_code == 201
    assert contract.json()["total_fee"] == "1" + "0" * 29

    report = client.get("/report/cases", headers=headers)
    assert report.status_code == 200
    [record] = report.json()["data"]
    assert record["contract_fee"] == "1" + "0" * 29
    assert record["profit_margin"] == "100.00%"


def test_consume_with_only_zero_quantities_is_bad_request(client, auth_headers, staff_user) -> None:
    headers = auth_headers(staff_user)
    case_id = client.post(
        "/cases/add", json={"informer": "Mrs. Lee", "staff": "Lin Mei"}, headers=headers
    ).json()["case_id"]

    response = client.post(
        "/inventory/consume",
        json={"case_id": case_id, "items": [{"material_id": "M01", "quantity": 0}]},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["field"] == "items"
    logs = client.get("/inventory/logs", params={"case_id": case_id}, headers=headers)
    assert logs.json()["data"] == []
