from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from financeflow.api.deps import get_gateway
from financeflow.db.settings import get_settings
from financeflow.main import app

USER = "user-1"
HEADERS = {"X-User-Id": USER}


@pytest.fixture
def client(gateway, settings):
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_healthcheck(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_gate_status_without_identity(client) -> None:
    response = client.get("/api/gate")

    assert response.json() == {"state": "unauthenticated", "redirect": "/auth"}


def test_protected_route_requires_identity(client) -> None:
    assert client.get("/api/transactions").status_code == 401


def test_gate_blocks_pending_and_unpaid_users(client, gateway) -> None:
    gateway.add_user("pending", activated=False)
    gateway.add_user("unpaid", subscription="inactive")
    gateway.add_user("disabled", is_active=False)

    pending = client.get("/api/transactions", headers={"X-User-Id": "pending"})
    unpaid = client.get("/api/transactions", headers={"X-User-Id": "unpaid"})
    disabled = client.get("/api/transactions", headers={"X-User-Id": "disabled"})

    assert pending.status_code == 403
    assert pending.json()["detail"] == {"state": "activation_pending", "redirect": "/pending-activation"}
    assert unpaid.status_code == 402
    assert unpaid.json()["detail"]["redirect"] == "/payment"
    assert disabled.status_code == 403
    assert disabled.json()["detail"]["state"] == "denied"


def test_transactions_feed_monthly_report(client, gateway) -> None:
    gateway.add_user(USER)
    food = gateway.add("categories", user_id=USER, name="Food & Dining", type="expense", icon="🍔", color="orange")

    for payload in (
        {"date": "2024-06-01", "type": "income", "amount": "1000"},
        {"date": "2024-06-05", "type": "expense", "amount": "300", "category_id": food["id"]},
        {"date": "2024-06-10", "type": "expense", "amount": "250", "category_id": food["id"]},
    ):
        assert client.post("/api/transactions", json=payload, headers=HEADERS).status_code == 201
    assert (
        client.post(
            "/api/budgets",
            json={"category_id": food["id"], "amount": "400", "month": "2024-06"},
            headers=HEADERS,
        ).status_code
        == 201
    )

    listed = client.get("/api/transactions", params={"month": "2024-06"}, headers=HEADERS)
    report = client.get("/api/reports/monthly", params={"month": "2024-06"}, headers=HEADERS).json()

    assert len(listed.json()) == 3
    assert Decimal(report["total_income"]) == Decimal("1000")
    assert Decimal(report["total_expense"]) == Decimal("550")
    assert Decimal(report["savings_rate"]) == Decimal("45")
    assert report["top_spending_category"]["name"] == "Food & Dining"
    assert report["over_budget"][0]["status"] == "over"
    assert Decimal(report["over_budget"][0]["actual_amount"]) == Decimal("550")


def test_invalid_month_and_payload_are_rejected(client, gateway) -> None:
    gateway.add_user(USER)

    bad_month = client.get("/api/reports/monthly", params={"month": "June"}, headers=HEADERS)
    bad_amount = client.post("/api/transactions", json={"type": "expense", "amount": "-1"}, headers=HEADERS)

    assert bad_month.status_code == 422
    assert bad_amount.status_code == 422
    assert ("insert", "transactions") not in gateway.calls


def test_gateway_failure_maps_to_bad_gateway(client, gateway) -> None:
    gateway.add_user(USER)
    gateway.fail.add("insert:transactions")

    response = client.post("/api/transactions", json={"type": "expense", "amount": "10"}, headers=HEADERS)

    assert response.status_code == 502
    assert response.json()["detail"] == "insert on transactions failed"


def test_goal_funds_and_missing_goal(client, gateway) -> None:
    gateway.add_user(USER)
    created = client.post("/api/goals", json={"name": "Bike", "target_amount": "200"}, headers=HEADERS).json()

    funded = client.post(f"/api/goals/{created['id']}/funds", json={"amount": "200"}, headers=HEADERS)
    missing = client.post("/api/goals/unknown/funds", json={"amount": "5"}, headers=HEADERS)

    assert funded.status_code == 200
    assert Decimal(funded.json()["progress"]) == Decimal("100")
    assert funded.json()["completed_at"] is not None
    assert missing.status_code == 404


def test_todo_toggle_and_quick_list(client, gateway) -> None:
    gateway.add_user(USER)
    todo = client.post("/api/todos", json={"title": "Pay rent", "priority": "high"}, headers=HEADERS).json()

    toggled = client.post(f"/api/todos/{todo['id']}/toggle", headers=HEADERS)
    quick = client.get("/api/todos/quick", headers=HEADERS)

    assert toggled.json()["status"] == "done"
    assert quick.json() == []


def test_csv_export_is_an_attachment(client, gateway) -> None:
    gateway.add_user(USER)
    client.post("/api/transactions", json={"date": "2024-06-01", "type": "income", "amount": "10"}, headers=HEADERS)

    response = client.get("/api/export/transactions.csv", headers=HEADERS)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]
    assert response.text.splitlines()[1] == "2024-06-01,income,,10,,cash"


def test_admin_stats_require_role(client, gateway) -> None:
    gateway.add_user(USER)
    gateway.add_user("admin-1", is_active=False)
    gateway.roles.add(("admin-1", "admin"))
    gateway.add("user_roles", user_id="admin-1", role="admin")
    gateway.add("transactions", user_id=USER, date="2024-06-01", type="income", amount="100")

    forbidden = client.get("/api/admin/stats", headers=HEADERS)
    stats = client.get("/api/admin/stats", headers={"X-User-Id": "admin-1"})

    assert forbidden.status_code == 403
    assert stats.status_code == 200
    body = stats.json()
    assert (body["total_users"], body["active_users"], body["admin_count"]) == (2, 1, 1)
    assert Decimal(body["total_income"]) == Decimal("100")


def _admin(gateway, admin_id: str = "admin-1") -> dict[str, str]:
    gateway.add_user(admin_id)
    gateway.add("user_roles", user_id=admin_id, role="admin")
    return {"X-User-Id": admin_id}


def test_admin_user_routes_require_role(client, gateway) -> None:
    gateway.add_user(USER)

    responses = [
        client.get("/api/admin/users", headers=HEADERS),
        client.patch(f"/api/admin/users/{USER}", json={"is_active": False}, headers=HEADERS),
        client.put(f"/api/admin/users/{USER}/admin", headers=HEADERS),
        client.delete(f"/api/admin/users/{USER}/admin", headers=HEADERS),
        client.delete(f"/api/admin/users/{USER}", headers=HEADERS),
        client.get(f"/api/admin/users/{USER}/transactions", headers=HEADERS),
    ]

    assert [response.status_code for response in responses] == [403] * 6
    assert ("update", "profiles") not in gateway.calls


def test_admin_lists_users_with_admin_flag(client, gateway) -> None:
    admin_headers = _admin(gateway)
    gateway.add_user(USER)

    users = client.get("/api/admin/users", headers=admin_headers).json()

    assert {user["id"]: user["is_admin"] for user in users} == {"admin-1": True, USER: False}


def test_admin_activation_releases_pending_and_disabled_users(client, gateway) -> None:
    admin_headers = _admin(gateway)
    gateway.add_user("pending", activated=False)
    gateway.add_user("disabled", is_active=False)

    assert client.get("/api/gate", headers={"X-User-Id": "pending"}).json()["state"] == "activation_pending"
    assert client.get("/api/gate", headers={"X-User-Id": "disabled"}).json()["state"] == "denied"

    activated = client.patch("/api/admin/users/pending", json={"is_active": True}, headers=admin_headers)
    enabled = client.patch("/api/admin/users/disabled", json={"is_active": True}, headers=admin_headers)

    assert activated.status_code == 200
    assert activated.json()["activated_at"] is not None
    assert enabled.json()["is_active"] is True
    assert client.get("/api/gate", headers={"X-User-Id": "pending"}).json()["state"] == "granted"
    assert client.get("/api/gate", headers={"X-User-Id": "disabled"}).json()["state"] == "granted"

    disabled = client.patch("/api/admin/users/pending", json={"is_active": False}, headers=admin_headers)
    assert disabled.json()["activated_at"] == activated.json()["activated_at"]
    assert client.get("/api/gate", headers={"X-User-Id": "pending"}).json()["state"] == "denied"


def test_admin_grants_and_revokes_role(client, gateway) -> None:
    admin_headers = _admin(gateway)
    gateway.add_user(USER)

    granted = client.put(f"/api/admin/users/{USER}/admin", headers=admin_headers)
    again = client.put(f"/api/admin/users/{USER}/admin", headers=admin_headers)
    promoted_stats = client.get("/api/admin/stats", headers=HEADERS)
    revoked = client.delete(f"/api/admin/users/{USER}/admin", headers=admin_headers)
    demoted_stats = client.get("/api/admin/stats", headers=HEADERS)

    assert granted.json()["is_admin"] is True
    assert again.json()["is_admin"] is True
    assert revoked.status_code == 204
    assert (promoted_stats.status_code, demoted_stats.status_code) == (200, 403)
    assert [row["user_id"] for row in gateway.tables["user_roles"]] == ["admin-1"]


def test_admin_deletes_user_and_reports_missing(client, gateway) -> None:
    admin_headers = _admin(gateway)
    gateway.add_user(USER)

    deleted = client.delete(f"/api/admin/users/{USER}", headers=admin_headers)
    missing = client.delete(f"/api/admin/users/{USER}", headers=admin_headers)
    unknown = client.patch("/api/admin/users/nobody", json={"is_active": True}, headers=admin_headers)

    assert deleted.status_code == 204
    assert missing.status_code == 404
    assert unknown.status_code == 404
    assert [row["id"] for row in gateway.tables["profiles"]] == ["admin-1"]


def test_admin_reads_latest_user_transactions(client, gateway) -> None:
    admin_headers = _admin(gateway)
    gateway.add_user(USER)
    for day in range(1, 61):
        date = f"2024-{day // 31 + 5:02d}-{day % 28 + 1:02d}"
        gateway.add("transactions", user_id=USER, date=date, type="expense", amount="1")
    gateway.add("transactions", user_id="someone-else", date="2024-12-31", type="income", amount="5")

    rows = client.get(f"/api/admin/users/{USER}/transactions", headers=admin_headers).json()

    assert len(rows) == 50
    assert all(row["type"] == "expense" for row in rows)
    assert [row["date"] for row in rows] == sorted((row["date"] for row in rows), reverse=True)


def test_single_resource_route_only_loads_its_store(client, gateway) -> None:
    gateway.add_user(USER)

    response = client.post("/api/todos", json={"title": "Pay rent"}, headers=HEADERS)

    assert response.status_code == 201
    loaded = {table for operation, table in gateway.calls if operation == "select"}
    assert loaded == {"profiles", "user_subscriptions", "todos"}
