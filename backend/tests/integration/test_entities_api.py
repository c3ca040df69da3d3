"""Integration tests for the generic entity endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from moldops.application.services import NotificationCenter, settings_service
from moldops.infrastructure.dependencies import get_auth_gateway, get_data_gateway, get_notification_center
from moldops.main import app
from tests.fakes.gateways import FakeAuthGateway, FakeDataGateway, role_row


@pytest.fixture
def data() -> FakeDataGateway:
    gateway = FakeDataGateway(
        {
            "machines": [
                {"id": "m1", "machine_code": "INJ-001", "name": "Haitian", "machine_type": "injection"},
                {"id": "m2", "machine_code": "BLW-001", "name": "Jomar", "machine_type": "blow"},
            ],
            "user_roles": [role_row("u1", "admin"), role_row("u2", "sales_staff")],
            "products": [{"id": "p1", "name": "Cap"}],
            "users": [{"id": "u1", "username": "admin", "email": "admin@moldops.local", "department": "IT"}],
            "production_orders": [],
        }
    )
    auth = FakeAuthGateway()
    auth.add_user("admin@moldops.local", "secret", "u1")
    auth.add_user("sales@moldops.local", "secret", "u2")
    app.dependency_overrides[get_data_gateway] = lambda: gateway
    app.dependency_overrides[get_auth_gateway] = lambda: auth
    yield gateway
    app.dependency_overrides.clear()


async def _headers(client: AsyncClient, email: str = "admin@moldops.local") -> dict[str, str]:
    response = await client.post("/api/v1/auth/login", json={"email": email, "password": "secret"})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_entity_pages_require_sign_in(data):
    async with _client() as client:
        response = await client.get("/api/v1/entities/machines")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_catalogue_reports_edit_permission(data):
    async with _client() as client:
        response = await client.get("/api/v1/entities", headers=await _headers(client, "sales@moldops.local"))

    entries = {e["slug"]: e for e in response.json()}
    assert len(entries) == 20
    assert entries["machines"]["can_edit"] is False
    assert entries["customers"]["can_edit"] is True
    assert entries["machines"]["add_button_text"] == "Add Machine"


@pytest.mark.asyncio
async def test_table_page_with_search_and_filter(data):
    async with _client() as client:
        headers = await _headers(client)
        response = await client.get(
            "/api/v1/entities/machines", params={"filter": "injection", "search": "inj"}, headers=headers
        )

    assert response.status_code == 200
    page = response.json()
    assert [row["id"] for row in page["rows"]] == ["m1"]
    assert page["total_rows"] == 2
    assert page["filter_options"] == ["injection", "blow"]
    assert page["affordances"] == {"add": True, "edit": True, "delete": True, "actions_column": True}
    assert page["rows"][0]["cells"]["hourly_rate"] == "$0"


@pytest.mark.asyncio
async def test_unknown_entity_is_404(data):
    async with _client() as client:
        response = await client.get("/api/v1/entities/widgets", headers=await _headers(client))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_gateway_failure_on_load_is_502(data):
    data.fail[("select", "machines")] = 500
    async with _client() as client:
        response = await client.get("/api/v1/entities/machines", headers=await _headers(client))
    assert response.status_code == 502


@pytest.mark.asyncio
async def test_form_lists_relation_options(data):
    async with _client() as client:
        response = await client.get("/api/v1/entities/production-orders/form", headers=await _headers(client))

    form = response.json()
    assert form["title"] == "Add Production Order"
    product = next(f for f in form["fields"] if f["name"] == "product_id")
    assert product["options"] == [{"value": "p1", "label": "Cap"}]
    assert form["editing_id"] is None


@pytest.mark.asyncio
async def test_create_update_and_validation(data):
    async with _client() as client:
        headers = await _headers(client)
        created = await client.post(
            "/api/v1/entities/machines", json={"machine_code": "INJ-002", "name": "Engel"}, headers=headers
        )
        invalid = await client.post("/api/v1/entities/machines", json={"name": "No code"}, headers=headers)
        updated = await client.put("/api/v1/entities/machines/m1", json={"name": "Haitian Mars"}, headers=headers)
        missing = await client.put("/api/v1/entities/machines/zz", json={"name": "x"}, headers=headers)

    assert created.status_code == 201
    assert created.json()["status"] == "succeeded"
    assert created.json()["notices"][-1]["message"] == "Machine created"
    assert invalid.status_code == 422
    assert invalid.json()["errors"][0]["field"] == "machine_code"
    assert updated.status_code == 200
    assert data.tables["machines"][0]["name"] == "Haitian Mars"
    assert missing.status_code == 404
    assert data.count_calls("insert", "machines") == 1


@pytest.mark.asyncio
async def test_create_forbidden_for_unpermitted_role(data):
    async with _client() as client:
        headers = await _headers(client, "sales@moldops.local")
        response = await client.post(
            "/api/v1/entities/machines", json={"machine_code": "X", "name": "Y"}, headers=headers
        )
    assert response.status_code == 403
    assert data.count_calls("insert") == 0


@pytest.mark.asyncio
async def test_delete_requires_confirmation(data):
    async with _client() as client:
        headers = await _headers(client)
        declined = await client.delete("/api/v1/entities/machines/m1", headers=headers)
        confirmed = await client.delete(
            "/api/v1/entities/machines/m1", params={"confirm": "true"}, headers=headers
        )

    assert declined.status_code == 428
    assert declined.json()["status"] == "declined"
    assert confirmed.status_code == 200
    assert data.count_calls("delete", "machines") == 1
    assert [r["id"] for r in data.tables["machines"]] == ["m2"]


@pytest.mark.asyncio
async def test_dashboard_and_reports(data):
    async with _client() as client:
        headers = await _headers(client)
        dashboard = await client.get("/api/v1/dashboard", headers=headers)
        reports = await client.get("/api/v1/reports", params={"category": "quality"}, headers=headers)

    assert dashboard.status_code == 200
    assert dashboard.json()["stats"]["products"] == 1
    assert len(dashboard.json()["orders_per_month"]) == 6
    assert reports.json()["filtered_count"] == 2
    assert reports.json()["categories"][0]["id"] == "all"


@pytest.mark.asyncio
async def test_settings_endpoints(data, tmp_path, monkeypatch):
    monkeypatch.setattr(settings_service, "SETTINGS_FILE", tmp_path / "settings.json")
    async with _client() as client:
        headers = await _headers(client)
        system = await client.get("/api/v1/settings/system", headers=headers)
        rejected = await client.put("/api/v1/settings/system", json={"default_theme": "rainbow"}, headers=headers)
        themes = await client.get("/api/v1/settings/themes")

    assert system.json()["working_hours_per_day"] == 8
    assert rejected.status_code == 422
    assert len(themes.json()) == 4


@pytest.mark.asyncio
async def test_admin_only_page_renders_read_only_for_other_roles(data):
    async with _client() as client:
        headers = await _headers(client, "sales@moldops.local")
        response = await client.get("/api/v1/entities/users", headers=headers)

    assert response.status_code == 200
    page = response.json()
    assert [row["id"] for row in page["rows"]] == ["u1"]
    assert page["affordances"] == {"add": False, "edit": False, "delete": False, "actions_column": False}


@pytest.mark.asyncio
async def test_notices_require_sign_in_and_stay_with_their_owner(data):
    center = NotificationCenter()
    app.dependency_overrides[get_notification_center] = lambda: center
    async with _client() as client:
        anonymous = await client.get("/api/v1/notifications")
        anonymous_stream = await client.get("/api/v1/notifications/stream")
        admin = await _headers(client)
        sales = await _headers(client, "sales@moldops.local")
        created = await client.post(
            "/api/v1/entities/machines", json={"machine_code": "INJ-003", "name": "Arburg"}, headers=admin
        )
        mine = await client.get("/api/v1/notifications", headers=admin)
        theirs = await client.get("/api/v1/notifications", headers=sales)

    assert anonymous.status_code == 401
    assert anonymous_stream.status_code == 401
    assert created.status_code == 201
    assert [n["message"] for n in mine.json()] == ["Machine created"]
    assert theirs.json() == []
