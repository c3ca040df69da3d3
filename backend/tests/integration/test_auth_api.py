"""Integration tests for sign-in, session and navigation endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from moldops.infrastructure.dependencies import get_auth_gateway, get_data_gateway
from moldops.main import app
from tests.fakes.gateways import FakeAuthGateway, FakeDataGateway, role_row


@pytest.fixture
def gateways():
    data = FakeDataGateway({"user_roles": [role_row("u1", "admin"), role_row("u1", "sales_staff", False)]})
    auth = FakeAuthGateway()
    auth.add_user("admin@moldops.local", "secret", "u1")
    app.dependency_overrides[get_data_gateway] = lambda: data
    app.dependency_overrides[get_auth_gateway] = lambda: auth
    yield data, auth
    app.dependency_overrides.clear()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_login_returns_token_roles_and_theme(gateways):
    async with _client() as client:
        response = await client.post(
            "/api/v1/auth/login", json={"email": "admin@moldops.local", "password": "secret"}
        )

    assert response.status_code == 200
    data = response.json()
    assert data["authenticated"] is True
    assert data["access_token"] == "token-u1"
    assert data["token_type"] == "bearer"
    assert data["roles"] == ["admin"]
    assert data["theme"]["palette"]["primary"]


@pytest.mark.asyncio
async def test_login_rejection_surfaces_raw_message(gateways):
    async with _client() as client:
        response = await client.post(
            "/api/v1/auth/login", json={"email": "admin@moldops.local", "password": "nope"}
        )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"


@pytest.mark.asyncio
async def test_session_round_trip(gateways):
    async with _client() as client:
        anonymous = await client.get("/api/v1/auth/session")
        login = await client.post(
            "/api/v1/auth/login", json={"email": "admin@moldops.local", "password": "secret"}
        )
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
        current = await client.get("/api/v1/auth/session", headers=headers)
        logout = await client.post("/api/v1/auth/logout", headers=headers)
        after = await client.get("/api/v1/auth/session", headers=headers)

    assert anonymous.json()["authenticated"] is False
    assert current.json()["user"]["email"] == "admin@moldops.local"
    assert logout.json()["authenticated"] is False
    assert after.json()["authenticated"] is False


@pytest.mark.asyncio
async def test_navigation_guard(gateways):
    async with _client() as client:
        signed_out = await client.get("/api/v1/navigation/resolve", params={"path": "/machines"})
        login = await client.post(
            "/api/v1/auth/login", json={"email": "admin@moldops.local", "password": "secret"}
        )
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
        signed_in = await client.get("/api/v1/navigation/resolve", params={"path": "/"}, headers=headers)
        missing = await client.get("/api/v1/navigation/resolve", params={"path": "/nowhere"}, headers=headers)
        menu = await client.get("/api/v1/navigation")

    assert signed_out.json()["redirect"] == "/"
    assert signed_in.json()["redirect"] == "/dashboard"
    assert missing.status_code == 404
    assert menu.json()["menu"][0]["path"] == "/dashboard"
