"""Unit tests for the Supabase data and auth gateways (httpx.MockTransport)."""

import json

import httpx
import pytest

from moldops.domain.entities import Filter, Order
from moldops.domain.exceptions import AuthenticationError, GatewayError
from moldops.infrastructure.supabase import SupabaseAuthGateway, SupabaseDataGateway
from moldops.infrastructure.supabase.data_gateway import filter_params, parse_content_range

URL = "https://project.supabase.co"
ANON = "anon-key"


# ── Helpers ──


def _client(handler, requests: list[httpx.Request]) -> httpx.AsyncClient:
    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(record))


# ── Data gateway ──


def test_filter_params_and_content_range():
    assert filter_params([Filter.eq("user_id", "u1"), Filter.gte("qty", 5)]) == [
        ("user_id", "eq.u1"),
        ("qty", "gte.5"),
    ]
    assert filter_params([Filter.eq("deleted_at", None)]) == [("deleted_at", "is.null")]
    assert filter_params([Filter.eq("is_active", True)]) == [("is_active", "eq.true")]
    assert parse_content_range("0-9/42") == 42
    assert parse_content_range("*/0") == 0
    assert parse_content_range("0-9/*") is None
    assert parse_content_range(None) is None


@pytest.mark.asyncio
async def test_select_sends_projection_filters_and_headers():
    requests: list[httpx.Request] = []
    client = _client(lambda r: httpx.Response(200, json=[{"id": "1"}]), requests)
    gateway = SupabaseDataGateway(URL, ANON, access_token="user-token", http_client=client)

    rows = await gateway.select(
        "user_roles",
        "role_id, roles(name, is_active)",
        [Filter.eq("user_id", "u1")],
        order=Order("created_at", ascending=False),
        limit=5,
    )

    assert rows == [{"id": "1"}]
    request = requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/user_roles"
    assert request.url.params["select"] == "role_id,roles(name,is_active)"
    assert request.url.params["user_id"] == "eq.u1"
    assert request.url.params["order"] == "created_at.desc"
    assert request.url.params["limit"] == "5"
    assert request.headers["apikey"] == ANON
    assert request.headers["authorization"] == "Bearer user-token"


@pytest.mark.asyncio
async def test_anonymous_requests_use_anon_key_as_bearer():
    requests: list[httpx.Request] = []
    client = _client(lambda r: httpx.Response(200, json=[]), requests)
    gateway = SupabaseDataGateway(URL, ANON, http_client=client)

    await gateway.select("machines")
    gateway.authorize("later-token")
    await gateway.select("machines")

    assert requests[0].headers["authorization"] == f"Bearer {ANON}"
    assert requests[1].headers["authorization"] == "Bearer later-token"


@pytest.mark.asyncio
async def test_insert_asks_for_representation():
    requests: list[httpx.Request] = []
    client = _client(lambda r: httpx.Response(201, json=[{"id": "new", "name": "Cap"}]), requests)
    gateway = SupabaseDataGateway(URL, ANON, http_client=client)

    row = await gateway.insert("products", {"name": "Cap"})

    assert row == {"id": "new", "name": "Cap"}
    assert requests[0].method == "POST"
    assert requests[0].headers["prefer"] == "return=representation"
    assert json.loads(requests[0].content) == {"name": "Cap"}


@pytest.mark.asyncio
async def test_update_targets_id_and_raises_when_nothing_matched():
    requests: list[httpx.Request] = []
    client = _client(lambda r: httpx.Response(200, json=[]), requests)
    gateway = SupabaseDataGateway(URL, ANON, http_client=client)

    with pytest.raises(GatewayError) as exc_info:
        await gateway.update("products", "p1", {"id": "p1", "name": "Lid"})

    assert exc_info.value.status_code == 404
    assert requests[0].method == "PATCH"
    assert requests[0].url.params["id"] == "eq.p1"
    assert json.loads(requests[0].content) == {"name": "Lid"}


@pytest.mark.asyncio
async def test_delete_and_count():
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "HEAD":
            return httpx.Response(200, headers={"Content-Range": "0-24/25"})
        return httpx.Response(204)

    gateway = SupabaseDataGateway(URL, ANON, http_client=_client(handler, requests))

    await gateway.delete("products", "p1")
    total = await gateway.count("products")

    assert requests[0].method == "DELETE"
    assert requests[0].url.params["id"] == "eq.p1"
    assert total == 25
    assert requests[1].headers["prefer"] == "count=exact"


@pytest.mark.asyncio
async def test_error_response_becomes_gateway_error():
    client = _client(
        lambda r: httpx.Response(409, json={"message": "duplicate key value violates unique constraint"}),
        [],
    )
    gateway = SupabaseDataGateway(URL, ANON, http_client=client)

    with pytest.raises(GatewayError) as exc_info:
        await gateway.insert("products", {"product_code": "P-1"})

    assert exc_info.value.status_code == 409
    assert "duplicate key" in exc_info.value.message


@pytest.mark.asyncio
async def test_transport_failure_becomes_503():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    gateway = SupabaseDataGateway(URL, ANON, http_client=_client(handler, []))

    with pytest.raises(GatewayError) as exc_info:
        await gateway.select("machines")
    assert exc_info.value.status_code == 503


def test_missing_url_is_rejected():
    with pytest.raises(ValueError):
        SupabaseDataGateway("", ANON)


# ── Auth gateway ──


@pytest.mark.asyncio
async def test_password_sign_in():
    requests: list[httpx.Request] = []
    payload = {
        "access_token": "jwt",
        "refresh_token": "refresh",
        "expires_in": 3600,
        "user": {"id": "u1", "email": "admin@moldops.local", "user_metadata": {"first_name": "Ani"}},
    }
    gateway = SupabaseAuthGateway(URL, ANON, http_client=_client(lambda r: httpx.Response(200, json=payload), requests))

    session = await gateway.sign_in_with_password("admin@moldops.local", "secret")

    assert session.access_token == "jwt"
    assert session.user.id == "u1"
    assert session.user.metadata == {"first_name": "Ani"}
    assert requests[0].url.path == "/auth/v1/token"
    assert requests[0].url.params["grant_type"] == "password"


@pytest.mark.asyncio
async def test_sign_in_rejection_keeps_raw_message():
    body = {"error": "invalid_grant", "error_description": "Invalid login credentials"}
    gateway = SupabaseAuthGateway(URL, ANON, http_client=_client(lambda r: httpx.Response(400, json=body), []))

    with pytest.raises(AuthenticationError) as exc_info:
        await gateway.sign_in_with_password("admin@moldops.local", "wrong")

    assert exc_info.value.message == "Invalid login credentials"
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_current_user_with_expired_token_is_none():
    gateway = SupabaseAuthGateway(URL, ANON, http_client=_client(lambda r: httpx.Response(401, json={}), []))
    assert await gateway.get_current_user("expired") is None


@pytest.mark.asyncio
async def test_sign_out_ignores_expired_token():
    requests: list[httpx.Request] = []
    gateway = SupabaseAuthGateway(URL, ANON, http_client=_client(lambda r: httpx.Response(401), requests))

    await gateway.sign_out("expired")

    assert requests[0].url.path == "/auth/v1/logout"
    assert requests[0].headers["authorization"] == "Bearer expired"
