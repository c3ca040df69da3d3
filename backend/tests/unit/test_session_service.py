"""Unit tests for SessionService and AppContext."""

import pytest

from moldops.application.services import AppContext, SessionService
from moldops.domain.entities import AuthStateChange
from moldops.domain.exceptions import AuthenticationError
from tests.fakes.gateways import FakeAuthGateway, FakeDataGateway, role_row


@pytest.fixture
def auth() -> FakeAuthGateway:
    gateway = FakeAuthGateway()
    gateway.add_user("admin@moldops.local", "secret", "u1")
    return gateway


@pytest.fixture
def data() -> FakeDataGateway:
    return FakeDataGateway(
        {
            "user_roles": [
                role_row("u1", "admin"),
                role_row("u1", "sales_staff", is_active=False),
                role_row("u2", "warehouse_staff"),
            ]
        }
    )


@pytest.mark.asyncio
async def test_sign_in_loads_active_roles_and_binds_token(auth, data):
    service = SessionService(auth, data)

    session = await service.sign_in("admin@moldops.local", "secret")

    assert session.access_token == "token-u1"
    assert service.context.is_authenticated
    assert service.context.roles == frozenset({"admin"})
    assert service.context.roles_loading is False
    assert data.token == "token-u1"


@pytest.mark.asyncio
async def test_sign_in_rejection_carries_raw_message(auth, data):
    service = SessionService(auth, data)

    with pytest.raises(AuthenticationError, match="Invalid login credentials"):
        await service.sign_in("admin@moldops.local", "wrong")
    assert service.context.is_authenticated is False


@pytest.mark.asyncio
async def test_boot_restores_session_from_token(auth, data):
    await auth.sign_in_with_password("admin@moldops.local", "secret")
    service = SessionService(auth, data)

    context = await service.boot("token-u1")

    assert context.user.id == "u1"
    assert context.roles == frozenset({"admin"})


@pytest.mark.asyncio
async def test_boot_with_unknown_token_is_logged_out(auth, data):
    service = SessionService(auth, data)
    context = await service.boot("stale-token")
    assert context.is_authenticated is False
    assert context.roles == frozenset()
    assert data.token is None


@pytest.mark.asyncio
async def test_boot_without_token_makes_no_calls(auth, data):
    service = SessionService(auth, data)
    await service.boot(None)
    assert data.calls == []


@pytest.mark.asyncio
async def test_sign_out_clears_state_even_when_gateway_fails(auth, data):
    service = SessionService(auth, data)
    await service.sign_in("admin@moldops.local", "secret")
    auth.fail_sign_out = True

    await service.sign_out()

    assert service.context.user is None
    assert service.context.access_token is None
    assert service.context.roles == frozenset()
    assert auth.signed_out == ["token-u1"]


@pytest.mark.asyncio
async def test_role_lookup_failure_yields_empty_role_set(auth, data):
    data.fail[("select", "user_roles")] = 500
    service = SessionService(auth, data)

    await service.sign_in("admin@moldops.local", "secret")

    assert service.context.is_authenticated
    assert service.context.roles == frozenset()


@pytest.mark.asyncio
async def test_auth_state_listeners_and_unsubscribe(auth, data):
    service = SessionService(auth, data)
    seen: list[AuthStateChange] = []

    async def async_listener(change: AuthStateChange) -> None:
        seen.append(change)

    unsubscribe = service.on_auth_state_change(async_listener)
    service.on_auth_state_change(lambda change: seen.append(change))

    await service.sign_in("admin@moldops.local", "secret")
    unsubscribe()
    await service.sign_out()

    assert [c.event for c in seen] == ["SIGNED_IN", "SIGNED_IN", "SIGNED_OUT"]
    assert seen[0].user.id == "u1"
    assert seen[-1].user is None


def test_app_context_theme():
    context = AppContext()
    assert context.theme == "neon-blue"
    context.set_theme("matrix-green")
    assert context.palette.name
    assert context.toggle_light_mode() is True
    with pytest.raises(ValueError):
        context.set_theme("not-a-theme")
