"""Unit tests for the generic ListEntityController."""

import asyncio
from dataclasses import replace

import pytest

from moldops.application.catalog import get_entity
from moldops.application.services import AppContext, ListEntityController, NotificationCenter
from moldops.domain.entities import AuthUser, MutationStatus, NoticeLevel, ViewState
from tests.fakes.gateways import FakeDataGateway

MACHINES = [
    {"id": "m1", "machine_code": "INJ-001", "name": "Haitian", "machine_type": "injection", "status": "active"},
    {"id": "m2", "machine_code": "BLW-001", "name": "Jomar", "machine_type": "blow", "status": "active"},
]


def _context(*roles: str) -> AppContext:
    return AppContext(user=AuthUser(id="u1", email="a@b.c"), access_token="t", roles=frozenset(roles))


@pytest.fixture
def gateway() -> FakeDataGateway:
    return FakeDataGateway({"machines": MACHINES})


@pytest.fixture
def controller(gateway: FakeDataGateway) -> ListEntityController:
    return ListEntityController(get_entity("machines"), gateway, _context("admin"))


# ── Loading ──


@pytest.mark.asyncio
async def test_fetch_all_replaces_snapshot_in_gateway_order(controller: ListEntityController):
    assert controller.loading is True
    assert await controller.fetch_all() is True
    assert [r["id"] for r in controller.items] == ["m1", "m2"]
    assert controller.loading is False


@pytest.mark.asyncio
async def test_fetch_failure_keeps_previous_snapshot_and_notifies(gateway, controller):
    await controller.fetch_all()
    gateway.fail[("select", "machines")] = 500

    assert await controller.fetch_all() is False
    assert len(controller.items) == 2
    assert controller.notices[-1].level == NoticeLevel.ERROR
    assert controller.loading is False


@pytest.mark.asyncio
async def test_load_fetches_relation_lookups():
    gateway = FakeDataGateway(
        {
            "production_orders": [],
            "products": [{"id": "p1", "name": "Cap"}],
            "machines": MACHINES,
            "molds": [],
        }
    )
    controller = ListEntityController(get_entity("production-orders"), gateway, _context("admin"))

    assert await controller.load() is True
    assert controller.lookups["products"] == [{"id": "p1", "name": "Cap"}]
    assert len(controller.lookups["machines"]) == 2
    assert {t for _, t in gateway.calls} == {"production_orders", "products", "machines", "molds"}


# ── Permissions ──


def test_can_edit_is_closed_without_roles(gateway):
    controller = ListEntityController(get_entity("machines"), gateway, _context())
    assert controller.can_edit() is False


def test_can_edit_is_closed_while_roles_load(gateway):
    context = _context("admin")
    context.roles_loading = True
    controller = ListEntityController(get_entity("machines"), gateway, context)
    assert controller.can_edit() is False


def test_can_edit_requires_intersection(gateway):
    entity = get_entity("machines")
    assert ListEntityController(entity, gateway, _context("production_manager")).can_edit() is True
    assert ListEntityController(entity, gateway, _context("sales_staff")).can_edit() is False


# ── Submit ──


@pytest.mark.asyncio
async def test_submit_insert_closes_form_and_refetches(gateway, controller):
    await controller.load()
    controller.open_form()
    controller.update_draft(machine_code="INJ-009", name="Arburg")

    outcome = await controller.submit()

    assert outcome.status == MutationStatus.SUCCEEDED
    assert controller.form_open is False
    assert gateway.count_calls("insert", "machines") == 1
    assert gateway.count_calls("select", "machines") == 2
    assert any(r["machine_code"] == "INJ-009" for r in controller.items)
    inserted = gateway.tables["machines"][-1]
    assert inserted["status"] == "active"


@pytest.mark.asyncio
async def test_submit_update_sends_patch_for_editing_id(gateway, controller):
    await controller.load()
    controller.open_form(controller.items[0])
    controller.update_draft(name="Haitian Mars")

    outcome = await controller.submit()

    assert outcome.status == MutationStatus.SUCCEEDED
    assert outcome.operation == "update"
    assert gateway.tables["machines"][0]["name"] == "Haitian Mars"
    assert gateway.count_calls("insert") == 0


@pytest.mark.asyncio
async def test_open_form_copies_record(controller):
    await controller.load()
    draft = controller.open_form(controller.items[0])
    draft.update(name="changed")
    assert controller.items[0]["name"] == "Haitian"


@pytest.mark.asyncio
async def test_invalid_draft_makes_no_gateway_call_and_keeps_form_open(gateway, controller):
    await controller.load()
    controller.open_form()
    controller.update_draft(name="No code")

    outcome = await controller.submit()

    assert outcome.status == MutationStatus.INVALID
    assert outcome.errors[0]["field"] == "machine_code"
    assert controller.form_open is True
    assert gateway.count_calls("insert") == 0


@pytest.mark.asyncio
async def test_write_failure_still_closes_form_and_refetches(gateway, controller):
    await controller.load()
    gateway.fail[("insert", "machines")] = 409
    controller.open_form()
    controller.update_draft(machine_code="INJ-001", name="Duplicate")

    outcome = await controller.submit()

    assert outcome.status == MutationStatus.WRITE_FAILED
    assert outcome.gateway_status == 409
    assert controller.form_open is False
    assert gateway.count_calls("select", "machines") == 2
    assert controller.notices[-1].level == NoticeLevel.ERROR


@pytest.mark.asyncio
async def test_refetch_failure_after_successful_write(gateway, controller):
    await controller.load()
    controller.open_form()
    controller.update_draft(machine_code="INJ-010", name="New")
    gateway.fail[("select", "machines")] = 503

    outcome = await controller.submit()

    assert outcome.status == MutationStatus.REFETCH_FAILED
    assert outcome.ok is True


@pytest.mark.asyncio
async def test_submit_forbidden_without_permitted_role(gateway):
    controller = ListEntityController(get_entity("machines"), gateway, _context("sales_staff"))
    await controller.load()
    controller.open_form()
    controller.update_draft(machine_code="X", name="Y")

    outcome = await controller.submit()

    assert outcome.status == MutationStatus.FORBIDDEN
    assert gateway.count_calls("insert") == 0


@pytest.mark.asyncio
async def test_second_submit_while_in_flight_is_busy(gateway, controller):
    await controller.load()
    controller.open_form()
    controller.update_draft(machine_code="INJ-011", name="Slow")
    gateway.gate = asyncio.Event()

    first = asyncio.create_task(controller.submit())
    await asyncio.sleep(0)
    for _ in range(5):
        await asyncio.sleep(0)
    second = await controller.submit()
    gateway.gate.set()
    first_outcome = await first

    assert second.status == MutationStatus.BUSY
    assert first_outcome.status == MutationStatus.SUCCEEDED
    assert gateway.count_calls("insert") == 1


# ── Remove ──


@pytest.mark.asyncio
async def test_declined_delete_makes_no_gateway_call(gateway, controller):
    await controller.load()
    calls_before = len(gateway.calls)

    outcome = await controller.remove("m1", confirm=lambda: False)

    assert outcome.status == MutationStatus.DECLINED
    assert len(gateway.calls) == calls_before


@pytest.mark.asyncio
async def test_confirmed_delete_refetches(gateway, controller):
    await controller.load()

    async def confirm() -> bool:
        return True

    outcome = await controller.remove("m1", confirm=confirm)

    assert outcome.status == MutationStatus.SUCCEEDED
    assert [r["id"] for r in controller.items] == ["m2"]
    assert gateway.count_calls("delete", "machines") == 1


@pytest.mark.asyncio
async def test_delete_failure_still_refetches(gateway, controller):
    await controller.load()
    gateway.fail[("delete", "machines")] = 500

    outcome = await controller.remove("m1", confirm=lambda: True)

    assert outcome.status == MutationStatus.WRITE_FAILED
    assert gateway.count_calls("select", "machines") == 2
    assert len(controller.items) == 2


# ── Lifetime ──


@pytest.mark.asyncio
async def test_results_after_unmount_are_dropped(gateway):
    gateway.gate = asyncio.Event()
    async with ListEntityController(get_entity("machines"), gateway, _context("admin")) as controller:
        task = asyncio.create_task(controller.fetch_all())
        await asyncio.sleep(0)
    gateway.gate.set()

    assert await task is False
    assert controller.items == []
    assert controller.unmounted is True


@pytest.mark.asyncio
async def test_mutations_after_unmount_are_cancelled(gateway, controller):
    await controller.load()
    controller.unmount()

    outcome = await controller.remove("m1", confirm=lambda: True)

    assert outcome.status == MutationStatus.CANCELLED
    assert gateway.count_calls("delete") == 0


# ── View & notices ──


@pytest.mark.asyncio
async def test_table_view_uses_entity_columns_and_permissions(gateway, controller):
    await controller.load()
    page = controller.table_view().render(controller.items, ViewState(filter_value="blow"))

    assert [r.id for r in page.rows] == ["m2"]
    assert page.affordances.add and page.affordances.edit and page.affordances.delete
    assert page.filter_options == ["injection", "blow"]


@pytest.mark.asyncio
async def test_notices_reach_the_notifier(gateway):
    center = NotificationCenter()
    controller = ListEntityController(get_entity("machines"), gateway, _context("admin"), center)
    await controller.load()

    await controller.remove("m1", confirm=lambda: True)

    assert center.recent(user_id="u1")[-1].message == "Machine deleted"
    assert center.recent(user_id="u1")[-1].user_id == "u1"
    assert center.recent() == []


@pytest.mark.asyncio
async def test_update_patch_leaves_fields_the_record_lacks_untouched(gateway, controller):
    await controller.load()
    controller.open_form(controller.items[0])
    controller.update_draft(name="Haitian Mars")

    outcome = await controller.submit()

    assert outcome.status == MutationStatus.SUCCEEDED
    stored = gateway.tables["machines"][0]
    assert stored["name"] == "Haitian Mars"
    assert stored["machine_code"] == "INJ-001"
    assert "hourly_rate" not in stored
    assert "tonnage" not in stored


def test_open_entity_is_editable_by_any_role_holder():
    open_entity = replace(get_entity("machines"), permitted_roles=None)
    gateway = FakeDataGateway({"machines": MACHINES})

    assert ListEntityController(open_entity, gateway, _context("sales_staff")).can_edit() is True
    assert ListEntityController(open_entity, gateway, _context()).can_edit() is False
