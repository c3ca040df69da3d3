"""Unit tests for the FormModal and draft-derived form fields."""

import pytest

from moldops.application.catalog import get_entity
from moldops.application.schemas import drafts
from moldops.application.services import AppContext, FormModal, ListEntityController, form_fields
from moldops.domain.entities import AuthUser, MutationStatus
from tests.fakes.gateways import FakeDataGateway


def _controller(gateway: FakeDataGateway, slug: str = "production-orders") -> ListEntityController:
    context = AppContext(user=AuthUser(id="u1"), access_token="t", roles=frozenset({"admin"}))
    return ListEntityController(get_entity(slug), gateway, context)


@pytest.fixture
def gateway() -> FakeDataGateway:
    return FakeDataGateway(
        {
            "production_orders": [{"id": "po1", "order_number": "PO-1", "product_id": "p1", "target_quantity": 10}],
            "products": [{"id": "p1", "name": "Cap"}, {"id": "p2", "name": "Lid"}],
            "machines": [],
            "molds": [],
        }
    )


def test_form_fields_kinds():
    fields = {f.name: f for f in form_fields(drafts.ProductionOrderDraft)}
    assert fields["order_number"].kind == "text"
    assert fields["order_number"].required is True
    assert fields["target_quantity"].kind == "number"
    assert fields["scheduled_start_date"].kind == "date"
    assert fields["status"].kind == "select"
    assert "in_progress" in fields["status"].options
    assert fields["product_id"].kind == "relation"
    assert fields["product_id"].relation == "products"
    assert fields["machine_id"].required is False


def test_boolean_and_datetime_kinds():
    user_fields = {f.name: f for f in form_fields(drafts.UserDraft)}
    assert user_fields["is_active"].kind == "boolean"
    downtime_fields = {f.name: f for f in form_fields(drafts.MachineDowntimeDraft)}
    assert "datetime" in {f.kind for f in downtime_fields.values()}


@pytest.mark.asyncio
async def test_render_is_none_when_closed(gateway):
    modal = FormModal(_controller(gateway))
    assert modal.is_open is False
    assert modal.render() is None


@pytest.mark.asyncio
async def test_render_create_form_with_relation_options(gateway):
    controller = _controller(gateway)
    await controller.load()
    controller.open_form()

    view = FormModal(controller).render()

    assert view.title == "Add Production Order"
    product = next(f for f in view.fields if f.name == "product_id")
    assert product.options == ({"value": "p1", "label": "Cap"}, {"value": "p2", "label": "Lid"})
    assert view.values == {}
    assert (view.submit_text, view.cancel_text) == ("Save", "Cancel")


@pytest.mark.asyncio
async def test_render_edit_form_title_and_values(gateway):
    controller = _controller(gateway)
    await controller.load()
    controller.open_form(controller.items[0])

    view = FormModal(controller).render()

    assert view.title == "Edit Production Order"
    assert view.values["order_number"] == "PO-1"


@pytest.mark.asyncio
async def test_save_and_cancel_delegate_to_controller(gateway):
    controller = _controller(gateway)
    await controller.load()
    modal = FormModal(controller)

    controller.open_form()
    modal.change(order_number="PO-2", product_id="p2", target_quantity=50)
    outcome = await modal.save()
    assert outcome.status == MutationStatus.SUCCEEDED
    assert modal.is_open is False

    controller.open_form()
    modal.cancel()
    assert modal.render() is None
    assert gateway.count_calls("insert") == 1


def test_change_without_open_form_raises(gateway):
    modal = FormModal(_controller(gateway))
    with pytest.raises(RuntimeError):
        modal.change(order_number="PO-3")
