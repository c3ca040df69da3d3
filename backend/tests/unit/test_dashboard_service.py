"""Unit tests for the DashboardService."""

from datetime import date

import pytest

from moldops.application.services import DashboardService
from moldops.application.services.dashboard_service import last_months
from tests.fakes.gateways import FakeDataGateway

TODAY = date(2024, 3, 15)


@pytest.fixture
def gateway() -> FakeDataGateway:
    return FakeDataGateway(
        {
            "products": [{"id": "p1"}, {"id": "p2"}],
            "raw_materials": [{"id": "r1"}],
            "finished_goods_inventory": [],
            "production_orders": [
                {"id": "o1", "order_number": "PO-1", "status": "planned", "created_at": "2024-03-01T08:00:00Z"},
                {"id": "o2", "order_number": "PO-2", "status": "completed", "created_at": "2024-01-20T08:00:00Z"},
                {"id": "o3", "order_number": "PO-3", "status": "completed", "created_at": "2023-12-02T08:00:00Z"},
                {"id": "o4", "order_number": "PO-4", "status": "completed", "created_at": "2023-06-02T08:00:00Z"},
            ],
        }
    )


def test_last_months_crosses_year_boundary():
    assert last_months(TODAY) == ["2023-10", "2023-11", "2023-12", "2024-01", "2024-02", "2024-03"]
    assert last_months(date(2024, 1, 1), 2) == ["2023-12", "2024-01"]


@pytest.mark.asyncio
async def test_dashboard_sections(gateway):
    dashboard = await DashboardService(gateway).get_dashboard(TODAY)

    assert dashboard.stats.products == 2
    assert dashboard.stats.raw_materials == 1
    assert dashboard.stats.finished_goods == 0
    assert dashboard.stats.production_orders == 4

    per_month = {m.month: m.count for m in dashboard.orders_per_month}
    assert per_month == {"2023-10": 0, "2023-11": 0, "2023-12": 1, "2024-01": 1, "2024-02": 0, "2024-03": 1}

    assert [o.order_number for o in dashboard.recent_orders] == ["PO-1", "PO-2", "PO-3", "PO-4"]


@pytest.mark.asyncio
async def test_failed_sections_degrade_to_defaults(gateway):
    gateway.fail[("count", "products")] = 500
    gateway.fail[("select", "production_orders")] = 503

    dashboard = await DashboardService(gateway).get_dashboard(TODAY)

    assert dashboard.stats.products == 0
    assert dashboard.stats.raw_materials == 1
    assert all(m.count == 0 for m in dashboard.orders_per_month)
    assert dashboard.recent_orders == []
