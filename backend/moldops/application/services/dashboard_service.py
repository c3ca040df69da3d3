"""Dashboard service — headline counts, monthly order volume and recent orders."""

import asyncio
import logging
from collections.abc import Awaitable
from datetime import date, datetime
from typing import TypeVar

from moldops.application.interfaces import DataGateway
from moldops.application.schemas.dashboard import (
    DashboardResponse,
    DashboardStats,
    MonthlyCount,
    RecentOrder,
)
from moldops.domain.entities import Filter, Order
from moldops.domain.exceptions import GatewayError

logger = logging.getLogger(__name__)

T = TypeVar("T")

STAT_TABLES = {
    "products": "products",
    "raw_materials": "raw_materials",
    "finished_goods": "finished_goods_inventory",
    "production_orders": "production_orders",
}
MONTHS_SHOWN = 6
RECENT_LIMIT = 5


def last_months(today: date, count: int = MONTHS_SHOWN) -> list[str]:
    """``"YYYY-MM"`` keys for the ``count`` months ending with ``today``'s month, oldest first."""
    keys = []
    for offset in range(count - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - offset
        keys.append(f"{index // 12:04d}-{index % 12 + 1:02d}")
    return keys


def _month_key(value: object) -> str | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return f"{parsed.year:04d}-{parsed.month:02d}"


class DashboardService:
    """Every section degrades to zeros/empty on gateway failure instead of failing the page."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def _or_default(self, call: Awaitable[T], default: T, what: str) -> T:
        try:
            return await call
        except GatewayError as exc:
            logger.warning("Dashboard %s unavailable: %s", what, exc)
            return default

    async def get_stats(self) -> DashboardStats:
        counts = await asyncio.gather(
            *(
                self._or_default(self._gateway.count(table), 0, f"count of {table}")
                for table in STAT_TABLES.values()
            )
        )
        return DashboardStats(**dict(zip(STAT_TABLES, counts)))

    async def orders_per_month(self, today: date | None = None) -> list[MonthlyCount]:
        months = last_months(today or date.today())
        since = f"{months[0]}-01"
        rows = await self._or_default(
            self._gateway.select("production_orders", "id, created_at", [Filter.gte("created_at", since)]),
            [],
            "monthly orders",
        )
        counts = dict.fromkeys(months, 0)
        for row in rows:
            key = _month_key(row.get("created_at"))
            if key in counts:
                counts[key] += 1
        return [MonthlyCount(month=month, count=counts[month]) for month in months]

    async def recent_orders(self) -> list[RecentOrder]:
        rows = await self._or_default(
            self._gateway.select(
                "production_orders",
                "order_number, status, created_at",
                order=Order("created_at", ascending=False),
                limit=RECENT_LIMIT,
            ),
            [],
            "recent orders",
        )
        return [RecentOrder.model_validate(row) for row in rows]

    async def get_dashboard(self, today: date | None = None) -> DashboardResponse:
        stats, per_month, recent = await asyncio.gather(
            self.get_stats(),
            self.orders_per_month(today),
            self.recent_orders(),
        )
        return DashboardResponse(stats=stats, orders_per_month=per_month, recent_orders=recent)
