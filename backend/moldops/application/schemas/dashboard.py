"""Pydantic DTOs for the dashboard."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    products: int = 0
    raw_materials: int = 0
    finished_goods: int = 0
    production_orders: int = 0


class MonthlyCount(BaseModel):
    month: str  # "YYYY-MM"
    count: int


class RecentOrder(BaseModel):
    order_number: str | None = None
    status: str | None = None
    created_at: str | None = None


class DashboardResponse(BaseModel):
    stats: DashboardStats
    orders_per_month: list[MonthlyCount]
    recent_orders: list[RecentOrder]
