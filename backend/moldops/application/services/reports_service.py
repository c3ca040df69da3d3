"""Reports catalogue — a static list of report cards shown through the table view."""

from moldops.application.services.table_view import TableView
from moldops.domain.entities import ALL_FILTER, ColumnSpec, Record, TablePage, ViewState

REPORT_CATEGORIES: dict[str, str] = {
    "production": "Production Reports",
    "quality": "Quality Reports",
    "inventory": "Inventory Reports",
    "financial": "Financial Reports",
    "maintenance": "Maintenance Reports",
    "sales": "Sales Reports",
}

REPORTS: tuple[Record, ...] = (
    {
        "id": "daily-production-summary",
        "title": "Daily Production Summary",
        "description": "Daily production output, efficiency, and downtime summary",
        "category": "production",
    },
    {
        "id": "machine-utilization",
        "title": "Machine Utilization Report",
        "description": "Machine usage, availability, and performance metrics",
        "category": "production",
    },
    {
        "id": "oee-analysis",
        "title": "OEE Analysis",
        "description": "Overall Equipment Effectiveness analysis by machine and period",
        "category": "production",
    },
    {
        "id": "quality-control-dashboard",
        "title": "Quality Control Dashboard",
        "description": "Quality metrics, defect rates, and inspection results",
        "category": "quality",
    },
    {
        "id": "customer-complaints",
        "title": "Customer Complaints Report",
        "description": "Customer complaint tracking and resolution status",
        "category": "quality",
    },
    {
        "id": "inventory-status",
        "title": "Inventory Status Report",
        "description": "Current stock levels, reorder points, and inventory valuation",
        "category": "inventory",
    },
    {
        "id": "material-consumption",
        "title": "Material Consumption Report",
        "description": "Raw material usage, waste analysis, and cost tracking",
        "category": "inventory",
    },
    {
        "id": "production-cost-analysis",
        "title": "Production Cost Analysis",
        "description": "Cost breakdown by product, machine, and time period",
        "category": "financial",
    },
    {
        "id": "sales-performance",
        "title": "Sales Performance Report",
        "description": "Sales orders, delivery performance, and customer analysis",
        "category": "sales",
    },
    {
        "id": "maintenance-schedule",
        "title": "Maintenance Schedule Report",
        "description": "Planned and completed maintenance activities",
        "category": "maintenance",
    },
)


def _category_name(value: object, row: Record) -> str:
    return REPORT_CATEGORIES.get(str(value), str(value))


class ReportsService:
    """Read-only: the view never offers add, edit or delete."""

    def __init__(self) -> None:
        self._view = TableView(
            [
                ColumnSpec("title", "Report"),
                ColumnSpec("description", "Description"),
                ColumnSpec("category", "Category", _category_name),
            ],
            searchable=True,
            filter_key="category",
            filter_options=list(REPORT_CATEGORIES),
        )

    def list_reports(self, category: str | None = None, search: str = "") -> TablePage:
        """Reports in ``category`` (``"all"`` or None for every category)."""
        if category in (None, "", "all"):
            category = ALL_FILTER
        return self._view.render(list(REPORTS), ViewState(search=search, filter_value=category))
