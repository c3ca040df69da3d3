"""Pydantic DTOs for system settings and report listings."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Currency = Literal["IDR", "USD", "EUR", "SGD"]


class NotificationSetting(BaseModel):
    """Delivery channels for one alert type."""

    model_config = ConfigDict(extra="forbid")

    type: str
    label: str
    description: str = ""
    enabled: bool = True
    email: bool = False
    sms: bool = False
    in_app: bool = True


def _default_notifications() -> list[NotificationSetting]:
    return [
        NotificationSetting(
            type="machine_breakdown",
            label="Machine Breakdown",
            description="Alert when machines break down or go offline",
            email=True,
            sms=True,
        ),
        NotificationSetting(
            type="quality_alert",
            label="Quality Issues",
            description="Alert when quality metrics fall below threshold",
            email=True,
        ),
        NotificationSetting(
            type="stock_low",
            label="Low Stock",
            description="Alert when inventory levels are low",
            email=True,
        ),
        NotificationSetting(
            type="maintenance_due",
            label="Maintenance Due",
            description="Alert when maintenance is due or overdue",
            email=True,
        ),
        NotificationSetting(
            type="production_target",
            label="Production Targets",
            description="Alert when production targets are not met",
            enabled=False,
        ),
    ]


class SystemSettings(BaseModel):
    """Company-wide settings persisted between restarts."""

    model_config = ConfigDict(extra="forbid")

    company_name: str = "PT. Plastik Injection Indonesia"
    default_currency: Currency = "IDR"
    working_hours_per_day: int = Field(8, ge=1, le=24)
    quality_alert_threshold: float = Field(5, ge=0, le=100)
    low_stock_alert_threshold: float = Field(20, ge=0, le=100)
    oee_target: float = Field(85, ge=0, le=100)
    maintenance_lead_time_days: int = Field(7, ge=0)
    notifications: list[NotificationSetting] = Field(default_factory=_default_notifications)
    default_theme: str = "neon-blue"
    default_light_mode: bool = False


class SystemSettingsUpdate(BaseModel):
    """Partial update — unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    company_name: str | None = Field(None, min_length=1)
    default_currency: Currency | None = None
    working_hours_per_day: int | None = Field(None, ge=1, le=24)
    quality_alert_threshold: float | None = Field(None, ge=0, le=100)
    low_stock_alert_threshold: float | None = Field(None, ge=0, le=100)
    oee_target: float | None = Field(None, ge=0, le=100)
    maintenance_lead_time_days: int | None = Field(None, ge=0)
    notifications: list[NotificationSetting] | None = None
    default_theme: str | None = None
    default_light_mode: bool | None = None


class ThemeOption(BaseModel):
    key: str
    name: str
    light: dict[str, str]
    dark: dict[str, str]


class ReportCategory(BaseModel):
    id: str
    name: str


class ReportRow(BaseModel):
    id: str
    cells: dict[str, str]
    record: dict[str, Any]


class ReportsResponse(BaseModel):
    rows: list[ReportRow]
    categories: list[ReportCategory]
    category: str
    search: str = ""
    total_rows: int
    filtered_count: int
