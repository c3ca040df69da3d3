from .auth import LoginRequest, LoginResponse, SessionResponse, ThemeSchema, UserSchema
from .dashboard import DashboardResponse, DashboardStats, MonthlyCount, RecentOrder
from .drafts import EntityDraft
from .navigation import NavigationResponse, ResolutionResponse, RouteSchema
from .entity import (
    AffordancesSchema,
    ColumnSchema,
    EntitySummary,
    FieldErrorSchema,
    FormFieldSchema,
    FormModalResponse,
    MutationResponse,
    NoticeSchema,
    RowSchema,
    TablePageResponse,
)
from .settings import (
    NotificationSetting,
    ReportCategory,
    ReportRow,
    ReportsResponse,
    SystemSettings,
    SystemSettingsUpdate,
    ThemeOption,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "SessionResponse",
    "ThemeSchema",
    "UserSchema",
    "DashboardResponse",
    "DashboardStats",
    "MonthlyCount",
    "RecentOrder",
    "EntityDraft",
    "AffordancesSchema",
    "ColumnSchema",
    "EntitySummary",
    "FieldErrorSchema",
    "FormFieldSchema",
    "FormModalResponse",
    "MutationResponse",
    "NoticeSchema",
    "RowSchema",
    "TablePageResponse",
    "NavigationResponse",
    "ResolutionResponse",
    "RouteSchema",
    "NotificationSetting",
    "ReportCategory",
    "ReportRow",
    "ReportsResponse",
    "SystemSettings",
    "SystemSettingsUpdate",
    "ThemeOption",
]
