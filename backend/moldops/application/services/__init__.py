from .cancellation import CancellationToken, OperationCancelled
from .table_view import TableView
from .session_service import AppContext, SessionService
from .list_entity_controller import ListEntityController
from .form_modal import FormModal, form_fields
from .notification_center import NotificationCenter
from .dashboard_service import DashboardService
from .navigation_service import NavigationService, Resolution, Route
from .reports_service import ReportsService

__all__ = [
    "CancellationToken",
    "OperationCancelled",
    "TableView",
    "AppContext",
    "SessionService",
    "ListEntityController",
    "FormModal",
    "form_fields",
    "NotificationCenter",
    "DashboardService",
    "NavigationService",
    "Resolution",
    "Route",
    "ReportsService",
]
