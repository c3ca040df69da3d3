from .record import Record, CollectionSnapshot, record_id
from .projection import Projection, parse_projection
from .query import Filter, FilterOp, Order
from .session import AuthUser, AuthSession, AuthStateChange
from .notice import Notice, NoticeLevel
from .outcome import MutationOutcome, MutationStatus
from .table import (
    ALL_FILTER,
    PLACEHOLDER,
    Affordances,
    ColumnSpec,
    Renderer,
    RenderedRow,
    TablePage,
    ViewState,
)
from .form import FormDraft, FormField, FormModalView
from .theme import ThemePalette, DEFAULT_THEME, get_palette, theme_keys

__all__ = [
    "Record",
    "CollectionSnapshot",
    "record_id",
    "Projection",
    "parse_projection",
    "Filter",
    "FilterOp",
    "Order",
    "AuthUser",
    "AuthSession",
    "AuthStateChange",
    "Notice",
    "NoticeLevel",
    "MutationOutcome",
    "MutationStatus",
    "ALL_FILTER",
    "PLACEHOLDER",
    "Affordances",
    "ColumnSpec",
    "Renderer",
    "RenderedRow",
    "TablePage",
    "ViewState",
    "FormDraft",
    "FormField",
    "FormModalView",
    "ThemePalette",
    "DEFAULT_THEME",
    "get_palette",
    "theme_keys",
]
