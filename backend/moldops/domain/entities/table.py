"""Domain entities for the generic table view — columns, rendered pages, affordances."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .record import Record

Renderer = Callable[[Any, Record], str]

ALL_FILTER = "__all__"
PLACEHOLDER = "-"


@dataclass(frozen=True)
class ColumnSpec:
    """One table column: the record key it reads, its header, an optional renderer."""

    key: str
    label: str
    renderer: Renderer | None = None


@dataclass
class ViewState:
    """Ephemeral per-view state: never persisted, reset on every mount."""

    search: str = ""
    filter_value: Any = ALL_FILTER
    page: int = 1

    @property
    def has_filter(self) -> bool:
        return self.filter_value is not None and self.filter_value != ALL_FILTER


@dataclass(frozen=True)
class Affordances:
    add: bool = False
    edit: bool = False
    delete: bool = False

    @property
    def actions_column(self) -> bool:
        return self.edit or self.delete


@dataclass
class RenderedRow:
    id: str
    cells: dict[str, str]
    record: Record


@dataclass
class TablePage:
    """The projection of a collection through search, filter and pagination."""

    columns: list[ColumnSpec]
    rows: list[RenderedRow]
    total_rows: int
    filtered_count: int
    page: int
    page_count: int
    page_size: int | None
    has_prev: bool
    has_next: bool
    affordances: Affordances
    filter_key: str | None = None
    filter_options: list[Any] = field(default_factory=list)
    search: str = ""
    filter_value: Any = ALL_FILTER
