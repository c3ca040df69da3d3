"""Generic table view — search, single-key filter, fixed-size pagination.

A pure projection of a collection snapshot plus ephemeral view state into a
:class:`TablePage`. The steps always run in the same order:

1. Search — keep a row if any field's string form contains the search text
   (case-insensitive). Empty search keeps everything.
2. Filter — keep a row if ``row[filter_key] == filter_value`` exactly.
   ``ALL_FILTER`` (or ``None``) disables the step.
3. Paginate — slice into ``page_size`` windows.
"""

import logging
import math
from collections.abc import Callable, Sequence
from typing import Any

from moldops.domain.entities import (
    ALL_FILTER,
    PLACEHOLDER,
    Affordances,
    ColumnSpec,
    Record,
    RenderedRow,
    TablePage,
    ViewState,
    record_id,
)

logger = logging.getLogger(__name__)


def search_text(value: Any) -> str:
    """String form of a field value as the search step sees it.

    ``None`` becomes ``""`` so it never matches "null", and floats keep
    Python's ``str`` form (``25.0``, not ``25``).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dict):
        return " ".join(search_text(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return " ".join(search_text(v) for v in value)
    return str(value)


def matches_search(row: Record, search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    return any(needle in search_text(value).lower() for value in row.values())


def render_cell(column: ColumnSpec, row: Record) -> str:
    """Renderer output if the column has one, else the string form, else a dash."""
    value = row.get(column.key)
    if column.renderer is not None:
        return column.renderer(value, row)
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)


def distinct_options(rows: Sequence[Record], key: str) -> list[Any]:
    """Distinct non-empty values of ``key`` in first-seen order."""
    seen: list[Any] = []
    for row in rows:
        value = row.get(key)
        if value is None or value == "" or value is False:
            continue
        if value not in seen:
            seen.append(value)
    return seen


class TableView:
    """Searchable / filterable / paginated grid over a list of records.

    Add, edit and delete affordances exist only when ``can_edit`` is true
    and the matching callback was supplied. The ``request_*`` methods report
    user intent upward through those callbacks.
    """

    def __init__(
        self,
        columns: Sequence[ColumnSpec],
        *,
        searchable: bool = False,
        filter_key: str | None = None,
        filter_options: Sequence[Any] | None = None,
        paginated: bool = False,
        page_size: int = 10,
        can_edit: bool = False,
        on_add: Callable[[], Any] | None = None,
        on_edit: Callable[[Record], Any] | None = None,
        on_delete: Callable[[str], Any] | None = None,
    ):
        if paginated and page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.columns = list(columns)
        self.searchable = searchable
        self.filter_key = filter_key
        self._filter_options = list(filter_options) if filter_options is not None else None
        self.paginated = paginated
        self.page_size = page_size
        self.can_edit = can_edit
        self._on_add = on_add
        self._on_edit = on_edit
        self._on_delete = on_delete

    @property
    def filterable(self) -> bool:
        return self.filter_key is not None

    @property
    def affordances(self) -> Affordances:
        return Affordances(
            add=self.can_edit and self._on_add is not None,
            edit=self.can_edit and self._on_edit is not None,
            delete=self.can_edit and self._on_delete is not None,
        )

    # ── Steps ────────────────────────────────────────────────────────

    def apply_search(self, rows: Sequence[Record], search: str) -> list[Record]:
        if not self.searchable:
            return list(rows)
        return [row for row in rows if matches_search(row, search)]

    def apply_filter(self, rows: Sequence[Record], filter_value: Any) -> list[Record]:
        if not self.filterable or filter_value is None or filter_value == ALL_FILTER:
            return list(rows)
        return [row for row in rows if row.get(self.filter_key) == filter_value]

    def page_count(self, filtered_count: int) -> int:
        if not self.paginated:
            return 1
        return math.ceil(filtered_count / self.page_size)

    def paginate(self, rows: Sequence[Record], page: int) -> tuple[list[Record], int]:
        """Return the rows on ``page`` (clamped to the valid range) and that page."""
        if not self.paginated:
            return list(rows), 1
        page = min(max(page, 1), max(self.page_count(len(rows)), 1))
        start = (page - 1) * self.page_size
        return list(rows[start : start + self.page_size]), page

    def filter_options(self, rows: Sequence[Record]) -> list[Any]:
        if not self.filterable:
            return []
        if self._filter_options is not None:
            return list(self._filter_options)
        return distinct_options(rows, self.filter_key)

    # ── Render ───────────────────────────────────────────────────────

    def render(self, rows: Sequence[Record], state: ViewState | None = None) -> TablePage:
        state = state or ViewState()
        searched = self.apply_search(rows, state.search)
        filtered = self.apply_filter(searched, state.filter_value)
        visible, page = self.paginate(filtered, state.page)
        page_count = self.page_count(len(filtered))

        rendered = [
            RenderedRow(
                id=record_id(row),
                cells={col.key: render_cell(col, row) for col in self.columns},
                record=row,
            )
            for row in visible
        ]

        return TablePage(
            columns=self.columns,
            rows=rendered,
            total_rows=len(rows),
            filtered_count=len(filtered),
            page=page,
            page_count=page_count,
            page_size=self.page_size if self.paginated else None,
            has_prev=self.paginated and page > 1,
            has_next=self.paginated and page < page_count,
            affordances=self.affordances,
            filter_key=self.filter_key,
            filter_options=self.filter_options(rows),
            search=state.search,
            filter_value=state.filter_value if state.has_filter else ALL_FILTER,
        )

    # ── Intents ──────────────────────────────────────────────────────

    def request_add(self) -> Any:
        if not self.affordances.add:
            logger.debug("Add requested without the add affordance — ignored")
            return None
        return self._on_add()

    def request_edit(self, record: Record) -> Any:
        if not self.affordances.edit:
            logger.debug("Edit requested without the edit affordance — ignored")
            return None
        return self._on_edit(record)

    def request_delete(self, rid: str) -> Any:
        if not self.affordances.delete:
            logger.debug("Delete requested without the delete affordance — ignored")
            return None
        return self._on_delete(rid)
