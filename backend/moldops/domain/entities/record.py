"""Domain entity — generic records and the collection snapshot that holds them."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

Record = dict[str, Any]


def record_id(record: Record) -> str:
    """Return the opaque id of a record as a string."""
    value = record.get("id")
    if value is None:
        raise KeyError("record has no 'id'")
    return str(value)


@dataclass
class CollectionSnapshot:
    """Ordered rows of one table as last fetched from the gateway.

    The snapshot is only ever replaced wholesale; rows are kept in the
    order the gateway returned them.
    """

    table: str
    rows: list[Record] = field(default_factory=list)
    fetched_at: datetime | None = None

    def replace(self, rows: list[Record]) -> None:
        self.rows = list(rows)
        self.fetched_at = datetime.now(timezone.utc)

    @property
    def is_loaded(self) -> bool:
        return self.fetched_at is not None

    def __len__(self) -> int:
        return len(self.rows)

    def find(self, rid: str) -> Record | None:
        for row in self.rows:
            if str(row.get("id")) == str(rid):
                return row
        return None
