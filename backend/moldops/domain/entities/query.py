"""Gateway query value objects — filters and ordering."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FilterOp(str, Enum):
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"


@dataclass(frozen=True)
class Filter:
    """A single column predicate, e.g. ``Filter("user_id", FilterOp.EQ, uid)``."""

    column: str
    op: FilterOp
    value: Any

    @classmethod
    def eq(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.EQ, value)

    @classmethod
    def gte(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.GTE, value)

    def matches(self, row_value: Any) -> bool:
        """Evaluate the predicate against a plain Python value."""
        if self.op is FilterOp.EQ:
            return row_value == self.value
        if self.op is FilterOp.NEQ:
            return row_value != self.value
        if row_value is None:
            return False
        try:
            if self.op is FilterOp.GT:
                return row_value > self.value
            if self.op is FilterOp.GTE:
                return row_value >= self.value
            if self.op is FilterOp.LT:
                return row_value < self.value
            if self.op is FilterOp.LTE:
                return row_value <= self.value
        except TypeError:
            return False
        return False


@dataclass(frozen=True)
class Order:
    column: str
    ascending: bool = True
