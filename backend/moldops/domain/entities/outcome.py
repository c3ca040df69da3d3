"""Typed results of controller mutations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MutationStatus(str, Enum):
    SUCCEEDED = "succeeded"
    WRITE_FAILED = "write_failed"
    REFETCH_FAILED = "refetch_failed"
    INVALID = "invalid"
    FORBIDDEN = "forbidden"
    BUSY = "busy"
    DECLINED = "declined"
    CANCELLED = "cancelled"


@dataclass
class MutationOutcome:
    """What happened to a submit or remove.

    ``WRITE_FAILED`` means the gateway rejected the write; ``REFETCH_FAILED``
    means the write went through but the collection could not be reloaded.
    """

    status: MutationStatus
    operation: str
    record: dict[str, Any] | None = None
    message: str | None = None
    errors: list[dict] = field(default_factory=list)
    gateway_status: int | None = None

    @property
    def ok(self) -> bool:
        return self.status in (MutationStatus.SUCCEEDED, MutationStatus.REFETCH_FAILED)
