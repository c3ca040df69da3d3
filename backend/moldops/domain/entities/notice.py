"""Domain entity for user-visible notifications (toasts / banners)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class NoticeLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notice:
    level: NoticeLevel
    message: str
    entity: str | None = None
    operation: str | None = None
    user_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "level": self.level.value,
            "message": self.message,
            "entity": self.entity,
            "operation": self.operation,
            "created_at": self.created_at.isoformat(),
        }
