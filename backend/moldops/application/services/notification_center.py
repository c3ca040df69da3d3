"""Notification center — in-process broadcaster of user-visible notices over SSE."""

import asyncio
import json
import logging
from collections import deque
from collections.abc import AsyncGenerator

from moldops.application.interfaces import Notifier
from moldops.domain.entities import Notice

logger = logging.getLogger(__name__)


class NotificationCenter(Notifier):
    """Fans notices out to the SSE clients of the user who raised them.

    Each client gets its own bounded asyncio.Queue, keyed by the owning
    user id; a client that stops reading is disconnected once its queue
    fills. The most recent notices are also kept for clients that poll
    instead of streaming.
    """

    def __init__(self, history_size: int = 50, queue_size: int = 100) -> None:
        self._queues: list[tuple[str | None, asyncio.Queue[str | None]]] = []
        self._queue_size = queue_size
        self._recent: deque[Notice] = deque(maxlen=history_size)

    def notify(self, notice: Notice) -> None:
        self._recent.append(notice)
        self._broadcast(notice.user_id, "notice", notice.to_dict())

    def recent(self, limit: int | None = None, user_id: str | None = None) -> list[Notice]:
        """Latest notices owned by ``user_id``, oldest first."""
        notices = [n for n in self._recent if n.user_id == user_id]
        return notices[-limit:] if limit else notices

    async def subscribe(self, user_id: str | None = None) -> AsyncGenerator[str, None]:
        """Yield formatted SSE messages for ``user_id`` until the client disconnects."""
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=self._queue_size)
        entry = (user_id, queue)
        self._queues.append(entry)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            if entry in self._queues:
                self._queues.remove(entry)

    def _broadcast(self, user_id: str | None, event_type: str, data: dict) -> None:
        message = f"event: {event_type}\ndata: {json.dumps(data)}\n\n"
        dead: list[tuple[str | None, asyncio.Queue[str | None]]] = []

        for entry in self._queues:
            owner, queue = entry
            if owner != user_id:
                continue
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                dead.append(entry)
                logger.warning("Notice client queue full, disconnecting")

        for entry in dead:
            self._queues.remove(entry)
            self._close(entry[1])

    @staticmethod
    def _close(queue: asyncio.Queue[str | None]) -> None:
        # Make room for the sentinel on a full queue.
        while queue.full():
            queue.get_nowait()
        queue.put_nowait(None)

    async def shutdown(self) -> None:
        """Disconnect all connected clients."""
        for _, queue in self._queues:
            self._close(queue)
        self._queues.clear()

    @property
    def client_count(self) -> int:
        return len(self._queues)
