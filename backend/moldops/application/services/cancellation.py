"""Cancellation token scoped to one controller's lifetime."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class OperationCancelled(Exception):
    """Raised by :meth:`CancellationToken.guard` when the owner went away mid-call."""


class CancellationToken:
    """Flag shared by everything one mounted page started.

    Gateway calls are wrapped with :meth:`guard`; a result that resolves
    after :meth:`cancel` is discarded rather than applied to the page.
    """

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    async def guard(self, awaitable: Awaitable[T]) -> T:
        if self._cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise OperationCancelled()
        result = await awaitable
        if self._cancelled:
            raise OperationCancelled()
        return result
