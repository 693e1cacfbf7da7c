"""
registrar.engine.queue — Bounded Message Queue
================================================

Decouples *receiving* a guild message from *processing* it.

- ``put()`` suspends while the queue is at capacity, up to ``put_timeout``
  seconds, then raises :class:`~registrar.errors.QueueFullError`.
- ``drain()`` takes the receive lock and processes every item that is
  currently buffered.  It never waits for new items: once the buffer is
  empty it returns.  Concurrent drains queue up on the lock, so each item
  is handed to exactly one handler call.

The intake cog enqueues and drains back-to-back inside the same
``on_message`` callback, so in steady state the buffer rarely holds more
than one item.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from registrar.constants import DEFAULT_QUEUE_CAPACITY, DEFAULT_QUEUE_PUT_TIMEOUT
from registrar.errors import QueueFullError

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = ["MessageQueue"]


class MessageQueue(Generic[T]):
    """Bounded FIFO buffer with a lock-guarded, non-suspending drain.

    Parameters
    ----------
    capacity:
        Maximum number of buffered items.
    put_timeout:
        Seconds ``put()`` may wait for free space.  ``None`` waits forever.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_QUEUE_CAPACITY,
        put_timeout: float | None = DEFAULT_QUEUE_PUT_TIMEOUT,
    ) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.put_timeout = put_timeout
        self._queue: asyncio.Queue[T] = asyncio.Queue(maxsize=capacity)
        self._drain_lock = asyncio.Lock()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()

    async def put(self, item: T) -> None:
        """Enqueue *item*, waiting for space if the queue is full."""
        if self.put_timeout is None:
            await self._queue.put(item)
            return
        try:
            await asyncio.wait_for(self._queue.put(item), timeout=self.put_timeout)
        except TimeoutError as exc:
            raise QueueFullError(
                f"Queue stayed at capacity ({self.capacity}) for {self.put_timeout}s"
            ) from exc

    async def drain(self, handler: Callable[[T], Awaitable[None]]) -> int:
        """Hand every buffered item to *handler*; return how many were handled.

        Waits for the drain lock if another drain is running, but never
        waits for items.  A handler exception is logged and the drain moves
        on to the next item.
        """
        handled = 0
        async with self._drain_lock:
            while True:
                try:
                    item = self._queue.get_nowait()
                except asyncio.QueueEmpty:
                    break
                try:
                    await handler(item)
                except Exception:
                    logger.exception("Handler failed for queued item %r", item)
                finally:
                    self._queue.task_done()
                handled += 1
        if handled:
            logger.debug("Drained %d queued item(s)", handled)
        return handled
