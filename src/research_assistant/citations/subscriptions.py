"""Change notifications for persisted citations.

Stores publish a ``CitationChange`` to a ``CitationChangeFeed`` after every
write. Callers that want live updates own a ``CitationSubscription`` and drive
it with ``start()`` / ``stop()``; nothing here is module-level state.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from research_assistant.models.domain import Citation
from research_assistant.observability.logger import get_logger

logger = get_logger("subscriptions")


@dataclass(frozen=True)
class CitationChange:
    event: str  # "insert", "update", "delete"
    citation_id: str
    message_id: str | None


class CitationChangeFeed:
    """Fan-out of citation change events to subscriber queues."""

    def __init__(self, max_queue_size: int = 100) -> None:
        self._subscribers: list[asyncio.Queue[CitationChange]] = []
        self._max_queue_size = max_queue_size

    def subscribe(self) -> asyncio.Queue[CitationChange]:
        queue: asyncio.Queue[CitationChange] = asyncio.Queue(maxsize=self._max_queue_size)
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[CitationChange]) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    def publish(self, change: CitationChange) -> None:
        for queue in self._subscribers:
            try:
                queue.put_nowait(change)
            except asyncio.QueueFull:
                logger.warning("subscriber_queue_full", citation_id=change.citation_id)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


CitationFetcher = Callable[[], Awaitable[list[Citation]]]
CitationCallback = Callable[[list[Citation]], Awaitable[None] | None]


class CitationSubscription:
    """Refetches citations and hands them to ``on_update`` after each change."""

    def __init__(
        self,
        feed: CitationChangeFeed,
        fetch: CitationFetcher,
        on_update: CitationCallback,
        message_id: str | None = None,
    ) -> None:
        self._feed = feed
        self._fetch = fetch
        self._on_update = on_update
        self._message_id = message_id
        self._queue: asyncio.Queue[CitationChange] | None = None
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> bool:
        return self._task is not None

    def start(self) -> None:
        if self._task is not None:
            return
        self._queue = self._feed.subscribe()
        self._task = asyncio.create_task(self._run(self._queue))

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        if self._queue is not None:
            self._feed.unsubscribe(self._queue)
            self._queue = None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self, queue: asyncio.Queue[CitationChange]) -> None:
        while True:
            change = await queue.get()
            if self._message_id and change.message_id != self._message_id:
                continue
            try:
                citations = await self._fetch()
                result = self._on_update(citations)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.error("subscription_refresh_failed", error=str(e), event=change.event)
