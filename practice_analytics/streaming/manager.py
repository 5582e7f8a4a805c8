"""Per-dashboard fan-out of update events to SSE listeners."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncGenerator, Optional, Union

from .events import CONNECTED_COMMENT, DashboardEventType, SSEEvent

logger = logging.getLogger(__name__)


class _StreamClosed:
    """Queued to a listener when its dashboard goes away."""


STREAM_CLOSED = _StreamClosed()


class StreamManager:
    """Keeps, for every dashboard, its live listener queues, the history of
    published events (for ``Last-Event-ID`` replay) and the last sequence id
    handed out."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[asyncio.Queue]] = {}
        self._history: dict[str, list[SSEEvent]] = {}
        self._last_sequence: dict[str, int] = {}

    async def subscribe(self, dashboard_id: str) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        self._listeners.setdefault(dashboard_id, []).append(queue)
        return queue

    async def unsubscribe(self, dashboard_id: str, queue: asyncio.Queue) -> None:
        listeners = self._listeners.get(dashboard_id)
        if not listeners or queue not in listeners:
            return
        listeners.remove(queue)
        if not listeners:
            del self._listeners[dashboard_id]

    def listener_count(self, dashboard_id: str) -> int:
        return len(self._listeners.get(dashboard_id, ()))

    def history_since(self, dashboard_id: str, last_event_id: int) -> list[SSEEvent]:
        return [e for e in self._history.get(dashboard_id, ()) if e.sequence_id > last_event_id]

    async def emit(self, dashboard_id: str, event: SSEEvent) -> None:
        self._history.setdefault(dashboard_id, []).append(event)
        for queue in self._listeners.get(dashboard_id, ()):
            queue.put_nowait(event)

    async def publish(
        self, dashboard_id: str, event_type: DashboardEventType, data: dict
    ) -> SSEEvent:
        """Stamp ``data`` with the dashboard's next sequence id and emit it."""
        sequence_id = self._last_sequence.get(dashboard_id, 0) + 1
        self._last_sequence[dashboard_id] = sequence_id
        event = SSEEvent(event_type=event_type, data=data, sequence_id=sequence_id)
        await self.emit(dashboard_id, event)
        return event

    def discard(self, dashboard_id: str) -> None:
        """Forget a deleted dashboard and end every stream still open on it."""
        self._history.pop(dashboard_id, None)
        self._last_sequence.pop(dashboard_id, None)
        listeners = self._listeners.pop(dashboard_id, [])
        for queue in listeners:
            queue.put_nowait(STREAM_CLOSED)
        if listeners:
            logger.info("Closed %d stream(s) for dashboard %s", len(listeners), dashboard_id)

    async def event_generator(
        self, dashboard_id: str, last_event_id: Optional[int] = None
    ) -> AsyncGenerator[str, None]:
        """Yield SSE frames for a dashboard until it is discarded.

        With ``last_event_id`` the missed history is replayed first. The
        listener queue is registered before the replay, so an event published
        in between shows up in both; anything at or below the highest id
        already sent is dropped from the queue.
        """
        queue = await self.subscribe(dashboard_id)
        sent_up_to = last_event_id
        try:
            yield CONNECTED_COMMENT

            if last_event_id is not None:
                for event in self.history_since(dashboard_id, last_event_id):
                    sent_up_to = event.sequence_id
                    yield event.encode()

            while True:
                item: Union[SSEEvent, _StreamClosed] = await queue.get()
                if item is STREAM_CLOSED:
                    return
                if sent_up_to is not None and item.sequence_id <= sent_up_to:
                    continue
                yield item.encode()
        finally:
            await self.unsubscribe(dashboard_id, queue)
