"""SSE Event Bus for real-time workflow updates.

Republishes WorkflowStore events to every connected SSE client.

Architecture:
  - The store publishes a StoreEvent on every mutation
  - EventBus.attach() subscribes the bus to a store and forwards each event
  - Clients subscribe via EventBus.subscribe() which returns an async generator

Event Envelope:
  {
    "event": "<store event kind>",
    "data": {
      "timestamp": "<ISO 8601>",
      ...payload
    }
  }
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from typing import AsyncGenerator, Callable, Optional, Set

from flowsim.logging_config import get_sse_logger
from flowsim.settings import SSE_KEEPALIVE_SECS, SSE_SUBSCRIBER_QUEUE_SIZE
from flowsim.store import StoreEvent, WorkflowStore

logger = get_sse_logger()

# Events that end a stream opened with `until_finished`
RUN_END_EVENTS = frozenset({"run_finished"})


class EventBus:
    """Fan-out of store events to SSE subscribers.

    Each subscriber owns a bounded queue; events for a full queue are
    dropped with a warning rather than blocking the publisher.
    """

    def __init__(self, queue_size: int = SSE_SUBSCRIBER_QUEUE_SIZE):
        self._queues: Set[asyncio.Queue] = set()
        self._queue_size = queue_size

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)

    def attach(self, store: WorkflowStore) -> Callable[[], None]:
        """Forward every event of `store`; returns the unsubscribe function."""

        def forward(event: StoreEvent) -> None:
            self.push(event.kind, dict(event.payload))

        return store.subscribe(forward)

    def push(self, event_type: str, data: dict) -> None:
        """Push an event to every connected client.

        Synchronous: in a single-threaded asyncio context queue puts have no
        yield points, so publishers never wait on slow clients.
        """
        if "timestamp" not in data:
            data["timestamp"] = datetime.now(timezone.utc).isoformat()

        event = {"event": event_type, "data": data}
        for queue in list(self._queues):
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning(f"Subscriber queue full, dropping: {event_type}")

    async def subscribe(
        self,
        stop_events: Optional[frozenset] = None,
        keepalive_interval: float = SSE_KEEPALIVE_SECS,
    ) -> AsyncGenerator[str, None]:
        """Subscribe to events, yielding SSE-formatted strings.

        Args:
            stop_events: Event types that end the stream after being sent
            keepalive_interval: Seconds between keepalive comments

        Yields:
            SSE-formatted strings ("event: ...\\ndata: ...\\n\\n")
        """
        stop_events = stop_events or frozenset()
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        self._queues.add(queue)
        logger.info(f"Client subscribed ({len(self._queues)} active)")

        try:
            while True:
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=keepalive_interval)
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue

                if event is None:  # Sentinel to stop
                    break
                yield _format_sse(event)

                if event["event"] in stop_events:
                    break
        finally:
            self._queues.discard(queue)
            logger.info(f"Client unsubscribed ({len(self._queues)} active)")

    def close(self) -> None:
        """End every open stream."""
        for queue in list(self._queues):
            try:
                queue.put_nowait(None)
            except asyncio.QueueFull:
                logger.warning("Subscriber queue full, could not deliver close sentinel")


def _format_sse(event: dict) -> str:
    """Format an event dict as an SSE string."""
    return f"event: {event['event']}\ndata: {json.dumps(event['data'], default=str)}\n\n"
