"""Thread-safe event bus feeding a single driving thread."""

from __future__ import annotations

import logging
import queue
from typing import Optional

from .events import StopEvent

logger = logging.getLogger("fsm_engine.event_bus")


class EventBus:
    """Bounded queue that any thread may publish to."""

    def __init__(self, maxsize: int = 256) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=maxsize)

    def publish(self, event: object) -> bool:
        """Queue the event; warn and return False when the queue is full."""
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            logger.warning("Event bus queue full; dropping event %r", event)
            return False
        return True

    def get(self, timeout: Optional[float] = None) -> object:
        """Next event, waiting up to ``timeout`` seconds; raises queue.Empty."""
        return self._queue.get(timeout=timeout)

    def get_nowait(self) -> object:
        return self._queue.get_nowait()

    def qsize(self) -> int:
        return self._queue.qsize()

    def stop(self, reason: str | None = None) -> None:
        """Publish a StopEvent, blocking until there is room for it."""
        self._queue.put(StopEvent(reason=reason))
