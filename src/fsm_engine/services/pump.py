"""Background worker delivering bus events to a step driver."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

from fsm_engine.config.models import PumpConfig
from fsm_engine.infra.exceptions import InvalidStateError, RejectedEventError
from fsm_engine.state_machine import StepDriver

from .event_bus import EventBus
from .events import StopEvent

logger = logging.getLogger("fsm_engine.pump")


class EventPump:
    """Serialises events from any number of producer threads into one driver.

    A single worker thread owns the driver's cadence; producers, including
    the driver's own hooks, only ``publish``. The worker exits on
    :meth:`stop` or once the driver has been closed.
    """

    def __init__(
        self,
        driver: StepDriver,
        config: Optional[PumpConfig] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self._driver = driver
        self._config = config or PumpConfig()
        self.bus = bus or EventBus(maxsize=self._config.queue_size)
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self.processed = 0
        self.rejected = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the worker thread if it is not already running."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._event_loop, name="EventPump", daemon=True)
        self._thread.start()
        logger.info("Event pump started.")

    def publish(self, event: object) -> bool:
        return self.bus.publish(event)

    def stop(self, reason: str | None = None) -> None:
        """Let the worker drain what was queued before this call, then finish.

        Safe to call repeatedly, including from a hook running on the worker
        thread, where it only asks the loop to finish.
        """
        if threading.current_thread() is self._thread:
            if not self.bus.publish(StopEvent(reason=reason)):
                self._stop_event.set()
            return
        if self.is_running:
            self.bus.stop(reason)
            self.join(self._config.join_timeout_s)
        self._stop_event.set()
        if not self.join(self._config.join_timeout_s):
            logger.warning("Event pump worker did not exit within %.1fs", self._config.join_timeout_s)
            return
        logger.info("Event pump stopped.")

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker to exit; True if it is no longer running."""
        if self._thread is not None:
            self._thread.join(timeout=timeout)
        return not self.is_running

    def __enter__(self) -> "EventPump":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop("context exit")

    # Internal -----------------------------------------------------------------

    def _event_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                event = self.bus.get(timeout=self._config.poll_interval_s)
            except queue.Empty:
                continue

            if isinstance(event, StopEvent):
                logger.info("Event pump received stop event: %s", event.reason)
                break

            if not self._dispatch(event):
                break

    def _dispatch(self, event: object) -> bool:
        """Step the driver; False once the driver can no longer accept events."""
        try:
            self._driver.step(event)
        except RejectedEventError as exc:
            self.rejected += 1
            logger.warning("Dropping event %r: %s", event, exc)
        except InvalidStateError:
            logger.info("Driver closed; event pump exiting.")
            return False
        except Exception:
            logger.exception("Error while dispatching event: %r", event)
        else:
            self.processed += 1
        if self._driver.closed:
            logger.info("Driver closed; event pump exiting.")
            return False
        return True
