"""Auto-drive control: the idle/running/paused/stopped machine and the drive loop."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from fsm_engine.infra.exceptions import LifecycleError

from .engine import TransitionEngine
from .model import Event

logger = logging.getLogger("fsm_engine.control")

_NO_EVENT: Any = object()


class DriveControl(StateMachine):
    """Control flow of an auto driver. ``stopped`` is never left."""

    idle = State("Idle", initial=True)
    running = State("Running")
    paused = State("Paused")
    stopped = State("Stopped")

    launch = idle.to(running) | paused.to(running)
    suspend = running.to(paused) | paused.to.itself()
    resume = paused.to(running)
    halt = idle.to(stopped) | running.to(stopped) | paused.to(stopped) | stopped.to.itself()

    def after_transition(self, event: str, source: object, target: object) -> None:
        """Log control changes; self-transitions are not worth a line."""
        source_name = getattr(source, "id", str(source))
        target_name = getattr(target, "id", str(target))
        if source_name != target_name:
            logger.info("Auto-drive control: %s -> %s (trigger: %s)", source_name, target_name, event)

    @property
    def state_id(self) -> str:
        return self.current_state.id


class AutoDriveController:
    """Runs staged events through a TransitionEngine until none remain.

    Events staged by hooks (``feed``) are consumed by an iterative loop, so
    long self-triggered chains do not grow the call stack.
    """

    def __init__(self, engine: TransitionEngine) -> None:
        self._engine = engine
        self._control = DriveControl()
        self._pending: Any = _NO_EVENT
        self._driving = False

    @property
    def control_state(self) -> str:
        """One of ``"idle"``, ``"running"``, ``"paused"`` or ``"stopped"``."""
        return self._control.state_id

    @property
    def has_pending(self) -> bool:
        return self._pending is not _NO_EVENT

    @property
    def pending(self) -> Optional[Event]:
        return None if self._pending is _NO_EVENT else self._pending

    @property
    def is_driving(self) -> bool:
        return self._driving

    def start(self, initial_event: Event) -> None:
        """Enter running and drive from ``initial_event``; replaces any staged event."""
        self._apply("start", self._control.launch)
        self._pending = initial_event
        self._drive()

    def feed(self, event: Event) -> None:
        """Stage ``event`` as the next one to drive.

        Inside a hook this only stages. On a running driver whose loop has
        drained it stages and continues driving on the caller's thread. While
        idle or paused it only stages; after stop it is ignored.
        """
        state = self.control_state
        if state == "stopped":
            logger.debug("Ignoring event %r fed to a stopped driver", event)
            return
        if self._pending is not _NO_EVENT:
            logger.debug("Replacing staged event %r with %r", self._pending, event)
        self._pending = event
        if state == "running" and not self._driving:
            self._drive()

    def pause(self, next_event: Event) -> None:
        """Halt after the current step and keep ``next_event`` for ``resume``.

        The event is kept even if the calling hook raises afterwards.
        """
        self._apply("pause", self._control.suspend)
        self._pending = next_event

    def resume(self) -> None:
        self._apply("resume", self._control.resume)
        self._drive()

    def stop(self) -> None:
        """Stop for good and drop any staged event. Safe to call repeatedly."""
        self._control.halt()
        self._pending = _NO_EVENT

    # Internal --------------------------------------------------------------

    def _apply(self, operation: str, trigger: Callable[[], Any]) -> None:
        try:
            trigger()
        except TransitionNotAllowed as exc:
            raise LifecycleError(operation, self.control_state) from exc

    def _drive(self) -> None:
        if self._driving:
            # Requested from a hook: the outer loop picks up the staged event.
            return
        self._driving = True
        try:
            while self._pending is not _NO_EVENT and self.control_state == "running":
                event, self._pending = self._pending, _NO_EVENT
                self._engine.step(event)
        except Exception:
            # An event staged by pause() in the failing hook stays for resume.
            if self.control_state == "running":
                self._pending = _NO_EVENT
            raise
        finally:
            self._driving = False
