"""Error types raised by the transition engine and its drivers."""

from __future__ import annotations

from typing import Any, Hashable, Optional


class FsmError(Exception):
    """Base class for every error raised by fsm_engine."""


class InvalidStateError(FsmError):
    """The current state has no node in the graph.

    Only reachable once the driver has been closed, since the initial state
    and every transition target get a node as soon as they are referenced.
    """

    def __init__(self, state: Optional[Hashable], message: Optional[str] = None) -> None:
        self.state = state
        super().__init__(message or f"No such state: {state!r}")


class RejectedEventError(FsmError):
    """The current state has no transition registered for the event.

    ``result`` carries the rejected TransitionResult the engine recorded.
    """

    def __init__(self, state: Hashable, event: Hashable, result: Optional[Any] = None) -> None:
        self.state = state
        self.event = event
        self.result = result
        super().__init__(f"State {state!r} does not accept event {event!r}")


class LifecycleError(FsmError):
    """A control operation is not allowed in the current control state."""

    def __init__(self, operation: str, control_state: str) -> None:
        self.operation = operation
        self.control_state = control_state
        super().__init__(f"Cannot {operation} while auto-drive is {control_state}")
