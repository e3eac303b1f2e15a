"""Step and auto drivers: two restricted views over one TransitionEngine."""

from __future__ import annotations

from typing import Iterable, Optional

from fsm_engine.config.models import EngineConfig
from fsm_engine.infra.exceptions import RejectedEventError

from .control import AutoDriveController
from .engine import Listener, TransitionEngine
from .graph import StateConfig
from .model import Event, State, TransitionResult


class _Driver:
    """Configuration, introspection and lifecycle shared by both drivers."""

    def __init__(self, initial_state: State, config: Optional[EngineConfig] = None) -> None:
        self._engine = TransitionEngine(initial_state, config)

    @property
    def current_state(self) -> Optional[State]:
        return self._engine.current_state

    @property
    def closed(self) -> bool:
        return self._engine.closed

    def config_state(self, state: State) -> StateConfig:
        """Return the configuration handle for ``state``, creating it if needed."""
        return self._engine.config_state(state)

    def states(self) -> tuple:
        return self._engine.states()

    def accepted_events(self, state: Optional[State] = None) -> tuple:
        """Events accepted by ``state`` (the current state by default)."""
        return self._engine.accepted_events(state)

    def add_listener(self, listener: Listener) -> None:
        self._engine.add_listener(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._engine.remove_listener(listener)

    def history(self) -> Iterable[TransitionResult]:
        return self._engine.history()

    def close(self) -> None:
        self._engine.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(current_state={self.current_state!r}, closed={self.closed})"


class StepDriver(_Driver):
    """Driver where the caller supplies every event through ``step``."""

    def step(self, event: Event) -> TransitionResult:
        """Run one transition; raises RejectedEventError or InvalidStateError."""
        return self._engine.step(event)

    def try_step(self, event: Event) -> TransitionResult:
        """Like ``step`` but a rejected event comes back with ``accepted=False``."""
        try:
            return self._engine.step(event)
        except RejectedEventError as exc:
            return exc.result


class AutoDriver(_Driver):
    """Driver that runs itself on events staged by its own hooks."""

    def __init__(self, initial_state: State, config: Optional[EngineConfig] = None) -> None:
        super().__init__(initial_state, config)
        self._controller = AutoDriveController(self._engine)

    @property
    def control_state(self) -> str:
        return self._controller.control_state

    @property
    def pending(self) -> Optional[Event]:
        """The staged event, or ``None`` if nothing is staged."""
        return self._controller.pending

    @property
    def has_pending(self) -> bool:
        return self._controller.has_pending

    @property
    def is_driving(self) -> bool:
        return self._controller.is_driving

    def start(self, initial_event: Event) -> None:
        self._controller.start(initial_event)

    def feed(self, event: Event) -> None:
        self._controller.feed(event)

    def pause(self, next_event: Event) -> None:
        self._controller.pause(next_event)

    def resume(self) -> None:
        self._controller.resume()

    def stop(self) -> None:
        self._controller.stop()

    def close(self) -> None:
        self._controller.stop()
        super().close()

    def __repr__(self) -> str:
        return (
            f"AutoDriver(current_state={self.current_state!r}, "
            f"control_state={self.control_state!r}, closed={self.closed})"
        )


def new_step_driver(initial_state: State, config: Optional[EngineConfig] = None) -> StepDriver:
    return StepDriver(initial_state, config)


def new_auto_driver(initial_state: State, config: Optional[EngineConfig] = None) -> AutoDriver:
    return AutoDriver(initial_state, config)
