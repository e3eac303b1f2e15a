"""Transition engine shared by the step and auto drivers."""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Iterable, MutableSequence, Optional

from fsm_engine.config.models import EngineConfig
from fsm_engine.infra.exceptions import InvalidStateError, RejectedEventError

from .actions import run_action
from .graph import StateConfig, StateGraph
from .model import Event, State, TransitionResult

Listener = Callable[[TransitionResult], None]

logger = logging.getLogger("fsm_engine.engine")


class TransitionEngine:
    """Current state plus the graph, and the single-transition ``step``.

    The engine has no locking. One caller at a time may drive it.
    """

    def __init__(self, initial_state: State, config: Optional[EngineConfig] = None) -> None:
        self._config = config or EngineConfig()
        self._graph: Optional[StateGraph] = StateGraph()
        self._graph.node(initial_state)
        self._current_state: Optional[State] = initial_state
        self._listeners: MutableSequence[Listener] = []
        self._history: Deque[TransitionResult] = deque(maxlen=self._config.history_size)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def current_state(self) -> Optional[State]:
        """The current state id, ``None`` once closed."""
        return self._current_state

    @property
    def closed(self) -> bool:
        return self._graph is None

    # Configuration ---------------------------------------------------------

    def config_state(self, state: State) -> StateConfig:
        graph = self._require_graph()
        return StateConfig(graph, graph.node(state))

    def states(self) -> tuple:
        return self._require_graph().states()

    def accepted_events(self, state: Optional[State] = None) -> tuple:
        graph = self._require_graph()
        node = graph.get(self._current_state if state is None else state)
        if node is None:
            return ()
        return tuple(node.transitions)

    # Listeners and history -------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        """Register a listener that receives TransitionResult notifications."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def history(self) -> Iterable[TransitionResult]:
        """Return an iterable snapshot of the transition history."""
        return tuple(self._history)

    # Execution -------------------------------------------------------------

    def step(self, event: Event) -> TransitionResult:
        """Deliver ``event`` to the current state and run its transition.

        The exit action runs while ``current_state`` still reads as the
        source, the enter action after it reads as the target.
        """
        source = self._current_state
        node = self._graph.get(source) if self._graph is not None else None
        if node is None:
            raise InvalidStateError(source)

        target = node.next_state_for(event)
        if target is None and not node.accepts(event):
            rejected = TransitionResult(
                previous_state=source,
                event=event,
                next_state=source,
                accepted=False,
                message=f"Event {event!r} rejected in state {source!r}.",
            )
            self._record(rejected)
            if self._config.log_transitions:
                logger.debug("Rejected event %r in state %r", event, source)
            raise RejectedEventError(source, event, rejected)

        run_action(node.resolve_exit(event))
        if self._graph is None:
            # The exit action closed the driver; there is nothing left to enter.
            return TransitionResult(
                previous_state=source,
                event=event,
                next_state=target,
                accepted=True,
                message="Driver closed by exit action.",
            )

        self._current_state = target
        target_node = self._graph.node(target)
        if self._config.log_transitions:
            logger.debug("Transition %r -> %r (trigger: %r)", source, target, event)
        result = TransitionResult(
            previous_state=source,
            event=event,
            next_state=target,
            accepted=True,
            message=f"{source!r} -> {target!r} on {event!r}.",
        )
        try:
            run_action(target_node.resolve_enter(source))
        finally:
            # The state has already changed, so the transition is recorded
            # even when the enter action raises.
            self._record(result)
        return result

    def close(self) -> None:
        """Discard the graph; afterwards every step raises InvalidStateError."""
        if self._graph is None:
            return
        self._graph.clear()
        self._graph = None
        self._current_state = None
        self._listeners.clear()
        logger.debug("Transition engine closed.")

    # Internal --------------------------------------------------------------

    def _require_graph(self) -> StateGraph:
        if self._graph is None:
            raise InvalidStateError(None, "Driver has been closed")
        return self._graph

    def _record(self, result: TransitionResult) -> None:
        self._history.append(result)
        for listener in tuple(self._listeners):
            listener(result)
