"""State graph and the fluent configuration handle."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from .actions import Action, ensure_action
from .model import Event, State, StateNode


class StateGraph:
    """Mapping from state id to node; nodes are created on first reference."""

    def __init__(self) -> None:
        self._nodes: Dict[State, StateNode] = {}

    def node(self, state: State) -> StateNode:
        """Return the node for ``state``, creating an empty one if absent."""
        node = self._nodes.get(state)
        if node is None:
            node = StateNode(id=state)
            self._nodes[state] = node
        return node

    def get(self, state: State) -> Optional[StateNode]:
        return self._nodes.get(state)

    def states(self) -> tuple:
        return tuple(self._nodes)

    def clear(self) -> None:
        for node in self._nodes.values():
            node.clear()
        self._nodes.clear()

    def __contains__(self, state: object) -> bool:
        return state in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[State]:
        return iter(self._nodes)


class StateConfig:
    """Fluent handle returned by ``config_state``; every setter returns self."""

    __slots__ = ("_graph", "_node")

    def __init__(self, graph: StateGraph, node: StateNode) -> None:
        self._graph = graph
        self._node = node

    @property
    def state(self) -> State:
        return self._node.id

    def accept(self, event: Event, target: State) -> "StateConfig":
        """Transition to ``target`` on ``event``. A later call for the same event wins."""
        self._graph.node(target)
        self._node.transitions[event] = target
        return self

    def on_enter(self, action: Optional[Action]) -> "StateConfig":
        self._node.enter_action = ensure_action(action)
        return self

    def on_enter_from(self, source: State, action: Optional[Action]) -> "StateConfig":
        """Run ``action`` instead of the generic enter action when arriving from ``source``."""
        action = ensure_action(action)
        if action is None:
            self._node.enter_from.pop(source, None)
        else:
            self._node.enter_from[source] = action
        return self

    def on_exit(self, action: Optional[Action]) -> "StateConfig":
        self._node.exit_action = ensure_action(action)
        return self

    def on_exit_event(self, event: Event, action: Optional[Action]) -> "StateConfig":
        """Run ``action`` instead of the generic exit action when leaving on ``event``."""
        action = ensure_action(action)
        if action is None:
            self._node.exit_on.pop(event, None)
        else:
            self._node.exit_on[event] = action
        return self

    def accepts(self, event: Event) -> bool:
        return self._node.accepts(event)

    def target_for(self, event: Event) -> Optional[State]:
        return self._node.next_state_for(event)

    def __repr__(self) -> str:
        return f"StateConfig(state={self._node.id!r}, events={list(self._node.transitions)!r})"
