"""Data structures representing the state graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional

from .actions import Action

State = Hashable
Event = Hashable


@dataclass(slots=True, eq=False)
class StateNode:
    """A state in the graph: its transition table and its hooks.

    Every mapping is created with the node, so transitions and hook
    overrides can be registered in any order.
    """

    id: State
    enter_action: Optional[Action] = None
    enter_from: Dict[State, Action] = field(default_factory=dict)
    exit_action: Optional[Action] = None
    exit_on: Dict[Event, Action] = field(default_factory=dict)
    transitions: Dict[Event, State] = field(default_factory=dict)

    def next_state_for(self, event: Event) -> Optional[State]:
        """Return the destination state for the provided event."""
        return self.transitions.get(event)

    def accepts(self, event: Event) -> bool:
        return event in self.transitions

    def resolve_exit(self, event: Event) -> Optional[Action]:
        """Exit action for leaving this state on ``event``."""
        action = self.exit_on.get(event)
        return action if action is not None else self.exit_action

    def resolve_enter(self, previous: State) -> Optional[Action]:
        """Enter action for arriving here from ``previous``."""
        action = self.enter_from.get(previous)
        return action if action is not None else self.enter_action

    def clear(self) -> None:
        self.enter_action = None
        self.exit_action = None
        self.enter_from.clear()
        self.exit_on.clear()
        self.transitions.clear()


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Result of executing a transition."""

    previous_state: State
    event: Event
    next_state: State
    accepted: bool
    message: str = ""

    @property
    def changed(self) -> bool:
        """Return True if the transition changed the state."""
        return self.accepted and self.previous_state != self.next_state
