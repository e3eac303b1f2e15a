"""Entry and exit actions attached to states."""

from __future__ import annotations

from typing import Callable, Optional

Action = Callable[[], None]


def ensure_action(action: Optional[Action]) -> Optional[Action]:
    """Validate an action before it is stored on a state node.

    ``None`` is accepted and means "no action".
    """
    if action is not None and not callable(action):
        raise TypeError(f"Action must be a zero-argument callable, got {type(action).__name__}")
    return action


def run_action(action: Optional[Action]) -> None:
    if action is not None:
        action()
