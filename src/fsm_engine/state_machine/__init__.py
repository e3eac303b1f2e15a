"""State graph, transition engine and drivers."""

from .actions import Action
from .control import AutoDriveController, DriveControl
from .drivers import AutoDriver, StepDriver, new_auto_driver, new_step_driver
from .engine import Listener, TransitionEngine
from .graph import StateConfig, StateGraph
from .model import Event, State, StateNode, TransitionResult

__all__ = [
    "Action",
    "AutoDriveController",
    "AutoDriver",
    "DriveControl",
    "Event",
    "Listener",
    "State",
    "StateConfig",
    "StateGraph",
    "StateNode",
    "StepDriver",
    "TransitionEngine",
    "TransitionResult",
    "new_auto_driver",
    "new_step_driver",
]
