"""Finite-state-machine execution engine with step and auto drivers."""

from .config import Config, EngineConfig, LoggingConfig, PumpConfig, load_config
from .infra import FsmError, InvalidStateError, LifecycleError, RejectedEventError, configure_logging
from .services import EventBus, EventPump
from .state_machine import (
    Action,
    AutoDriver,
    StateConfig,
    StepDriver,
    TransitionResult,
    new_auto_driver,
    new_step_driver,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "AutoDriver",
    "Config",
    "EngineConfig",
    "EventBus",
    "EventPump",
    "FsmError",
    "InvalidStateError",
    "LifecycleError",
    "LoggingConfig",
    "PumpConfig",
    "RejectedEventError",
    "StateConfig",
    "StepDriver",
    "TransitionResult",
    "configure_logging",
    "load_config",
    "new_auto_driver",
    "new_step_driver",
]
