"""Infrastructure helpers: error types and logging setup."""

from .exceptions import FsmError, InvalidStateError, LifecycleError, RejectedEventError
from .logging import configure_logging

__all__ = [
    "FsmError",
    "InvalidStateError",
    "LifecycleError",
    "RejectedEventError",
    "configure_logging",
]
