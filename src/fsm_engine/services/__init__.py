"""Services for driving a step driver from several threads."""

from .event_bus import EventBus
from .events import StopEvent
from .pump import EventPump

__all__ = [
    "EventBus",
    "EventPump",
    "StopEvent",
]
