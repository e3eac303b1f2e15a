"""Messages carried on the event bus besides the driver's own events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StopEvent:
    """Asks the pump worker to finish, with an optional reason."""

    reason: str | None = None
    created_at: datetime = field(default_factory=_utc_now)
