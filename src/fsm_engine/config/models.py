"""Dataclass definitions for engine configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional


@dataclass(frozen=True)
class EngineConfig:
    """Transition engine configuration."""

    history_size: int = 64
    log_transitions: bool = True

    def __post_init__(self) -> None:
        if self.history_size <= 0:
            raise ValueError("history_size must be a positive integer.")


@dataclass(frozen=True)
class PumpConfig:
    """Event pump configuration."""

    queue_size: int = 256
    poll_interval_s: float = 0.5
    join_timeout_s: float = 2.0

    def __post_init__(self) -> None:
        if self.queue_size < 0:
            raise ValueError("queue_size must be zero (unbounded) or positive.")


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    filepath: Optional[Path] = None
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 5
    console: bool = True

    def resolved_path(self) -> Optional[Path]:
        if self.filepath is None:
            return None
        path = self.filepath if isinstance(self.filepath, Path) else Path(self.filepath)
        return path.expanduser().resolve()


@dataclass(frozen=True)
class Config:
    """Root configuration object."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    pump: PumpConfig = field(default_factory=PumpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
