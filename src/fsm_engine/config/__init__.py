"""Configuration package for the transition engine and event pump."""

from .loader import load_config
from .models import Config, EngineConfig, LoggingConfig, PumpConfig

__all__ = [
    "Config",
    "EngineConfig",
    "LoggingConfig",
    "PumpConfig",
    "load_config",
]
