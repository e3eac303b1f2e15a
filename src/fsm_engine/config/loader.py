"""Configuration loader utilities."""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import yaml

from .models import Config, EngineConfig, LoggingConfig, PumpConfig

_Section = TypeVar("_Section")


def _normalize_path(path: Path | str) -> Path:
    return path if isinstance(path, Path) else Path(path)


def _load_raw_config(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    suffix = config_path.suffix.lower()
    with config_path.open("r", encoding="utf-8") as stream:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(stream) or {}
        if suffix == ".json":
            return json.load(stream)
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(config_path: Path | str) -> Config:
    """Load configuration file and construct Config dataclass."""

    config_path = _normalize_path(config_path)
    raw = _load_raw_config(config_path)
    if not isinstance(raw, dict):
        raise ValueError("Configuration root must be a mapping.")

    engine = _build_section(EngineConfig, raw.get("engine"), "engine")
    pump = _build_section(PumpConfig, raw.get("pump"), "pump")

    logging_raw = dict(raw.get("logging") or {})
    log_path = logging_raw.get("filepath")
    if log_path:
        # Relative log paths follow the config file, not the working directory.
        logging_raw["filepath"] = (config_path.parent / log_path).resolve()
    logging = _build_section(LoggingConfig, logging_raw, "logging")

    return Config(engine=engine, pump=pump, logging=logging)


def _build_section(section_type: Type[_Section], raw_section: Any, name: str) -> _Section:
    if raw_section is None:
        return section_type()
    if not isinstance(raw_section, dict):
        raise ValueError(f"Configuration section '{name}' must be a mapping.")

    known = {item.name for item in fields(section_type)}
    unknown = sorted(set(raw_section) - known)
    if unknown:
        raise ValueError(f"Unknown keys in '{name}' section: {', '.join(unknown)}")
    return section_type(**raw_section)
