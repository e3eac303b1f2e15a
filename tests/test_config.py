"""Tests for configuration loading and logging setup."""

from __future__ import annotations

import json
import logging
import logging.handlers

import pytest

from fsm_engine.config import Config, EngineConfig, LoggingConfig, PumpConfig, load_config
from fsm_engine.infra import configure_logging


def test_defaults():
    config = Config()
    assert config.engine.history_size == 64
    assert config.engine.log_transitions is True
    assert config.pump.queue_size == 256
    assert config.logging.filepath is None
    assert config.logging.resolved_path() is None


def test_load_yaml(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text(
        "engine:\n"
        "  history_size: 8\n"
        "  log_transitions: false\n"
        "pump:\n"
        "  queue_size: 4\n"
        "logging:\n"
        "  level: DEBUG\n"
        "  filepath: logs/fsm.log\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.engine == EngineConfig(history_size=8, log_transitions=False)
    assert config.pump.queue_size == 4
    assert config.pump.join_timeout_s == PumpConfig().join_timeout_s
    assert config.logging.level == "DEBUG"
    assert config.logging.filepath == (tmp_path / "logs" / "fsm.log").resolve()


def test_load_json(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({"engine": {"history_size": 2}}), encoding="utf-8")

    config = load_config(str(path))

    assert config.engine.history_size == 2
    assert config.logging == LoggingConfig()


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == Config()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "engine.ini"
    path.write_text("[engine]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported"):
        load_config(path)


def test_unknown_key(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("engine:\n  history: 3\n", encoding="utf-8")
    with pytest.raises(ValueError, match="engine"):
        load_config(path)


def test_invalid_values():
    with pytest.raises(ValueError):
        EngineConfig(history_size=0)
    with pytest.raises(ValueError):
        PumpConfig(queue_size=-1)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_with_file(tmp_path, restore_root_logger):
    log_path = tmp_path / "logs" / "fsm.log"
    configure_logging(LoggingConfig(level="DEBUG", filepath=log_path, console=False))

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)

    logging.getLogger("fsm_engine.test").debug("hello %s", "file")
    for handler in root.handlers:
        handler.flush()
    assert "hello file" in log_path.read_text(encoding="utf-8")


def test_configure_logging_console_only(restore_root_logger):
    configure_logging(LoggingConfig(level="WARNING"))

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)
