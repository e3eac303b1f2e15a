"""Tests for the event bus and the background event pump."""

from __future__ import annotations

import logging
import threading

import pytest

from conftest import E, S
from fsm_engine import EventBus, EventPump, new_step_driver
from fsm_engine.config import PumpConfig
from fsm_engine.services import StopEvent


class TestEventBus:
    def test_publish_and_get(self):
        bus = EventBus(maxsize=2)
        assert bus.publish(E.X)
        assert bus.qsize() == 1
        assert bus.get(timeout=0.1) == E.X

    def test_full_queue_drops(self, caplog):
        bus = EventBus(maxsize=1)
        assert bus.publish(E.X)
        with caplog.at_level(logging.WARNING, logger="fsm_engine.event_bus"):
            assert not bus.publish(E.Y)
        assert "queue full" in caplog.text
        assert bus.get_nowait() == E.X

    def test_stop_publishes_stop_event(self):
        bus = EventBus()
        bus.stop("done")
        event = bus.get_nowait()
        assert isinstance(event, StopEvent)
        assert event.reason == "done"


@pytest.fixture
def fast_config() -> PumpConfig:
    return PumpConfig(queue_size=16, poll_interval_s=0.05, join_timeout_s=2.0)


class TestEventPump:
    def test_events_are_stepped_in_order(self, fast_config):
        driver = new_step_driver(S.A)
        driver.config_state(S.A).accept(E.X, S.B)
        driver.config_state(S.B).accept(E.Y, S.C)

        pump = EventPump(driver, fast_config)
        pump.start()
        pump.publish(E.X)
        pump.publish(E.Y)
        pump.stop("test done")

        assert not pump.is_running
        assert driver.current_state == S.C
        assert pump.processed == 2

    def test_rejected_event_is_skipped(self, fast_config, caplog):
        driver = new_step_driver(S.A)
        driver.config_state(S.A).accept(E.X, S.B)

        with caplog.at_level(logging.WARNING, logger="fsm_engine.pump"):
            with EventPump(driver, fast_config) as pump:
                pump.publish(E.Z)
                pump.publish(E.X)

        assert driver.current_state == S.B
        assert pump.rejected == 1
        assert pump.processed == 1
        assert "Dropping event" in caplog.text

    def test_hook_exception_is_logged_and_loop_continues(self, fast_config, caplog):
        driver = new_step_driver(S.A)

        def boom():
            raise RuntimeError("enter failed")

        driver.config_state(S.A).accept(E.X, S.B)
        driver.config_state(S.B).accept(E.Y, S.C).on_enter(boom)

        with caplog.at_level(logging.ERROR, logger="fsm_engine.pump"):
            with EventPump(driver, fast_config) as pump:
                pump.publish(E.X)
                pump.publish(E.Y)

        assert driver.current_state == S.C
        assert "Error while dispatching" in caplog.text

    def test_hooks_publish_follow_up_events_until_close(self, fast_config):
        """Step-driving where each hook queues the next event and the last one closes."""
        driver = new_step_driver("S0")
        pump = EventPump(driver, fast_config)
        visited = []
        threads = set()

        def enter(state: str, next_event: str):
            def _action():
                visited.append(state)
                threads.add(threading.current_thread().name)
                pump.publish(next_event)

            return _action

        driver.config_state("S0").accept("E1", "S1").accept("E2", "S2")
        driver.config_state("S1").accept("E3", "S3").accept("E4", "S4").on_enter(enter("S1", "E3"))
        driver.config_state("S2").accept("E1", "S1").on_enter(enter("S2", "E1"))
        driver.config_state("S1").on_enter_from("S2", enter("S1", "E4"))
        driver.config_state("S4").accept("E3", "S3").on_enter(enter("S4", "E3"))
        driver.config_state("S3").on_enter(lambda: (visited.append("S3"), driver.close()))

        pump.start()
        pump.publish("E2")

        assert pump.join(timeout=2.0)
        assert visited == ["S2", "S1", "S4", "S3"]
        assert driver.closed
        assert threads == {"EventPump"}

    def test_stop_from_hook_on_worker_thread(self, fast_config, caplog):
        driver = new_step_driver(S.A)
        pump = EventPump(driver, fast_config)
        driver.config_state(S.A).accept(E.X, S.B)
        driver.config_state(S.B).on_enter(lambda: pump.stop("reached B"))

        with caplog.at_level(logging.INFO, logger="fsm_engine.pump"):
            pump.start()
            pump.publish(E.X)
            assert pump.join(timeout=2.0)

        assert driver.current_state == S.B
        assert pump.processed == 1
        assert "Error while dispatching" not in caplog.text
        assert "reached B" in caplog.text

    def test_producers_on_many_threads(self):
        driver = new_step_driver(S.A)
        driver.config_state(S.A).accept(E.X, S.A)
        config = PumpConfig(queue_size=0, poll_interval_s=0.05, join_timeout_s=5.0)
        pump = EventPump(driver, config)
        pump.start()

        producers = [
            threading.Thread(target=lambda: [pump.publish(E.X) for _ in range(50)])
            for _ in range(4)
        ]
        for producer in producers:
            producer.start()
        for producer in producers:
            producer.join()
        pump.stop()

        assert pump.processed == 200
        assert driver.current_state == S.A

    def test_stop_without_start(self, fast_config):
        pump = EventPump(new_step_driver(S.A), fast_config)
        pump.stop()
        pump.stop()
        assert not pump.is_running
