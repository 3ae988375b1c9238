"""Tests for timer-driven ticks on the Qt event loop."""

import pytest
from PyQt6.QtCore import QEventLoop, QTimer

from alerts import AlertAggregator
from fleet_engine import FleetStatusEngine, demo_roster
from sampler import SimulatedEyeDetector
from scheduler import PeriodicTask
from session import DriverSession, SessionController
from utils import make_rng


def run_event_loop(ms):
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


@pytest.fixture(autouse=True)
def _qt(qapp):
    return qapp


class TestPeriodicTask:

    def test_fires_until_cancelled(self):
        calls = []
        task = PeriodicTask(10, lambda: calls.append(1))
        task.start()
        assert task.is_running
        run_event_loop(120)
        task.cancel()
        fired = len(calls)
        assert fired >= 2

        run_event_loop(60)
        assert len(calls) == fired
        assert not task.is_running

    def test_cancel_is_idempotent(self):
        task = PeriodicTask(10, lambda: None)
        task.cancel()
        task.start()
        task.cancel()
        task.cancel()
        assert not task.is_running

    def test_cancel_from_inside_tick(self):
        calls = []
        task = PeriodicTask(5, lambda: (calls.append(1), task.cancel()))
        task.start()
        run_event_loop(80)
        assert calls == [1]

    def test_interval(self):
        assert PeriodicTask(2000, lambda: None).interval_ms == 2000


class TestTimedComponents:

    def test_session_samples_on_timer(self):
        session = DriverSession.check_in("Ana", "TR-1")
        controller = SessionController(
            session, SimulatedEyeDetector(make_rng(1)), AlertAggregator(),
            interval_ms=10,
        )
        controller.start()
        run_event_loop(100)
        controller.end_session()
        assert session.is_monitoring is False

    def test_no_ticks_after_stop(self):
        ticks = []

        class CountingDetector(SimulatedEyeDetector):
            def sample(self):
                ticks.append(1)
                return super().sample()

        session = DriverSession.check_in("Ana", "TR-1")
        controller = SessionController(session, CountingDetector(make_rng(1)),
                                       interval_ms=10)
        controller.start()
        run_event_loop(80)
        controller.stop()
        after_stop = len(ticks)
        assert after_stop >= 1
        run_event_loop(60)
        assert len(ticks) == after_stop

    def test_fleet_runs_and_stops(self, clock):
        engine = FleetStatusEngine(demo_roster(clock), make_rng(0), clock,
                                   interval_ms=10)
        engine.start()
        assert engine.is_running
        run_event_loop(50)
        engine.stop()
        engine.stop()
        assert not engine.is_running
