"""
session.py — Driver session state and its monitoring lifecycle.
The controller wires the eye-state detector into the alert factory and
aggregator and exposes start / stop / end-session control.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import config
from alerts import AlertAggregator, create_alert
from sampler import EyeState, EyeStateDetector, ObservationEvent
from scheduler import PeriodicTask
from utils import ConfigurationError, monotonic_clock, require


@dataclass
class DriverSession:
    """A checked-in driver. Lives only as long as the monitoring session."""
    driver_name: str
    vehicle_id: str
    shift_start: str = ""
    last_break: str = ""
    is_monitoring: bool = False
    alert_count: int = 0
    last_alert_at: Optional[float] = None
    eye_state: EyeState = EyeState.OPEN

    @classmethod
    def check_in(cls, name: str, vehicle_id: str, shift_start: str = "",
                 last_break: str = "") -> "DriverSession":
        """Create a session from the check-in payload.

        Only name and vehicle id are checked here; anything deeper belongs
        to the intake form.
        """
        name = (name or "").strip()
        vehicle_id = (vehicle_id or "").strip()
        if not name:
            raise ConfigurationError("driver name must not be empty")
        if not vehicle_id:
            raise ConfigurationError("vehicle id must not be empty")
        return cls(driver_name=name, vehicle_id=vehicle_id,
                   shift_start=shift_start or "", last_break=last_break or "")


class SessionController:
    """Owns one driver's monitoring lifecycle.

    States: NOT_STARTED → MONITORING ⇄ STOPPED. ``end_session`` tears the
    whole session down; the controller cannot be restarted afterwards.
    """

    def __init__(self, session: DriverSession, detector: EyeStateDetector,
                 aggregator: Optional[AlertAggregator] = None,
                 clock: Callable[[], float] = monotonic_clock,
                 logger=None,
                 interval_ms: int = config.SAMPLER_TICK_INTERVAL_MS):
        self.session = require(session, "session")
        self.detector = require(detector, "detector")
        self.aggregator = aggregator if aggregator is not None else AlertAggregator()
        self._clock = require(clock, "clock")
        self._logger = logger
        self._state = config.SESSION_NOT_STARTED
        self._interval_ms = interval_ms
        self._task = None

    # ──────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ──────────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> str:
        return self._state

    @property
    def is_monitoring(self) -> bool:
        return self._state == config.SESSION_MONITORING

    @property
    def is_ended(self) -> bool:
        return self.session is None

    def start(self):
        if self.is_ended or self.is_monitoring:
            return
        self._state = config.SESSION_MONITORING
        self.session.is_monitoring = True
        if self._task is None:
            self._task = PeriodicTask(self._interval_ms, self.tick)
        self._task.start()
        self._log("monitoring_started")

    def stop(self):
        if not self.is_monitoring:
            return
        self._cancel_task()
        self._state = config.SESSION_STOPPED
        self.session.is_monitoring = False
        self._log("monitoring_stopped")

    def toggle_monitoring(self):
        if self.is_monitoring:
            self.stop()
        else:
            self.start()

    def end_session(self):
        """Stop sampling and discard the session with its whole alert history."""
        if self.is_ended:
            return
        self._cancel_task()
        self._log("session_ended")
        self.aggregator.clear()
        self.session.is_monitoring = False
        self.session = None
        self._state = config.SESSION_STOPPED

    # ──────────────────────────────────────────────────────────────────────────
    # Sampling
    # ──────────────────────────────────────────────────────────────────────────

    def tick(self) -> Optional[EyeState]:
        """Run one sampling step. Does nothing unless monitoring."""
        if not self.is_monitoring:
            return None

        observation = self.detector.sample()
        self.session.eye_state = observation.eye_state

        if observation.event is ObservationEvent.DROWSY:
            alert = create_alert(self.session, self._clock)
            self.session.alert_count += 1
            self.session.last_alert_at = alert.created_at
            self.aggregator.record(alert)
            self._log("drowsy_alert", alert)
        elif observation.event is ObservationEvent.NORMAL:
            self._log("normal")

        return observation.eye_state

    def acknowledge(self, alert_id: str) -> bool:
        if self.is_ended:
            return False
        removed = self.aggregator.acknowledge(alert_id)
        if removed:
            self._log("acknowledged", alert_id=alert_id)
        return removed

    # ──────────────────────────────────────────────────────────────────────────
    # Internal helpers
    # ──────────────────────────────────────────────────────────────────────────

    def _cancel_task(self):
        if self._task is not None:
            self._task.cancel()

    def _log(self, event_type: str, alert=None, alert_id: str = ""):
        if self._logger is None:
            return
        self._logger.log_session_event(self.session, event_type,
                                       alert=alert, alert_id=alert_id)
