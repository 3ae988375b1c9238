"""
fleet_engine.py — Fleet-wide driver risk status simulation.
Owns the control-room roster and re-rolls each driver's status on a fixed
period, reporting every transition into danger to the control room.
Contains NO display logic — the notifier decides how to present events.
"""

import dataclasses
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

import config
from scheduler import PeriodicTask
from utils import ConfigurationError, monotonic_clock, require

STATUSES = (config.STATUS_SAFE, config.STATUS_WARNING, config.STATUS_DANGER)

_REQUIRED_FIELDS = ("driver_id", "name", "vehicle_id")


@dataclass(frozen=True)
class FleetDriverRecord:
    """One driver on the control-room roster."""
    driver_id: str
    name: str
    vehicle_id: str
    status: str = config.STATUS_SAFE
    location: str = ""
    shift_start: str = ""
    last_alert_at: Optional[float] = None
    alert_count: int = 0

    def __post_init__(self):
        for name in _REQUIRED_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"roster entry is missing '{name}'")
        if self.status not in STATUSES:
            raise ConfigurationError(
                f"roster entry {self.driver_id!r} has unknown status {self.status!r}"
            )
        if (not isinstance(self.alert_count, int) or isinstance(self.alert_count, bool)
                or self.alert_count < 0):
            raise ConfigurationError(
                f"roster entry {self.driver_id!r} needs a non-negative integer alert count"
            )
        if self.last_alert_at is not None and not isinstance(self.last_alert_at, (int, float)):
            raise ConfigurationError(
                f"roster entry {self.driver_id!r} has a non-numeric last alert time"
            )

    @classmethod
    def from_dict(cls, data: dict, clock: Callable[[], float] = monotonic_clock):
        """Build a record from a roster dict.

        ``alert_age_sec`` (seconds since the last alert) is accepted in place
        of ``last_alert_at``.
        """
        missing = [name for name in _REQUIRED_FIELDS if name not in data]
        if missing:
            raise ConfigurationError(f"roster entry is missing {', '.join(missing)}")

        last_alert_at = data.get("last_alert_at")
        if last_alert_at is None and data.get("alert_age_sec") is not None:
            try:
                last_alert_at = clock() - float(data["alert_age_sec"])
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"roster entry {data['driver_id']!r} has a non-numeric alert age"
                ) from None

        return cls(
            driver_id=str(data["driver_id"]),
            name=data["name"],
            vehicle_id=data["vehicle_id"],
            status=data.get("status", config.STATUS_SAFE),
            location=data.get("location", ""),
            shift_start=data.get("shift_start", ""),
            last_alert_at=last_alert_at,
            alert_count=data.get("alert_count", 0),
        )


@dataclass(frozen=True)
class FleetSummary:
    total: int
    safe: int
    warning: int
    danger: int


class FleetStatusEngine:
    """Stochastic risk-status feed over a fixed roster.

    Args:
        roster: Iterable of FleetDriverRecord or roster dicts.
        rng: Uniform random source with a ``random()`` method. Required.
        clock: Timestamp source for ``last_alert_at``. Required.
        notifier: Control-room collaborator implementing
            ``on_critical_transition(driver_id, name, vehicle_id, timestamp)``
            and ``on_driver_contacted(driver_id, name, vehicle_id)``.
        interval_ms: Period of the live feed.
    """

    def __init__(self, roster: Iterable, rng, clock: Callable[[], float] = monotonic_clock,
                 notifier=None, interval_ms: int = config.FLEET_TICK_INTERVAL_MS):
        self._rng = require(rng, "rng")
        self._clock = require(clock, "clock")
        self._notifier = notifier
        self._roster = self._build_roster(roster)
        self._interval_ms = interval_ms
        self._task = None

    # ──────────────────────────────────────────────────────────────────────────
    # Public API
    # ──────────────────────────────────────────────────────────────────────────

    @property
    def roster(self) -> List[FleetDriverRecord]:
        return list(self._roster)

    @property
    def is_running(self) -> bool:
        return self._task is not None and self._task.is_running

    def tick(self, roster: Iterable) -> List[FleetDriverRecord]:
        """Advance every record once and return the new roster.

        Roster entries go through the same validation as at construction.
        Critical-transition notifications are sent once the whole new roster
        has been built.
        """
        updated, transitions = self._advance_all(self._build_roster(roster))
        self._notify(transitions)
        return updated

    def step(self) -> List[FleetDriverRecord]:
        """Tick the owned roster in place of the previous one."""
        self._roster, transitions = self._advance_all(self._roster)
        self._notify(transitions)
        return self.roster

    def start(self):
        """Run ``step`` every interval on the Qt event loop."""
        if self._task is None:
            self._task = PeriodicTask(self._interval_ms, self.step)
        self._task.start()

    def stop(self):
        if self._task is not None:
            self._task.cancel()

    def find(self, driver_id: str) -> Optional[FleetDriverRecord]:
        for record in self._roster:
            if record.driver_id == driver_id:
                return record
        return None

    def contact_driver(self, driver_id: str) -> Optional[FleetDriverRecord]:
        """Ask the control room to open a line to a driver. Unknown ids are ignored."""
        record = self.find(driver_id)
        if record is not None and self._notifier is not None:
            self._notifier.on_driver_contacted(
                record.driver_id, record.name, record.vehicle_id
            )
        return record

    def summary(self) -> FleetSummary:
        counts = {status: 0 for status in STATUSES}
        for record in self._roster:
            counts[record.status] += 1
        return FleetSummary(
            total=len(self._roster),
            safe=counts[config.STATUS_SAFE],
            warning=counts[config.STATUS_WARNING],
            danger=counts[config.STATUS_DANGER],
        )

    @property
    def critical_count(self) -> int:
        return self.summary().danger

    # ──────────────────────────────────────────────────────────────────────────
    # Internal helpers
    # ──────────────────────────────────────────────────────────────────────────

    def _build_roster(self, roster) -> List[FleetDriverRecord]:
        if roster is None:
            raise ConfigurationError("roster must be provided")
        records = []
        seen = set()
        for entry in roster:
            if isinstance(entry, dict):
                entry = FleetDriverRecord.from_dict(entry, self._clock)
            elif not isinstance(entry, FleetDriverRecord):
                raise ConfigurationError(f"unsupported roster entry: {entry!r}")
            if entry.driver_id in seen:
                raise ConfigurationError(f"duplicate driver id {entry.driver_id!r}")
            seen.add(entry.driver_id)
            records.append(entry)
        return records

    def _advance_all(self, roster):
        updated = []
        transitions = []
        for record in roster:
            new_record, critical = self._advance(record)
            updated.append(new_record)
            if critical:
                transitions.append(new_record)
        return updated, transitions

    def _notify(self, transitions):
        if self._notifier is None:
            return
        for record in transitions:
            self._notifier.on_critical_transition(
                record.driver_id, record.name, record.vehicle_id,
                record.last_alert_at
            )

    def _advance(self, record: FleetDriverRecord):
        """Return the re-rolled record and whether it just turned critical."""
        if float(self._rng.random()) >= config.FLEET_STATUS_CHANGE_PROBABILITY:
            return record, False

        index = min(int(float(self._rng.random()) * len(STATUSES)), len(STATUSES) - 1)
        new_status = STATUSES[index]

        if new_status == config.STATUS_DANGER:
            if record.status == config.STATUS_DANGER:
                return record, False
            updated = dataclasses.replace(
                record,
                status=new_status,
                last_alert_at=self._clock(),
                alert_count=record.alert_count + 1,
            )
            return updated, True

        if new_status == config.STATUS_WARNING:
            updated = dataclasses.replace(
                record, status=new_status, last_alert_at=self._clock()
            )
            return updated, False

        return dataclasses.replace(record, status=new_status), False


def demo_roster(clock: Callable[[], float] = monotonic_clock) -> List[FleetDriverRecord]:
    """The four-driver fleet shown when the control room starts empty-handed."""
    return [FleetDriverRecord.from_dict(entry, clock) for entry in config.DEMO_ROSTER]
