"""
alerts.py — Alert records, the alert factory, and the per-session aggregator.
The aggregator owns a session's alert history and derives the single active
alert shown to the driver. Contains NO audio or display logic.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

import config
from utils import monotonic_clock, new_alert_id


class AlertKind(Enum):
    DROWSY = "drowsy"
    FATIGUE = "fatigue"
    NORMAL = "normal"


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Alert:
    """Immutable alert raised for one driver session."""
    kind: AlertKind
    created_at: float
    driver_name: str
    vehicle_id: str
    severity: Severity
    id: str = field(default_factory=new_alert_id)


def create_alert(session, clock: Callable[[], float] = monotonic_clock) -> Alert:
    """Build the alert for a drowsy observation.

    Args:
        session: Anything exposing ``driver_name`` and ``vehicle_id``.
        clock: Source of the ``created_at`` timestamp.
    """
    return Alert(
        kind=AlertKind.DROWSY,
        created_at=clock(),
        driver_name=session.driver_name,
        vehicle_id=session.vehicle_id,
        severity=Severity.HIGH,
    )


def _is_active_candidate(alert: Alert) -> bool:
    return alert.kind is not AlertKind.NORMAL and alert.severity is Severity.HIGH


class AlertAggregator:
    """Insertion-ordered alert history with a derived active alert.

    Listeners registered with ``add_listener`` are called with the new active
    alert (or None) after every change, once the history is fully updated.
    """

    def __init__(self):
        # Newest first: (insertion sequence, alert)
        self._entries: List[tuple] = []
        self._sequence = itertools.count()
        self._active: Optional[Alert] = None
        self._listeners: List[Callable[[Optional[Alert]], None]] = []

    # ──────────────────────────────────────────────────────────────────────────
    # Public API
    # ──────────────────────────────────────────────────────────────────────────

    def add_listener(self, callback: Callable[[Optional[Alert]], None]):
        self._listeners.append(callback)

    def record(self, alert: Alert):
        """Insert an alert at the head of the history."""
        self._entries.insert(0, (next(self._sequence), alert))
        self._refresh_active()

    def acknowledge(self, alert_id: str) -> bool:
        """Remove the alert with this id. Unknown ids are ignored.

        Returns:
            True if an alert was removed.
        """
        for index, (_, alert) in enumerate(self._entries):
            if alert.id == alert_id:
                del self._entries[index]
                self._refresh_active()
                return True
        return False

    def active_alert(self) -> Optional[Alert]:
        return self._active

    def recent_history(self, n: int = config.RECENT_HISTORY_SIZE) -> List[Alert]:
        """Up to ``n`` most recent non-normal alerts, newest first."""
        if n <= 0:
            return []
        entries = [e for e in self._entries if e[1].kind is not AlertKind.NORMAL]
        entries.sort(key=self._recency_key, reverse=True)
        return [alert for _, alert in entries[:n]]

    def history(self) -> List[Alert]:
        """Full history, most recently inserted first."""
        return [alert for _, alert in self._entries]

    def clear(self):
        """Drop the whole history (session teardown)."""
        self._entries.clear()
        self._refresh_active()

    def statistics(self) -> Dict[str, int]:
        """Alert totals by severity and kind."""
        alerts = self.history()
        stats = {"total_alerts": len(alerts)}
        for severity in Severity:
            stats[f"{severity.value}_alerts"] = sum(
                1 for a in alerts if a.severity is severity
            )
        for kind in AlertKind:
            stats[f"{kind.value}_kind"] = sum(1 for a in alerts if a.kind is kind)
        return stats

    def __len__(self):
        return len(self._entries)

    # ──────────────────────────────────────────────────────────────────────────
    # Internal helpers
    # ──────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _recency_key(entry):
        sequence, alert = entry
        return alert.created_at, sequence

    def _refresh_active(self):
        candidates = [e for e in self._entries if _is_active_candidate(e[1])]
        new_active = max(candidates, key=self._recency_key)[1] if candidates else None

        previous_id = self._active.id if self._active else None
        new_id = new_active.id if new_active else None
        self._active = new_active

        if previous_id != new_id:
            for callback in list(self._listeners):
                callback(new_active)
