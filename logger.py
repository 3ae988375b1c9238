"""
logger.py — Session event logger for the DriveGuard core.
Appends rows to a CSV file with timestamps, driver, vehicle, event type,
eye state, and alert details.
"""

import csv
import os
from datetime import datetime

import config


class SessionLogger:
    """Logs monitoring and fleet events to a CSV file."""

    HEADER = [
        "Timestamp",
        "Source",
        "Driver",
        "Vehicle",
        "Event_Type",
        "Eye_State",
        "Alert_Id",
        "Severity",
        "Alert_Count",
    ]

    def __init__(self, path: str = config.SESSION_LOG_PATH):
        self.path = path

        # Ensure the logs directory exists
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        # Open the CSV file in append mode
        file_exists = os.path.exists(path)
        self._file = open(path, mode="a", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)

        # Write header if the file is new or empty
        if not file_exists or os.path.getsize(path) == 0:
            self._writer.writerow(self.HEADER)
            self._file.flush()

    def log_session_event(self, session, event_type: str, alert=None,
                          alert_id: str = ""):
        """Append one row for a driver-session event.

        Args:
            session: The DriverSession the event belongs to.
            event_type: e.g. "drowsy_alert", "normal", "acknowledged".
            alert: The Alert created by this event, if any.
            alert_id: Alert id for events that only reference one.
        """
        self._write_row(
            source="session",
            driver=session.driver_name,
            vehicle=session.vehicle_id,
            event_type=event_type,
            eye_state=session.eye_state.value,
            alert_id=alert.id if alert else alert_id,
            severity=alert.severity.value if alert else "",
            alert_count=session.alert_count,
        )

    def log_fleet_event(self, driver_id: str, name: str, vehicle_id: str,
                        event_type: str):
        """Append one row for a control-room event (keyed by driver id)."""
        self._write_row(
            source=f"fleet:{driver_id}",
            driver=name,
            vehicle=vehicle_id,
            event_type=event_type,
            eye_state="",
            alert_id="",
            severity="",
            alert_count="",
        )

    def close(self):
        """Close the CSV file handle."""
        if self._file and not self._file.closed:
            self._file.close()

    def _write_row(self, source, driver, vehicle, event_type, eye_state,
                   alert_id, severity, alert_count):
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        self._writer.writerow([
            timestamp,
            source,
            driver,
            vehicle,
            event_type,
            eye_state,
            alert_id,
            severity,
            str(alert_count),
        ])
        self._file.flush()
