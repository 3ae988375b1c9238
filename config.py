"""
config.py — Central configuration for the DriveGuard monitoring core.
All constants, probabilities, tick intervals, and file paths are stored here.
No magic numbers should appear in other modules.
"""

import sys
import os

if getattr(sys, 'frozen', False):
    BASE_DIR = sys._MEIPASS
else:
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# ─── Project Paths ────────────────────────────────────────────────────────────
ASSETS_DIR = os.path.join(BASE_DIR, "assets")
LOGS_DIR = os.path.join(os.getcwd(), "logs")  # keep logs outside exe

ALERT_SOUND_PATH = os.path.join(ASSETS_DIR, "alert.wav")
CRITICAL_SOUND_PATH = os.path.join(ASSETS_DIR, "critical.wav")
SESSION_LOG_PATH = os.path.join(LOGS_DIR, "session_log.csv")

# ─── Eye-State Sampler ────────────────────────────────────────────────────────
SAMPLER_TICK_INTERVAL_MS = 2000

# Cumulative thresholds on a uniform variate r in [0, 1):
#   r < DROWSY  → drowsy,  r < CLOSED → closed,  otherwise open
EYE_DROWSY_THRESHOLD = 0.10
EYE_CLOSED_THRESHOLD = 0.30

# ─── Alert Aggregator ─────────────────────────────────────────────────────────
RECENT_HISTORY_SIZE = 5

# ─── Fleet Status Engine ──────────────────────────────────────────────────────
FLEET_TICK_INTERVAL_MS = 5000
FLEET_STATUS_CHANGE_PROBABILITY = 0.05

# Banner messages kept by the control-room feed
CONTROL_ROOM_FEED_SIZE = 50

# ─── Status Labels ────────────────────────────────────────────────────────────
STATUS_SAFE = "safe"
STATUS_WARNING = "warning"
STATUS_DANGER = "danger"

SESSION_NOT_STARTED = "NOT_STARTED"
SESSION_MONITORING = "MONITORING"
SESSION_STOPPED = "STOPPED"

# ─── Demo Fleet ───────────────────────────────────────────────────────────────
# Seed roster shown in the control room when no real roster is supplied.
# Alert ages are seconds before start-up.
DEMO_ROSTER = [
    {"driver_id": "1", "name": "John Smith", "vehicle_id": "TR-001",
     "status": STATUS_SAFE, "location": "Highway I-95 North",
     "shift_start": "06:00", "alert_count": 0},
    {"driver_id": "2", "name": "Maria Garcia", "vehicle_id": "TR-007",
     "status": STATUS_WARNING, "location": "Route 66 West",
     "shift_start": "05:30", "alert_age_sec": 30 * 60, "alert_count": 2},
    {"driver_id": "3", "name": "David Johnson", "vehicle_id": "TR-015",
     "status": STATUS_DANGER, "location": "Interstate 10 East",
     "shift_start": "04:00", "alert_age_sec": 2 * 60, "alert_count": 5},
    {"driver_id": "4", "name": "Sarah Chen", "vehicle_id": "TR-023",
     "status": STATUS_SAFE, "location": "Highway 101 South",
     "shift_start": "07:00", "alert_count": 1},
]

# ─── Demo Run (main.py) ───────────────────────────────────────────────────────
DEMO_DRIVER_NAME = "Demo Driver"
DEMO_VEHICLE_ID = "TR-100"
DEMO_DURATION_SEC = 60
DEMO_REPORT_NAME = "driveguard_report_{stamp}.xlsx"
