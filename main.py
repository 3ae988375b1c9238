"""
main.py — Entry point for the DriveGuard monitoring core.
Checks in a demo driver, starts monitoring alongside the demo fleet feed on
the Qt event loop, and exports an Excel report when the run ends.
"""

import os
import sys
from datetime import datetime

from PyQt6.QtCore import QCoreApplication, QTimer

import config
from alarm import AlarmManager, ControlRoomFeed
from alerts import AlertAggregator
from fleet_engine import FleetStatusEngine, demo_roster
from logger import SessionLogger
from report import export_report
from sampler import SimulatedEyeDetector
from session import DriverSession, SessionController
from utils import make_rng, monotonic_clock


def main():
    app = QCoreApplication(sys.argv)
    rng = make_rng()

    logger = SessionLogger()
    alarm_manager = AlarmManager()
    feed = ControlRoomFeed(logger=logger)

    # ── Driver session ──
    session = DriverSession.check_in(
        config.DEMO_DRIVER_NAME, config.DEMO_VEHICLE_ID,
        shift_start=datetime.now().strftime("%H:%M"),
    )
    aggregator = AlertAggregator()
    aggregator.add_listener(alarm_manager.on_active_alert_changed)
    controller = SessionController(
        session, SimulatedEyeDetector(rng), aggregator,
        clock=monotonic_clock, logger=logger,
    )

    # ── Fleet ──
    fleet = FleetStatusEngine(demo_roster(), rng, monotonic_clock, notifier=feed)

    def shutdown():
        report_name = config.DEMO_REPORT_NAME.format(
            stamp=datetime.now().strftime("%Y%m%d_%H%M%S"))
        report_path = os.path.join(config.LOGS_DIR, report_name)
        export_report(report_path, controller.session, aggregator, fleet)
        print(f"Report saved to: {report_path}")
        print(f"  - {session.alert_count} session alerts")
        print(f"  - {feed.critical_transitions} critical fleet transitions")

        fleet.stop()
        controller.end_session()
        alarm_manager.cleanup()
        feed.cleanup()
        logger.close()
        app.quit()

    controller.start()
    fleet.start()
    QTimer.singleShot(config.DEMO_DURATION_SEC * 1000, shutdown)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
