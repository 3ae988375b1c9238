"""
report.py — Excel export of a monitoring session and the fleet roster.
"""

from datetime import datetime

from openpyxl import Workbook
from openpyxl.styles import Font as XlFont, PatternFill

from utils import format_timestamp, monotonic_clock

_HEADER_FONT = XlFont(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(start_color="1F2937", end_color="1F2937", fill_type="solid")


def _style_sheet(ws):
    for cell in ws[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
    for col in ws.columns:
        mx = max(len(str(c.value or "")) for c in col)
        ws.column_dimensions[col[0].column_letter].width = mx + 3


def export_report(file_path, session=None, aggregator=None, fleet=None,
                  clock=monotonic_clock):
    """Write the session alerts, fleet status and a summary to ``file_path``.

    Any of the three sources may be None; its sheet is then left empty.
    Errors while saving (``OSError``) propagate to the caller.

    Returns:
        The path written.
    """
    wb = Workbook()

    # Sheet 1: Alerts
    ws1 = wb.active
    ws1.title = "Alerts"
    ws1.append(["Alert Id", "Time", "Type", "Severity", "Driver", "Vehicle"])
    alerts = aggregator.history() if aggregator is not None else []
    for alert in alerts:
        ws1.append([alert.id, format_timestamp(alert.created_at, clock),
                    alert.kind.value, alert.severity.value.upper(),
                    alert.driver_name, alert.vehicle_id])
    _style_sheet(ws1)

    # Sheet 2: Fleet Status
    ws2 = wb.create_sheet("Fleet Status")
    ws2.append(["Driver Id", "Name", "Vehicle", "Status", "Location",
                "Shift Start", "Last Alert", "Alerts"])
    roster = fleet.roster if fleet is not None else []
    for record in roster:
        ws2.append([record.driver_id, record.name, record.vehicle_id,
                    record.status.upper(), record.location, record.shift_start,
                    format_timestamp(record.last_alert_at, clock),
                    record.alert_count])
    _style_sheet(ws2)

    # Sheet 3: Summary
    ws3 = wb.create_sheet("Session Summary")
    ws3.append(["Metric", "Value"])
    summary = [("Report Generated", datetime.now().strftime("%Y-%m-%d %H:%M:%S"))]
    if session is not None:
        summary += [
            ("Driver", session.driver_name),
            ("Vehicle", session.vehicle_id),
            ("Shift Start", session.shift_start),
            ("Last Break", session.last_break),
            ("Session Alerts", session.alert_count),
            ("Last Alert", format_timestamp(session.last_alert_at, clock)),
        ]
    if aggregator is not None:
        active = aggregator.active_alert()
        summary.append(("Active Alert", active.id if active else "None"))
        for key, value in aggregator.statistics().items():
            summary.append((key.replace("_", " ").title(), value))
    if fleet is not None:
        fleet_summary = fleet.summary()
        summary += [
            ("Total Drivers", fleet_summary.total),
            ("Safe Drivers", fleet_summary.safe),
            ("Warning Drivers", fleet_summary.warning),
            ("Critical Drivers", fleet_summary.danger),
        ]
    for m, v in summary:
        ws3.append([m, v])
    for cell in ws3[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
    ws3.column_dimensions["A"].width = 25
    ws3.column_dimensions["B"].width = 36

    wb.save(file_path)
    return file_path
