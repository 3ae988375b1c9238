"""Tests for the alert factory and aggregator."""

import numpy as np
import pytest

from alerts import Alert, AlertAggregator, AlertKind, Severity, create_alert
from session import DriverSession


def make_alert(created_at, kind=AlertKind.DROWSY, severity=Severity.HIGH):
    return Alert(kind=kind, created_at=created_at, driver_name="Ana",
                 vehicle_id="TR-1", severity=severity)


@pytest.fixture
def session():
    return DriverSession.check_in("Ana", "TR-1")


class TestCreateAlert:

    def test_fields(self, session, clock):
        alert = create_alert(session, clock)
        assert alert.kind is AlertKind.DROWSY
        assert alert.severity is Severity.HIGH
        assert alert.created_at == clock.now
        assert alert.driver_name == "Ana"
        assert alert.vehicle_id == "TR-1"

    def test_alert_is_immutable(self, session, clock):
        alert = create_alert(session, clock)
        with pytest.raises(AttributeError):
            alert.severity = Severity.LOW

    def test_ids_are_unique(self, session, clock):
        ids = {create_alert(session, clock).id for _ in range(100000)}
        assert len(ids) == 100000


class TestActiveAlert:

    def test_empty_has_no_active(self):
        assert AlertAggregator().active_alert() is None

    def test_latest_high_alert_is_active(self):
        agg = AlertAggregator()
        first, second = make_alert(1.0), make_alert(2.0)
        agg.record(first)
        agg.record(second)
        assert agg.active_alert() == second

    def test_older_timestamp_does_not_displace_active(self):
        agg = AlertAggregator()
        newer, older = make_alert(5.0), make_alert(3.0)
        agg.record(newer)
        agg.record(older)
        assert agg.active_alert() == newer

    def test_non_high_and_normal_alerts_never_active(self):
        agg = AlertAggregator()
        agg.record(make_alert(1.0, severity=Severity.MEDIUM))
        agg.record(make_alert(2.0, kind=AlertKind.NORMAL))
        assert agg.active_alert() is None

    def test_timestamp_tie_goes_to_latest_insert(self):
        agg = AlertAggregator()
        a, b = make_alert(7.0), make_alert(7.0)
        agg.record(a)
        agg.record(b)
        assert agg.active_alert() == b
        assert agg.recent_history() == [b, a]

    def test_record_maximum_becomes_active_for_random_sequences(self):
        rng = np.random.default_rng(3)
        agg = AlertAggregator()
        for t in rng.random(200):
            alert = make_alert(float(t))
            agg.record(alert)
            if alert.created_at >= max(a.created_at for a in agg.history()):
                assert agg.active_alert() == alert


class TestRecentHistory:

    def test_never_exceeds_window_and_is_newest_prefix(self):
        rng = np.random.default_rng(11)
        agg = AlertAggregator()
        for t in rng.random(60):
            agg.record(make_alert(float(t)))
            recent = agg.recent_history(5)
            assert len(recent) <= 5
            ordered = sorted(agg.history(), key=lambda a: a.created_at, reverse=True)
            assert recent == ordered[:len(recent)]

    def test_normal_alerts_excluded(self):
        agg = AlertAggregator()
        agg.record(make_alert(1.0))
        agg.record(make_alert(2.0, kind=AlertKind.NORMAL))
        agg.record(make_alert(3.0, kind=AlertKind.FATIGUE, severity=Severity.LOW))
        kinds = [a.kind for a in agg.recent_history()]
        assert kinds == [AlertKind.FATIGUE, AlertKind.DROWSY]

    def test_read_is_repeatable(self):
        agg = AlertAggregator()
        for t in range(8):
            agg.record(make_alert(float(t)))
        assert agg.recent_history() == agg.recent_history()
        assert len(agg) == 8

    def test_non_positive_n(self):
        agg = AlertAggregator()
        agg.record(make_alert(1.0))
        assert agg.recent_history(0) == []


class TestAcknowledge:

    def test_unknown_id_is_noop(self):
        agg = AlertAggregator()
        alert = make_alert(1.0)
        agg.record(alert)
        before = (agg.history(), agg.active_alert())
        assert agg.acknowledge("missing") is False
        assert (agg.history(), agg.active_alert()) == before

    def test_twice_equals_once(self):
        agg = AlertAggregator()
        a, b = make_alert(1.0), make_alert(2.0)
        agg.record(a)
        agg.record(b)
        agg.acknowledge(b.id)
        once = (agg.history(), agg.active_alert())
        assert agg.acknowledge(b.id) is False
        assert (agg.history(), agg.active_alert()) == once

    def test_six_alerts_scenario(self):
        agg = AlertAggregator()
        alerts = [make_alert(float(t)) for t in range(1, 7)]
        for alert in alerts:
            agg.record(alert)

        assert agg.recent_history(5) == list(reversed(alerts))[:5]

        agg.acknowledge(alerts[-1].id)
        assert agg.active_alert() == alerts[-2]

    def test_acknowledging_last_alert_clears_active(self):
        agg = AlertAggregator()
        alert = make_alert(1.0)
        agg.record(alert)
        agg.acknowledge(alert.id)
        assert agg.active_alert() is None
        assert agg.history() == []


class TestListeners:

    def test_notified_only_on_change(self):
        agg = AlertAggregator()
        seen = []
        agg.add_listener(seen.append)

        newest = make_alert(5.0)
        agg.record(newest)
        agg.record(make_alert(1.0))  # older, active unchanged
        agg.acknowledge("missing")
        agg.acknowledge(newest.id)

        assert len(seen) == 2
        assert seen[0] == newest
        assert seen[1].created_at == 1.0

    def test_listener_sees_updated_state(self):
        agg = AlertAggregator()
        observed = []
        agg.add_listener(lambda alert: observed.append(
            (alert, agg.active_alert(), len(agg))))
        alert = make_alert(1.0)
        agg.record(alert)
        assert observed == [(alert, alert, 1)]

    def test_clear_notifies_none(self):
        agg = AlertAggregator()
        seen = []
        agg.record(make_alert(1.0))
        agg.add_listener(seen.append)
        agg.clear()
        assert seen == [None]
        assert len(agg) == 0


class TestStatistics:

    def test_counts(self):
        agg = AlertAggregator()
        agg.record(make_alert(1.0))
        agg.record(make_alert(2.0, severity=Severity.LOW, kind=AlertKind.FATIGUE))
        stats = agg.statistics()
        assert stats["total_alerts"] == 2
        assert stats["high_alerts"] == 1
        assert stats["low_alerts"] == 1
        assert stats["medium_alerts"] == 0
        assert stats["drowsy_kind"] == 1
        assert stats["fatigue_kind"] == 1
