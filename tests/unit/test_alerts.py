"""Unit tests for the alert log and threshold monitors."""

from plant_sim.detection.alerts import AlertLog, ThresholdMonitor
from plant_sim.types import AlertLevel


class TestAlertLog:
    def test_newest_first(self):
        log = AlertLog()
        log.add(AlertLevel.INFO, "first")
        log.add(AlertLevel.WARNING, "second")
        assert [a.message for a in log.alerts] == ["second", "first"]

    def test_deduplicates_by_message(self):
        log = AlertLog()
        assert log.add(AlertLevel.INFO, "Turbine #1 is online") is not None
        assert log.add(AlertLevel.INFO, "Turbine #1 is online") is None
        assert len(log) == 1

    def test_capped_to_newest(self):
        log = AlertLog(max_alerts=5)
        for i in range(8):
            log.add(AlertLevel.INFO, f"alert {i}")
        assert len(log) == 5
        assert log.alerts[0].message == "alert 7"
        assert log.alerts[-1].message == "alert 3"

    def test_dismiss(self):
        log = AlertLog()
        alert = log.add(AlertLevel.CRITICAL, "boom")
        assert log.dismiss(alert.id)
        assert not log.dismiss(alert.id)
        assert len(log) == 0

    def test_dismissed_message_can_reappear(self):
        log = AlertLog()
        alert = log.add(AlertLevel.WARNING, "low water")
        log.dismiss(alert.id)
        assert log.add(AlertLevel.WARNING, "low water") is not None

    def test_clear(self):
        log = AlertLog()
        log.add(AlertLevel.INFO, "a")
        log.add(AlertLevel.INFO, "b")
        log.clear()
        assert log.alerts == ()

    def test_state(self):
        alert = AlertLog().add(AlertLevel.WARNING, "hot")
        state = alert.get_state()
        assert state["level"] == "warning"
        assert state["message"] == "hot"
        assert "timestamp" in state


class TestThresholdMonitor:
    def test_fires_once_per_crossing(self):
        monitor = ThresholdMonitor("maintenance")
        assert monitor.check({3}) == {3}
        assert monitor.check({3}) == set()
        assert monitor.check({3, 5}) == {5}

    def test_rearms_after_clearing(self):
        monitor = ThresholdMonitor("storage")
        monitor.check({"water"})
        monitor.check(set())
        assert monitor.check({"water"}) == {"water"}

    def test_reset(self):
        monitor = ThresholdMonitor("emissions")
        monitor.check({"nox"})
        monitor.reset()
        assert monitor.check({"nox"}) == {"nox"}
