"""Unit tests for the replan scheduler."""

from ncvguard.collision import ReplanScheduler, ReplanState


class TestReplanScheduler:
    """Tests for ReplanScheduler class."""

    def test_idle_without_active_trajectory(self):
        scheduler = ReplanScheduler(5000)
        assert scheduler.on_update_cycle_completed(False, 0) is False
        assert scheduler.state == ReplanState.IDLE
        assert scheduler.detection_time_ms is None

    def test_first_detection_triggers(self):
        scheduler = ReplanScheduler(5000)
        assert scheduler.on_update_cycle_completed(True, 0) is True
        assert scheduler.state == ReplanState.PENDING
        assert scheduler.detection_time_ms == 0

    def test_cadence(self):
        scheduler = ReplanScheduler(5000)
        scheduler.on_update_cycle_completed(True, 0)

        assert scheduler.on_update_cycle_completed(True, 4999) is False
        assert scheduler.on_update_cycle_completed(True, 5000) is False
        assert scheduler.detection_time_ms == 0

        assert scheduler.on_update_cycle_completed(True, 5001) is True
        assert scheduler.detection_time_ms == 5001

        assert scheduler.on_update_cycle_completed(True, 10001) is False
        assert scheduler.on_update_cycle_completed(True, 10002) is True

    def test_periodic_replan_without_active_trajectory(self):
        """Once pending, period expiry triggers regardless of trajectory."""
        scheduler = ReplanScheduler(5000)
        scheduler.on_update_cycle_completed(True, 0)
        assert scheduler.on_update_cycle_completed(False, 6000) is True
        assert scheduler.state == ReplanState.PENDING

    def test_gated_replan(self):
        collision = {"found": False}
        scheduler = ReplanScheduler(5000, collision_check=lambda: collision["found"])
        scheduler.on_update_cycle_completed(True, 0)

        assert scheduler.on_update_cycle_completed(True, 6000) is False
        assert scheduler.detection_time_ms == 0

        collision["found"] = True
        assert scheduler.on_update_cycle_completed(True, 6001) is True
        assert scheduler.detection_time_ms == 6001

    def test_gate_not_used_for_first_detection(self):
        scheduler = ReplanScheduler(5000, collision_check=lambda: False)
        assert scheduler.on_update_cycle_completed(True, 0) is True
