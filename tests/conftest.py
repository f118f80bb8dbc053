"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest

from ncvguard.core import CollisionCheckerConfig, PlanNode, RoadwayObstacle, RoutePointStamped
from ncvguard.core.interfaces import (
    ArbitratorService,
    ConflictDetector,
    MotionPredictor,
    ReplanHandle,
    RouteSegment,
    RouteService,
    TimeProvider,
)
from ncvguard.core.types import ConflictSpace


class FakeRouteSegment(RouteSegment):
    """Segment with fixed-width lanes starting at crosstrack 0."""

    def __init__(self, lane_width: float = 3.7):
        self.lane_width = lane_width

    def determine_primary_lane(self, crosstrack: float) -> int:
        return int(crosstrack // self.lane_width)


class FakeRouteService(RouteService):
    def __init__(self, downtrack: float = 40.0, crosstrack: float = 2 * 3.7 + 1.0):
        self.available = True
        self.downtrack = downtrack
        self.crosstrack = crosstrack
        self.segment = FakeRouteSegment()

    def is_route_data_available(self) -> bool:
        return self.available

    def get_current_route_segment(self) -> RouteSegment:
        return self.segment

    def get_current_downtrack_distance(self) -> float:
        return self.downtrack

    def get_current_crosstrack_distance(self) -> float:
        return self.crosstrack


class FakeArbitrator(ArbitratorService):
    def __init__(self, trajectory=None):
        self.trajectory = trajectory

    def get_current_trajectory(self):
        return self.trajectory


class FakeClock(TimeProvider):
    def __init__(self, now_ms: int = 10_000):
        self.now_ms = now_ms

    def get_current_time_millis(self) -> int:
        return self.now_ms


class RecordingReplanHandle(ReplanHandle):
    def __init__(self):
        self.calls = []

    def trigger_new_plan(self, force_total_replan: bool) -> None:
        self.calls.append(force_total_replan)


class StubPredictor(MotionPredictor):
    """Predicts a stationary object sampled every 0.4 s at its last position."""

    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def predict_motion(self, object_id, history, distance_step, time_duration):
        self.calls.append((object_id, list(history), distance_step, time_duration))
        if self.fail:
            raise RuntimeError("predictor failure")
        last = history[-1]
        t0 = last.stamp_ms / 1000.0
        return [
            RoutePointStamped(last.downtrack, last.crosstrack, t0 + 0.4 * i)
            for i in range(3)
        ]


class RecordingConflictDetector(ConflictDetector):
    """Reports a conflict for every predicted path whose first downtrack is listed."""

    def __init__(self, conflicting_downtracks=()):
        self.conflicting_downtracks = set(conflicting_downtracks)
        self.calls = []

    def get_conflicts(
        self, path_a, path_b, spatial_structure,
        downtrack_margin, crosstrack_margin, time_margin,
        longitudinal_bias, lateral_bias, temporal_bias,
    ):
        self.calls.append({
            "path_a": list(path_a),
            "path_b": list(path_b),
            "downtrack_margin": downtrack_margin,
            "crosstrack_margin": crosstrack_margin,
            "time_margin": time_margin,
            "biases": (longitudinal_bias, lateral_bias, temporal_bias),
        })
        if path_b and path_b[0].downtrack in self.conflicting_downtracks:
            return [ConflictSpace(0.0, 1.0, 0.0, 1.0)]
        return []


@pytest.fixture
def tmp_config_dir():
    """Create temporary directory for config files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def default_config():
    """Create a default NCV Guard configuration.

    Returns:
        CollisionCheckerConfig: Default configuration instance
    """
    return CollisionCheckerConfig()


@pytest.fixture
def sample_config_dict():
    """Create a sample configuration dictionary.

    Returns:
        dict: Configuration dictionary
    """
    return {
        "interpolator": "linear",
        "prediction": {
            "model": "kalman",
            "max_historical_data_age": 2000,
            "distance_step": 1.0,
        },
        "collision": {
            "replan_period": 2.5,
            "time_margin": 0.2,
        },
        "vehicle": {
            "length": 4.0,
            "width": 1.8,
        },
    }


@pytest.fixture
def route_service():
    """Host in lane 2 at downtrack 40 m."""
    return FakeRouteService()


@pytest.fixture
def arbitrator():
    return FakeArbitrator()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def replan_handle():
    return RecordingReplanHandle()


def make_obstacle(downtrack, stamp_ms, lane=2, object_id=7, crosstrack=9.0, secondary=()):
    """Build an obstacle observation."""
    return RoadwayObstacle(
        object_id=object_id,
        stamp_ms=stamp_ms,
        downtrack=downtrack,
        crosstrack=crosstrack,
        primary_lane=lane,
        secondary_lanes=frozenset(secondary),
    )


def make_path(downtrack, stamps, crosstrack=9.0):
    """Build a stationary stamped path at the given times."""
    return [RoutePointStamped(downtrack, crosstrack, t) for t in stamps]


def straight_plan(speed=10.0, duration=5.0):
    """Constant speed plan nodes relative to the plan start."""
    return [
        PlanNode(time=0.0, distance=0.0),
        PlanNode(time=duration, distance=speed * duration),
    ]
