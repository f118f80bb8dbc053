"""Data model shared by the tracking, planning and collision modules.

Distances are route-relative: downtrack is measured along the route,
crosstrack is the lateral offset from the route centerline. Observation
stamps are integer milliseconds, route point stamps are seconds.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet


@dataclass(frozen=True)
class RoadwayObstacle:
    """Single sensed obstacle at a single instant.

    Attributes:
        object_id: Tracked identity assigned by perception
        stamp_ms: Observation time in milliseconds
        downtrack: Downtrack distance along the route (m)
        crosstrack: Crosstrack distance from the route centerline (m)
        primary_lane: Lane index the obstacle mostly occupies
        secondary_lanes: Other lane indices the obstacle overlaps
    """

    object_id: int
    stamp_ms: int
    downtrack: float
    crosstrack: float = 0.0
    primary_lane: int = 0
    secondary_lanes: FrozenSet[int] = field(default_factory=frozenset)

    def with_id(self, object_id: int) -> "RoadwayObstacle":
        """Return a copy of this observation under a different identity."""
        return replace(self, object_id=object_id)


@dataclass(frozen=True)
class RoutePointStamped:
    """Planned or predicted position at an absolute time.

    Attributes:
        downtrack: Downtrack distance (m)
        crosstrack: Crosstrack distance (m)
        stamp: Absolute time (s)
        segment_idx: Route segment index
    """

    downtrack: float
    crosstrack: float
    stamp: float
    segment_idx: int = 0

    def as_point(self):
        """Point coordinates used by the spatial index."""
        return (self.downtrack, self.crosstrack, self.stamp)


@dataclass(frozen=True)
class PlanNode:
    """Node of a host plan or candidate trajectory.

    Time and distance are relative to the start of the plan.
    """

    time: float  # s
    distance: float  # m


@dataclass(frozen=True)
class ConflictSpace:
    """Region of downtrack/time where two paths overlap."""

    start_downtrack: float
    end_downtrack: float
    start_time: float
    end_time: float
