"""Contracts for the collaborators the collision checker depends on.

Route, arbitrator, time and replan services are provided by the host
guidance system. Predictor, interpolator, conflict detector and spatial
structure factory are pluggable strategies with bundled implementations.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple

from .types import ConflictSpace, PlanNode, RoadwayObstacle, RoutePointStamped


class RouteSegment(ABC):
    """Route segment the host vehicle currently occupies."""

    @abstractmethod
    def determine_primary_lane(self, crosstrack: float) -> int:
        """Lane index containing the given crosstrack distance."""


class RouteService(ABC):
    """Host localization relative to the active route."""

    @abstractmethod
    def is_route_data_available(self) -> bool:
        pass

    @abstractmethod
    def get_current_route_segment(self) -> RouteSegment:
        pass

    @abstractmethod
    def get_current_downtrack_distance(self) -> float:
        pass

    @abstractmethod
    def get_current_crosstrack_distance(self) -> float:
        pass


class ArbitratorService(ABC):
    """Planner state as seen by plugins."""

    @abstractmethod
    def get_current_trajectory(self) -> Optional[Any]:
        """Current trajectory handle, or None when nothing is being executed."""


class TimeProvider(ABC):
    """Source of the current time in milliseconds."""

    @abstractmethod
    def get_current_time_millis(self) -> int:
        pass


class SystemTimeProvider(TimeProvider):
    """Wall-clock time provider."""

    def get_current_time_millis(self) -> int:
        return int(time.time() * 1000)


class ReplanHandle(ABC):
    """Fire-and-forget channel used to ask the planner for a new plan."""

    @abstractmethod
    def trigger_new_plan(self, force_total_replan: bool) -> None:
        pass


class MotionPredictor(ABC):
    """Predicts the future path of a tracked object from its history."""

    @abstractmethod
    def predict_motion(
        self,
        object_id: str,
        history: List[RoadwayObstacle],
        distance_step: float,
        time_duration: float,
    ) -> List[RoutePointStamped]:
        """Predict object motion.

        Args:
            object_id: Identity key of the tracked object
            history: Observations ordered by ascending stamp
            distance_step: Sampling resolution of the output (m)
            time_duration: Prediction horizon (s)

        Returns:
            Predicted path ordered by ascending stamp
        """


class MotionInterpolator(ABC):
    """Converts a plan of nodes into a stamped route path."""

    @abstractmethod
    def interpolate_motion(
        self,
        plan: Sequence[PlanNode],
        distance_step: float,
        start_time: float,
        start_downtrack: float,
    ) -> List[RoutePointStamped]:
        pass


class SpatialStructure(ABC):
    """Index of points supporting axis-aligned range queries."""

    @abstractmethod
    def insert(self, point: Sequence[float], obj: Any) -> None:
        pass

    @abstractmethod
    def get_collisions(self, bounds: Sequence[Tuple[float, float]]) -> List[Any]:
        pass


class SpatialStructureFactory(ABC):
    @abstractmethod
    def build_spatial_structure(self) -> SpatialStructure:
        pass


class ConflictDetector(ABC):
    """Finds regions where two stamped paths overlap."""

    @abstractmethod
    def get_conflicts(
        self,
        path_a: Sequence[RoutePointStamped],
        path_b: Sequence[RoutePointStamped],
        spatial_structure: SpatialStructure,
        downtrack_margin: float,
        crosstrack_margin: float,
        time_margin: float,
        longitudinal_bias: float,
        lateral_bias: float,
        temporal_bias: float,
    ) -> List[ConflictSpace]:
        pass
