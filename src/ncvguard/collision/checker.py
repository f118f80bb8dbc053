"""Object collision checker for non-connected vehicles (NCVs).

Keeps the recent history of in-lane objects ahead of the host vehicle,
predicts their motion and uses those predictions to:
- reject candidate trajectories that would run through a tracked object
- request replans from the planner while objects are being tracked

Update cycles run on the perception thread; collision queries and host
plan updates run on the planning thread. History, predictions and the
replan timer are guarded by a single lock so a query never sees a
prediction computed from a half-pruned history. The host plan is an
independent, atomically swapped snapshot.
"""

import threading
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.config import CollisionCheckerConfig
from ..core.interfaces import (
    ArbitratorService,
    ConflictDetector,
    MotionInterpolator,
    MotionPredictor,
    ReplanHandle,
    RouteService,
    SpatialStructureFactory,
    TimeProvider,
)
from ..core.types import PlanNode, RoadwayObstacle, RoutePointStamped
from ..planning.host_plan import HostPlanSnapshot
from ..planning.interpolation import get_motion_interpolator
from ..tracking.history import ObservationHistoryStore
from ..tracking.motion_prediction import get_motion_predictor
from ..tracking.prediction_cache import MotionPredictionCache, PredictedPath
from ..utils.logging import get_logger, log_path
from .conflict import BasicConflictDetector
from .evaluator import ConflictEvaluator
from .replan import ReplanScheduler
from .spatial import NSpatialHashMapFactory

logger = get_logger(__name__)

# All in-lane objects are tracked under one identity until multi-object
# tracking from sensor fusion is reliable
SHARED_OBJECT_ID = 0


class ObjectCollisionChecker:
    """Tracks NCVs, validates trajectories and triggers replans."""

    def __init__(
        self,
        config: CollisionCheckerConfig,
        route_service: RouteService,
        arbitrator_service: ArbitratorService,
        time_provider: TimeProvider,
        replan_handle: ReplanHandle,
        motion_predictor: MotionPredictor,
        motion_interpolator: MotionInterpolator,
        conflict_detector: ConflictDetector,
        structure_factory: SpatialStructureFactory
    ):
        """Initialize collision checker.

        Args:
            config: Checker configuration
            route_service: Host localization on the route
            arbitrator_service: Access to the planner's current trajectory
            time_provider: Source of current time (ms)
            replan_handle: Channel used to request replans
            motion_predictor: Strategy predicting object motion
            motion_interpolator: Strategy interpolating host plans
            conflict_detector: Predicate finding path overlaps
            structure_factory: Builds spatial indices for conflict checks
        """
        self.config = config
        self.route_service = route_service
        self.arbitrator_service = arbitrator_service
        self.time_provider = time_provider
        self.replan_handle = replan_handle
        self.motion_interpolator = motion_interpolator

        self.max_historical_data_age = config.prediction.max_historical_data_age
        self.distance_step = config.prediction.distance_step

        self._lock = threading.RLock()
        self.histories = ObservationHistoryStore()
        self.predictions = MotionPredictionCache(
            motion_predictor,
            distance_step=config.prediction.distance_step,
            time_duration=config.prediction.time_duration
        )
        self.evaluator = ConflictEvaluator(
            self.predictions,
            conflict_detector,
            structure_factory,
            downtrack_margin=config.downtrack_margin,
            crosstrack_margin=config.crosstrack_margin,
            time_margin=config.collision.time_margin,
            longitudinal_bias=config.collision.longitudinal_bias,
            lateral_bias=config.collision.lateral_bias,
            temporal_bias=config.collision.temporal_bias
        )

        collision_check = None
        if config.collision.collision_gated_replan:
            collision_check = self.has_host_plan_collision
        self.scheduler = ReplanScheduler(config.replan_period_ms, collision_check)

        self._host_plan = HostPlanSnapshot()

        logger.info(f"ReplanPeriod: {config.replan_period_ms}")

    @property
    def host_plan(self) -> Tuple[RoutePointStamped, ...]:
        return self._host_plan.get()

    @property
    def detection_time_ms(self) -> Optional[int]:
        with self._lock:
            return self.scheduler.detection_time_ms

    def tracked_object_ids(self) -> List[int]:
        with self._lock:
            return self.histories.object_ids()

    def get_history(self, object_id: int) -> Tuple[RoadwayObstacle, ...]:
        with self._lock:
            return self.histories.history(object_id)

    def get_prediction(self, object_id: int) -> Optional[PredictedPath]:
        with self._lock:
            return self.predictions.get(object_id)

    def _is_in_lane(self, obstacle: RoadwayObstacle, current_lane: int) -> bool:
        if obstacle.primary_lane == current_lane:
            return True
        if not self.config.include_adjacent_lanes:
            return False
        # Object straddling into our lane from a neighbouring one
        return (
            current_lane in obstacle.secondary_lanes
            and abs(obstacle.primary_lane - current_lane) == 1
        )

    def update_objects(self, obstacles: Iterable[RoadwayObstacle]) -> None:
        """Process a batch of sensed obstacles.

        Records in-lane objects ahead of the host, expires old history,
        refreshes predictions and requests a replan when the policy says
        so. Does nothing when route data is unavailable.

        Args:
            obstacles: Obstacles sensed in the latest perception cycle
        """
        if not self.route_service.is_route_data_available():
            logger.debug("Route data unavailable, skipping object update")
            return

        current_lane = self.route_service.get_current_route_segment().determine_primary_lane(
            self.route_service.get_current_crosstrack_distance()
        )
        current_downtrack = self.route_service.get_current_downtrack_distance()

        with self._lock:
            # Keep only objects in our lane and not behind us
            in_lane_count = 0
            for obs in obstacles:
                if not self._is_in_lane(obs, current_lane):
                    continue
                if obs.downtrack - current_downtrack < 0:
                    continue

                if self.config.normalize_object_ids:
                    obs = obs.with_id(SHARED_OBJECT_ID)
                self.histories.record(obs)
                in_lane_count += 1

            logger.debug(f"Recorded {in_lane_count} in lane objects")

            # Expire old data, then predict what remains
            now_ms = self.time_provider.get_current_time_millis()
            min_stamp_ms = now_ms - self.max_historical_data_age

            for object_id in self.histories.object_ids():
                self.histories.prune(object_id, min_stamp_ms)

                # Expired ids leave both maps before any later refresh
                if self.histories.is_empty(object_id):
                    self.histories.evict(object_id)
                    self.predictions.remove(object_id)
                    logger.debug(f"Object {object_id} expired")
                    continue

                self.predictions.refresh(object_id, self.histories.history(object_id))

            has_active_trajectory = self.arbitrator_service.get_current_trajectory() is not None
            should_replan = self.scheduler.on_update_cycle_completed(
                has_active_trajectory,
                self.time_provider.get_current_time_millis()
            )

        if should_replan:
            self.replan_handle.trigger_new_plan(True)

    def set_host_plan(
        self,
        plan: Sequence[PlanNode],
        start_time: float,
        start_downtrack: float
    ) -> None:
        """Interpolate and publish the host vehicle's current plan.

        Args:
            plan: Plan nodes relative to the plan start
            start_time: Absolute start time of the plan (s)
            start_downtrack: Downtrack distance at the plan start (m)
        """
        host_plan_points = self.motion_interpolator.interpolate_motion(
            plan, self.distance_step, start_time, start_downtrack
        )
        log_path(logger, "host plan", host_plan_points)
        self._host_plan.set(host_plan_points)

    def has_collision(
        self,
        trajectory: Sequence[PlanNode],
        time_offset: float,
        distance_offset: float
    ) -> bool:
        """Check a candidate trajectory against tracked object predictions.

        Args:
            trajectory: Candidate plan nodes relative to its start
            time_offset: Absolute start time of the candidate (s)
            distance_offset: Downtrack distance at the candidate start (m)

        Returns:
            True if the candidate conflicts with any tracked object
        """
        route_plan = self.motion_interpolator.interpolate_motion(
            trajectory, self.distance_step, time_offset, distance_offset
        )

        with self._lock:
            return self.evaluator.evaluate(route_plan, 1.0)

    def has_host_plan_collision(self, margin_factor: Optional[float] = None) -> bool:
        """Check the published host plan against tracked object predictions.

        Args:
            margin_factor: Margin multiplier, defaults to the configured
                gated_margin_factor

        Returns:
            True if the host plan conflicts with any tracked object
        """
        if margin_factor is None:
            margin_factor = self.config.collision.gated_margin_factor

        host_plan = self._host_plan.get()
        with self._lock:
            return self.evaluator.evaluate(host_plan, margin_factor)


def create_collision_checker(
    config: CollisionCheckerConfig,
    route_service: RouteService,
    arbitrator_service: ArbitratorService,
    time_provider: TimeProvider,
    replan_handle: ReplanHandle,
    motion_predictor: Optional[MotionPredictor] = None,
    motion_interpolator: Optional[MotionInterpolator] = None,
    conflict_detector: Optional[ConflictDetector] = None,
    structure_factory: Optional[SpatialStructureFactory] = None
) -> ObjectCollisionChecker:
    """Create collision checker.

    Strategies not passed explicitly are resolved from the configuration.

    Args:
        config: Checker configuration
        route_service: Host localization on the route
        arbitrator_service: Access to the planner's current trajectory
        time_provider: Source of current time (ms)
        replan_handle: Channel used to request replans
        motion_predictor: Override for the configured prediction model
        motion_interpolator: Override for the configured interpolator
        conflict_detector: Override for the basic conflict detector
        structure_factory: Override for the spatial hash factory

    Returns:
        ObjectCollisionChecker instance

    Raises:
        ValueError: If the configuration is invalid

    Example:
        >>> config = CollisionCheckerConfig.from_yaml("configs/default.yaml")
        >>> checker = create_collision_checker(config, route, arbitrator, clock, handle)
        >>> checker.update_objects(obstacles)
        >>> checker.has_collision(nodes, time_offset=12.0, distance_offset=40.0)
    """
    errors = config.validate()
    if errors:
        raise ValueError(f"Invalid collision checker config: {'; '.join(errors)}")

    if motion_predictor is None:
        motion_predictor = get_motion_predictor(config.prediction.model)
    if motion_interpolator is None:
        motion_interpolator = get_motion_interpolator(config.interpolator)
    if conflict_detector is None:
        conflict_detector = BasicConflictDetector()
    if structure_factory is None:
        structure_factory = NSpatialHashMapFactory(config.cell_sizes)

    return ObjectCollisionChecker(
        config,
        route_service,
        arbitrator_service,
        time_provider,
        replan_handle,
        motion_predictor,
        motion_interpolator,
        conflict_detector,
        structure_factory
    )
