"""Conflict evaluation of a candidate path against cached predictions."""

from typing import Sequence

from ..core.interfaces import ConflictDetector, SpatialStructureFactory
from ..core.types import RoutePointStamped
from ..tracking.prediction_cache import MotionPredictionCache, PredictedPath
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Overlap added to half the prediction sampling interval
TIME_MARGIN_OVERLAP = 0.0001  # s


class ConflictEvaluator:
    """Checks a candidate path against every cached object prediction.

    Downtrack and crosstrack margins are fixed at construction. The time
    margin is derived per prediction: half the interval between its first
    two points plus a small overlap, or the base time margin for
    predictions with fewer than two points. margin_factor scales the
    downtrack and time margins but never the crosstrack margin.
    """

    def __init__(
        self,
        predictions: MotionPredictionCache,
        conflict_detector: ConflictDetector,
        structure_factory: SpatialStructureFactory,
        downtrack_margin: float,
        crosstrack_margin: float,
        time_margin: float,
        longitudinal_bias: float = 0.0,
        lateral_bias: float = 0.0,
        temporal_bias: float = 0.0
    ):
        """Initialize conflict evaluator.

        Args:
            predictions: Cache of predicted object paths
            conflict_detector: Predicate finding overlaps between two paths
            structure_factory: Builds a fresh spatial index per check
            downtrack_margin: Half vehicle length plus downtrack buffer (m)
            crosstrack_margin: Half vehicle width plus crosstrack buffer (m)
            time_margin: Base time margin (s)
            longitudinal_bias: Downtrack bias passed to the detector
            lateral_bias: Crosstrack bias passed to the detector
            temporal_bias: Time bias passed to the detector
        """
        self.predictions = predictions
        self.conflict_detector = conflict_detector
        self.structure_factory = structure_factory
        self.downtrack_margin = downtrack_margin
        self.crosstrack_margin = crosstrack_margin
        self.time_margin = time_margin
        self.longitudinal_bias = longitudinal_bias
        self.lateral_bias = lateral_bias
        self.temporal_bias = temporal_bias

    def time_margin_for(self, predicted_path: PredictedPath) -> float:
        """Unscaled time margin used against one predicted path."""
        if len(predicted_path) > 1:
            # Assumes uniform sampling of the prediction
            return (predicted_path[1].stamp - predicted_path[0].stamp) / 2.0 + TIME_MARGIN_OVERLAP
        return self.time_margin

    def evaluate(
        self,
        candidate_path: Sequence[RoutePointStamped],
        margin_factor: float = 1.0
    ) -> bool:
        """Check a candidate path for conflicts with any tracked object.

        Args:
            candidate_path: Stamped path to check
            margin_factor: Multiplier for downtrack and time margins

        Returns:
            True on the first object whose prediction conflicts, else False
        """
        for object_id, predicted_path in self.predictions.items():
            conflict_spaces = self.conflict_detector.get_conflicts(
                candidate_path,
                predicted_path,
                self.structure_factory.build_spatial_structure(),
                self.downtrack_margin * margin_factor,
                self.crosstrack_margin,
                self.time_margin_for(predicted_path) * margin_factor,
                self.longitudinal_bias,
                self.lateral_bias,
                self.temporal_bias,
            )

            if conflict_spaces:
                logger.debug(f"Object {object_id} conflicts with path: {conflict_spaces}")
                return True

        return False
