"""Cache of the latest predicted path for each tracked object."""

from typing import Dict, Iterable, List, Optional, Tuple

from ..core.interfaces import MotionPredictor
from ..core.types import RoadwayObstacle, RoutePointStamped

PredictedPath = Tuple[RoutePointStamped, ...]


class MotionPredictionCache:
    """Holds one predicted path per tracked object.

    Each refresh fully replaces the cached path for that object. Predictor
    output is stored as returned, degenerate paths included.
    """

    def __init__(
        self,
        predictor: MotionPredictor,
        distance_step: float,
        time_duration: float
    ):
        """Initialize prediction cache.

        Args:
            predictor: Strategy used to predict object motion
            distance_step: Sampling resolution passed to the predictor (m)
            time_duration: Prediction horizon passed to the predictor (s)
        """
        self.predictor = predictor
        self.distance_step = distance_step
        self.time_duration = time_duration
        self._predictions: Dict[int, PredictedPath] = {}

    def refresh(self, object_id: int, history: Iterable[RoadwayObstacle]) -> PredictedPath:
        """Predict and cache the path of one object.

        Args:
            object_id: Tracked identity
            history: Observations ordered by ascending stamp

        Returns:
            The newly cached path
        """
        path = tuple(
            self.predictor.predict_motion(
                str(object_id),
                list(history),
                self.distance_step,
                self.time_duration
            )
        )
        self._predictions[object_id] = path
        return path

    def remove(self, object_id: int) -> None:
        self._predictions.pop(object_id, None)

    def get(self, object_id: int) -> Optional[PredictedPath]:
        return self._predictions.get(object_id)

    def items(self) -> List[Tuple[int, PredictedPath]]:
        """Snapshot of (object_id, path) pairs."""
        return list(self._predictions.items())

    def __contains__(self, object_id: int) -> bool:
        return object_id in self._predictions

    def __len__(self) -> int:
        return len(self._predictions)
