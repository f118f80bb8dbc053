"""Per-object observation history with age-based pruning.

Each tracked identity owns a deque of observations sorted by ascending
stamp. Observations usually arrive in time order and are appended; late
ones are placed by sorted insertion. Expiring data is a prefix removal
from the oldest end, so pruning costs O(removed) per call.
"""

from bisect import bisect_right
from collections import deque
from typing import Deque, Dict, List, Tuple

from ..core.types import RoadwayObstacle


class ObservationHistoryStore:
    """Time-ordered, age-bounded observation buffers keyed by object id."""

    def __init__(self):
        self._histories: Dict[int, Deque[RoadwayObstacle]] = {}

    def record(self, observation: RoadwayObstacle) -> None:
        """Add an observation, creating the object's history if absent.

        Args:
            observation: Observation to store
        """
        history = self._histories.get(observation.object_id)
        if history is None:
            history = deque()
            self._histories[observation.object_id] = history

        if not history or history[-1].stamp_ms <= observation.stamp_ms:
            history.append(observation)
            return

        # Late observation: keep ascending order, after equal stamps
        stamps = [obs.stamp_ms for obs in history]
        history.insert(bisect_right(stamps, observation.stamp_ms), observation)

    def prune(self, object_id: int, min_stamp_ms: int) -> int:
        """Remove observations strictly older than min_stamp_ms.

        Args:
            object_id: Tracked identity
            min_stamp_ms: Oldest stamp allowed to remain

        Returns:
            Number of removed observations
        """
        history = self._histories.get(object_id)
        if history is None:
            return 0

        removed = 0
        while history and history[0].stamp_ms < min_stamp_ms:
            history.popleft()
            removed += 1
        return removed

    def is_empty(self, object_id: int) -> bool:
        history = self._histories.get(object_id)
        return not history

    def evict(self, object_id: int) -> None:
        """Drop an object's history entirely."""
        self._histories.pop(object_id, None)

    def history(self, object_id: int) -> Tuple[RoadwayObstacle, ...]:
        """Snapshot of an object's history, oldest first."""
        return tuple(self._histories.get(object_id, ()))

    def object_ids(self) -> List[int]:
        return list(self._histories.keys())

    def __contains__(self, object_id: int) -> bool:
        return object_id in self._histories

    def __len__(self) -> int:
        return len(self._histories)
