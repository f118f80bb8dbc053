"""Conflict detection between two stamped route paths.

Path B is indexed in (downtrack, crosstrack, time) space. Every point of
path A queries a box around itself sized by the margins and shifted by the
bias terms. Runs of consecutive conflicting points of path A are merged
into a single ConflictSpace.
"""

from typing import List, Optional, Sequence

from ..core.interfaces import ConflictDetector, SpatialStructure
from ..core.types import ConflictSpace, RoutePointStamped


class BasicConflictDetector(ConflictDetector):
    """Point-wise conflict detector over a spatial index."""

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
        """Find regions where path_a comes within the margins of path_b.

        Args:
            path_a: Path being checked, usually the host plan
            path_b: Path it is checked against, usually a prediction
            spatial_structure: Empty index used to store path_b
            downtrack_margin: Half-width of the downtrack window (m)
            crosstrack_margin: Half-width of the crosstrack window (m)
            time_margin: Half-width of the time window (s)
            longitudinal_bias: Downtrack shift of the window (m)
            lateral_bias: Crosstrack shift of the window (m)
            temporal_bias: Time shift of the window (s)

        Returns:
            List of conflict spaces, empty if the paths never overlap
        """
        if not path_a or not path_b:
            return []

        for point in path_b:
            spatial_structure.insert(point.as_point(), point)

        conflicts = []
        start: Optional[RoutePointStamped] = None
        end: Optional[RoutePointStamped] = None

        for point in path_a:
            bounds = [
                (point.downtrack - downtrack_margin + longitudinal_bias,
                 point.downtrack + downtrack_margin + longitudinal_bias),
                (point.crosstrack - crosstrack_margin + lateral_bias,
                 point.crosstrack + crosstrack_margin + lateral_bias),
                (point.stamp - time_margin + temporal_bias,
                 point.stamp + time_margin + temporal_bias),
            ]

            if spatial_structure.get_collisions(bounds):
                if start is None:
                    start = point
                end = point
            elif start is not None:
                conflicts.append(self._conflict_space(start, end))
                start = end = None

        if start is not None:
            conflicts.append(self._conflict_space(start, end))

        return conflicts

    @staticmethod
    def _conflict_space(start: RoutePointStamped, end: RoutePointStamped) -> ConflictSpace:
        return ConflictSpace(
            start_downtrack=start.downtrack,
            end_downtrack=end.downtrack,
            start_time=start.stamp,
            end_time=end.stamp,
        )
