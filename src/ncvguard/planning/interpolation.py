"""Host motion interpolation.

Converts a plan of nodes (time and distance relative to the plan
start) into stamped route points sampled every distance_step metres.
"""

from typing import List, Sequence

import numpy as np

from ..core.interfaces import MotionInterpolator
from ..core.types import PlanNode, RoutePointStamped


class LinearMotionInterpolator(MotionInterpolator):
    """Piecewise linear interpolation between consecutive plan nodes.

    Each node-to-node segment is split into equal pieces no longer than
    distance_step. Stationary segments contribute only their start node.
    """

    def __init__(self, crosstrack: float = 0.0, segment_idx: int = 0):
        """Initialize interpolator.

        Args:
            crosstrack: Crosstrack assigned to every output point (m)
            segment_idx: Route segment index assigned to every output point
        """
        self.crosstrack = crosstrack
        self.segment_idx = segment_idx

    def interpolate_motion(
        self,
        plan: Sequence[PlanNode],
        distance_step: float,
        start_time: float,
        start_downtrack: float,
    ) -> List[RoutePointStamped]:
        if not plan:
            return []

        times = []
        distances = []
        for a, b in zip(plan, plan[1:]):
            dd = b.distance - a.distance
            n_pieces = max(1, int(np.ceil(dd / distance_step))) if dd > 0 else 1
            fractions = np.arange(n_pieces) / n_pieces
            times.append(a.time + fractions * (b.time - a.time))
            distances.append(a.distance + fractions * dd)

        times.append(np.array([plan[-1].time]))
        distances.append(np.array([plan[-1].distance]))

        return [
            RoutePointStamped(
                downtrack=start_downtrack + float(d),
                crosstrack=self.crosstrack,
                stamp=start_time + float(t),
                segment_idx=self.segment_idx,
            )
            for t, d in zip(np.concatenate(times), np.concatenate(distances))
        ]


def get_motion_interpolator(name: str, **kwargs) -> MotionInterpolator:
    """Get motion interpolator by name.

    Args:
        name: Interpolator name (linear)
        **kwargs: Additional arguments for the interpolator

    Returns:
        MotionInterpolator instance
    """
    if name == "linear":
        return LinearMotionInterpolator(**kwargs)
    else:
        raise ValueError(f"Unknown motion interpolator: {name}")


def list_motion_interpolators() -> List[str]:
    return ["linear"]
