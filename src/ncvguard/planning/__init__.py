"""Host plan modules for NCV Guard."""

from .host_plan import HostPlanSnapshot
from .interpolation import (
    LinearMotionInterpolator,
    get_motion_interpolator,
    list_motion_interpolators,
)

__all__ = [
    "HostPlanSnapshot",
    "LinearMotionInterpolator",
    "get_motion_interpolator",
    "list_motion_interpolators",
]
