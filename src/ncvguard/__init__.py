"""NCV Guard: object tracking and replan triggering for guidance.

Tracks non-connected vehicles (NCVs) sensed ahead of the host vehicle,
predicts their motion, checks candidate and active plans against those
predictions, and requests a replan from the planner when needed.
"""

__version__ = "0.1.0"
__author__ = "ChrisRPL"
__email__ = "shepard128@gmail.com"

from .collision import ObjectCollisionChecker, create_collision_checker
from .core import CollisionCheckerConfig

__all__ = [
    "ObjectCollisionChecker",
    "create_collision_checker",
    "CollisionCheckerConfig",
]
