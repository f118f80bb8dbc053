"""Collision checking and replan triggering for NCV Guard.

This module checks host plans and candidate trajectories against the
predicted motion of tracked objects and decides when to ask the planner
for a new plan.
"""

from .checker import ObjectCollisionChecker, create_collision_checker
from .conflict import BasicConflictDetector
from .evaluator import ConflictEvaluator
from .replan import ReplanScheduler, ReplanState
from .spatial import NSpatialHashMap, NSpatialHashMapFactory

__all__ = [
    "ObjectCollisionChecker",
    "create_collision_checker",
    "BasicConflictDetector",
    "ConflictEvaluator",
    "ReplanScheduler",
    "ReplanState",
    "NSpatialHashMap",
    "NSpatialHashMapFactory",
]
