"""Core modules for NCV Guard."""

from .config import (
    CollisionCheckerConfig,
    CollisionConfig,
    PredictionConfig,
    SpatialIndexConfig,
    VehicleConfig,
)
from .types import ConflictSpace, PlanNode, RoadwayObstacle, RoutePointStamped

__all__ = [
    "CollisionCheckerConfig",
    "CollisionConfig",
    "PredictionConfig",
    "SpatialIndexConfig",
    "VehicleConfig",
    "ConflictSpace",
    "PlanNode",
    "RoadwayObstacle",
    "RoutePointStamped",
]
