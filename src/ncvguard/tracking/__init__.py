"""Object tracking modules for NCV Guard.

This module keeps per-object observation histories and predicts the
future motion of tracked non-connected vehicles for collision checking.
"""

from .history import ObservationHistoryStore
from .motion_prediction import (
    KalmanPredictor,
    LinearRegressionPredictor,
    get_motion_predictor,
    list_motion_predictors,
)
from .prediction_cache import MotionPredictionCache

__all__ = [
    "ObservationHistoryStore",
    "MotionPredictionCache",
    "LinearRegressionPredictor",
    "KalmanPredictor",
    "get_motion_predictor",
    "list_motion_predictors",
]
