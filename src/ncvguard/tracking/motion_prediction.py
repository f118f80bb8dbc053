"""Motion predictors for tracked non-connected vehicles.

Predictors turn a time-ordered observation history into a stamped route
path covering a fixed horizon. Output is sampled uniformly in time so that
consecutive points are distance_step apart along the route at the
estimated speed. The collision evaluator relies on the uniform spacing when
it derives its temporal margin from the first two points.

Available models:
- linear_regression: least-squares fit of downtrack over time
- kalman: constant velocity Kalman filter over downtrack and crosstrack
"""

from typing import List, Tuple

import numpy as np
from scipy import stats

from ..core.interfaces import MotionPredictor
from ..core.types import RoadwayObstacle, RoutePointStamped

MS_PER_S = 1000.0
MIN_SPEED = 0.1  # m/s, slower objects are treated as stationary
MAX_PREDICTION_POINTS = 2000


def sample_times(
    start_time: float,
    speed: float,
    distance_step: float,
    time_duration: float
) -> np.ndarray:
    """Sample prediction times across the horizon.

    Args:
        start_time: Time of the first predicted point (s)
        speed: Estimated downtrack speed (m/s)
        distance_step: Desired downtrack spacing between points (m)
        time_duration: Prediction horizon (s)

    Returns:
        Ascending sample times [N] with N >= 2
    """
    end_time = start_time + time_duration
    if abs(speed) < MIN_SPEED:
        return np.array([start_time, end_time])

    dt = distance_step / abs(speed)
    dt = max(dt, time_duration / MAX_PREDICTION_POINTS)
    n_steps = int(np.floor(time_duration / dt + 1e-9))
    times = start_time + dt * np.arange(n_steps + 1)

    # Close the horizon if the uniform grid stops short of it
    if n_steps == 0 or end_time - times[-1] > 1e-9:
        times = np.append(times, end_time)

    return times


def _to_route_points(
    times: np.ndarray,
    downtracks: np.ndarray,
    crosstracks: np.ndarray
) -> List[RoutePointStamped]:
    return [
        RoutePointStamped(downtrack=float(s), crosstrack=float(d), stamp=float(t))
        for t, s, d in zip(times, downtracks, crosstracks)
    ]


class LinearRegressionPredictor(MotionPredictor):
    """Predicts constant speed motion fitted to the whole history.

    Crosstrack is held at the most recent observation since in-lane objects
    are assumed to keep their lane.
    """

    def predict_motion(
        self,
        object_id: str,
        history: List[RoadwayObstacle],
        distance_step: float,
        time_duration: float,
    ) -> List[RoutePointStamped]:
        if not history:
            return []

        latest = history[-1]
        t_last = latest.stamp_ms / MS_PER_S

        # Fit relative to the latest stamp to keep the intercept meaningful
        t = np.array([obs.stamp_ms / MS_PER_S for obs in history]) - t_last
        s = np.array([obs.downtrack for obs in history])

        if len(np.unique(t)) < 2:
            speed = 0.0
            start_downtrack = float(s[t == 0.0].mean())
        else:
            fit = stats.linregress(t, s)
            speed = float(fit.slope)
            start_downtrack = float(fit.intercept)

        times = sample_times(t_last, speed, distance_step, time_duration)
        downtracks = start_downtrack + speed * (times - t_last)
        crosstracks = np.full_like(times, latest.crosstrack)

        return _to_route_points(times, downtracks, crosstracks)


class KalmanFilter:
    """Kalman filter for route-relative position and velocity tracking.

    Implements the classic Kalman filter for a constant velocity motion
    model with a variable time step between observations.

    State: [downtrack, crosstrack, v_downtrack, v_crosstrack]
    Measurement: [downtrack, crosstrack]
    """

    def __init__(
        self,
        process_noise: float = 1.0,
        measurement_noise: float = 0.5
    ):
        """Initialize Kalman filter.

        Args:
            process_noise: Process noise standard deviation (m/s^2)
            measurement_noise: Measurement noise standard deviation (m)
        """
        self.process_noise = process_noise

        # Measurement matrix (observe position only)
        self.H = np.array([
            [1, 0, 0, 0],
            [0, 1, 0, 0]
        ], dtype=np.float64)

        # Measurement noise covariance
        r = measurement_noise ** 2
        self.R = r * np.eye(2)

    @staticmethod
    def transition(dt: float) -> np.ndarray:
        """State transition matrix for a time step of dt seconds."""
        return np.array([
            [1, 0, dt, 0],
            [0, 1, 0, dt],
            [0, 0, 1, 0],
            [0, 0, 0, 1]
        ], dtype=np.float64)

    def process_covariance(self, dt: float) -> np.ndarray:
        q = self.process_noise ** 2
        return q * np.array([
            [dt**4/4, 0, dt**3/2, 0],
            [0, dt**4/4, 0, dt**3/2],
            [dt**3/2, 0, dt**2, 0],
            [0, dt**3/2, 0, dt**2]
        ], dtype=np.float64)

    def initialize(self, measurement: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Initialize state with zero velocity and high uncertainty.

        Args:
            measurement: Initial measurement [downtrack, crosstrack]

        Returns:
            Tuple of (state [4], covariance [4, 4])
        """
        x = np.array([measurement[0], measurement[1], 0.0, 0.0])
        P = np.diag([1.0, 1.0, 100.0, 100.0])
        return x, P

    def predict(
        self,
        x: np.ndarray,
        P: np.ndarray,
        dt: float
    ) -> Tuple[np.ndarray, np.ndarray]:
        F = self.transition(dt)
        return F @ x, F @ P @ F.T + self.process_covariance(dt)

    def update(
        self,
        x: np.ndarray,
        P: np.ndarray,
        measurement: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        # Innovation (measurement residual)
        y = measurement - (self.H @ x)

        # Innovation covariance
        S = self.H @ P @ self.H.T + self.R

        # Kalman gain
        K = P @ self.H.T @ np.linalg.inv(S)

        x_upd = x + K @ y
        P_upd = (np.eye(4) - K @ self.H) @ P

        return x_upd, P_upd

    def filter(self, history: List[RoadwayObstacle]) -> np.ndarray:
        """Run the filter over a time-ordered history.

        Args:
            history: Observations ordered by ascending stamp

        Returns:
            Final state estimate [4]
        """
        x, P = self.initialize(
            np.array([history[0].downtrack, history[0].crosstrack])
        )

        for prev, obs in zip(history, history[1:]):
            dt = (obs.stamp_ms - prev.stamp_ms) / MS_PER_S
            if dt > 0:
                x, P = self.predict(x, P, dt)
            x, P = self.update(x, P, np.array([obs.downtrack, obs.crosstrack]))

        return x


class KalmanPredictor(MotionPredictor):
    """Extrapolates the Kalman filter state estimate over the horizon."""

    def __init__(self, process_noise: float = 1.0, measurement_noise: float = 0.5):
        self.kf = KalmanFilter(
            process_noise=process_noise,
            measurement_noise=measurement_noise
        )

    def predict_motion(
        self,
        object_id: str,
        history: List[RoadwayObstacle],
        distance_step: float,
        time_duration: float,
    ) -> List[RoutePointStamped]:
        if not history:
            return []

        x = self.kf.filter(history)
        t_last = history[-1].stamp_ms / MS_PER_S

        times = sample_times(t_last, x[2], distance_step, time_duration)
        offsets = times - t_last
        if abs(x[2]) < MIN_SPEED:
            # Stationary object, do not drift laterally either
            offsets = np.zeros_like(offsets)

        downtracks = x[0] + x[2] * offsets
        crosstracks = x[1] + x[3] * offsets

        return _to_route_points(times, downtracks, crosstracks)


def get_motion_predictor(name: str, **kwargs) -> MotionPredictor:
    """Get motion predictor by model name.

    Args:
        name: Model name (linear_regression, kalman)
        **kwargs: Additional arguments for the predictor

    Returns:
        MotionPredictor instance

    Example:
        >>> predictor = get_motion_predictor("linear_regression")
        >>> path = predictor.predict_motion("0", history, 2.0, 10.0)
    """
    if name == "linear_regression":
        return LinearRegressionPredictor(**kwargs)
    elif name == "kalman":
        return KalmanPredictor(**kwargs)
    else:
        raise ValueError(f"Unknown motion predictor: {name}")


def list_motion_predictors() -> List[str]:
    """List available motion predictor models.

    Returns:
        List of model names
    """
    return [
        "linear_regression",  # Default, matches uniform output sampling
        "kalman"
    ]
