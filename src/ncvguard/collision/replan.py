"""Rate-limited replan policy.

The scheduler starts a detection timer the first time an update cycle
completes while the planner holds a trajectory, and requests a replan
right away. From then on it requests another replan each time more than
the replan period has elapsed since the last request. There is no way back
to idle; periodic replanning continues for as long as the checker runs.
"""

from enum import Enum
from typing import Callable, Optional

from ..utils.logging import get_logger

logger = get_logger(__name__)


class ReplanState(Enum):
    IDLE = "idle"
    PENDING = "pending"


class ReplanScheduler:
    """Decides when an update cycle should request a new plan."""

    def __init__(
        self,
        replan_period_ms: int,
        collision_check: Optional[Callable[[], bool]] = None
    ):
        """Initialize replan scheduler.

        Args:
            replan_period_ms: Minimum time between periodic replans (ms)
            collision_check: Optional predicate gating periodic replans.
                When None, every period expiry requests a replan.
        """
        self.replan_period_ms = replan_period_ms
        self.collision_check = collision_check
        self._detection_time_ms: Optional[int] = None

    @property
    def detection_time_ms(self) -> Optional[int]:
        return self._detection_time_ms

    @property
    def state(self) -> ReplanState:
        if self._detection_time_ms is None:
            return ReplanState.IDLE
        return ReplanState.PENDING

    def on_update_cycle_completed(self, has_active_trajectory: bool, now_ms: int) -> bool:
        """Advance the policy after an update cycle.

        Args:
            has_active_trajectory: Whether the planner holds a trajectory
            now_ms: Current time (ms)

        Returns:
            True if a replan should be requested
        """
        if self._detection_time_ms is None:
            if has_active_trajectory:
                self._detection_time_ms = now_ms
                logger.info("NEW PLAN: First ncv detection")
                return True
            return False

        if now_ms - self._detection_time_ms > self.replan_period_ms:
            if self.collision_check is not None and not self.collision_check():
                return False
            self._detection_time_ms = now_ms
            logger.info("NEW PLAN: timer triggered")
            return True

        return False
