"""Single-slot holder for the host vehicle's interpolated plan."""

import threading
from typing import Iterable, Tuple

from ..core.types import RoutePointStamped


class HostPlanSnapshot:
    """Atomically replaced, immutable host plan.

    The plan is stored as a tuple and swapped as a whole, so a reader
    always sees exactly one published plan.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._points: Tuple[RoutePointStamped, ...] = ()

    def set(self, points: Iterable[RoutePointStamped]) -> None:
        new_points = tuple(points)
        with self._lock:
            self._points = new_points

    def get(self) -> Tuple[RoutePointStamped, ...]:
        with self._lock:
            return self._points

    def __len__(self) -> int:
        return len(self.get())
