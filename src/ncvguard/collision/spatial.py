"""N-dimensional spatial hash used for conflict queries.

Points are bucketed into a uniform grid with one cell size per axis. Range
queries visit every cell overlapping the query box and then filter points
against the exact bounds.
"""

import itertools
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from ..core.interfaces import SpatialStructure, SpatialStructureFactory

Cell = Tuple[int, ...]


class NSpatialHashMap(SpatialStructure):
    """Uniform-grid hash map over N-dimensional points."""

    def __init__(self, cell_sizes: Sequence[float]):
        """Initialize spatial hash.

        Args:
            cell_sizes: Cell size along each axis
        """
        self.cell_sizes = np.asarray(cell_sizes, dtype=np.float64)
        self._cells: Dict[Cell, List[Tuple[np.ndarray, Any]]] = {}

    @property
    def dimensions(self) -> int:
        return len(self.cell_sizes)

    def _cell(self, point: Sequence[float]) -> Cell:
        return tuple(int(c) for c in np.floor(np.asarray(point) / self.cell_sizes))

    def insert(self, point: Sequence[float], obj: Any) -> None:
        """Insert an object at the given point.

        Args:
            point: Coordinates, one per axis
            obj: Object stored with the point
        """
        if len(point) != self.dimensions:
            raise ValueError(
                f"Expected a point with {self.dimensions} dimensions, got {len(point)}"
            )
        coords = np.asarray(point, dtype=np.float64)
        self._cells.setdefault(self._cell(coords), []).append((coords, obj))

    def get_collisions(self, bounds: Sequence[Tuple[float, float]]) -> List[Any]:
        """Objects whose point lies inside the closed bounds.

        Args:
            bounds: (min, max) pair for each axis

        Returns:
            Matching objects
        """
        if len(bounds) != self.dimensions:
            raise ValueError(
                f"Expected bounds with {self.dimensions} dimensions, got {len(bounds)}"
            )
        lower = np.array([b[0] for b in bounds], dtype=np.float64)
        upper = np.array([b[1] for b in bounds], dtype=np.float64)
        if np.any(lower > upper):
            return []

        lower_cell = self._cell(lower)
        upper_cell = self._cell(upper)
        ranges = [range(lo, hi + 1) for lo, hi in zip(lower_cell, upper_cell)]

        # Large boxes over a sparse map: scan occupied cells instead
        n_query_cells = int(np.prod([len(r) for r in ranges]))
        if n_query_cells > len(self._cells):
            candidates = (
                cell for cell in self._cells
                if all(lo <= c <= hi for c, lo, hi in zip(cell, lower_cell, upper_cell))
            )
        else:
            candidates = (cell for cell in itertools.product(*ranges) if cell in self._cells)

        collisions = []
        for cell in candidates:
            for coords, obj in self._cells[cell]:
                if np.all(coords >= lower) and np.all(coords <= upper):
                    collisions.append(obj)
        return collisions

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._cells.values())


class NSpatialHashMapFactory(SpatialStructureFactory):
    """Builds empty NSpatialHashMap instances with fixed cell sizes."""

    def __init__(self, cell_sizes: Sequence[float]):
        self.cell_sizes = list(cell_sizes)

    def build_spatial_structure(self) -> NSpatialHashMap:
        return NSpatialHashMap(self.cell_sizes)
