"""
Centerline - Shared data contract of both road generators.

Contains:
- CenterlinePoint: ground-plane position plus heading
- PathGenerator: base class for the endless and loop generators
"""

from dataclasses import dataclass
from typing import List, Tuple
import numpy as np


@dataclass(frozen=True)
class CenterlinePoint:
    """Single sample of a road midline."""
    x: float
    z: float
    heading: float  # Radians, 0 = +X, not wrapped

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.z)

    @property
    def direction(self) -> Tuple[float, float]:
        """Unit tangent on the ground plane."""
        return (np.cos(self.heading), np.sin(self.heading))


class PathGenerator:
    """Base class for road generators.

    Subclasses own an ordered point list whose index is the only identity
    of a point. The endless generator grows it on demand; the loop generator
    fills it once.
    """

    closed: bool = False

    def __init__(self):
        self._points: List[CenterlinePoint] = []

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> CenterlinePoint:
        return self._points[index]

    @property
    def points(self) -> List[CenterlinePoint]:
        """Centerline points (do not mutate)."""
        return self._points

    @property
    def headings(self) -> List[float]:
        return [p.heading for p in self._points]

    @property
    def frontier(self) -> int:
        """Index of the most recently generated point."""
        return len(self._points) - 1

    @property
    def start(self) -> CenterlinePoint:
        """First centerline point (vehicle spawn pose)."""
        return self._points[0]

    @property
    def is_capped(self) -> bool:
        return False

    def ensure_ahead(self, min_count: int) -> int:
        """Grow the centerline to at least ``min_count`` points.

        Args:
            min_count: Required number of points

        Returns:
            Number of points added
        """
        raise NotImplementedError

    def as_array(self) -> np.ndarray:
        """Centerline as an (N, 2) array of x, z."""
        if not self._points:
            return np.zeros((0, 2))
        return np.array([(p.x, p.z) for p in self._points], dtype=float)

    def nearest_index(self, x: float, z: float) -> int:
        """Index of the centerline point closest to (x, z).

        Args:
            x: Query X
            z: Query Z

        Returns:
            Point index, or -1 when empty
        """
        if not self._points:
            return -1
        pts = self.as_array()
        d2 = (pts[:, 0] - x) ** 2 + (pts[:, 1] - z) ** 2
        return int(np.argmin(d2))

    def distance_to_frontier(self, x: float, z: float) -> float:
        """Straight-line distance from (x, z) to the last point."""
        if not self._points:
            return float('inf')
        head = self._points[-1]
        return float(np.hypot(head.x - x, head.z - z))
