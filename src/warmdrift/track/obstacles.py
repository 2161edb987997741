"""
Obstacles - Exclusion zones the road generator steers around.

Contains:
- CircleObstacle / RectObstacle: immutable shapes on the ground plane
- ObstacleField: spatial registry with point and segment containment
  queries and a nearest-obstacle steering hint
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple
import numpy as np


class ObstacleShape(Enum):
    """Shape tag for obstacles."""
    CIRCLE = "circle"
    RECT = "rect"


@dataclass(frozen=True)
class CircleObstacle:
    """Circular exclusion zone (lakes).

    The radius already includes any avoidance clearance.
    """
    x: float
    z: float
    radius: float
    kind: str = "lake"

    @property
    def shape(self) -> ObstacleShape:
        return ObstacleShape.CIRCLE

    def contains(self, x: float, z: float, margin: float = 0.0) -> bool:
        dx = x - self.x
        dz = z - self.z
        r = self.radius + margin
        return dx * dx + dz * dz < r * r

    def clearance(self, x: float, z: float) -> Tuple[float, float]:
        """Distance from the edge and the outward direction at (x, z).

        Returns:
            Tuple of (signed clearance, angle from obstacle toward point)
        """
        dx = x - self.x
        dz = z - self.z
        return np.hypot(dx, dz) - self.radius, np.arctan2(dz, dx)


@dataclass(frozen=True)
class RectObstacle:
    """Axis-aligned rectangular exclusion zone (city blocks).

    Half extents already include any avoidance clearance.
    """
    x: float
    z: float
    half_x: float
    half_z: float
    kind: str = "building"

    @property
    def shape(self) -> ObstacleShape:
        return ObstacleShape.RECT

    def contains(self, x: float, z: float, margin: float = 0.0) -> bool:
        return (
            abs(x - self.x) < self.half_x + margin
            and abs(z - self.z) < self.half_z + margin
        )

    def clearance(self, x: float, z: float) -> Tuple[float, float]:
        """Distance from the clamped surface and the outward direction at (x, z).

        Returns:
            Tuple of (clearance, angle from obstacle toward point)
        """
        dx = x - self.x
        dz = z - self.z
        ex = max(abs(dx) - self.half_x, 0.0) * np.sign(dx)
        ez = max(abs(dz) - self.half_z, 0.0) * np.sign(dz)
        dist = np.hypot(ex, ez)
        if dist == 0.0:
            # Inside the rectangle: push out from the center
            return 0.0, np.arctan2(dz, dx)
        return dist, np.arctan2(ez, ex)


Obstacle = CircleObstacle | RectObstacle


class ObstacleField:
    """Registry of obstacles for one generated world.

    Queries are brute force over all obstacles; a world holds at most a few
    hundred of them.

    Usage:
        field = ObstacleField()
        field.add(CircleObstacle(0.0, 0.0, 50.0))
        field.point_hits(10.0, 0.0, margin=20.0)  # True
    """

    # Interior points tested along a segment (endpoints excluded)
    SEGMENT_SAMPLES = 4

    def __init__(self, obstacles: Iterable[Obstacle] | None = None):
        """Initialize field.

        Args:
            obstacles: Optional initial obstacles
        """
        self._obstacles: List[Obstacle] = []
        if obstacles is not None:
            self.extend(obstacles)

    def __len__(self) -> int:
        return len(self._obstacles)

    def __iter__(self):
        return iter(self._obstacles)

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        """All obstacles in insertion order."""
        return tuple(self._obstacles)

    @property
    def is_empty(self) -> bool:
        return not self._obstacles

    def add(self, obstacle: Obstacle) -> None:
        """Add an obstacle to the field.

        Args:
            obstacle: Obstacle to add
        """
        self._obstacles.append(obstacle)

    def extend(self, obstacles: Iterable[Obstacle]) -> None:
        for obstacle in obstacles:
            self.add(obstacle)

    def point_hits(self, x: float, z: float, margin: float = 0.0) -> bool:
        """Check whether a point lies inside any obstacle.

        Args:
            x: Point X
            z: Point Z
            margin: Extra clearance added to every obstacle

        Returns:
            True if the point is inside an obstacle (plus margin)
        """
        return any(o.contains(x, z, margin) for o in self._obstacles)

    def segment_hits(
        self,
        x1: float,
        z1: float,
        x2: float,
        z2: float,
        margin: float = 0.0,
    ) -> bool:
        """Approximate segment test by sampling interior points.

        Thin obstacles crossed between samples are missed.

        Args:
            x1, z1: Segment start
            x2, z2: Segment end
            margin: Extra clearance added to every obstacle

        Returns:
            True if any interior sample hits an obstacle
        """
        samples = self.SEGMENT_SAMPLES + 1
        for i in range(1, samples):
            t = i / samples
            x = x1 + (x2 - x1) * t
            z = z1 + (z2 - z1) * t
            if self.point_hits(x, z, margin):
                return True
        return False

    def nearest_avoidance_heading(self, x: float, z: float) -> float | None:
        """Direction pointing away from the closest obstacle.

        Args:
            x: Query X
            z: Query Z

        Returns:
            Angle in radians from the nearest obstacle toward the point,
            or None if the field is empty
        """
        best_dist = float('inf')
        best_angle = None
        for obstacle in self._obstacles:
            dist, angle = obstacle.clearance(x, z)
            if dist < best_dist:
                best_dist = dist
                best_angle = float(angle)
        return best_angle
