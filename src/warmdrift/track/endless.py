"""
Endless road generator - Infinite forward-extending centerline.

Generates:
- Gently wandering road driven by smoothed noise
- Reactive, step-by-step steering around obstacles
- Growth on demand up to a hard point cap
"""

from dataclasses import dataclass
from typing import List
import logging
import numpy as np

from warmdrift.track.centerline import CenterlinePoint, PathGenerator
from warmdrift.track.noise import NoiseConfig, SmoothedNoise
from warmdrift.track.obstacles import ObstacleField

logger = logging.getLogger(__name__)


@dataclass
class EndlessRoadConfig:
    """Configuration for the endless road."""
    # Geometry
    step_length: float = 6.0           # Distance between points (m)
    max_curvature: float = 0.015       # rad per meter

    # Curvature noise
    noise_amplitude: float = 0.008
    noise_smoothing: float = 0.97
    noise_dt: float = 1.0 / 60.0

    # Obstacle avoidance
    avoidance_margin: float = 0.0      # Clearance is baked into obstacle extents
    max_avoidance_attempts: int = 24
    avoidance_steer_rad: float = 0.3
    random_steer_rad: float = 0.6

    # Capacity
    max_points: int = 5000
    initial_ahead: int = 60

    # Start pose
    start_x: float = 0.0
    start_z: float = 0.0
    start_heading: float = 0.0

    # Random seed (None for random)
    seed: int | None = None

    def __post_init__(self):
        if self.step_length <= 0.0:
            raise ValueError(f"step_length must be positive, got {self.step_length}")
        if self.max_curvature < 0.0:
            raise ValueError(f"max_curvature must be non-negative, got {self.max_curvature}")
        if self.max_points < 1:
            raise ValueError(f"max_points must be at least 1, got {self.max_points}")
        if self.max_avoidance_attempts < 0:
            raise ValueError("max_avoidance_attempts must be non-negative")

    @property
    def max_heading_step(self) -> float:
        """Largest heading change noise alone may produce per step."""
        return self.max_curvature * self.step_length


class EndlessRoadGenerator(PathGenerator):
    """Greedy, locally reactive road builder.

    Each new point continues from the last heading plus a small smoothed
    random bend. If the step would enter an obstacle, the heading is nudged
    away from the nearest obstacle and retried a bounded number of times;
    after that the last candidate is accepted so generation never stalls.

    Points are only ever appended. Once ``max_points`` is reached further
    extension is a no-op.

    Usage:
        generator = EndlessRoadGenerator(field)
        generator.ensure_ahead(len(generator) + 30)
    """

    def __init__(
        self,
        obstacles: ObstacleField | None = None,
        config: EndlessRoadConfig | None = None,
    ):
        """Initialize generator and pre-generate the first stretch.

        Args:
            obstacles: Obstacles to avoid. Empty field if None.
            config: Road configuration. Uses defaults if None.
        """
        super().__init__()
        self.config = config or EndlessRoadConfig()
        self.obstacles = obstacles if obstacles is not None else ObstacleField()

        self._rng = np.random.default_rng(self.config.seed)
        self.noise = SmoothedNoise(
            NoiseConfig(
                amplitude=self.config.noise_amplitude,
                smoothing=self.config.noise_smoothing,
            ),
            seed=self._rng.integers(0, 2**32),
        )

        self._attempts: List[int] = []
        self._cap_logged = False

        self._append(
            CenterlinePoint(
                self.config.start_x,
                self.config.start_z,
                self.config.start_heading,
            ),
            attempts=0,
        )
        self.ensure_ahead(self.config.initial_ahead)

    @property
    def is_capped(self) -> bool:
        return len(self._points) >= self.config.max_points

    def avoidance_attempts(self, index: int) -> int:
        """Number of avoidance retries spent on a point.

        Args:
            index: Point index

        Returns:
            Retry count (0 for an unobstructed step)
        """
        return self._attempts[index]

    def ensure_ahead(self, min_count: int) -> int:
        added = 0
        while len(self._points) < min_count:
            if not self.extend_one():
                break
            added += 1
        return added

    def _step_from(self, prev: CenterlinePoint, heading: float) -> tuple[float, float]:
        step = self.config.step_length
        return prev.x + np.cos(heading) * step, prev.z + np.sin(heading) * step

    def _blocked(self, prev: CenterlinePoint, x: float, z: float) -> bool:
        margin = self.config.avoidance_margin
        return (
            self.obstacles.point_hits(x, z, margin)
            or self.obstacles.segment_hits(prev.x, prev.z, x, z, margin)
        )

    def extend_one(self) -> bool:
        """Append one point to the road.

        Returns:
            False if the point cap has been reached, True otherwise
        """
        if self.is_capped:
            if not self._cap_logged:
                logger.warning(
                    "Endless road reached its %d point cap; generation stopped",
                    self.config.max_points,
                )
                self._cap_logged = True
            return False

        cfg = self.config
        prev = self._points[-1]

        bend = np.clip(self.noise.next(cfg.noise_dt), -1.0, 1.0)
        heading = prev.heading + bend * cfg.max_curvature * cfg.step_length
        x, z = self._step_from(prev, heading)

        attempts = 0
        while self._blocked(prev, x, z) and attempts < cfg.max_avoidance_attempts:
            away = self.obstacles.nearest_avoidance_heading(x, z)
            if away is not None:
                delta = np.arctan2(np.sin(away - heading), np.cos(away - heading))
                heading += (1.0 if delta >= 0.0 else -1.0) * cfg.avoidance_steer_rad
            else:
                side = 1.0 if self._rng.random() < 0.5 else -1.0
                heading += side * cfg.random_steer_rad
            x, z = self._step_from(prev, heading)
            attempts += 1

        if attempts and attempts >= cfg.max_avoidance_attempts and self._blocked(prev, x, z):
            logger.debug(
                "Avoidance exhausted at point %d; accepting (%.1f, %.1f)",
                len(self._points), x, z,
            )

        self._append(CenterlinePoint(float(x), float(z), float(heading)), attempts)
        return True

    def _append(self, point: CenterlinePoint, attempts: int) -> None:
        self._points.append(point)
        self._attempts.append(attempts)
