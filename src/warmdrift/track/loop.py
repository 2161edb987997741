"""
Loop track generator - Closed circuits from randomized control points.

Generates:
- Jittered control points around a circle
- A closed centripetal Catmull-Rom spline through them
- Reproducible layouts from an explicit integer seed
"""

from dataclasses import dataclass
from typing import List, Tuple
import logging
import numpy as np

from warmdrift.track.centerline import CenterlinePoint, PathGenerator

logger = logging.getLogger(__name__)


class LinearCongruentialGenerator:
    """Small seeded PRNG with a stable, platform-independent sequence.

    Uses the Numerical Recipes constants with modulus 2**32, so a stored
    seed always regenerates the same circuit.
    """

    MULTIPLIER = 1664525
    INCREMENT = 1013904223
    MODULUS = 2**32

    def __init__(self, seed: int):
        self.state = int(seed) % self.MODULUS

    def next_int(self) -> int:
        self.state = (self.MULTIPLIER * self.state + self.INCREMENT) % self.MODULUS
        return self.state

    def next_float(self) -> float:
        """Next value in [0, 1)."""
        return self.next_int() / self.MODULUS

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.next_float()


@dataclass
class LoopTrackConfig:
    """Configuration for closed-loop generation."""
    control_point_count: int = 12
    base_radius: float = 300.0         # m
    radial_jitter: float = 90.0        # +/- m on each control point radius
    angular_jitter: float = 0.35       # Fraction of the angular spacing
    segment_count: int = 600           # Samples along the finished loop
    alpha: float = 0.5                 # 0.5 = centripetal parameterization

    # Random seed (None for random)
    seed: int | None = None

    def __post_init__(self):
        if self.control_point_count < 3:
            raise ValueError(
                f"control_point_count must be at least 3, got {self.control_point_count}"
            )
        if self.base_radius <= 0.0:
            raise ValueError(f"base_radius must be positive, got {self.base_radius}")
        if self.radial_jitter < 0.0:
            raise ValueError(f"radial_jitter must be non-negative, got {self.radial_jitter}")
        if not 0.0 <= self.angular_jitter < 0.5:
            raise ValueError(f"angular_jitter must be in [0, 0.5), got {self.angular_jitter}")
        if self.segment_count < self.control_point_count:
            raise ValueError("segment_count must be at least control_point_count")


class LoopTrack(PathGenerator):
    """Finished closed circuit.

    The centerline is complete at construction; the point after the last
    one is the first one again.
    """

    closed = True

    def __init__(
        self,
        points: List[CenterlinePoint],
        control_points: np.ndarray,
        seed: int,
    ):
        super().__init__()
        self._points = list(points)
        self.control_points = control_points
        self.seed = seed

    def ensure_ahead(self, min_count: int) -> int:
        return 0

    @property
    def length(self) -> float:
        """Total loop length in meters, including the closing segment."""
        pts = self.as_array()
        if len(pts) < 2:
            return 0.0
        diffs = np.roll(pts, -1, axis=0) - pts
        return float(np.sum(np.hypot(diffs[:, 0], diffs[:, 1])))


def _catmull_rom_span(
    p0: np.ndarray,
    p1: np.ndarray,
    p2: np.ndarray,
    p3: np.ndarray,
    s: np.ndarray,
    alpha: float,
) -> np.ndarray:
    """Evaluate one Catmull-Rom span between p1 and p2.

    Args:
        p0, p1, p2, p3: Neighbouring control points
        s: Local parameters in [0, 1)
        alpha: Knot exponent (0.5 = centripetal)

    Returns:
        Array of shape (len(s), 2)
    """
    def knot(a, b):
        return max(float(np.hypot(*(b - a))) ** alpha, 1e-6)

    t0 = 0.0
    t1 = t0 + knot(p0, p1)
    t2 = t1 + knot(p1, p2)
    t3 = t2 + knot(p2, p3)

    t = (t1 + s * (t2 - t1))[:, None]

    a1 = (t1 - t) / (t1 - t0) * p0 + (t - t0) / (t1 - t0) * p1
    a2 = (t2 - t) / (t2 - t1) * p1 + (t - t1) / (t2 - t1) * p2
    a3 = (t3 - t) / (t3 - t2) * p2 + (t - t2) / (t3 - t2) * p3

    b1 = (t2 - t) / (t2 - t0) * a1 + (t - t0) / (t2 - t0) * a2
    b2 = (t3 - t) / (t3 - t1) * a2 + (t - t1) / (t3 - t1) * a3

    return (t2 - t) / (t2 - t1) * b1 + (t - t1) / (t2 - t1) * b2


def sample_closed_spline(
    control_points: np.ndarray,
    segment_count: int,
    alpha: float = 0.5,
) -> np.ndarray:
    """Sample a closed Catmull-Rom spline at equal parameter steps.

    Args:
        control_points: (N, 2) control points in loop order
        segment_count: Number of samples on the whole loop
        alpha: Knot exponent

    Returns:
        (segment_count, 2) array of samples
    """
    n = len(control_points)
    u = np.arange(segment_count) * n / segment_count
    spans = np.minimum(np.floor(u).astype(int), n - 1)
    local = u - spans

    samples = np.empty((segment_count, 2))
    for i in range(n):
        mask = spans == i
        if not np.any(mask):
            continue
        samples[mask] = _catmull_rom_span(
            control_points[(i - 1) % n],
            control_points[i],
            control_points[(i + 1) % n],
            control_points[(i + 2) % n],
            local[mask],
            alpha,
        )
    return samples


def closed_headings(samples: np.ndarray) -> np.ndarray:
    """Tangent headings of a closed polyline using wrapped central differences."""
    d = np.roll(samples, -1, axis=0) - np.roll(samples, 1, axis=0)
    return np.unwrap(np.arctan2(d[:, 1], d[:, 0]))


class LoopTrackGenerator:
    """Procedural closed circuit generator.

    Control points are placed around a circle with jittered angle and
    radius, sorted by angle so the polygon cannot self-intersect, and
    joined by a closed spline. Obstacles are not consulted.

    Usage:
        generator = LoopTrackGenerator()
        track = generator.generate_with_seed(42)
    """

    def __init__(self, config: LoopTrackConfig | None = None):
        """Initialize generator with optional configuration.

        Args:
            config: Loop configuration. Uses defaults if None.
        """
        self.config = config or LoopTrackConfig()

    def control_points(self, seed: int) -> np.ndarray:
        """Jittered control points sorted by angle around the origin.

        Args:
            seed: LCG seed

        Returns:
            (N, 2) array of x, z
        """
        cfg = self.config
        rng = LinearCongruentialGenerator(seed)
        n = cfg.control_point_count
        spacing = 2 * np.pi / n

        points: List[Tuple[float, float]] = []
        for i in range(n):
            angle = i * spacing + rng.uniform(-cfg.angular_jitter, cfg.angular_jitter) * spacing
            radius = cfg.base_radius + rng.uniform(-cfg.radial_jitter, cfg.radial_jitter)
            radius = max(radius, 0.1 * cfg.base_radius)
            points.append((radius * np.cos(angle), radius * np.sin(angle)))

        pts = np.array(points, dtype=float)
        order = np.argsort(np.arctan2(pts[:, 1], pts[:, 0]), kind="stable")
        return pts[order]

    def generate(self, seed: int | None = None) -> LoopTrack:
        """Generate a closed loop.

        Args:
            seed: LCG seed. Falls back to the config seed, then to a fresh
                random seed which is recorded on the returned track.

        Returns:
            Generated LoopTrack
        """
        if seed is None:
            seed = self.config.seed
        if seed is None:
            seed = int(np.random.default_rng().integers(0, 2**32))

        controls = self.control_points(seed)
        samples = sample_closed_spline(controls, self.config.segment_count, self.config.alpha)
        headings = closed_headings(samples)

        points = [
            CenterlinePoint(float(x), float(z), float(h))
            for (x, z), h in zip(samples, headings)
        ]
        track = LoopTrack(points, controls, seed)
        logger.debug(
            "Generated loop seed=%d with %d samples (%.0f m)",
            seed, len(points), track.length,
        )
        return track

    def generate_with_seed(self, seed: int) -> LoopTrack:
        """Generate loop with specific seed.

        Args:
            seed: LCG seed

        Returns:
            Generated track
        """
        return self.generate(seed)


def generate_loop(
    control_point_count: int,
    base_radius: float,
    radial_jitter: float,
    segment_count: int,
    seed: int,
) -> LoopTrack:
    """Build a closed loop in one call.

    Args:
        control_point_count: Number of spline control points
        base_radius: Mean control point radius
        radial_jitter: Uniform +/- jitter applied to each radius
        segment_count: Number of centerline samples
        seed: LCG seed

    Returns:
        Generated LoopTrack
    """
    config = LoopTrackConfig(
        control_point_count=control_point_count,
        base_radius=base_radius,
        radial_jitter=radial_jitter,
        segment_count=segment_count,
    )
    return LoopTrackGenerator(config).generate(seed)
