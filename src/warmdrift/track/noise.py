"""
Smoothed noise - Low-pass filtered random signal.

Drives the slow left/right wander of the endless road:
- Occasionally picks a new random target
- Relaxes the output exponentially toward that target
"""

from dataclasses import dataclass
import numpy as np


@dataclass
class NoiseConfig:
    """Configuration for a smoothed noise source."""
    amplitude: float = 1.0
    smoothing: float = 0.95            # Closer to 1 = slower relaxation
    resample_probability: float = 0.02  # Chance per call of a new target

    def __post_init__(self):
        if self.amplitude < 0.0:
            raise ValueError(f"amplitude must be non-negative, got {self.amplitude}")
        if not 0.0 < self.smoothing < 1.0:
            raise ValueError(f"smoothing must be in (0, 1), got {self.smoothing}")
        if not 0.0 <= self.resample_probability <= 1.0:
            raise ValueError(
                f"resample_probability must be in [0, 1], got {self.resample_probability}"
            )


class SmoothedNoise:
    """Random signal bounded by ``[-amplitude, amplitude]``.

    Each call to :meth:`next` may resample the internal target, then moves
    the output value toward it at a rate set by ``dt`` and the smoothing
    factor. Given the same seed the sequence is fully reproducible.

    Usage:
        noise = SmoothedNoise(NoiseConfig(amplitude=0.5), seed=7)
        value = noise.next(1 / 60)
    """

    def __init__(self, config: NoiseConfig | None = None, seed: int | None = None):
        """Initialize noise source.

        Args:
            config: Noise configuration. Uses defaults if None.
            seed: Random seed (None for a non-reproducible sequence)
        """
        self.config = config or NoiseConfig()
        self.target: float = 0.0
        self.value: float = 0.0
        self._rng = np.random.default_rng(seed)

    @property
    def rate(self) -> float:
        """Relaxation rate constant (1/s)."""
        return 60.0 * (1.0 - self.config.smoothing)

    def reseed(self, seed: int | None) -> None:
        """Restart the sequence from a new seed.

        Args:
            seed: Random seed
        """
        self._rng = np.random.default_rng(seed)
        self.target = 0.0
        self.value = 0.0

    def next(self, dt: float) -> float:
        """Advance the signal.

        Args:
            dt: Time step in seconds

        Returns:
            Current smoothed value
        """
        amp = self.config.amplitude
        if self._rng.random() < self.config.resample_probability:
            self.target = float(self._rng.uniform(-amp, amp))

        alpha = 1.0 - np.exp(-max(dt, 0.0) * self.rate)
        self.value += float((self.target - self.value) * alpha)
        return self.value
