"""
Telemetry channel - Single buffered time series.

Provides:
- Bounded sample buffer
- Running statistics
"""

from collections import deque
from dataclasses import dataclass
import numpy as np


@dataclass
class ChannelConfig:
    """Configuration for a telemetry channel."""
    name: str = "unnamed"
    unit: str = ""
    min_value: float = float('-inf')
    max_value: float = float('inf')
    precision: int = 3
    buffer_size: int = 10000


class TelemetryChannel:
    """Time series for one measurement.

    Statistics cover every recorded sample, including ones that have
    since dropped out of the buffer.
    """

    def __init__(self, config: ChannelConfig | None = None, name: str = "channel"):
        """Initialize channel.

        Args:
            config: Channel configuration
            name: Channel name (used if config not provided)
        """
        self.config = config or ChannelConfig(name=name)

        self._times: deque = deque(maxlen=self.config.buffer_size)
        self._values: deque = deque(maxlen=self.config.buffer_size)

        # Running statistics
        self._min: float = float('inf')
        self._max: float = float('-inf')
        self._sum: float = 0.0
        self._count: int = 0

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def count(self) -> int:
        """Number of samples ever recorded."""
        return self._count

    @property
    def min_value(self) -> float:
        return self._min if self._count > 0 else 0.0

    @property
    def max_value(self) -> float:
        return self._max if self._count > 0 else 0.0

    @property
    def mean(self) -> float:
        return self._sum / self._count if self._count > 0 else 0.0

    @property
    def last_value(self) -> float:
        return self._values[-1] if self._values else 0.0

    def record(self, time: float, value: float) -> None:
        """Record a new value.

        Args:
            time: Timestamp
            value: Value to record (clamped to the channel range)
        """
        value = float(np.clip(value, self.config.min_value, self.config.max_value))

        self._times.append(time)
        self._values.append(value)

        self._min = min(self._min, value)
        self._max = max(self._max, value)
        self._sum += value
        self._count += 1

    def get_values(self) -> np.ndarray:
        return np.array(self._values)

    def get_times(self) -> np.ndarray:
        return np.array(self._times)

    def get_range(self, start_time: float, end_time: float) -> tuple[np.ndarray, np.ndarray]:
        """Get buffered values in a time range.

        Args:
            start_time: Start of range
            end_time: End of range

        Returns:
            Tuple of (times, values) arrays
        """
        times = self.get_times()
        values = self.get_values()
        if len(times) == 0:
            return times, values
        mask = (times >= start_time) & (times <= end_time)
        return times[mask], values[mask]

    def clear(self) -> None:
        """Clear all recorded data."""
        self._times.clear()
        self._values.clear()
        self._min = float('inf')
        self._max = float('-inf')
        self._sum = 0.0
        self._count = 0

    def get_state(self) -> dict:
        """Channel summary.

        Returns:
            Dictionary with channel statistics
        """
        def rounded(value):
            return round(value, self.config.precision) if self._count > 0 else None

        return {
            "name": self.config.name,
            "unit": self.config.unit,
            "count": self._count,
            "min": rounded(self._min),
            "max": rounded(self._max),
            "mean": rounded(self.mean),
            "last": rounded(self.last_value),
        }
