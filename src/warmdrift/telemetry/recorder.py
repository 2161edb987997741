"""
Telemetry recorder - Samples vehicle data over time.

Provides:
- Standard vehicle channels (speed, slip, steering, inputs)
- Rate-limited sampling
- Per-channel statistics
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional
import numpy as np

from warmdrift.car.vehicle import Vehicle
from warmdrift.telemetry.channel import ChannelConfig, TelemetryChannel


STANDARD_CHANNELS = {
    # Motion
    "speed_kph": ChannelConfig("speed_kph", "km/h", 0, 400, 1),
    "forward_speed": ChannelConfig("forward_speed", "m/s", -100, 100, 2),
    "lateral_speed": ChannelConfig("lateral_speed", "m/s", -100, 100, 2),
    "yaw_rate": ChannelConfig("yaw_rate", "rad/s", -10, 10, 3),
    "slip_angle_deg": ChannelConfig("slip_angle_deg", "deg", -90, 90, 1),

    # Driver
    "steer_angle_deg": ChannelConfig("steer_angle_deg", "deg", -45, 45, 1),
    "throttle": ChannelConfig("throttle", "%", 0, 100, 0),
    "brake": ChannelConfig("brake", "%", 0, 100, 0),
    "drift": ChannelConfig("drift", "", 0, 1, 0),
}

# Channels stored as 0-100 % but reported by the vehicle as 0-1
_PERCENT_CHANNELS = ("throttle", "brake")

_TIME_EPSILON = 1e-9


@dataclass
class RecorderConfig:
    """Recorder configuration."""
    sample_rate_hz: float = 60.0
    channels: List[str] | None = None  # Channels to record (None = all)
    buffer_size: int = 100000

    def __post_init__(self):
        if self.sample_rate_hz <= 0.0:
            raise ValueError(f"sample_rate_hz must be positive, got {self.sample_rate_hz}")


class TelemetryRecorder:
    """Records vehicle telemetry onto named channels.

    Usage:
        recorder = TelemetryRecorder(car=vehicle)
        recorder.record(world.time)
        recorder.get_channel("speed_kph").max_value
    """

    def __init__(
        self,
        config: RecorderConfig | None = None,
        car: Vehicle | None = None,
    ):
        """Initialize recorder.

        Args:
            config: Recorder configuration
            car: Vehicle to record (can be set later)
        """
        self.config = config or RecorderConfig()
        self._car = car

        self._channels: Dict[str, TelemetryChannel] = {}
        self._setup_channels()

        self._next_sample_time: float = float('-inf')
        self._sample_interval: float = 1.0 / self.config.sample_rate_hz

    def _setup_channels(self) -> None:
        names = self.config.channels or list(STANDARD_CHANNELS.keys())
        for name in names:
            if name in STANDARD_CHANNELS:
                cfg = replace(STANDARD_CHANNELS[name], buffer_size=self.config.buffer_size)
            else:
                cfg = ChannelConfig(name=name, buffer_size=self.config.buffer_size)
            self._channels[name] = TelemetryChannel(cfg)

    def set_car(self, car: Vehicle) -> None:
        """Set the vehicle to record.

        Args:
            car: Vehicle to record
        """
        self._car = car

    @property
    def channels(self) -> Dict[str, TelemetryChannel]:
        return self._channels

    def get_channel(self, name: str) -> Optional[TelemetryChannel]:
        return self._channels.get(name)

    def record(self, time: float, telemetry: Dict[str, Any] | None = None) -> bool:
        """Record telemetry at current time.

        Args:
            time: Current simulation time
            telemetry: Telemetry dict (fetches from the vehicle if None)

        Returns:
            True if a sample was recorded
        """
        # Tolerance absorbs rounding in accumulated tick times
        if time < self._next_sample_time - _TIME_EPSILON:
            return False

        if telemetry is None and self._car is not None:
            telemetry = self._car.get_telemetry()
        if telemetry is None:
            return False

        self._next_sample_time += self._sample_interval
        if self._next_sample_time <= time:
            # Behind schedule (or first sample): restart from now
            self._next_sample_time = time + self._sample_interval

        for name, channel in self._channels.items():
            if name not in telemetry:
                continue
            value = float(telemetry[name])
            if name in _PERCENT_CHANNELS:
                value *= 100.0
            channel.record(time, value)
        return True

    def get_current_values(self) -> Dict[str, float]:
        """Most recent value from each channel."""
        return {name: ch.last_value for name, ch in self._channels.items()}

    def get_statistics(self) -> Dict[str, Dict[str, Any]]:
        return {name: ch.get_state() for name, ch in self._channels.items()}

    def get_series(self, name: str) -> tuple[np.ndarray, np.ndarray]:
        """Buffered (times, values) of a channel; empty if unknown."""
        channel = self._channels.get(name)
        if channel is None:
            return np.array([]), np.array([])
        return channel.get_times(), channel.get_values()

    def clear(self) -> None:
        """Clear all recorded data."""
        for channel in self._channels.values():
            channel.clear()
        self._next_sample_time = float('-inf')

    def get_state(self) -> dict:
        return {
            "sample_rate_hz": self.config.sample_rate_hz,
            "total_samples": sum(ch.count for ch in self._channels.values()),
            "channels": self.get_statistics(),
        }
