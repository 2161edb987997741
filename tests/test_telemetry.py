"""Basic tests for the WarmDrift telemetry module."""

import pytest
import numpy as np

from warmdrift.car.vehicle import Vehicle, VehicleInputs
from warmdrift.telemetry.channel import ChannelConfig, TelemetryChannel
from warmdrift.telemetry.recorder import RecorderConfig, TelemetryRecorder


class TestTelemetryChannel:
    """Test telemetry channel."""

    def test_statistics(self):
        """Test running statistics."""
        channel = TelemetryChannel(name="speed")
        for i, value in enumerate([1.0, 5.0, 3.0]):
            channel.record(i * 0.1, value)

        assert channel.count == 3
        assert channel.min_value == 1.0
        assert channel.max_value == 5.0
        assert channel.mean == pytest.approx(3.0)
        assert channel.last_value == 3.0

    def test_empty_channel(self):
        """Test an empty channel reports zeros."""
        channel = TelemetryChannel()

        assert channel.mean == 0.0
        assert channel.get_state()["max"] is None

    def test_value_clamped(self):
        """Test values outside the channel range are clamped."""
        channel = TelemetryChannel(ChannelConfig(name="pct", min_value=0, max_value=100))
        channel.record(0.0, 150.0)

        assert channel.last_value == 100.0

    def test_buffer_bounded(self):
        """Test the buffer drops old samples but statistics keep them."""
        channel = TelemetryChannel(ChannelConfig(name="x", buffer_size=5))
        for i in range(10):
            channel.record(float(i), float(i))

        assert len(channel.get_values()) == 5
        assert channel.get_times()[0] == 5.0
        assert channel.count == 10
        assert channel.min_value == 0.0

    def test_get_range(self):
        """Test time range query."""
        channel = TelemetryChannel()
        for i in range(10):
            channel.record(float(i), float(i * 2))

        times, values = channel.get_range(2.0, 4.0)
        assert np.array_equal(times, [2.0, 3.0, 4.0])
        assert np.array_equal(values, [4.0, 6.0, 8.0])

    def test_clear(self):
        """Test clearing a channel."""
        channel = TelemetryChannel()
        channel.record(0.0, 1.0)
        channel.clear()

        assert channel.count == 0
        assert len(channel.get_values()) == 0


class TestTelemetryRecorder:
    """Test telemetry recorder."""

    def test_standard_channels(self):
        """Test default recorder covers vehicle telemetry."""
        recorder = TelemetryRecorder()
        telemetry = Vehicle().get_telemetry()

        for name in recorder.channels:
            assert name in telemetry

    def test_rate_limited(self):
        """Test samples closer than the interval are skipped."""
        recorder = TelemetryRecorder(RecorderConfig(sample_rate_hz=10.0), Vehicle())

        assert recorder.record(0.0)
        assert not recorder.record(0.05)
        assert recorder.record(0.1)
        assert recorder.get_channel("speed_kph").count == 2

    def test_accumulated_tick_times(self):
        """Test sampling keeps its rate when time is summed tick by tick."""
        recorder = TelemetryRecorder(RecorderConfig(sample_rate_hz=60.0))
        time = 0.0
        recorded = 0
        for _ in range(120):
            time += 1.0 / 120.0
            recorded += recorder.record(time, {"speed_kph": 1.0})

        assert recorded == 60

    def test_schedule_restarts_after_gap(self):
        """Test a long gap does not cause a burst of catch-up samples."""
        recorder = TelemetryRecorder(RecorderConfig(sample_rate_hz=10.0))

        assert recorder.record(0.0, {"speed_kph": 1.0})
        assert recorder.record(1.0, {"speed_kph": 1.0})
        assert not recorder.record(1.05, {"speed_kph": 1.0})
        assert recorder.record(1.1, {"speed_kph": 1.0})

    def test_no_car(self):
        """Test recording without a car or telemetry does nothing."""
        assert not TelemetryRecorder().record(0.0)

    def test_percent_scaling(self):
        """Test pedal inputs are stored as percentages."""
        vehicle = Vehicle()
        vehicle.step(VehicleInputs(throttle=0.5))
        recorder = TelemetryRecorder(car=vehicle)
        recorder.record(0.0)

        assert recorder.get_channel("throttle").last_value == pytest.approx(50.0)
        assert recorder.get_channel("brake").last_value == 0.0

    def test_channel_selection(self):
        """Test recording only selected channels."""
        recorder = TelemetryRecorder(RecorderConfig(channels=["speed_kph", "custom"]))
        recorder.record(0.0, {"speed_kph": 36.0, "custom": 2.0, "yaw_rate": 1.0})

        assert set(recorder.channels) == {"speed_kph", "custom"}
        assert recorder.get_current_values() == {"speed_kph": 36.0, "custom": 2.0}

    def test_series_and_clear(self):
        """Test series access and clearing."""
        recorder = TelemetryRecorder(RecorderConfig(sample_rate_hz=100.0))
        for i in range(5):
            recorder.record(i * 0.1, {"speed_kph": float(i)})

        times, values = recorder.get_series("speed_kph")
        assert len(times) == 5
        assert values[-1] == 4.0

        recorder.clear()
        assert recorder.get_state()["total_samples"] == 0
        assert recorder.record(0.0, {"speed_kph": 1.0})

    def test_unknown_series(self):
        """Test unknown channel gives empty series."""
        times, values = TelemetryRecorder().get_series("missing")

        assert len(times) == 0
        assert len(values) == 0

    def test_invalid_rate(self):
        """Test non-positive sample rate is rejected."""
        with pytest.raises(ValueError):
            RecorderConfig(sample_rate_hz=0.0)
