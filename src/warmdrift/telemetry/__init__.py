"""
Telemetry module - Vehicle data collection.

This module contains:
- TelemetryRecorder: Samples vehicle state over time
- TelemetryChannel: Individual data channel
"""

from warmdrift.telemetry.recorder import TelemetryRecorder, RecorderConfig
from warmdrift.telemetry.channel import TelemetryChannel, ChannelConfig

__all__ = [
    "TelemetryRecorder",
    "RecorderConfig",
    "TelemetryChannel",
    "ChannelConfig",
]
