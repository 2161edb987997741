"""
Car module - Arcade vehicle dynamics.

This module contains:
- Vehicle: Fixed-step integrator with drift
- VehicleConfig: Handling parameters
- VehicleInputs: Per-tick driver inputs
- VehicleState: Pose and motion
"""

from warmdrift.car.vehicle import Vehicle, VehicleConfig, VehicleInputs, VehicleState

__all__ = [
    "Vehicle",
    "VehicleConfig",
    "VehicleInputs",
    "VehicleState",
]
