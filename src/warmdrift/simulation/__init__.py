"""
Simulation module - Frame loop and world state.

This module contains:
- Simulator: Fixed-step frame loop with regeneration
- World: Aggregate of biome, obstacles, road, vehicle and camera
- ChaseCamera: Smoothed follow camera
- InputSnapshot: Per-frame player controls
"""

from warmdrift.simulation.simulator import Simulator, SimulatorConfig
from warmdrift.simulation.world import GenerationMode, World
from warmdrift.simulation.camera import CameraState, ChaseCamera, ChaseCameraConfig
from warmdrift.simulation.controls import InputSnapshot, KeyBindings

__all__ = [
    "Simulator",
    "SimulatorConfig",
    "GenerationMode",
    "World",
    "CameraState",
    "ChaseCamera",
    "ChaseCameraConfig",
    "InputSnapshot",
    "KeyBindings",
]
