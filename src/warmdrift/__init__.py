"""
WarmDrift - Procedural road driving simulation core.

This package provides:
- An endless road generator that steers around lakes and city blocks
- Seeded closed-loop spline circuits
- Arcade car dynamics with drift
- A chase camera and fixed-step frame loop
"""

__version__ = "0.1.0"

from warmdrift.simulation.simulator import Simulator
from warmdrift.simulation.world import GenerationMode, World
from warmdrift.car.vehicle import Vehicle

__all__ = ["Simulator", "World", "GenerationMode", "Vehicle", "__version__"]
