"""
Track module - Procedural road generation.

This module contains:
- SmoothedNoise: Low-pass random signal for road curvature
- ObstacleField: Exclusion zones the road avoids
- EndlessRoadGenerator: Infinite forward-extending road
- LoopTrackGenerator: Closed spline circuits from seeded control points
- Biome: World themes and their obstacles
"""

from warmdrift.track.noise import SmoothedNoise, NoiseConfig
from warmdrift.track.obstacles import (
    CircleObstacle,
    ObstacleField,
    ObstacleShape,
    RectObstacle,
)
from warmdrift.track.centerline import CenterlinePoint, PathGenerator
from warmdrift.track.endless import EndlessRoadConfig, EndlessRoadGenerator
from warmdrift.track.loop import (
    LinearCongruentialGenerator,
    LoopTrack,
    LoopTrackConfig,
    LoopTrackGenerator,
    generate_loop,
)
from warmdrift.track.biomes import BIOMES, Biome, choose_biome, get_biome, populate_obstacles

__all__ = [
    "SmoothedNoise",
    "NoiseConfig",
    "CircleObstacle",
    "RectObstacle",
    "ObstacleShape",
    "ObstacleField",
    "CenterlinePoint",
    "PathGenerator",
    "EndlessRoadConfig",
    "EndlessRoadGenerator",
    "LinearCongruentialGenerator",
    "LoopTrack",
    "LoopTrackConfig",
    "LoopTrackGenerator",
    "generate_loop",
    "BIOMES",
    "Biome",
    "choose_biome",
    "get_biome",
    "populate_obstacles",
]
