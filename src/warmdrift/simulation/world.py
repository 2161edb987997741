"""
World - Everything that is regenerated together.

Manages:
- Biome and obstacle field
- Road generator (endless or loop)
- Player vehicle
- Chase camera (carried across regenerations)
- Simulation time
"""

from dataclasses import replace
from enum import Enum
import logging
import numpy as np

from warmdrift.car.vehicle import Vehicle, VehicleConfig
from warmdrift.simulation.camera import ChaseCamera
from warmdrift.track.biomes import Biome, choose_biome, populate_obstacles
from warmdrift.track.centerline import PathGenerator
from warmdrift.track.endless import EndlessRoadConfig, EndlessRoadGenerator
from warmdrift.track.loop import LoopTrackConfig, LoopTrackGenerator
from warmdrift.track.obstacles import ObstacleField

logger = logging.getLogger(__name__)


class GenerationMode(Enum):
    """Road generation strategy."""
    ENDLESS = "endless"
    LOOP = "loop"


class World:
    """State container for one generated world.

    A World is never regenerated in place; :meth:`create` builds a fresh one
    and the simulator swaps it in between frames.
    """

    def __init__(
        self,
        biome: Biome,
        obstacles: ObstacleField,
        generator: PathGenerator,
        vehicle: Vehicle,
        camera: ChaseCamera,
        mode: GenerationMode,
        seed: int,
    ):
        self.biome = biome
        self.obstacles = obstacles
        self.generator = generator
        self.vehicle = vehicle
        self.camera = camera
        self.mode = mode
        self.seed = seed

        # Timing
        self._time: float = 0.0
        self._frame: int = 0

    @classmethod
    def create(
        cls,
        mode: GenerationMode = GenerationMode.ENDLESS,
        seed: int | None = None,
        biome: Biome | None = None,
        road_config: EndlessRoadConfig | None = None,
        loop_config: LoopTrackConfig | None = None,
        vehicle_config: VehicleConfig | None = None,
        camera: ChaseCamera | None = None,
    ) -> "World":
        """Generate a new world.

        Args:
            mode: Endless road or closed loop
            seed: World seed (None picks and records a random one)
            biome: Biome to use (random if None)
            road_config: Endless road configuration. An unset road seed is
                derived from the world seed.
            loop_config: Loop configuration
            vehicle_config: Vehicle configuration
            camera: Existing camera to carry over; snapped to the new car

        Returns:
            New World
        """
        if seed is None:
            seed = int(np.random.default_rng().integers(0, 2**32))
        rng = np.random.default_rng(seed)

        biome = biome or choose_biome(rng)
        obstacles = ObstacleField()
        populate_obstacles(biome, obstacles, rng)

        if mode is GenerationMode.LOOP:
            generator = LoopTrackGenerator(loop_config).generate(seed)
        else:
            road_seed = int(rng.integers(0, 2**32))
            config = road_config or EndlessRoadConfig()
            if config.seed is None:
                config = replace(config, seed=road_seed)
            generator = EndlessRoadGenerator(obstacles, config)

        vehicle = Vehicle(vehicle_config)
        start = generator.start
        vehicle.reset(x=start.x, z=start.z, yaw=start.heading)

        camera = camera or ChaseCamera()
        camera.snap(vehicle.state)

        logger.info(
            "Generated %s world: biome=%s seed=%d obstacles=%d points=%d",
            mode.value, biome.key, seed, len(obstacles), len(generator),
        )
        return cls(biome, obstacles, generator, vehicle, camera, mode, seed)

    @property
    def time(self) -> float:
        """Simulated time in seconds."""
        return self._time

    @property
    def frame(self) -> int:
        """Number of physics ticks run."""
        return self._frame

    def advance_time(self, dt: float) -> None:
        """Advance simulation time.

        Args:
            dt: Time step in seconds
        """
        self._time += dt
        self._frame += 1

    def get_state(self) -> dict:
        """Summary of world state for display and debugging."""
        return {
            "mode": self.mode.value,
            "seed": self.seed,
            "biome": self.biome.key,
            "time": self._time,
            "frame": self._frame,
            "obstacles": len(self.obstacles),
            "points": len(self.generator),
            "capped": self.generator.is_capped,
            "vehicle": self.vehicle.get_telemetry(),
        }
