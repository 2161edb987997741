"""
Simulator - Frame loop driving the world.

Provides:
- Fixed time-step physics from variable frame times (accumulator)
- Road extension as the car nears the frontier
- Atomic world regeneration between frames
- Optional telemetry recording
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional
import logging

from warmdrift.car.vehicle import VehicleConfig, VehicleInputs
from warmdrift.simulation.camera import ChaseCamera, ChaseCameraConfig, CameraState
from warmdrift.simulation.controls import InputSnapshot
from warmdrift.simulation.world import GenerationMode, World
from warmdrift.telemetry.recorder import RecorderConfig, TelemetryRecorder
from warmdrift.track.biomes import get_biome
from warmdrift.track.endless import EndlessRoadConfig
from warmdrift.track.loop import LoopTrackConfig

logger = logging.getLogger(__name__)


@dataclass
class SimulatorConfig:
    """Simulator configuration."""
    # Time stepping
    fixed_dt: float = 1.0 / 120.0    # Physics tick (120 Hz)
    max_frame_dt: float = 0.05       # Longer frames are clamped

    # Road extension
    frontier_distance: float = 200.0  # Extend when the car is this close to the last point
    extend_batch: int = 30            # Points added per extension

    # World generation
    mode: GenerationMode = GenerationMode.ENDLESS
    biome: str | None = None          # Biome key (random per world if None)

    enable_telemetry: bool = False

    def __post_init__(self):
        if isinstance(self.mode, str):
            self.mode = GenerationMode(self.mode)
        if self.fixed_dt <= 0.0:
            raise ValueError(f"fixed_dt must be positive, got {self.fixed_dt}")
        if self.max_frame_dt < self.fixed_dt:
            raise ValueError("max_frame_dt must be at least fixed_dt")


class Simulator:
    """Owns the current World and advances it frame by frame.

    Each frame runs zero or more fixed physics ticks, then one camera
    update. A reset request swaps in a freshly generated World before any
    tick of that frame runs.

    Usage:
        sim = Simulator()
        sim.regenerate(seed=42)
        while running:
            sim.frame(frame_dt, InputSnapshot(forward=True))
    """

    def __init__(
        self,
        config: SimulatorConfig | None = None,
        road_config: EndlessRoadConfig | None = None,
        loop_config: LoopTrackConfig | None = None,
        vehicle_config: VehicleConfig | None = None,
        camera_config: ChaseCameraConfig | None = None,
        recorder_config: RecorderConfig | None = None,
    ):
        """Initialize simulator.

        Args:
            config: Simulator configuration. Uses defaults if None.
            road_config: Endless road configuration
            loop_config: Loop configuration
            vehicle_config: Vehicle configuration. A copy is used with the
                simulator's fixed_dt.
            camera_config: Chase camera configuration
            recorder_config: Telemetry recorder configuration
        """
        self.config = config or SimulatorConfig()
        self.road_config = road_config
        self.loop_config = loop_config
        self.vehicle_config = replace(
            vehicle_config or VehicleConfig(), fixed_dt=self.config.fixed_dt
        )

        self.camera = ChaseCamera(camera_config)
        self.world: Optional[World] = None
        self.recorder = (
            TelemetryRecorder(recorder_config) if self.config.enable_telemetry else None
        )

        self._accumulator: float = 0.0
        self._regeneration_callbacks: List[Callable[[World], None]] = []

    @property
    def time(self) -> float:
        return self.world.time if self.world else 0.0

    @property
    def camera_state(self) -> CameraState:
        return self.camera.state

    def add_regeneration_callback(self, callback: Callable[[World], None]) -> None:
        """Add callback called with each newly generated world.

        Args:
            callback: Function taking the new World
        """
        self._regeneration_callbacks.append(callback)

    def regenerate(
        self,
        seed: int | None = None,
        mode: GenerationMode | None = None,
    ) -> World:
        """Replace the world with a newly generated one.

        Args:
            seed: World seed. Loop mode reproduces its track from it.
            mode: Generation mode (uses the configured one if None)

        Returns:
            The new World
        """
        world = World.create(
            mode=mode or self.config.mode,
            seed=seed,
            biome=get_biome(self.config.biome) if self.config.biome else None,
            road_config=self.road_config,
            loop_config=self.loop_config,
            vehicle_config=self.vehicle_config,
            camera=self.camera,
        )
        self.world = world
        self._accumulator = 0.0

        if self.recorder is not None:
            self.recorder.clear()
            self.recorder.set_car(world.vehicle)

        for callback in self._regeneration_callbacks:
            callback(world)
        return world

    def tick(self, inputs: VehicleInputs) -> None:
        """Run one fixed physics step.

        Args:
            inputs: Vehicle inputs for this tick
        """
        world = self._require_world()
        world.vehicle.step(inputs, self.config.fixed_dt)
        self._extend_road(world)
        world.advance_time(self.config.fixed_dt)

        if self.recorder is not None:
            self.recorder.record(world.time)

    def _extend_road(self, world: World) -> None:
        generator = world.generator
        if generator.is_capped:
            return
        x, z = world.vehicle.position
        if generator.distance_to_frontier(x, z) < self.config.frontier_distance:
            added = generator.ensure_ahead(len(generator) + self.config.extend_batch)
            if added:
                logger.debug("Extended road by %d points to %d", added, len(generator))

    def frame(self, dt: float, snapshot: InputSnapshot | None = None) -> int:
        """Advance by one rendered frame.

        Args:
            dt: Frame time in seconds (clamped to max_frame_dt)
            snapshot: Player input for this frame

        Returns:
            Number of physics ticks run
        """
        snapshot = snapshot or InputSnapshot()
        if snapshot.reset_requested:
            self.regenerate()

        world = self._require_world()
        dt = min(max(dt, 0.0), self.config.max_frame_dt)
        inputs = snapshot.to_vehicle_inputs()

        self._accumulator += dt
        ticks = 0
        while self._accumulator >= self.config.fixed_dt:
            self.tick(inputs)
            self._accumulator -= self.config.fixed_dt
            ticks += 1

        self.camera.update(world.vehicle.state, dt)
        return ticks

    def run(self, seconds: float, snapshot: InputSnapshot, frame_dt: float = 1.0 / 60.0) -> int:
        """Run frames for a span of time with constant input.

        Args:
            seconds: Time to simulate
            snapshot: Input held for the whole span
            frame_dt: Frame time

        Returns:
            Total physics ticks run
        """
        ticks = 0
        elapsed = 0.0
        while elapsed < seconds:
            ticks += self.frame(frame_dt, snapshot)
            elapsed += frame_dt
        return ticks

    def _require_world(self) -> World:
        if self.world is None:
            raise RuntimeError("No world generated; call regenerate() first")
        return self.world

    def get_state(self) -> Dict[str, Any]:
        """Complete simulation state summary."""
        return {
            "config": {
                "fixed_dt": self.config.fixed_dt,
                "mode": self.config.mode.value,
            },
            "world": self.world.get_state() if self.world else None,
            "camera": {
                "position": self.camera.state.position.tolist(),
                "target": self.camera.state.target.tolist(),
                "roll": self.camera.state.roll,
            },
        }
