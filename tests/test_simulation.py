"""Basic tests for the WarmDrift simulation module."""

import pytest
import numpy as np

from warmdrift.car.vehicle import VehicleConfig, VehicleInputs, VehicleState
from warmdrift.simulation.camera import ChaseCamera, ChaseCameraConfig
from warmdrift.simulation.controls import InputSnapshot, KeyBindings
from warmdrift.simulation.simulator import Simulator, SimulatorConfig
from warmdrift.simulation.world import GenerationMode, World
from warmdrift.track.biomes import get_biome
from warmdrift.track.endless import EndlessRoadConfig, EndlessRoadGenerator
from warmdrift.track.loop import LoopTrack


class TestControls:
    """Test input snapshot."""

    def test_from_pressed_keys(self):
        """Test key names map onto controls."""
        snapshot = InputSnapshot.from_pressed_keys({"W", "ArrowLeft", "Shift"})

        assert snapshot.forward
        assert snapshot.left
        assert snapshot.drift
        assert not snapshot.backward
        assert not snapshot.reset_requested

    def test_custom_bindings(self):
        """Test custom bindings replace the defaults."""
        bindings = KeyBindings(forward=("i",), reset=("f5",))
        snapshot = InputSnapshot.from_pressed_keys({"i", "f5", "w"}, bindings)

        assert snapshot.forward
        assert snapshot.reset_requested

    def test_to_vehicle_inputs(self):
        """Test conversion to vehicle inputs."""
        inputs = InputSnapshot(forward=True, left=True, drift=True).to_vehicle_inputs()

        assert inputs.throttle == 1.0
        assert inputs.brake == 0.0
        assert inputs.steering == -1.0
        assert inputs.drift

    def test_opposite_steer_cancels(self):
        """Test holding left and right gives no steering."""
        assert InputSnapshot(left=True, right=True).steer_axis == 0.0


class TestChaseCamera:
    """Test chase camera."""

    def test_snap_uses_heading_when_stationary(self):
        """Test stationary car falls back to its heading."""
        camera = ChaseCamera()
        vehicle = VehicleState(yaw=np.pi / 2)

        state = camera.snap(vehicle)

        assert np.allclose(state.position, [0.0, 0.45 + 6.5, -12.0])
        assert np.allclose(state.target, [0.0, 0.45, 6.0])

    def test_follows_velocity_direction(self):
        """Test camera trails the direction of travel, not the nose."""
        camera = ChaseCamera()
        vehicle = VehicleState(yaw=0.0, velocity_x=-10.0)

        position, target = camera.desired(vehicle)

        assert position[0] == pytest.approx(12.0)
        assert target[0] == pytest.approx(-6.0)

    def test_exponential_smoothing(self):
        """Test camera moves part way toward the desired position."""
        config = ChaseCameraConfig(stiffness=6.0)
        camera = ChaseCamera(config)
        vehicle = VehicleState(x=100.0)

        desired, _ = camera.desired(vehicle)
        camera.update(vehicle, 0.1)

        alpha = 1.0 - np.exp(-0.6)
        assert np.allclose(camera.state.position, desired * alpha)

    def test_zero_dt_holds_position(self):
        """Test a zero-length frame does not move the camera."""
        camera = ChaseCamera()
        camera.update(VehicleState(x=50.0), 0.0)

        assert np.allclose(camera.state.position, 0.0)

    def test_roll_bounded(self):
        """Test camera roll stays within its limit."""
        config = ChaseCameraConfig(roll_factor=100.0)
        camera = ChaseCamera(config)
        vehicle = VehicleState(velocity_x=5.0, velocity_z=50.0)

        camera.update(vehicle, 1 / 60)

        assert abs(camera.state.roll) <= config.max_roll


class TestWorld:
    """Test world creation."""

    def test_endless_world(self):
        """Test endless world places the car on the first road point."""
        world = World.create(GenerationMode.ENDLESS, seed=1, biome=get_biome("forest"))

        assert isinstance(world.generator, EndlessRoadGenerator)
        assert world.generator.obstacles is world.obstacles
        assert world.vehicle.position == (world.generator.start.x, world.generator.start.z)
        assert world.vehicle.heading == world.generator.start.heading
        assert world.seed == 1

    def test_loop_world_reproducible(self):
        """Test loop worlds replay from their seed."""
        a = World.create(GenerationMode.LOOP, seed=21)
        b = World.create(GenerationMode.LOOP, seed=21)

        assert isinstance(a.generator, LoopTrack)
        assert a.biome is b.biome
        assert np.array_equal(a.generator.as_array(), b.generator.as_array())

    def test_random_seed_recorded(self):
        """Test an unseeded world records the seed it used."""
        world = World.create(GenerationMode.LOOP)

        assert isinstance(world.seed, int)

    def test_camera_carried_over(self):
        """Test an existing camera is reused and snapped."""
        camera = ChaseCamera()
        world = World.create(GenerationMode.LOOP, seed=3, camera=camera)

        expected, _ = camera.desired(world.vehicle.state)
        assert world.camera is camera
        assert np.allclose(camera.state.position, expected)

    def test_supplied_road_config_replays_from_seed(self):
        """Test an unseeded road config follows the world seed."""
        road_config = EndlessRoadConfig(step_length=8.0)
        a = World.create(GenerationMode.ENDLESS, seed=11, road_config=road_config)
        b = World.create(GenerationMode.ENDLESS, seed=11, road_config=road_config)

        assert road_config.seed is None
        assert a.generator.config.step_length == 8.0
        assert np.array_equal(a.generator.as_array(), b.generator.as_array())

    def test_time_advance(self):
        """Test time advances correctly."""
        world = World.create(GenerationMode.LOOP, seed=4)

        world.advance_time(0.1)
        assert world.time == 0.1
        assert world.frame == 1


class TestSimulator:
    """Test simulator frame loop."""

    def _sim(self, **kwargs) -> Simulator:
        config = SimulatorConfig(biome="forest", **kwargs)
        sim = Simulator(config)
        sim.regenerate(seed=7)
        return sim

    def test_frame_without_world(self):
        """Test stepping before generation is an error."""
        with pytest.raises(RuntimeError):
            Simulator().frame(1 / 60)

    def test_fixed_ticks_per_second(self):
        """Test one simulated second runs 120 physics ticks."""
        sim = self._sim()
        ticks = sim.run(1.0, InputSnapshot(forward=True))

        assert abs(ticks - 120) <= 2
        assert sim.time == pytest.approx(ticks * sim.config.fixed_dt)

    def test_long_frame_clamped(self):
        """Test a long frame runs at most max_frame_dt worth of ticks."""
        sim = self._sim()
        ticks = sim.frame(1.0)

        assert ticks <= 6

    def test_driving_moves_car_and_camera(self):
        """Test throttle moves the car and the camera follows."""
        sim = self._sim()
        start = np.array(sim.world.vehicle.position)

        sim.run(2.0, InputSnapshot(forward=True))

        assert np.hypot(*(np.array(sim.world.vehicle.position) - start)) > 10.0
        car = np.array([sim.world.vehicle.state.x, sim.world.vehicle.state.z])
        cam = sim.camera_state.position[[0, 2]]
        assert np.hypot(*(cam - car)) < 30.0

    def test_extends_road_near_frontier(self):
        """Test the road grows when the car reaches the frontier."""
        sim = self._sim()
        generator = sim.world.generator
        before = len(generator)
        head = generator.points[-1]

        sim.world.vehicle.reset(x=head.x, z=head.z, yaw=head.heading)
        sim.tick(VehicleInputs())

        assert len(generator) == before + sim.config.extend_batch

    def test_no_extension_far_from_frontier(self):
        """Test the road does not grow while the frontier is far away."""
        sim = self._sim(frontier_distance=10.0)
        before = len(sim.world.generator)

        sim.tick(VehicleInputs())

        assert len(sim.world.generator) == before

    def test_reset_request_swaps_world(self):
        """Test a reset request regenerates before the frame's ticks."""
        sim = self._sim()
        sim.run(0.5, InputSnapshot(forward=True))
        old_world = sim.world

        ticks = sim.frame(1 / 60, InputSnapshot(reset_requested=True))

        assert sim.world is not old_world
        assert sim.world.camera is sim.camera
        assert 1 <= ticks <= 2
        assert sim.world.frame == ticks

    def test_regenerate_loop_with_seed(self):
        """Test loop regeneration with an explicit seed replays the track."""
        sim = self._sim()

        a = sim.regenerate(seed=99, mode=GenerationMode.LOOP).generator.as_array()
        b = sim.regenerate(seed=99, mode=GenerationMode.LOOP).generator.as_array()

        assert np.array_equal(a, b)

    def test_regeneration_callback(self):
        """Test callbacks receive each new world."""
        sim = self._sim()
        seen = []
        sim.add_regeneration_callback(seen.append)

        world = sim.regenerate(seed=5)

        assert seen == [world]

    def test_vehicle_config_not_mutated(self):
        """Test the caller's vehicle config keeps its own time step."""
        vehicle_config = VehicleConfig(fixed_dt=0.01)
        sim = Simulator(SimulatorConfig(biome="forest"), vehicle_config=vehicle_config)
        sim.regenerate(seed=2)

        assert vehicle_config.fixed_dt == 0.01
        assert sim.world.vehicle.config.fixed_dt == sim.config.fixed_dt

    def test_mode_from_string(self):
        """Test generation mode can be configured by name."""
        assert SimulatorConfig(mode="loop").mode is GenerationMode.LOOP

    def test_telemetry_recording(self):
        """Test telemetry is recorded while driving."""
        sim = self._sim(enable_telemetry=True)
        sim.run(1.0, InputSnapshot(forward=True))

        speed = sim.recorder.get_channel("speed_kph")
        assert speed.count > 0
        assert speed.max_value > 0.0

    def test_telemetry_sample_rate(self):
        """Test telemetry samples at its configured rate over fixed ticks."""
        sim = self._sim(enable_telemetry=True)
        sim.run(1.0, InputSnapshot(forward=True))

        count = sim.recorder.get_channel("speed_kph").count
        assert abs(count - 60) <= 2

    def test_get_state(self):
        """Test state summary contents."""
        sim = self._sim()
        state = sim.get_state()

        assert state["world"]["biome"] == "forest"
        assert state["world"]["seed"] == 7
        assert len(state["camera"]["position"]) == 3
