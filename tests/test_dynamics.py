"""Integration tests for vehicle dynamics scenarios."""

import numpy as np

from warmdrift.car.vehicle import Vehicle, VehicleConfig, VehicleInputs


def _analytic_speed(config: VehicleConfig, t: float) -> float:
    """Forward speed from rest under full throttle: v' = a - c v^2."""
    a = config.engine_acceleration - config.rolling_resistance
    c = config.air_drag * config.drag_scale
    return float(np.sqrt(a / c) * np.tanh(t * np.sqrt(a * c)))


def _run_throttle(config: VehicleConfig, seconds: float) -> list:
    vehicle = Vehicle(config)
    speeds = []
    for _ in range(int(round(seconds / config.fixed_dt))):
        vehicle.step(VehicleInputs(throttle=1.0))
        speeds.append(vehicle.state.forward_speed)
    return speeds


def test_throttle_from_rest_follows_drag_curve():
    """Two seconds of throttle should match the analytic drag solution."""
    config = VehicleConfig()
    speeds = _run_throttle(config, 2.0)

    expected = _analytic_speed(config, 2.0)
    assert abs(speeds[-1] - expected) / expected < 0.01
    assert speeds[-1] < config.max_speed
    assert np.all(np.diff(speeds) > 0.0)


def test_throttle_converges_to_equilibrium():
    """With enough drag the car settles at the terminal speed."""
    config = VehicleConfig(drag_scale=0.02)
    speeds = _run_throttle(config, 20.0)

    terminal = config.terminal_speed
    assert terminal < config.max_speed
    assert abs(speeds[-1] - terminal) / terminal < 0.005
    assert np.all(np.diff(speeds) >= -1e-12)


def test_brake_stops_without_reversing():
    """Full brake from 20 m/s should stop the car without rolling back."""
    config = VehicleConfig()
    vehicle = Vehicle(config)
    vehicle.state.velocity_x = 20.0

    speeds = [vehicle.state.forward_speed]
    for _ in range(120):
        vehicle.step(VehicleInputs(brake=1.0))
        speeds.append(vehicle.state.forward_speed)

    assert np.all(np.diff(speeds) <= 0.0)
    assert min(speeds) >= 0.0
    assert speeds[-1] == 0.0


def test_drift_increases_slip_in_corner():
    """Holding drift through a corner should build a larger slip angle."""
    def corner(drift: bool) -> float:
        vehicle = Vehicle()
        for _ in range(240):
            vehicle.step(VehicleInputs(throttle=1.0))
        max_slip = 0.0
        for _ in range(120):
            vehicle.step(VehicleInputs(throttle=1.0, steering=1.0, drift=drift))
            max_slip = max(max_slip, abs(vehicle.state.slip_angle))
        return max_slip

    assert corner(drift=True) > corner(drift=False)


def test_yaw_continuous_under_continuous_input():
    """Yaw and steer should change smoothly tick to tick."""
    config = VehicleConfig()
    vehicle = Vehicle(config)
    yaws, steers = [], []
    for i in range(600):
        steering = np.sin(i / 60.0)
        vehicle.step(VehicleInputs(throttle=0.6, steering=steering))
        yaws.append(vehicle.state.yaw)
        steers.append(vehicle.state.steer_angle)

    max_yaw_step = config.max_speed / config.wheel_base * np.tan(config.max_steer) * config.fixed_dt
    assert np.max(np.abs(np.diff(yaws))) <= max_yaw_step
    assert np.max(np.abs(np.diff(steers))) <= 2 * config.max_steer * config.steer_speed * config.fixed_dt
