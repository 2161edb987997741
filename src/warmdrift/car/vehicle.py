"""
Vehicle - Arcade car dynamics with drift.

Simulates:
- Smoothed steering toward the driver's target
- Longitudinal engine, brake, drag and rolling resistance
- Lateral grip as a spring toward zero slip (reduced while drifting)
- Yaw from a kinematic bicycle model
"""

from dataclasses import dataclass
from typing import Any, Dict
import numpy as np


@dataclass
class VehicleConfig:
    """Vehicle handling parameters."""
    # Longitudinal (m/s^2)
    engine_acceleration: float = 30.0
    brake_deceleration: float = 55.0
    air_drag: float = 0.75
    drag_scale: float = 0.002         # Scales air_drag * v * |v|
    rolling_resistance: float = 2.0

    # Lateral grip (1/s)
    cornering_stiffness: float = 22.0
    cornering_stiffness_drift: float = 6.0

    # Steering
    steer_speed: float = 4.5          # Steering low-pass rate (1/s)
    max_steer: float = 0.6            # rad
    wheel_base: float = 2.5           # m

    # Limits
    max_speed: float = 95.0           # m/s
    ground_clearance: float = 0.45    # m, fixed body height

    # Integration
    fixed_dt: float = 1.0 / 120.0

    def __post_init__(self):
        if self.fixed_dt <= 0.0:
            raise ValueError(f"fixed_dt must be positive, got {self.fixed_dt}")
        if self.wheel_base <= 0.0:
            raise ValueError(f"wheel_base must be positive, got {self.wheel_base}")
        if self.max_speed <= 0.0:
            raise ValueError(f"max_speed must be positive, got {self.max_speed}")
        if self.max_steer < 0.0:
            raise ValueError(f"max_steer must be non-negative, got {self.max_steer}")

    @property
    def terminal_speed(self) -> float:
        """Speed where full throttle balances drag and rolling resistance."""
        drag = self.air_drag * self.drag_scale
        net = self.engine_acceleration - self.rolling_resistance
        if drag <= 0.0:
            return float('inf') if net > 0.0 else 0.0
        return float(np.sqrt(max(net, 0.0) / drag))


@dataclass
class VehicleInputs:
    """Per-tick driver inputs."""
    throttle: float = 0.0      # 0.0 to 1.0 (bool accepted)
    brake: float = 0.0         # 0.0 to 1.0 (bool accepted)
    steering: float = 0.0      # -1.0 to 1.0
    drift: bool = False        # Reduced lateral grip


@dataclass
class VehicleState:
    """Current vehicle pose and motion."""
    # Position (world, meters); y is pinned to ground clearance
    x: float = 0.0
    y: float = 0.45
    z: float = 0.0

    # Velocity (world frame, m/s)
    velocity_x: float = 0.0
    velocity_z: float = 0.0

    # Orientation (radians)
    yaw: float = 0.0           # 0 = +X direction
    steer_angle: float = 0.0

    # Derived values (updated every step)
    yaw_rate: float = 0.0
    drifting: bool = False

    @property
    def forward(self) -> np.ndarray:
        """Unit forward axis on the ground plane (x, z)."""
        return np.array([np.cos(self.yaw), np.sin(self.yaw)])

    @property
    def right(self) -> np.ndarray:
        """Unit right axis on the ground plane (forward x up)."""
        return np.array([-np.sin(self.yaw), np.cos(self.yaw)])

    @property
    def velocity(self) -> np.ndarray:
        return np.array([self.velocity_x, self.velocity_z])

    @property
    def speed(self) -> float:
        return float(np.hypot(self.velocity_x, self.velocity_z))

    @property
    def forward_speed(self) -> float:
        return float(self.forward @ self.velocity)

    @property
    def lateral_speed(self) -> float:
        return float(self.right @ self.velocity)

    @property
    def slip_angle(self) -> float:
        """Angle between heading and direction of travel (rad)."""
        if self.speed < 0.5:
            return 0.0
        return float(np.arctan2(self.lateral_speed, abs(self.forward_speed)))


class Vehicle:
    """Fixed-step arcade vehicle.

    The velocity is split into forward and lateral parts each step. The
    forward part responds to engine, brake, drag and rolling resistance;
    the lateral part decays toward zero at a rate set by cornering
    stiffness, which drops while drift is held so the rear can slide.

    Usage:
        vehicle = Vehicle()
        vehicle.step(VehicleInputs(throttle=1.0))
        vehicle.speed_kph
    """

    def __init__(self, config: VehicleConfig | None = None):
        """Initialize vehicle with optional configuration.

        Args:
            config: Vehicle configuration. Uses defaults if None.
        """
        self.config = config or VehicleConfig()
        self.state = VehicleState(y=self.config.ground_clearance)
        self.last_inputs = VehicleInputs()

    def reset(self, x: float = 0.0, z: float = 0.0, yaw: float = 0.0) -> None:
        """Place the vehicle at rest.

        Args:
            x: Starting X position
            z: Starting Z position
            yaw: Starting heading in radians
        """
        self.state = VehicleState(x=x, y=self.config.ground_clearance, z=z, yaw=yaw)
        self.last_inputs = VehicleInputs()

    @property
    def speed(self) -> float:
        """Current speed in m/s."""
        return self.state.speed

    @property
    def speed_kph(self) -> float:
        """Current speed in km/h."""
        return self.state.speed * 3.6

    @property
    def position(self) -> tuple[float, float]:
        """Current (x, z) position."""
        return (self.state.x, self.state.z)

    @property
    def heading(self) -> float:
        """Current yaw in radians."""
        return self.state.yaw

    def _longitudinal(self, v_long: float, throttle: float, brake: float, dt: float) -> float:
        """Integrate forward speed by one step.

        Engine and drag act first. Brake and rolling resistance then only
        reduce the resulting speed, never flipping its sign.
        """
        cfg = self.config
        drive = throttle * cfg.engine_acceleration
        drag = cfg.air_drag * v_long * abs(v_long) * cfg.drag_scale
        v_free = v_long + (drive - drag) * dt

        # Resistive terms oppose the post-drive motion and stop at zero
        resist = (brake * cfg.brake_deceleration + cfg.rolling_resistance) * dt
        if abs(v_free) <= resist:
            return 0.0
        return v_free - np.sign(v_free) * resist

    def step(self, inputs: VehicleInputs, dt: float | None = None) -> VehicleState:
        """Advance the vehicle by one tick.

        Args:
            inputs: Driver inputs
            dt: Time step in seconds (uses fixed_dt if None)

        Returns:
            Updated vehicle state
        """
        cfg = self.config
        dt = cfg.fixed_dt if dt is None else dt
        s = self.state

        throttle = float(np.clip(float(inputs.throttle), 0.0, 1.0))
        brake = float(np.clip(float(inputs.brake), 0.0, 1.0))
        steering = float(np.clip(float(inputs.steering), -1.0, 1.0))
        drifting = bool(inputs.drift)

        # Smooth steer
        target_steer = steering * cfg.max_steer
        s.steer_angle += (target_steer - s.steer_angle) * (1.0 - np.exp(-dt * cfg.steer_speed))
        s.steer_angle = float(np.clip(s.steer_angle, -cfg.max_steer, cfg.max_steer))

        # Split velocity along vehicle axes
        forward = s.forward
        right = s.right
        velocity = s.velocity
        v_long = float(forward @ velocity)
        v_lat = float(right @ velocity)

        # Longitudinal and lateral dynamics
        new_v_long = self._longitudinal(v_long, throttle, brake, dt)
        stiffness = cfg.cornering_stiffness_drift if drifting else cfg.cornering_stiffness
        new_v_lat = v_lat - stiffness * v_lat * dt

        # Back to world frame
        new_velocity = forward * new_v_long + right * new_v_lat
        speed = np.hypot(*new_velocity)
        if speed > cfg.max_speed:
            new_velocity *= cfg.max_speed / speed
            new_v_long = float(forward @ new_velocity)
        s.velocity_x = float(new_velocity[0])
        s.velocity_z = float(new_velocity[1])

        # Yaw rate from bicycle model
        s.yaw_rate = float(new_v_long / cfg.wheel_base * np.tan(s.steer_angle))
        s.yaw += s.yaw_rate * dt

        # Integrate position
        s.x += s.velocity_x * dt
        s.z += s.velocity_z * dt
        s.y = cfg.ground_clearance

        s.drifting = drifting
        self.last_inputs = VehicleInputs(throttle, brake, steering, drifting)
        return s

    def get_telemetry(self) -> Dict[str, Any]:
        """Snapshot of vehicle data for HUD and recording.

        Returns:
            Dictionary of current values
        """
        s = self.state
        return {
            "x": s.x,
            "z": s.z,
            "yaw": s.yaw,
            "speed": s.speed,
            "speed_kph": self.speed_kph,
            "forward_speed": s.forward_speed,
            "lateral_speed": s.lateral_speed,
            "slip_angle_deg": float(np.degrees(s.slip_angle)),
            "yaw_rate": s.yaw_rate,
            "steer_angle_deg": float(np.degrees(s.steer_angle)),
            "throttle": self.last_inputs.throttle,
            "brake": self.last_inputs.brake,
            "drift": float(s.drifting),
        }
