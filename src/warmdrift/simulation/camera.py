"""
Chase camera - Smoothed follow transform behind the vehicle.

Provides:
- Velocity-aligned follow position with exponential smoothing
- Look-at target ahead of the vehicle
- Slight roll from lateral slide
"""

from dataclasses import dataclass, field
import numpy as np

from warmdrift.car.vehicle import VehicleState


@dataclass
class ChaseCameraConfig:
    """Chase camera configuration."""
    height: float = 6.5
    distance: float = 12.0
    stiffness: float = 6.0            # Follow rate (1/s)
    look_ahead: float = 6.0           # Target distance ahead of the car
    roll_factor: float = 0.15
    max_roll: float = 0.08            # rad
    min_follow_speed: float = 0.1     # Below this, follow the heading instead


@dataclass
class CameraState:
    """Camera transform. Vectors are (x, y, z)."""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    target: np.ndarray = field(default_factory=lambda: np.zeros(3))
    roll: float = 0.0


class ChaseCamera:
    """Camera that trails the vehicle along its direction of travel.

    Updated once per rendered frame with the variable frame time. Only
    reads the vehicle state.
    """

    def __init__(self, config: ChaseCameraConfig | None = None):
        """Initialize camera.

        Args:
            config: Camera configuration. Uses defaults if None.
        """
        self.config = config or ChaseCameraConfig()
        self.state = CameraState()

    def follow_direction(self, vehicle: VehicleState) -> np.ndarray:
        """Planar (x, z) unit direction the camera trails along.

        Falls back to the vehicle heading when nearly stationary.
        """
        speed = vehicle.speed
        if speed < self.config.min_follow_speed:
            return vehicle.forward
        return vehicle.velocity / speed

    def desired(self, vehicle: VehicleState) -> tuple[np.ndarray, np.ndarray]:
        """Ideal camera position and look-at target for a vehicle state.

        Returns:
            Tuple of (position, target) 3-vectors
        """
        cfg = self.config
        dx, dz = self.follow_direction(vehicle)
        car = np.array([vehicle.x, vehicle.y, vehicle.z])
        direction = np.array([dx, 0.0, dz])

        position = car - direction * cfg.distance + np.array([0.0, cfg.height, 0.0])
        target = car + direction * cfg.look_ahead
        return position, target

    def _roll(self, vehicle: VehicleState) -> float:
        dx, dz = self.follow_direction(vehicle)
        # Right of the follow direction on the ground plane
        v_lat = -dz * vehicle.velocity_x + dx * vehicle.velocity_z
        roll = -v_lat * 0.0025 * self.config.roll_factor
        return float(np.clip(roll, -self.config.max_roll, self.config.max_roll))

    def update(self, vehicle: VehicleState, dt: float) -> CameraState:
        """Move the camera toward its desired transform.

        Args:
            vehicle: Current vehicle state
            dt: Frame time in seconds

        Returns:
            Updated camera state
        """
        position, target = self.desired(vehicle)
        alpha = 1.0 - np.exp(-max(dt, 0.0) * self.config.stiffness)
        self.state.position = self.state.position + (position - self.state.position) * alpha
        self.state.target = target
        self.state.roll = self._roll(vehicle)
        return self.state

    def snap(self, vehicle: VehicleState) -> CameraState:
        """Jump straight to the desired transform (used after regeneration)."""
        position, target = self.desired(vehicle)
        self.state = CameraState(position=position, target=target, roll=0.0)
        return self.state
