"""
Controls - Fixed-shape input snapshot handed to the simulation.

The input collaborator fills one InputSnapshot per frame; physics never
sees key names.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from warmdrift.car.vehicle import VehicleInputs


@dataclass(frozen=True)
class KeyBindings:
    """Key names (lower case) mapped to each control."""
    forward: Tuple[str, ...] = ("w", "arrowup")
    backward: Tuple[str, ...] = ("s", "arrowdown")
    left: Tuple[str, ...] = ("a", "arrowleft")
    right: Tuple[str, ...] = ("d", "arrowright")
    drift: Tuple[str, ...] = ("shift",)
    reset: Tuple[str, ...] = ("r",)


@dataclass(frozen=True)
class InputSnapshot:
    """Player controls for one frame."""
    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False
    drift: bool = False
    reset_requested: bool = False

    @classmethod
    def from_pressed_keys(
        cls,
        keys: Iterable[str],
        bindings: KeyBindings | None = None,
    ) -> "InputSnapshot":
        """Build a snapshot from the set of currently held keys.

        Args:
            keys: Names of held keys (case-insensitive)
            bindings: Key bindings. Uses defaults if None.

        Returns:
            InputSnapshot
        """
        bindings = bindings or KeyBindings()
        held = {k.lower() for k in keys}

        def any_held(names: Tuple[str, ...]) -> bool:
            return any(name in held for name in names)

        return cls(
            forward=any_held(bindings.forward),
            backward=any_held(bindings.backward),
            left=any_held(bindings.left),
            right=any_held(bindings.right),
            drift=any_held(bindings.drift),
            reset_requested=any_held(bindings.reset),
        )

    @property
    def steer_axis(self) -> float:
        """-1 for left, 1 for right, 0 for neither or both."""
        return float(self.right) - float(self.left)

    def to_vehicle_inputs(self) -> VehicleInputs:
        """Convert to vehicle inputs."""
        return VehicleInputs(
            throttle=1.0 if self.forward else 0.0,
            brake=1.0 if self.backward else 0.0,
            steering=self.steer_axis,
            drift=self.drift,
        )
