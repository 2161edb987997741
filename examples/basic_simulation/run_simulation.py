#!/usr/bin/env python3
"""
Basic Simulation Example

This example demonstrates how to:
1. Generate an endless-road world from a seed
2. Drive it headless through the fixed-step frame loop
3. Read vehicle telemetry and camera state
4. Regenerate the world with a reset request

Run with: python run_simulation.py
"""

import logging

from warmdrift import Simulator
from warmdrift.simulation import InputSnapshot, SimulatorConfig


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    print("=" * 60)
    print("WarmDrift Basic Simulation Example")
    print("=" * 60)

    # Step 1: Generate a world
    print("\n1. Generating world...")
    sim = Simulator(SimulatorConfig(enable_telemetry=True))
    world = sim.regenerate(seed=42)

    print(f"   Biome: {world.biome.label}")
    print(f"   Obstacles: {len(world.obstacles)}")
    print(f"   Road points: {len(world.generator)}")

    # Step 2: Drive with a scripted sequence of key presses
    print("\n2. Driving for 10 seconds at 60 fps...")
    script = [
        (3.0, {"w"}),
        (2.0, {"w", "a"}),
        (2.0, {"w", "d", "shift"}),
        (3.0, {"w"}),
    ]
    for seconds, keys in script:
        ticks = sim.run(seconds, InputSnapshot.from_pressed_keys(keys))
        telemetry = world.vehicle.get_telemetry()
        print(
            f"   keys={sorted(keys)!s:<24} ticks={ticks:4d} "
            f"speed={telemetry['speed_kph']:6.1f} km/h "
            f"slip={telemetry['slip_angle_deg']:5.1f} deg"
        )

    # Step 3: Inspect telemetry and camera
    print("\n3. Results")
    stats = sim.recorder.get_statistics()
    print(f"   Top speed: {stats['speed_kph']['max']} km/h")
    print(f"   Max slip: {stats['slip_angle_deg']['max']} deg")
    print(f"   Road points: {len(world.generator)} (capped: {world.generator.is_capped})")
    print(f"   Camera position: {sim.camera_state.position.round(2).tolist()}")

    # Step 4: Reset
    print("\n4. Requesting a new world...")
    sim.frame(1 / 60, InputSnapshot(reset_requested=True))
    print(f"   New biome: {sim.world.biome.label} (seed {sim.world.seed})")

    print("\n" + "=" * 60)
    print("Simulation complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
