"""
Biomes - World themes and the obstacles they contribute.

Each biome sets the road width and decides which obstacle-producing
features (lakes, city blocks) appear. Palette values are passed through
for the renderer.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple
import numpy as np

from warmdrift.track.obstacles import CircleObstacle, ObstacleField, RectObstacle, Obstacle


# Road avoidance radius as a multiple of road width
AVOID_RADIUS_FACTOR = 2.2


@dataclass(frozen=True)
class Biome:
    """World theme."""
    key: str
    label: str
    road_width: float = 12.0
    lakes: bool = True
    city: bool = False
    snow: bool = False
    palette: Dict[str, int] = field(default_factory=dict)

    @property
    def avoid_radius(self) -> float:
        """Clearance the road keeps from obstacles."""
        return self.road_width * AVOID_RADIUS_FACTOR


BIOMES: Tuple[Biome, ...] = (
    Biome(
        key="forest", label="Warm Forest", road_width=12.0,
        palette={"sky": 0xffebd6, "ground": 0xf8ecd9, "road": 0x4b4b4b, "water": 0x7fd3ff},
    ),
    Biome(
        key="snow", label="Snow Plains", road_width=12.0, snow=True,
        palette={"sky": 0xeef7ff, "ground": 0xf6fbff, "road": 0x3e3e46, "water": 0x9fdbff},
    ),
    Biome(
        key="desert", label="Desert Dunes", road_width=13.0,
        palette={"sky": 0xfff0d6, "ground": 0xffe8c2, "road": 0x5a4a3f, "water": 0x86defa},
    ),
    Biome(
        key="alpine", label="Alpine Ridge", road_width=11.5,
        palette={"sky": 0xffefe0, "ground": 0xf7efe4, "road": 0x3f3f44, "water": 0x8cd8ff},
    ),
    Biome(
        key="coastal", label="Coastal Drive", road_width=12.0,
        palette={"sky": 0xfff6e3, "ground": 0xfdf5e6, "road": 0x4a4e50, "water": 0x74c7ff},
    ),
    Biome(
        key="city", label="Tiny City", road_width=12.5, lakes=False, city=True,
        palette={"sky": 0xffefe0, "ground": 0xf6ebdd, "road": 0x2f2f35, "water": 0x80d4ff},
    ),
)


def get_biome(key: str) -> Biome:
    """Look up a biome by key.

    Args:
        key: Biome key, e.g. "forest"

    Returns:
        Matching Biome
    """
    for biome in BIOMES:
        if biome.key == key:
            return biome
    raise KeyError(f"Unknown biome: {key}")


def choose_biome(rng: np.random.Generator) -> Biome:
    """Pick a biome uniformly at random."""
    return BIOMES[int(rng.integers(0, len(BIOMES)))]


def _lakes(rng: np.random.Generator, avoid_radius: float) -> List[Obstacle]:
    lakes = []
    count = 2 + int(rng.integers(0, 3))
    for _ in range(count):
        radius = rng.uniform(50.0, 110.0)
        angle = rng.uniform(0.0, 2 * np.pi)
        dist = rng.uniform(180.0, 600.0)
        lakes.append(CircleObstacle(
            x=float(np.cos(angle) * dist),
            z=float(np.sin(angle) * dist),
            radius=float(radius + avoid_radius),
            kind="lake",
        ))
    return lakes


def _city_blocks(rng: np.random.Generator, avoid_radius: float) -> List[Obstacle]:
    blocks = []
    block_size = 50.0
    grid = 5 + int(rng.integers(0, 4))
    for gx in range(-grid, grid + 1):
        for gz in range(-grid, grid + 1):
            if gx == 0 and gz == 0:
                # Plaza at the origin keeps the spawn point free
                continue
            w = block_size + rng.uniform(0.0, block_size)
            d = block_size + rng.uniform(0.0, block_size)
            blocks.append(RectObstacle(
                x=gx * block_size * 2,
                z=gz * block_size * 2,
                half_x=float(w * 0.7 + avoid_radius),
                half_z=float(d * 0.7 + avoid_radius),
                kind="building",
            ))
    return blocks


def populate_obstacles(
    biome: Biome,
    field: ObstacleField,
    rng: np.random.Generator,
    avoid_radius: float | None = None,
) -> List[Obstacle]:
    """Place a biome's obstacles into a field.

    Args:
        biome: Biome being generated
        field: Field to add obstacles to
        rng: Random generator
        avoid_radius: Clearance baked into every obstacle. Uses the
            biome's avoid radius if None.

    Returns:
        The obstacles that were added
    """
    if avoid_radius is None:
        avoid_radius = biome.avoid_radius

    added: List[Obstacle] = []
    if biome.lakes:
        added.extend(_lakes(rng, avoid_radius))
    if biome.city:
        added.extend(_city_blocks(rng, avoid_radius))

    field.extend(added)
    return added
