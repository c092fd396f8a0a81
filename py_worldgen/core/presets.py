"""
Ready-made world description.

A three zone world (sky, surface, underworld) with desert, ice and jungle
climates on the surface and a handful of decorative biomes. Painters
produce integer tile ids; TILE_PALETTE maps them to display colours.
"""

from typing import Dict, List, Tuple

from .brush import Brush, FillBrush, IgnoreBrush, LayeredBrush, SelectorBrush
from .region import Direction, Span
from .sampler import (
    ConstSampler,
    FadeSampler,
    GraphSampler,
    LayeredSampler,
    NoiseSampler,
    SplitSampler,
)
from .settings import (
    BiomeProducerSettings,
    BiomeSettings,
    ClimateSettings,
    GenerationSettings,
    ZoneSettings,
)
from .shapes import Oval, Rectangle, Triangle

Color = Tuple[int, int, int]

TILE_AIR = 0

# name, label colour, tile id
GROUND_BIOMES: List[Tuple[str, Color, int]] = [
    ("sky", (155, 209, 255), 1),
    ("cave", (128, 128, 128), 2),
    ("surface", (151, 107, 75), 3),
    ("underworld", (68, 68, 76), 4),
    ("ice", (144, 195, 232), 5),
    ("ice_surface", (211, 236, 241), 6),
    ("desert", (212, 192, 100), 7),
    ("desert_surface", (255, 218, 56), 8),
    ("jungle", (98, 124, 55), 9),
    ("jungle_surface", (53, 80, 30), 10),
]

TILE_MARBLE = 11
TILE_GRANITE = 12
TILE_HIVE = 13
TILE_MUSHROOM = 14
TILE_CLOUD = 15

TILE_PALETTE: Dict[int, Color] = {
    TILE_AIR: (0, 0, 0),
    **{tile: color for _, color, tile in GROUND_BIOMES},
    TILE_MARBLE: (168, 178, 204),
    TILE_GRANITE: (50, 46, 104),
    TILE_HIVE: (248, 166, 2),
    TILE_MUSHROOM: (93, 127, 255),
    TILE_CLOUD: (223, 255, 255),
}


def ground_painter(tile: int) -> Brush:
    """Noisy ground silhouette near the top of the zone with caves carved below."""
    ground = SelectorBrush(
        SplitSampler(
            Direction.DOWN,
            Span(0.0, 0.2),
            GraphSampler(
                Direction.UP,
                LayeredSampler([
                    (10.0, NoiseSampler.new(200.0, offset=1.0)),
                    (10.0, NoiseSampler.new(150.0, offset=5.0)),
                    (1.0, NoiseSampler.new(20.0, offset=5.0)),
                ]),
                ConstSampler(1.0),
                ConstSampler(0.0),
            ),
            ConstSampler(0.0),
        ),
        [(0.5, FillBrush(tile)), (1.0, FillBrush(TILE_AIR))],
    )

    caves = SelectorBrush.weighted(
        FadeSampler(
            Direction.DOWN,
            LayeredSampler([
                (5.0, NoiseSampler.new(50.0)),
                (1.5, NoiseSampler.new(20.0)),
                (1.0, ConstSampler(0.0)),
            ]),
            LayeredSampler([
                (5.0, NoiseSampler.new(50.0)),
                (1.5, NoiseSampler.new(20.0)),
            ]),
        ),
        [(1.5, IgnoreBrush()), (1.0, FillBrush(TILE_AIR))],
    )

    return LayeredBrush([ground, caves])


def _producer(surface_size: float, surface_transition: float, surface: str, cave: str) -> BiomeProducerSettings:
    return BiomeProducerSettings(
        surface_size=surface_size,
        surface_transition=surface_transition,
        surface_biome=surface,
        cave_biome=cave,
    )


def _climate(
    shape, width_weight: float, depth: float, name: str
) -> Tuple[str, ClimateSettings]:
    return (
        name,
        ClimateSettings(
            shape=shape,
            width_weight=width_weight,
            depth=depth,
            biome_producer=_producer(0.0, 0.3, f"{name}_surface", name),
            zones=["surface"],
        ),
    )


def _feature(
    name: str,
    tile: int,
    ratio: float,
    height_range: Tuple[float, float],
    scale: float,
    offset: float,
    zones: List[str],
    climates: List[str],
) -> Tuple[str, BiomeSettings]:
    return (
        name,
        BiomeSettings(
            label=TILE_PALETTE[tile],
            biome_ratio=ratio,
            painter=FillBrush(tile),
            height_range=Span(*height_range),
            zones=zones,
            climates=climates,
            selection_sampler=NoiseSampler.new(scale, offset=offset),
        ),
    )


def demo_settings(width: int = 1600, height: int = 450, seed: int = 69) -> GenerationSettings:
    """
    Describe the demo world.

    Args:
        width: World width in tiles
        height: World height in tiles
        seed: Noise seed

    Returns:
        Complete generation settings
    """
    zones = [
        ("sky", ZoneSettings(height_weight=1000.0, terrain_size=0.0, biome_producer=_producer(0.0, 0.0, "sky", "sky"))),
        ("surface", ZoneSettings(height_weight=5000.0, terrain_size=0.1, biome_producer=_producer(0.0, 0.3, "surface", "cave"))),
        ("underworld", ZoneSettings(height_weight=1000.0, biome_producer=_producer(1.0, 0.0, "underworld", "underworld"))),
    ]

    climates = [
        _climate(Oval(offset_y=0.2), 150.0, 0.3, "desert"),
        _climate(Triangle(offset_y=0.6), 300.0, 0.6, "ice"),
        _climate(Rectangle(sheer=0.2), 300.0, 1.0, "jungle"),
    ]

    biomes = [
        (name, BiomeSettings(label=color, painter=ground_painter(tile)))
        for name, color, tile in GROUND_BIOMES
    ]
    biomes += [
        _feature("marble", TILE_MARBLE, 0.1, (0.6, 0.8), 400.0, 1.0, ["surface"], ["ice", "jungle"]),
        _feature("granite", TILE_GRANITE, 0.1, (0.5, 0.8), 350.0, 2.0, ["surface"], ["ice"]),
        _feature("hive", TILE_HIVE, 0.125, (0.6, 0.8), 400.0, 3.0, [], ["jungle"]),
        _feature("mushroom", TILE_MUSHROOM, 0.07, (0.6, 0.8), 800.0, 4.0, ["surface"], []),
        _feature("sky_island", TILE_CLOUD, 0.5, (0.0, 1.0), 200.0, 5.0, ["sky"], []),
    ]

    return GenerationSettings(
        zones=zones,
        climates=climates,
        biomes=biomes,
        world_width=width,
        world_height=height,
        seed=seed,
        spawn_size=0.1,
        biome_height_transition=0.2,
    )
