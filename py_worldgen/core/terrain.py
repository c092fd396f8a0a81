"""Tile painting: turns a biome map into a tile map using each biome's painter."""

from typing import TYPE_CHECKING, Any, Dict

import numpy as np
import structlog

from .brush import BakedBrush
from .grid import Grid
from .sweep import Sweep

if TYPE_CHECKING:
    from .biome_map import BiomeMap
    from .generator import WorldGenerator

logger = structlog.get_logger()


def paint_terrain(
    generator: "WorldGenerator", biome_map: "BiomeMap", fill: Any = 0, dtype: Any = np.uint16
) -> Grid:
    """
    Paint tiles zone by zone.

    Painters are baked once per zone, and only for biomes that actually
    occur inside the zone.

    Args:
        generator: Generator the biome map was produced by
        biome_map: Biome ids for every tile
        fill: Tile every cell starts as
        dtype: Numpy dtype of the tile grid

    Returns:
        Tile grid of the same size as the biome map
    """
    world = generator.world
    if (biome_map.width, biome_map.height) != (world.width, world.height):
        raise ValueError(
            f"Biome map is {biome_map.width}x{biome_map.height}, "
            f"world is {world.width}x{world.height}"
        )

    terrain = Grid(world.width, world.height, fill=fill, dtype=dtype)
    ids = biome_map.ids

    for zone in generator.zones:
        if zone.terrain_size == 0.0:
            continue

        sweep = Sweep.zone(world, zone)
        present = np.unique(biome_map.data.view(sweep.x_range, sweep.y_range).array)

        painters: Dict[int, BakedBrush] = {
            int(biome_id): sweep.bake_brush(generator.biomes[int(biome_id)].painter)
            for biome_id in present
        }
        logger.debug(
            "Painting zone",
            zone=zone.name,
            biomes=[generator.biomes[biome_id].name for biome_id in painters],
        )

        sweep.apply(terrain, lambda x, y, current: painters[int(ids[y, x])].apply(x, y, current))

    return terrain
