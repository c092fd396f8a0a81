"""
PNG export of biome and terrain maps.

Every biome is drawn with its debug label colour, every tile id with its
palette colour. Unknown tile ids are drawn magenta.
"""

from pathlib import Path
from typing import Dict, Sequence, Tuple, Union

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import structlog

from .core.biome_map import BiomeMap
from .core.grid import Grid
from .core.world import Biome

logger = structlog.get_logger()

MISSING_COLOR = (255, 0, 255)

PathLike = Union[str, Path]


def _lookup_table(colors: Dict[int, Tuple[int, int, int]]) -> np.ndarray:
    size = max(colors) + 1 if colors else 1
    table = np.tile(np.array(MISSING_COLOR, dtype=np.uint8), (size, 1))
    for index, color in colors.items():
        table[index] = color
    return table


def ids_to_rgb(ids: np.ndarray, colors: Dict[int, Tuple[int, int, int]]) -> np.ndarray:
    """Map an integer id array to an ``(h, w, 3)`` uint8 image."""
    table = _lookup_table(colors)
    ids = ids.astype(np.int64)
    out = np.empty(ids.shape + (3,), dtype=np.uint8)
    out[...] = MISSING_COLOR
    known = ids < len(table)
    out[known] = table[ids[known]]
    return out


def biome_map_to_rgb(biome_map: BiomeMap, biomes: Sequence[Biome]) -> np.ndarray:
    """Image of the biome map using every biome's label colour."""
    return ids_to_rgb(biome_map.ids, {index: tuple(biome.label) for index, biome in enumerate(biomes)})


def terrain_to_rgb(terrain: Grid, palette: Dict[int, Tuple[int, int, int]]) -> np.ndarray:
    return ids_to_rgb(terrain.data, palette)


def save_biome_map(path: PathLike, biome_map: BiomeMap, biomes: Sequence[Biome]) -> Path:
    """
    Write the biome map as a PNG.

    Args:
        path: Output file
        biome_map: Generated biome map
        biomes: Resolved biomes, indexed by biome id

    Returns:
        Path that was written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, biome_map_to_rgb(biome_map, biomes))
    logger.info("Saved biome map", path=str(path))
    return path


def save_terrain_map(path: PathLike, terrain: Grid, palette: Dict[int, Tuple[int, int, int]]) -> Path:
    """Write the tile map as a PNG using ``palette`` for tile colours."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, terrain_to_rgb(terrain, palette))
    logger.info("Saved terrain map", path=str(path))
    return path
