"""
Biome placement.

Builds the biome grid with a painter's algorithm, broad to narrow:

1. every zone is filled by its surface/cave producer
2. the zone's own biomes are stamped over it
3. every climate of the zone is filled by its producer, inside its shape
4. the climate's biomes are stamped over it, again inside its shape

Later steps overwrite earlier ones.
"""

from typing import TYPE_CHECKING, List

import numpy as np
import structlog

from .grid import Grid
from .region import Span
from .sampler import BakedSampler
from .sweep import Sweep
from .world import Biome, BiomeId, BiomeProducer

if TYPE_CHECKING:
    from .generator import WorldGenerator

logger = structlog.get_logger()


def get_y_biome(
    sweep: Sweep, x: int, y: int, transition: BakedSampler, producer: BiomeProducer
) -> BiomeId:
    """Surface or cave biome for ``(x, y)`` based on its depth inside ``sweep``."""
    depth = sweep.local_y(y)
    surface_end = producer.surface_size + producer.surface_transition

    if depth >= surface_end:
        return producer.cave_biome
    if depth >= producer.surface_size:
        edge = 1.0 - (depth - producer.surface_size) / producer.surface_transition
        if transition.get(x, y) > edge:
            return producer.cave_biome
        return producer.surface_biome
    return producer.surface_biome


def height_bias(float_y: float, height_range: Span, transition: float) -> float:
    """1 inside ``height_range``, fading linearly to 0 over ``transition`` outside it."""
    if float_y < height_range.start:
        distance = height_range.start - float_y
    elif float_y > height_range.end:
        distance = float_y - height_range.end
    else:
        return 1.0
    return max(0.0, 1.0 - distance / transition)


class BiomeMap:
    """Grid of biome ids covering the whole world."""

    def __init__(self, data: Grid):
        self.data = data

    @property
    def width(self) -> int:
        return self.data.width

    @property
    def height(self) -> int:
        return self.data.height

    @property
    def ids(self) -> np.ndarray:
        """The raw ``(height, width)`` id array."""
        return self.data.data

    def get(self, x: int, y: int) -> BiomeId:
        return BiomeId(int(self.data.get(x, y)))

    def get_safe(self, x: int, y: int) -> BiomeId:
        """Biome id at ``(x, y)`` clamped into the map."""
        x = min(max(x, 0), self.width - 1)
        y = min(max(y, 0), self.height - 1)
        return BiomeId(int(self.data.data[y, x]))

    def __eq__(self, other) -> bool:
        if not isinstance(other, BiomeMap):
            return NotImplemented
        return self.data == other.data

    @classmethod
    def generate(cls, generator: "WorldGenerator") -> "BiomeMap":
        world = generator.world
        out = Grid(world.width, world.height, fill=0, dtype=np.uint16)

        logger.info(
            "Generating biome map",
            width=world.width,
            height=world.height,
            zones=len(generator.zones),
        )

        for zone in generator.zones:
            zone_sweep = Sweep.zone(world, zone)
            cls._fill_producer(out, zone_sweep, generator, zone.biome_producer)
            cls._stamp_biomes(out, zone_sweep, generator, zone.child_biomes)

            for climate_id, x_range in zone.child_climates:
                climate = generator.climates[climate_id]
                climate_sweep = Sweep.climate(world, zone, climate, x_range)
                if climate_sweep.is_empty():
                    logger.warning(
                        "Climate covers no tiles", climate=climate.name, zone=zone.name
                    )
                    continue

                cls._fill_producer(
                    out, climate_sweep, generator, climate.biome_producer, shape=climate.shape
                )
                cls._stamp_biomes(
                    out, climate_sweep, generator, climate.child_biomes, shape=climate.shape
                )

        return cls(out)

    @staticmethod
    def _fill_producer(
        out: Grid, sweep: Sweep, generator: "WorldGenerator", producer: BiomeProducer, shape=None
    ):
        transition = sweep.bake_sampler(generator.transition_sampler)

        def fill(x: int, y: int, current):
            if shape is not None and not shape.inside(sweep.local_x(x), sweep.local_y(y)):
                return current
            return get_y_biome(sweep, x, y, transition, producer)

        sweep.apply(out, fill)

    @staticmethod
    def _stamp_biomes(
        out: Grid, sweep: Sweep, generator: "WorldGenerator", biome_ids: List[BiomeId], shape=None
    ):
        world_height = float(generator.world.height)
        for biome_id in biome_ids:
            biome: Biome = generator.biomes[biome_id]
            selection = sweep.bake_sampler(biome.selection_sampler)
            transition = generator.biome_height_transition
            ratio = biome.biome_ratio
            height_range = biome.height_range

            def stamp(x: int, y: int, current):
                if shape is not None and not shape.inside(sweep.local_x(x), sweep.local_y(y)):
                    return current
                bias = height_bias(y / world_height, height_range, transition)
                if selection.get(x, y) <= ratio * bias:
                    return biome_id
                return current

            sweep.apply(out, stamp)
