"""
Resolved zones, climates and biomes.

Settings reference each other by name; these types hold dense integer ids
instead. Ids follow the (sorted) declaration order and index directly into
the generator's lists. They are only valid for the run that produced them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, NewType, Tuple

from .brush import Brush
from .errors import UnknownReferenceError
from .region import Span
from .sampler import Sampler
from .settings import BiomeProducerSettings
from .shapes import ClimateShape

ZoneId = NewType("ZoneId", int)
ClimateId = NewType("ClimateId", int)
BiomeId = NewType("BiomeId", int)


def resolve(kind: str, name: str, lookup: Dict[str, int]) -> int:
    """Resolve ``name`` through ``lookup`` or fail with an UnknownReferenceError."""
    try:
        return lookup[name]
    except KeyError:
        raise UnknownReferenceError(kind, name) from None


@dataclass
class BiomeProducer:
    """Surface/cave decision shared by zones and climates."""

    surface_size: float
    surface_transition: float
    surface_biome: BiomeId
    cave_biome: BiomeId

    @classmethod
    def from_settings(
        cls, settings: BiomeProducerSettings, biomes_lookup: Dict[str, int]
    ) -> "BiomeProducer":
        return cls(
            surface_size=settings.surface_size,
            surface_transition=settings.surface_transition,
            surface_biome=BiomeId(resolve("biome", settings.surface_biome, biomes_lookup)),
            cave_biome=BiomeId(resolve("biome", settings.cave_biome, biomes_lookup)),
        )


@dataclass
class Zone:
    name: str
    height_weight: float
    biome_producer: BiomeProducer
    terrain_size: float = 1.0

    # Filled while resolving climates and biomes
    child_climates: List[Tuple[ClimateId, range]] = field(default_factory=list)
    child_biomes: List[BiomeId] = field(default_factory=list)

    # Filled by WorldGenerator.compute_zone_heights
    world_range: range = range(0, 0)


@dataclass
class Climate:
    name: str
    shape: ClimateShape
    width_weight: float
    depth: float
    biome_producer: BiomeProducer
    zones: List[ZoneId] = field(default_factory=list)

    child_biomes: List[BiomeId] = field(default_factory=list)


@dataclass
class Biome:
    name: str
    label: Tuple[int, int, int]
    biome_ratio: float
    selection_sampler: Sampler
    height_range: Span
    painter: Brush
    zones: List[ZoneId] = field(default_factory=list)
    climates: List[ClimateId] = field(default_factory=list)
