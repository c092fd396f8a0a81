"""
World generator.

Resolves named settings into dense ids, validates them, lays zones and
climates out over the world and drives the biome placement and tile
painting stages.
"""

import time
from collections import Counter
from typing import List, Optional

import numpy as np
import structlog

from .biome_map import BiomeMap
from .errors import SettingsError, UnknownReferenceError
from .grid import Grid
from .region import WorldParameters
from .sampler import NoiseSampler, Sampler
from .settings import GenerationSettings, lookup
from .terrain import paint_terrain
from .world import (
    Biome,
    BiomeId,
    BiomeProducer,
    Climate,
    ClimateId,
    Zone,
    ZoneId,
    resolve,
)

logger = structlog.get_logger()

# Scale of the noise that roughens the surface/cave boundary
TRANSITION_NOISE_SCALE = 10.0


class WorldGenerator:
    """Builds biome and terrain maps for one world.

    All validation happens in the constructor, so a generator that was
    constructed successfully will not fail while sweeping.
    """

    def __init__(self, settings: GenerationSettings):
        """
        Resolve and validate generation settings.

        Args:
            settings: Zones, climates, biomes and world parameters

        Raises:
            UnknownReferenceError: A name is referenced but never declared
            SettingsError: The settings are degenerate
        """
        settings = settings.sorted_copy()
        self._check_duplicates(settings)

        if not settings.zones:
            raise SettingsError("At least one zone is required")

        zones_lookup = lookup(settings.zones)
        climates_lookup = lookup(settings.climates)
        biomes_lookup = lookup(settings.biomes)

        # === Zones
        total_height = sum(zone.height_weight for _, zone in settings.zones)
        if total_height <= 0.0:
            raise SettingsError("Zone height weights must have a positive total")

        self.zones: List[Zone] = []
        for name, zone in settings.zones:
            self.zones.append(
                Zone(
                    name=name,
                    height_weight=zone.height_weight / total_height,
                    terrain_size=zone.terrain_size,
                    biome_producer=BiomeProducer.from_settings(zone.biome_producer, biomes_lookup),
                )
            )

        # === Climates
        self.climates: List[Climate] = []
        for climate_id, (name, climate) in enumerate(settings.climates):
            zone_ids = [ZoneId(resolve("zone", zone, zones_lookup)) for zone in climate.zones]
            for zone_id in zone_ids:
                self.zones[zone_id].child_climates.append((ClimateId(climate_id), range(0, 0)))

            self.climates.append(
                Climate(
                    name=name,
                    shape=climate.shape,
                    width_weight=climate.width_weight,
                    depth=climate.depth,
                    biome_producer=BiomeProducer.from_settings(climate.biome_producer, biomes_lookup),
                    zones=zone_ids,
                )
            )

        # === Biomes
        self.biomes: List[Biome] = []
        for biome_id, (name, biome) in enumerate(settings.biomes):
            zone_ids = [ZoneId(resolve("zone", zone, zones_lookup)) for zone in biome.zones]
            climate_ids = [
                ClimateId(resolve("climate", climate, climates_lookup)) for climate in biome.climates
            ]
            for zone_id in zone_ids:
                self.zones[zone_id].child_biomes.append(BiomeId(biome_id))
            for climate_id in climate_ids:
                self.climates[climate_id].child_biomes.append(BiomeId(biome_id))

            self.biomes.append(
                Biome(
                    name=name,
                    label=tuple(biome.label),
                    biome_ratio=biome.biome_ratio,
                    selection_sampler=biome.selection_sampler,
                    height_range=biome.height_range,
                    painter=biome.painter,
                    zones=zone_ids,
                    climates=climate_ids,
                )
            )

        self.world = WorldParameters(
            width=settings.world_width, height=settings.world_height, seed=settings.seed
        )
        self.spawn_size = settings.spawn_size
        self.biome_height_transition = settings.biome_height_transition
        self.transition_sampler: Sampler = (
            settings.transition_sampler
            if settings.transition_sampler is not None
            else NoiseSampler.new(TRANSITION_NOISE_SCALE)
        )
        self.shuffle_climates = settings.shuffle_climates
        self.rng = np.random.default_rng(settings.seed)

        self.compute_zone_heights()
        self.compute_climate_widths()

        logger.info(
            "World generator ready",
            width=self.world.width,
            height=self.world.height,
            seed=self.world.seed,
            zones=len(self.zones),
            climates=len(self.climates),
            biomes=len(self.biomes),
        )

    @staticmethod
    def _check_duplicates(settings: GenerationSettings):
        for kind, entries in (
            ("zone", settings.zones),
            ("climate", settings.climates),
            ("biome", settings.biomes),
        ):
            duplicates = [name for name, count in Counter(name for name, _ in entries).items() if count > 1]
            if duplicates:
                raise SettingsError(f"Duplicate {kind} names: {', '.join(sorted(duplicates))}")

    @property
    def width(self) -> int:
        return self.world.width

    @property
    def height(self) -> int:
        return self.world.height

    def biome_id(self, name: str) -> BiomeId:
        """Look up the id a biome name was resolved to."""
        for biome_id, biome in enumerate(self.biomes):
            if biome.name == name:
                return BiomeId(biome_id)
        raise UnknownReferenceError("biome", name)

    def compute_zone_heights(self):
        """Stack zones top to bottom, each proportional to its height weight.

        The last zone absorbs the rounding remainder so the zones always
        cover the full world height.
        """
        current_height = 0
        for index, zone in enumerate(self.zones):
            if index == len(self.zones) - 1:
                zone_height = self.world.height - current_height
            else:
                zone_height = int(self.world.height * zone.height_weight)

            if zone_height <= 0:
                raise SettingsError(f"Zone '{zone.name}' has zero height")

            zone.world_range = range(current_height, current_height + zone_height)
            current_height += zone_height

        logger.debug(
            "Computed zone heights",
            zones={zone.name: (zone.world_range.start, zone.world_range.stop) for zone in self.zones},
        )

    def compute_climate_widths(self):
        """Lay each zone's climates out horizontally.

        The first half of a zone's climates sits left of the spawn strip,
        the rest right of it. Climates share the width that is not
        spawn strip in proportion to their width weights.
        """
        available = 1.0 - self.spawn_size
        for zone in self.zones:
            count = len(zone.child_climates)
            if count == 0:
                continue

            if self.shuffle_climates:
                order = self.rng.permutation(count)
                zone.child_climates = [zone.child_climates[int(i)] for i in order]

            total_width = sum(self.climates[climate_id].width_weight for climate_id, _ in zone.child_climates)
            if total_width <= 0.0:
                raise SettingsError(f"Climates of zone '{zone.name}' have no width")

            left_size = count // 2
            cursor = 0.0
            laid_out = []
            for pos, (climate_id, _) in enumerate(zone.child_climates):
                if pos == left_size:
                    cursor += self.spawn_size

                start = cursor
                cursor += available * self.climates[climate_id].width_weight / total_width
                end = self.world.width if pos == count - 1 else int(self.world.width * cursor)
                laid_out.append((climate_id, range(int(self.world.width * start), end)))

            zone.child_climates = laid_out

    def generate_biome_map(self) -> BiomeMap:
        start = time.perf_counter()
        biome_map = BiomeMap.generate(self)
        logger.info("Biome map generated", elapsed_ms=round((time.perf_counter() - start) * 1000, 1))
        return biome_map

    def generate_terrain_map(self, biome_map: BiomeMap, fill: int = 0, dtype=np.uint16) -> Grid:
        start = time.perf_counter()
        terrain = paint_terrain(self, biome_map, fill=fill, dtype=dtype)
        logger.info("Terrain map generated", elapsed_ms=round((time.perf_counter() - start) * 1000, 1))
        return terrain

    def generate(self, terrain_fill: Optional[int] = None):
        """Run the biome stage and, if ``terrain_fill`` is given, the painting stage."""
        biome_map = self.generate_biome_map()
        if terrain_fill is None:
            return biome_map, None
        return biome_map, self.generate_terrain_map(biome_map, fill=terrain_fill)
