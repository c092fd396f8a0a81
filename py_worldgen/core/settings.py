"""
Generation settings.

These are the already-materialized descriptions of zones, climates and
biomes. Entries reference each other only by name; names are resolved into
dense ids by the WorldGenerator before anything is generated.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .brush import Brush, IgnoreBrush
from .region import Span
from .sampler import ConstSampler, Sampler
from .shapes import ClimateShape


class BiomeProducerSettings(BaseModel):
    """Intended surface/cave biome split across an area (zone or climate)."""

    surface_size: float = Field(
        ..., ge=0.0, le=1.0, description="Fraction of the area dedicated to the surface biome"
    )
    surface_transition: float = Field(
        ..., ge=0.0, le=1.0, description="Fraction of the area used for the noisy surface/cave boundary"
    )
    surface_biome: str = Field(..., description="Name of the surface biome")
    cave_biome: str = Field(..., description="Name of the cave biome")


class ZoneSettings(BaseModel):
    """A horizontal band of the world."""

    height_weight: float = Field(..., ge=0.0, description="Height relative to the other zones")
    priority: float = Field(default=0.0, description="Stack order, lowest on top")
    terrain_size: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Set to 0 to leave the zone out of tile painting"
    )
    biome_producer: BiomeProducerSettings


class ClimateSettings(BaseModel):
    """A shaped region hanging from the top of one or more zones."""

    shape: ClimateShape
    width_weight: float = Field(..., ge=0.0, description="Width relative to the other climates")
    depth: float = Field(..., ge=0.0, le=1.0, description="Fraction of the zone height covered")
    biome_producer: BiomeProducerSettings
    zones: List[str] = Field(default_factory=list, description="Zones this climate appears in")

    class Config:
        arbitrary_types_allowed = True


class BiomeSettings(BaseModel):
    """A biome and the rules that place it."""

    label: Tuple[int, int, int] = Field(
        default=(255, 0, 255), description="Debug colour used when rendering the biome map"
    )
    biome_ratio: float = Field(
        default=1.0,
        ge=0.0,
        description="Higher values place more of the biome. Compared against the selection sampler",
    )
    selection_sampler: Sampler = Field(default_factory=lambda: ConstSampler(0.0))
    height_range: Span = Field(
        default=Span(0.0, 1.0),
        description="Preferred band of the normalized world height",
    )
    zones: List[str] = Field(default_factory=list, description="Zones the biome is stamped into")
    climates: List[str] = Field(default_factory=list, description="Climates the biome is stamped into")
    painter: Brush = Field(default_factory=IgnoreBrush, description="Tile painter for cells of this biome")

    class Config:
        arbitrary_types_allowed = True


class GenerationSettings(BaseModel):
    """Everything a generation run needs."""

    zones: List[Tuple[str, ZoneSettings]]
    climates: List[Tuple[str, ClimateSettings]] = Field(default_factory=list)
    biomes: List[Tuple[str, BiomeSettings]]

    world_width: int = Field(..., gt=0, description="World width in tiles")
    world_height: int = Field(..., gt=0, description="World height in tiles")
    seed: int = Field(default=0, ge=0)

    spawn_size: float = Field(
        default=0.0, ge=0.0, lt=1.0, description="Fraction of the world width kept free of climates"
    )
    biome_height_transition: float = Field(
        default=0.2,
        gt=0.0,
        description="Distance, in normalized world height, over which biome bias fades to 0",
    )

    transition_sampler: Optional[Sampler] = Field(
        default=None, description="Overrides the surface/cave boundary noise"
    )
    shuffle_climates: bool = Field(
        default=False, description="Shuffle each zone's climates (seeded) before layout"
    )

    class Config:
        arbitrary_types_allowed = True

    def sorted_copy(self) -> "GenerationSettings":
        """Copy with zones ordered by priority and climates/biomes by name."""
        return self.model_copy(
            update={
                "zones": sorted(self.zones, key=lambda entry: entry[1].priority),
                "climates": sorted(self.climates, key=lambda entry: entry[0]),
                "biomes": sorted(self.biomes, key=lambda entry: entry[0]),
            }
        )


def lookup(entries: List[Tuple[str, Any]]) -> Dict[str, int]:
    """Map each declared name to its position in ``entries``."""
    return {name: index for index, (name, _) in enumerate(entries)}
