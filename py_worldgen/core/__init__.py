"""
Core world generation functionality.
"""

from .region import Direction, Span, WorldParameters, Pass, Context
from .grid import Grid, GridView
from .errors import WorldGenError, SettingsError, UnknownReferenceError
from .settings import (
    BiomeProducerSettings,
    ZoneSettings,
    ClimateSettings,
    BiomeSettings,
    GenerationSettings,
)
from .shapes import ClimateShape, Oval, Triangle, Rectangle
from .generator import WorldGenerator
from .biome_map import BiomeMap

__all__ = ['Direction', 'Span', 'WorldParameters', 'Pass', 'Context',
           'Grid', 'GridView',
           'WorldGenError', 'SettingsError', 'UnknownReferenceError',
           'BiomeProducerSettings', 'ZoneSettings', 'ClimateSettings', 'BiomeSettings',
           'GenerationSettings',
           'ClimateShape', 'Oval', 'Triangle', 'Rectangle',
           'WorldGenerator', 'BiomeMap']
