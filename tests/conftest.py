"""Shared settings builders."""

import pytest
from py_worldgen.core.sampler import ConstSampler
from py_worldgen.core.settings import (
    BiomeProducerSettings,
    BiomeSettings,
    ClimateSettings,
    GenerationSettings,
    ZoneSettings,
)
from py_worldgen.core.shapes import Rectangle


def producer(surface="b", cave="a", size=0.3, transition=0.1):
    return BiomeProducerSettings(
        surface_size=size, surface_transition=transition, surface_biome=surface, cave_biome=cave
    )


def zone(height_weight=1.0, priority=0.0, **kwargs):
    return ZoneSettings(
        height_weight=height_weight, priority=priority, biome_producer=kwargs.pop("biome_producer", producer()), **kwargs
    )


def climate(width_weight=1.0, depth=1.0, zones=("main",), shape=None, biome_producer=None):
    return ClimateSettings(
        shape=shape if shape is not None else Rectangle(),
        width_weight=width_weight,
        depth=depth,
        biome_producer=biome_producer if biome_producer is not None else producer(),
        zones=list(zones),
    )


def generation_settings(**overrides):
    """One zone spanning a 10x10 world with surface biome b and cave biome a."""
    kwargs = dict(
        zones=[("main", zone())],
        biomes=[("a", BiomeSettings()), ("b", BiomeSettings())],
        world_width=10,
        world_height=10,
        seed=1,
        transition_sampler=ConstSampler(0.0),
    )
    kwargs.update(overrides)
    return GenerationSettings(**kwargs)


@pytest.fixture
def simple_settings():
    """Minimal valid settings."""
    return generation_settings()
