"""
Batch gradient noise.

Noise is always produced for a whole rectangle at once: one call returns
a dense ``(height, width)`` buffer. Sampling a single point at a time is
far too slow for world-sized maps.
"""

from enum import Enum
from functools import lru_cache

import numpy as np
from opensimplex import OpenSimplex

# Raw simplex output rarely reaches +-1. Amplifying before the clamp pushes
# typical values out toward 0 and 1 instead of clustering around 0.5.
NOISE_AMPLIFICATION = 2.0

FBM_OCTAVES = 4
FBM_LACUNARITY = 2.0
FBM_GAIN = 0.5


class NoiseKind(Enum):
    """Noise primitives available to noise samplers."""

    SIMPLEX = "simplex"
    FBM = "fbm"


@lru_cache(maxsize=32)
def _generator(seed: int) -> OpenSimplex:
    return OpenSimplex(seed=seed)


def gradient_field(
    kind: NoiseKind,
    seed: int,
    x_start: float,
    y_start: float,
    width: int,
    height: int,
    frequency_x: float,
    frequency_y: float,
) -> np.ndarray:
    """
    Generate raw gradient noise for a rectangle.

    Cell ``(i, j)`` of the result is sampled at
    ``((x_start + i) * frequency_x, (y_start + j) * frequency_y)``.

    Args:
        kind: Noise primitive
        seed: Noise seed
        x_start: Absolute x of the first column (may be fractional)
        y_start: Absolute y of the first row (may be fractional)
        width: Number of columns
        height: Number of rows
        frequency_x: Horizontal frequency (1 / scale)
        frequency_y: Vertical frequency (1 / scale)

    Returns:
        float32 array of shape ``(height, width)`` with values roughly in [-1, 1]
    """
    if width <= 0 or height <= 0:
        return np.zeros((max(height, 0), max(width, 0)), dtype=np.float32)

    xs = (x_start + np.arange(width, dtype=np.float64)) * frequency_x
    ys = (y_start + np.arange(height, dtype=np.float64)) * frequency_y
    generator = _generator(seed)

    if kind is NoiseKind.SIMPLEX:
        return generator.noise2array(xs, ys).astype(np.float32)

    if kind is NoiseKind.FBM:
        total = np.zeros((height, width), dtype=np.float64)
        amplitude = 1.0
        amplitude_sum = 0.0
        frequency = 1.0
        for _ in range(FBM_OCTAVES):
            total += amplitude * generator.noise2array(xs * frequency, ys * frequency)
            amplitude_sum += amplitude
            frequency *= FBM_LACUNARITY
            amplitude *= FBM_GAIN
        return (total / amplitude_sum).astype(np.float32)

    raise ValueError(f"Unsupported noise kind: {kind}")


def to_unit_range(raw: np.ndarray) -> np.ndarray:
    """Map raw noise into [0, 1] with ``clamp((raw * K + 1) / 2, 0, 1)``."""
    return np.clip((raw * NOISE_AMPLIFICATION + 1.0) / 2.0, 0.0, 1.0).astype(np.float32)
