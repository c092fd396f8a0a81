"""
Climate outlines.

A climate occupies a rectangle inside its zone, but only the cells for which
its shape test passes are painted. Tests take the cell position normalized
to the climate rectangle, ``x`` and ``y`` in [0, 1) with ``y`` growing
downwards from the top of the zone.
"""

import math
from dataclasses import dataclass


class ClimateShape:
    """Base class for climate outlines."""

    def inside(self, x: float, y: float) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Oval(ClimateShape):
    """Circle of diameter 1, stretched vertically and raised by ``offset_y``."""

    offset_y: float = 0.0

    def inside(self, x: float, y: float) -> bool:
        center_x = 0.5
        center_y = 0.5 - self.offset_y
        dist_x = center_x - x
        dist_y = center_y - y * (1.0 - self.offset_y)
        return math.sqrt(dist_x * dist_x + dist_y * dist_y) < 0.5


@dataclass(frozen=True)
class Triangle(ClimateShape):
    """Triangle widening downwards; ``offset_y`` is its width at the top edge."""

    offset_y: float = 0.0

    def inside(self, x: float, y: float) -> bool:
        dist_x = abs(x - 0.5) * 2.0
        dist_y = (1.0 - y) * (1.0 - self.offset_y)
        return dist_x + dist_y < 1.0


@dataclass(frozen=True)
class Rectangle(ClimateShape):
    """Rectangle whose sides lean inwards by ``sheer`` towards opposite corners."""

    sheer: float = 0.0

    def inside(self, x: float, y: float) -> bool:
        dist_x = abs(x - 0.5) * 2.0
        lean = y if x > 0.5 else 1.0 - y
        dist_y = (1.0 - self.sheer) + lean * self.sheer
        return dist_y > dist_x
