"""
Evaluation windows for samplers and brushes.

A Pass is an integer rectangle of world tiles that something is evaluated
over. A Context is a Pass that also carries the run-global world
parameters (size and seed) which noise and normalized helpers need.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, NamedTuple, Tuple


class Direction(Enum):
    """Orientation used by directional samplers.

    ``local_dir`` grows from 0 to 1 when moving in the named direction.
    """

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


class Span(NamedTuple):
    """Half-open float interval ``[start, end)``."""

    start: float
    end: float

    @property
    def length(self) -> float:
        return self.end - self.start

    def contains(self, value: float) -> bool:
        return self.start <= value < self.end


FULL_SPAN = Span(0.0, 1.0)


@dataclass(frozen=True)
class WorldParameters:
    """Read-only parameters shared by every bake of a single generation run."""

    width: int
    height: int
    seed: int


@dataclass(frozen=True)
class Pass:
    """Integer rectangle of world tiles, ``x_range`` x ``y_range`` (half-open)."""

    x_range: range
    y_range: range

    @property
    def min_x(self) -> int:
        return self.x_range.start

    @property
    def max_x(self) -> int:
        return self.x_range.stop

    @property
    def min_y(self) -> int:
        return self.y_range.start

    @property
    def max_y(self) -> int:
        return self.y_range.stop

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def shape(self) -> Tuple[int, int]:
        """Numpy shape ``(height, width)`` of a buffer covering this pass."""
        return (self.height, self.width)

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, x: int, y: int) -> bool:
        return x in self.x_range and y in self.y_range

    def local_x(self, x: int) -> float:
        # A collapsed window has no interior; everything sits at its start
        if self.width == 0:
            return 0.0
        return (x - self.min_x) / self.width

    def local_y(self, y: int) -> float:
        if self.height == 0:
            return 0.0
        return (y - self.min_y) / self.height

    def local_dir(self, x: int, y: int, direction: Direction) -> float:
        if direction is Direction.UP:
            return self.local_y(y)
        if direction is Direction.DOWN:
            return 1.0 - self.local_y(y)
        if direction is Direction.RIGHT:
            return self.local_x(x)
        return 1.0 - self.local_x(x)

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Iterate ``(x, y)`` row by row."""
        for y in self.y_range:
            for x in self.x_range:
                yield x, y

    def as_pass(self) -> "Pass":
        return Pass(self.x_range, self.y_range)


@dataclass(frozen=True)
class Context(Pass):
    """A Pass bound to the parameters of the current generation run."""

    world: WorldParameters

    @classmethod
    def for_world(cls, world: WorldParameters) -> "Context":
        return cls(range(0, world.width), range(0, world.height), world)

    def extend(self, width: Span, height: Span) -> "Context":
        """Derive the fractional sub-rectangle ``width`` x ``height`` of this one.

        Fractions are relative to this rectangle, so ``Span(0.0, 1.0)``
        keeps an axis unchanged.
        """
        return replace(
            self,
            x_range=range(
                self.min_x + int(self.width * width.start),
                self.min_x + int(self.width * width.end),
            ),
            y_range=range(
                self.min_y + int(self.height * height.start),
                self.min_y + int(self.height * height.end),
            ),
        )
