"""
Brushes: trees of discrete "paint this cell" nodes.

A baked brush is applied to a single cell: it receives the current value
and returns the value the cell should hold afterwards. Layering brushes is
how "paint base terrain, then stamp features on top" is expressed.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, Tuple, TypeVar

from .errors import SettingsError
from .region import Context, Pass
from .sampler import Sampler

T = TypeVar("T")


class BakedBrush(Generic[T]):
    """A brush specialised to one Pass."""

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[int, int, T], T]):
        self._func = func

    def apply(self, x: int, y: int, value: T) -> T:
        return self._func(x, y, value)


class Brush(Generic[T]):
    """Base class of all brush nodes."""

    def bake(self, ctx: Context, pass_: Pass) -> BakedBrush[T]:
        raise NotImplementedError


@dataclass(frozen=True)
class FillBrush(Brush[T]):
    """Overwrites the cell with ``value``."""

    value: Any

    def bake(self, ctx: Context, pass_: Pass) -> BakedBrush[T]:
        value = self.value
        return BakedBrush(lambda x, y, current: value)


class IgnoreBrush(Brush[T]):
    """Leaves the cell untouched."""

    def bake(self, ctx: Context, pass_: Pass) -> BakedBrush[T]:
        return BakedBrush(lambda x, y, current: current)

    def __eq__(self, other) -> bool:
        return isinstance(other, IgnoreBrush)

    def __hash__(self) -> int:
        return hash(IgnoreBrush)

    def __repr__(self) -> str:
        return "IgnoreBrush()"


class SelectorBrush(Brush[T]):
    """Picks one child brush per cell from a sampled value.

    ``values`` holds ``(threshold, brush)`` pairs with monotonically
    increasing thresholds in [0, 1]. The first child whose threshold is
    greater than the sampled value is applied. A value at or above the
    last threshold falls through to the last child.
    """

    def __init__(self, sampler: Sampler, values: Sequence[Tuple[float, Brush[T]]]):
        if not values:
            raise SettingsError("SelectorBrush needs at least one child")

        previous = 0.0
        for threshold, _ in values:
            if threshold < previous or threshold > 1.0 + 1e-6:
                raise SettingsError(
                    f"Selector thresholds must increase within [0, 1], got {[t for t, _ in values]}"
                )
            previous = threshold

        self.sampler = sampler
        self.values: Tuple[Tuple[float, Brush[T]], ...] = tuple(values)

    @classmethod
    def weighted(cls, sampler: Sampler, values: Sequence[Tuple[float, Brush[T]]]) -> "SelectorBrush[T]":
        """Build a selector from arbitrary weights, turned into cumulative fractions."""
        total = sum(weight for weight, _ in values)
        if not values or total <= 0.0:
            raise SettingsError("SelectorBrush needs a positive total weight")

        cumulative = 0.0
        thresholds = []
        for weight, brush in values:
            cumulative += weight / total
            thresholds.append((cumulative, brush))
        return cls(sampler, thresholds)

    @classmethod
    def even(cls, sampler: Sampler, brushes: Sequence[Brush[T]]) -> "SelectorBrush[T]":
        return cls.weighted(sampler, [(1.0, brush) for brush in brushes])

    @property
    def thresholds(self) -> Tuple[float, ...]:
        return tuple(threshold for threshold, _ in self.values)

    def bake(self, ctx: Context, pass_: Pass) -> BakedBrush[T]:
        sampler = self.sampler.bake(ctx, pass_)
        baked = [(threshold, brush.bake(ctx, pass_)) for threshold, brush in self.values]
        last = baked[-1][1]

        def apply(x: int, y: int, current: T) -> T:
            value = sampler.get(x, y)
            for threshold, brush in baked:
                if threshold > value:
                    return brush.apply(x, y, current)
            return last.apply(x, y, current)

        return BakedBrush(apply)

    def __repr__(self) -> str:
        return f"SelectorBrush({self.sampler!r}, {list(self.values)!r})"


class LayeredBrush(Brush[T]):
    """Applies every child in order; later children paint over earlier ones."""

    def __init__(self, layers: Sequence[Brush[T]]):
        self.layers: Tuple[Brush[T], ...] = tuple(layers)

    def bake(self, ctx: Context, pass_: Pass) -> BakedBrush[T]:
        baked = [brush.bake(ctx, pass_) for brush in self.layers]

        def apply(x: int, y: int, current: T) -> T:
            for brush in baked:
                current = brush.apply(x, y, current)
            return current

        return BakedBrush(apply)

    def __repr__(self) -> str:
        return f"LayeredBrush({list(self.layers)!r})"
