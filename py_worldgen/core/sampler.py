"""
Samplers: trees of continuous-valued nodes.

A Sampler returns a value in [0, 1] for any world coordinate. Samplers are
layered into trees and then *baked* against a concrete Context and Pass,
which turns the tree into a BakedSampler: a plain callable that closes over
every precomputed buffer and scalar it needs. Baking happens once per
region, evaluation happens once per tile.

Composite nodes can transiently leave [0, 1] (a Layered of out-of-range
children, for instance); an enclosing Zoom clamps the value back.
"""

from dataclasses import dataclass, field
from typing import Callable, Sequence, Tuple

import numpy as np

from .errors import SettingsError
from .noise import NoiseKind, gradient_field, to_unit_range
from .region import FULL_SPAN, Context, Direction, Pass, Span


class BakedSampler:
    """A sampler specialised to one Pass."""

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[int, int], float]):
        self._func = func

    def get(self, x: int, y: int) -> float:
        return self._func(x, y)

    def __call__(self, x: int, y: int) -> float:
        return self._func(x, y)


class Sampler:
    """Base class of all sampler nodes."""

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        """
        Specialise this sampler for evaluation inside ``pass_``.

        Args:
            ctx: Region the sampler is positioned against, plus world parameters
            pass_: Rectangle the baked sampler will be evaluated over

        Returns:
            BakedSampler valid for every ``(x, y)`` inside ``pass_``
        """
        raise NotImplementedError


# Simple


class XSampler(Sampler):
    """Returns the local X coordinate within the baked pass."""

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        min_x = pass_.min_x
        width = float(pass_.width)
        return BakedSampler(lambda x, y: (x - min_x) / width)

    def __repr__(self) -> str:
        return "XSampler()"


class YSampler(Sampler):
    """Returns the local Y coordinate within the baked pass."""

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        min_y = pass_.min_y
        height = float(pass_.height)
        return BakedSampler(lambda x, y: (y - min_y) / height)

    def __repr__(self) -> str:
        return "YSampler()"


@dataclass(frozen=True)
class ConstSampler(Sampler):
    """Returns ``value`` no matter where the point is sampled."""

    value: float

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        value = float(self.value)
        return BakedSampler(lambda x, y: value)


# Processing


class LayeredSampler(Sampler):
    """Weighted sum of child samplers. Weights are normalized to sum to 1."""

    def __init__(self, layers: Sequence[Tuple[float, Sampler]]):
        total = sum(weight for weight, _ in layers)
        if not layers or total <= 0.0:
            raise SettingsError("LayeredSampler needs a positive total weight")

        self.layers: Tuple[Tuple[float, Sampler], ...] = tuple(
            (weight / total, sampler) for weight, sampler in layers
        )

    @classmethod
    def even(cls, samplers: Sequence[Sampler]) -> "LayeredSampler":
        return cls([(1.0, sampler) for sampler in samplers])

    @property
    def weights(self) -> Tuple[float, ...]:
        return tuple(weight for weight, _ in self.layers)

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        baked = [(weight, sampler.bake(ctx, pass_)) for weight, sampler in self.layers]

        def sample(x: int, y: int) -> float:
            out = 0.0
            for weight, func in baked:
                out += func.get(x, y) * weight
            return out

        return BakedSampler(sample)

    def __repr__(self) -> str:
        return f"LayeredSampler({list(self.layers)!r})"


@dataclass(frozen=True)
class ZoomSampler(Sampler):
    """Stretches the ``range`` part of the inner sampler over [0, 1].

    - anything below ``range.start`` becomes 0
    - anything above ``range.end`` becomes 1
    - anything in between is scaled linearly
    """

    range: Span
    sampler: Sampler

    def __post_init__(self):
        object.__setattr__(self, "range", Span(*self.range))
        if self.range.end <= self.range.start:
            raise SettingsError(f"Zoom range must be increasing, got {tuple(self.range)}")

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        inner = self.sampler.bake(ctx, pass_)
        start = self.range.start
        length = self.range.length

        def sample(x: int, y: int) -> float:
            value = (inner.get(x, y) - start) / length
            if value < 0.0:
                return 0.0
            if value > 1.0:
                return 1.0
            return value

        return BakedSampler(sample)


@dataclass(frozen=True)
class FadeSampler(Sampler):
    """Linear blend between two samplers along a direction.

    At the start of the direction the result is ``to``; at the far end it
    is ``from_``.
    """

    direction: Direction
    from_: Sampler
    to: Sampler

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        from_ = self.from_.bake(ctx, pass_)
        to = self.to.bake(ctx, pass_)
        direction = self.direction

        def sample(x: int, y: int) -> float:
            pos = ctx.local_dir(x, y, direction)
            return from_.get(x, y) * pos + to.get(x, y) * (1.0 - pos)

        return BakedSampler(sample)


@dataclass(frozen=True)
class SplitSampler(Sampler):
    """Hard edge between two samplers along a direction.

    Points whose ``1 - local_dir`` lies in ``range`` use ``inner``, all
    others use ``outer``. Both children are positioned against the split's
    own sub-region, so their directional coordinates are local to it.
    """

    direction: Direction
    range: Span
    inner: Sampler
    outer: Sampler

    def __post_init__(self):
        object.__setattr__(self, "range", Span(*self.range))

    def _sub_span(self) -> Span:
        # Up and Right select the far end of their axis
        if self.direction in (Direction.UP, Direction.RIGHT):
            return Span(1.0 - self.range.end, 1.0 - self.range.start)
        return self.range

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        if self.direction.vertical:
            sub_ctx = ctx.extend(FULL_SPAN, self._sub_span())
        else:
            sub_ctx = ctx.extend(self._sub_span(), FULL_SPAN)

        inner = self.inner.bake(sub_ctx, pass_)
        outer = self.outer.bake(sub_ctx, pass_)
        direction = self.direction
        span = self.range

        def sample(x: int, y: int) -> float:
            pos = ctx.local_dir(x, y, direction)
            if span.contains(1.0 - pos):
                return inner.get(x, y)
            return outer.get(x, y)

        return BakedSampler(sample)


@dataclass(frozen=True)
class GraphSampler(Sampler):
    """Silhouette branch.

    ``height`` is evaluated once per perpendicular coordinate along the
    far edge of the context in ``direction`` (the edge where ``local_dir``
    approaches 1). A point whose ``local_dir`` lies below that skyline
    value uses ``less``, any other point uses ``more``.
    """

    direction: Direction
    height: Sampler
    less: Sampler
    more: Sampler

    def _edge(self, ctx: Context) -> int:
        if self.direction is Direction.UP:
            return ctx.max_y - 1
        if self.direction is Direction.DOWN:
            return ctx.min_y
        if self.direction is Direction.RIGHT:
            return ctx.max_x - 1
        return ctx.min_x

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        edge = self._edge(ctx)
        direction = self.direction

        if direction.vertical:
            strip = Pass(pass_.x_range, range(edge, edge + 1))
            skyline_sampler = self.height.bake(ctx, strip)
            skyline = np.array(
                [skyline_sampler.get(x, edge) for x in pass_.x_range], dtype=np.float64
            )
            offset = pass_.min_x
        else:
            strip = Pass(range(edge, edge + 1), pass_.y_range)
            skyline_sampler = self.height.bake(ctx, strip)
            skyline = np.array(
                [skyline_sampler.get(edge, y) for y in pass_.y_range], dtype=np.float64
            )
            offset = pass_.min_y

        less = self.less.bake(ctx, pass_)
        more = self.more.bake(ctx, pass_)
        vertical = direction.vertical

        def sample(x: int, y: int) -> float:
            value = skyline[(x if vertical else y) - offset]
            if ctx.local_dir(x, y, direction) < value:
                return less.get(x, y)
            return more.get(x, y)

        return BakedSampler(sample)


# Random


@dataclass(frozen=True)
class NoiseSampler(Sampler):
    """Samples gradient noise at absolute world coordinates.

    ``scale_x``/``scale_y`` stretch the noise (frequency is ``1 / scale``).
    ``offset`` shifts the field by ``offset * world_size`` so that samplers
    with similar scales do not produce visually identical results.
    """

    scale_x: float
    scale_y: float
    offset: float = 0.0
    kind: NoiseKind = field(default=NoiseKind.SIMPLEX)

    def __post_init__(self):
        if self.scale_x <= 0.0 or self.scale_y <= 0.0:
            raise SettingsError(
                f"Noise scale must be positive, got {self.scale_x}x{self.scale_y}"
            )

    @classmethod
    def new(cls, scale: float, kind: NoiseKind = NoiseKind.SIMPLEX, offset: float = 0.0) -> "NoiseSampler":
        return cls(scale, scale, offset, kind)

    def bake(self, ctx: Context, pass_: Pass) -> BakedSampler:
        world = ctx.world
        raw = gradient_field(
            self.kind,
            world.seed,
            pass_.min_x + self.offset * world.width,
            pass_.min_y + self.offset * world.height,
            pass_.width,
            pass_.height,
            1.0 / self.scale_x,
            1.0 / self.scale_y,
        )
        values = to_unit_range(raw)
        min_x = pass_.min_x
        min_y = pass_.min_y

        return BakedSampler(lambda x, y: float(values[y - min_y, x - min_x]))


X = XSampler()
Y = YSampler()
