"""Tests for sampler trees."""

import pytest
import numpy as np
from py_worldgen.core.errors import SettingsError
from py_worldgen.core.noise import NoiseKind, gradient_field, to_unit_range
from py_worldgen.core.region import Context, Direction, Pass, Span, WorldParameters
from py_worldgen.core.sampler import (
    X,
    Y,
    ConstSampler,
    FadeSampler,
    GraphSampler,
    LayeredSampler,
    NoiseSampler,
    SplitSampler,
    ZoomSampler,
)


@pytest.fixture
def world():
    """Create a 10x10 world."""
    return WorldParameters(width=10, height=10, seed=42)


@pytest.fixture
def ctx(world):
    """Whole-world context."""
    return Context.for_world(world)


def bake(sampler, ctx):
    return sampler.bake(ctx, ctx.as_pass())


class TestSimpleSamplers:
    """Test leaf samplers."""

    def test_const(self, ctx):
        """Test that a constant is returned everywhere."""
        baked = bake(ConstSampler(0.3), ctx)
        assert all(baked.get(x, y) == 0.3 for x, y in ctx.cells())

    def test_x_and_y(self, world):
        """Test local coordinates within the baked pass."""
        ctx = Context(range(10, 20), range(0, 4), world)

        assert bake(X, ctx).get(10, 0) == 0.0
        assert bake(X, ctx).get(15, 0) == 0.5
        assert bake(Y, ctx).get(10, 2) == 0.5
        assert bake(Y, ctx)(10, 1) == 0.25


class TestLayeredSampler:
    """Test weighted sums."""

    @pytest.mark.parametrize("weights", [[1.0, 3.0], [1000.0, 1.0, 0.5], [0.001, 0.002]])
    def test_weights_normalized(self, weights):
        """Test that weights sum to 1 whatever their magnitude."""
        sampler = LayeredSampler([(weight, ConstSampler(0.0)) for weight in weights])
        assert sum(sampler.weights) == pytest.approx(1.0)

    def test_weighted_sum(self, ctx):
        """Test the blended value."""
        sampler = LayeredSampler([(1.0, ConstSampler(1.0)), (3.0, ConstSampler(0.0))])
        assert bake(sampler, ctx).get(0, 0) == pytest.approx(0.25)

    def test_even(self, ctx):
        """Test equally weighted layers."""
        sampler = LayeredSampler.even([ConstSampler(0.2), ConstSampler(0.4)])
        assert sampler.weights == (0.5, 0.5)
        assert bake(sampler, ctx).get(3, 3) == pytest.approx(0.3)

    def test_invalid_weights(self):
        """Test that empty or zero-weight layers are rejected."""
        with pytest.raises(SettingsError):
            LayeredSampler([])
        with pytest.raises(SettingsError):
            LayeredSampler([(0.0, ConstSampler(1.0))])


class TestZoomSampler:
    """Test range stretching."""

    @pytest.mark.parametrize(
        "inner,expected",
        [(0.4, 0.5), (0.2, 0.0), (0.6, 1.0), (0.1, 0.0), (0.9, 1.0), (0.3, 0.25)],
    )
    def test_zoom_formula(self, ctx, inner, expected):
        """Test clamp((inner - start) / (end - start), 0, 1)."""
        sampler = ZoomSampler(Span(0.2, 0.6), ConstSampler(inner))
        assert bake(sampler, ctx).get(0, 0) == pytest.approx(expected)

    def test_zoom_clamps_out_of_range_children(self, ctx):
        """Test that a composite leaving [0, 1] is clamped back."""
        sampler = ZoomSampler((0.0, 1.0), ConstSampler(1.7))
        assert bake(sampler, ctx).get(0, 0) == 1.0

    def test_invalid_range(self):
        """Test that an empty or reversed range is rejected."""
        with pytest.raises(SettingsError):
            ZoomSampler(Span(0.5, 0.5), ConstSampler(0.0))
        with pytest.raises(SettingsError):
            ZoomSampler(Span(0.6, 0.2), ConstSampler(0.0))


class TestFadeSampler:
    """Test directional blending."""

    def test_endpoints(self, ctx):
        """Test that pos=0 yields `to` and pos=1 yields `from`."""
        up = bake(FadeSampler(Direction.UP, ConstSampler(0.8), ConstSampler(0.2)), ctx)
        down = bake(FadeSampler(Direction.DOWN, ConstSampler(0.8), ConstSampler(0.2)), ctx)

        # Top row: local_y == 0
        assert up.get(4, 0) == 0.2
        assert down.get(4, 0) == 0.8

    def test_midpoint(self, ctx):
        """Test the linear blend halfway along the direction."""
        fade = bake(FadeSampler(Direction.RIGHT, ConstSampler(1.0), ConstSampler(0.0)), ctx)
        assert fade.get(5, 0) == pytest.approx(0.5)
        assert fade.get(2, 9) == pytest.approx(0.2)


class TestSplitSampler:
    """Test hard edges."""

    def test_discontinuous_at_boundary(self, ctx):
        """Test that neighbouring rows across the edge select different children."""
        split = bake(
            SplitSampler(Direction.UP, Span(0.0, 0.5), ConstSampler(1.0), ConstSampler(0.0)), ctx
        )

        # 1 - local_y of row 5 is 0.5, just outside; row 6 gives 0.4, just inside
        assert split.get(0, 5) == 0.0
        assert split.get(0, 6) == 1.0
        assert split.get(0, 0) == 0.0
        assert split.get(0, 9) == 1.0

    def test_children_use_sub_region(self, ctx):
        """Test that children are positioned against the split's own sub-region."""
        inner = FadeSampler(Direction.DOWN, ConstSampler(1.0), ConstSampler(0.0))
        split = bake(SplitSampler(Direction.DOWN, Span(0.0, 0.5), inner, ConstSampler(0.5)), ctx)

        # Rows 0-4 form the sub-region; row 4 is 80 % of the way down it
        assert split.get(0, 0) == 1.0
        assert split.get(0, 4) == pytest.approx(0.2)
        assert split.get(0, 5) == 0.5

    def test_upward_children_use_far_end(self, ctx):
        """Test that an upward split positions its children against the bottom rows."""
        inner = FadeSampler(Direction.UP, ConstSampler(1.0), ConstSampler(0.0))
        split = bake(SplitSampler(Direction.UP, Span(0.0, 0.5), inner, ConstSampler(-1.0)), ctx)

        # Rows 6-9 select inner; the sub-region is rows 5-9
        assert split.get(0, 5) == -1.0
        assert split.get(0, 6) == pytest.approx(0.2)
        assert split.get(0, 9) == pytest.approx(0.8)

    def test_rightward_children_use_far_end(self, ctx):
        """Test that a rightward split positions its children against the right columns."""
        inner = FadeSampler(Direction.RIGHT, ConstSampler(1.0), ConstSampler(0.0))
        split = bake(SplitSampler(Direction.RIGHT, Span(0.0, 0.5), inner, ConstSampler(-1.0)), ctx)

        assert split.get(5, 0) == -1.0
        assert split.get(6, 3) == pytest.approx(0.2)
        assert split.get(9, 3) == pytest.approx(0.8)

    def test_collapsed_sub_region(self):
        """Test that a split too thin to cover a row still evaluates everywhere."""
        ctx = Context.for_world(WorldParameters(width=8, height=4, seed=1))
        graph = GraphSampler(Direction.UP, ConstSampler(0.5), ConstSampler(1.0), ConstSampler(0.0))
        fade = FadeSampler(Direction.DOWN, ConstSampler(1.0), ConstSampler(0.0))
        split = bake(
            SplitSampler(Direction.DOWN, Span(0.0, 0.2), LayeredSampler.even([graph, fade]), ConstSampler(0.0)),
            ctx,
        )

        values = [split.get(x, y) for x, y in ctx.cells()]
        assert len(values) == 32
        assert all(np.isfinite(values))


class TestGraphSampler:
    """Test silhouettes."""

    def test_constant_skyline(self, ctx):
        """Test that points below the skyline use `less`."""
        graph = bake(
            GraphSampler(Direction.UP, ConstSampler(0.5), ConstSampler(0.0), ConstSampler(1.0)), ctx
        )

        for x in range(10):
            assert [graph.get(x, y) for y in range(10)] == [0.0] * 5 + [1.0] * 5

    def test_skyline_per_column(self, ctx):
        """Test that the height is evaluated once per column."""
        graph = bake(GraphSampler(Direction.UP, X, ConstSampler(0.0), ConstSampler(1.0)), ctx)

        # Column 0 has skyline 0: nothing is below it
        assert all(graph.get(0, y) == 1.0 for y in range(10))
        # Column 5 has skyline 0.5
        assert graph.get(5, 4) == 0.0
        assert graph.get(5, 5) == 1.0

    def test_downward_direction(self, ctx):
        """Test that a downward graph measures from the bottom."""
        graph = bake(
            GraphSampler(Direction.DOWN, ConstSampler(0.5), ConstSampler(0.0), ConstSampler(1.0)), ctx
        )

        assert graph.get(0, 9) == 0.0
        assert graph.get(0, 6) == 0.0
        assert graph.get(0, 5) == 1.0
        assert graph.get(0, 0) == 1.0

    def test_horizontal_direction(self, ctx):
        """Test that a rightward graph evaluates one skyline value per row."""
        graph = bake(GraphSampler(Direction.RIGHT, Y, ConstSampler(0.0), ConstSampler(1.0)), ctx)

        assert graph.get(1, 2) == 0.0
        assert graph.get(2, 2) == 1.0


class TestNoiseSampler:
    """Test gradient noise."""

    def test_values_in_unit_range(self, ctx):
        """Test that noise is clamped into [0, 1]."""
        baked = bake(NoiseSampler.new(3.0), ctx)
        values = np.array([baked.get(x, y) for x, y in ctx.cells()])

        assert np.all(values >= 0.0)
        assert np.all(values <= 1.0)
        assert values.std() > 0.0

    def test_deterministic(self, ctx):
        """Test that the same seed produces the same values."""
        first = bake(NoiseSampler.new(5.0), ctx)
        second = bake(NoiseSampler.new(5.0), ctx)
        assert all(first.get(x, y) == second.get(x, y) for x, y in ctx.cells())

    def test_absolute_coordinates(self, world):
        """Test that overlapping passes agree on shared points."""
        sampler = NoiseSampler.new(4.0)
        ctx = Context.for_world(world)
        whole = sampler.bake(ctx, ctx.as_pass())
        part = sampler.bake(ctx, Pass(range(5, 10), range(3, 7)))

        for x in range(5, 10):
            for y in range(3, 7):
                assert part.get(x, y) == whole.get(x, y)

    def test_offset_and_seed_change_field(self, world, ctx):
        """Test that offset and seed both decorrelate the field."""
        base = bake(NoiseSampler.new(4.0), ctx)
        shifted = bake(NoiseSampler.new(4.0, offset=1.5), ctx)
        reseeded = bake(NoiseSampler.new(4.0), Context.for_world(WorldParameters(10, 10, 7)))

        cells = list(ctx.cells())
        assert any(base.get(x, y) != shifted.get(x, y) for x, y in cells)
        assert any(base.get(x, y) != reseeded.get(x, y) for x, y in cells)

    def test_fbm(self, ctx):
        """Test the fractal noise kind."""
        baked = bake(NoiseSampler.new(6.0, kind=NoiseKind.FBM), ctx)
        values = [baked.get(x, y) for x, y in ctx.cells()]
        assert all(0.0 <= value <= 1.0 for value in values)

    def test_invalid_scale(self):
        """Test that non-positive scales are rejected."""
        with pytest.raises(SettingsError):
            NoiseSampler.new(0.0)
        with pytest.raises(SettingsError):
            NoiseSampler(1.0, -2.0)

    def test_gradient_field_shape(self):
        """Test the batch call's output layout."""
        field = gradient_field(NoiseKind.SIMPLEX, 0, 0.0, 0.0, 7, 3, 0.1, 0.1)
        assert field.shape == (3, 7)
        assert gradient_field(NoiseKind.SIMPLEX, 0, 0.0, 0.0, 0, 3, 0.1, 0.1).shape == (3, 0)

    def test_to_unit_range(self):
        """Test the amplify-and-clamp mapping."""
        values = to_unit_range(np.array([-1.0, 0.0, 1.0]))
        np.testing.assert_allclose(values, [0.0, 0.5, 1.0])
