"""Region iteration for the placement and painting stages."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .grid import Grid, GridView
from .region import Context, WorldParameters

if TYPE_CHECKING:
    from .brush import BakedBrush, Brush
    from .sampler import BakedSampler, Sampler
    from .world import Climate, Zone


@dataclass(frozen=True)
class Sweep(Context):
    """Iterates every ``(x, y)`` of a rectangle.

    A sweep is also a Context, so samplers and brushes can be baked
    directly against it and ``local_x``/``local_y``/``local_dir`` are
    relative to the swept rectangle. ``extend`` derives the sweep of a
    fractional sub-rectangle with its own local frame.
    """

    @classmethod
    def zone(cls, world: WorldParameters, zone: "Zone") -> "Sweep":
        """Full world width by the zone's vertical world range."""
        return cls(range(0, world.width), zone.world_range, world)

    @classmethod
    def climate(
        cls, world: WorldParameters, zone: "Zone", climate: "Climate", x_range: range
    ) -> "Sweep":
        """The climate's columns, from the top of its zone down ``depth`` of the zone."""
        top = zone.world_range.start
        height = int(len(zone.world_range) * climate.depth)
        return cls(x_range, range(top, top + height), world)

    def bake_sampler(self, sampler: "Sampler") -> "BakedSampler":
        return sampler.bake(self, self)

    def bake_brush(self, brush: "Brush") -> "BakedBrush":
        return brush.bake(self, self)

    def for_each(self, func: Callable[[int, int], None]):
        for y in self.y_range:
            for x in self.x_range:
                func(x, y)

    def apply(self, grid: Grid, func: Callable[[int, int, Any], Any]) -> GridView:
        """
        Replace every swept cell of ``grid`` with ``func(x, y, current)``.

        Returns:
            The view of ``grid`` that was written
        """
        view = grid.view(self.x_range, self.y_range)
        view.for_each_mut(func)
        return view
