"""
Dense row-major 2-D storage for biome and tile maps.

The grid is backed by a numpy array of shape ``(height, width)`` and is
addressed with ``(x, y)`` world coordinates. Views expose a rectangle of
the same buffer, so independent regions can be written without copying.
"""

from typing import Any, Callable, Optional

import numpy as np


class Grid:
    """Bounds-checked 2-D map of values."""

    def __init__(
        self,
        width: int,
        height: int,
        fill: Any = 0,
        dtype: Any = np.uint16,
        track_changes: bool = False,
    ):
        """
        Create a grid filled with ``fill``.

        Args:
            width: Number of columns
            height: Number of rows
            fill: Initial value of every cell
            dtype: Numpy dtype of the backing buffer
            track_changes: Keep a per-cell counter of writes
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid size must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        self.data = np.full((height, width), fill, dtype=dtype)
        self.changes: Optional[np.ndarray] = (
            np.zeros((height, width), dtype=np.uint16) if track_changes else None
        )

    @classmethod
    def from_array(cls, data: np.ndarray) -> "Grid":
        """Wrap an existing ``(height, width)`` array without copying."""
        if data.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got shape {data.shape}")

        grid = cls.__new__(cls)
        grid.height, grid.width = data.shape
        grid.data = data
        grid.changes = None
        return grid

    def _check(self, x: int, y: int):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"{x} < {self.width} | {y} < {self.height}")

    def get(self, x: int, y: int):
        self._check(x, y)
        return self.data[y, x]

    def insert(self, x: int, y: int, value):
        self._check(x, y)
        self.data[y, x] = value
        if self.changes is not None:
            self.changes[y, x] = min(int(self.changes[y, x]) + 1, 0xFFFF)

    def __getitem__(self, pos):
        x, y = pos
        return self.get(x, y)

    def __setitem__(self, pos, value):
        x, y = pos
        self.insert(x, y, value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.data.shape == other.data.shape and bool(np.array_equal(self.data, other.data))

    def for_each(self, func: Callable[[int, int, Any], None]):
        for y in range(self.height):
            for x in range(self.width):
                func(x, y, self.data[y, x])

    def for_each_mut(self, func: Callable[[int, int, Any], Any]):
        """Replace every cell with ``func(x, y, value)``.

        Returning the very value that was passed in leaves the cell untouched.
        """
        for y in range(self.height):
            for x in range(self.width):
                current = self.data[y, x]
                value = func(x, y, current)
                if value is not current:
                    self.insert(x, y, value)

    def view(self, x_range: range, y_range: range) -> "GridView":
        return GridView(self, x_range, y_range)

    def copy(self) -> "Grid":
        grid = Grid.from_array(self.data.copy())
        if self.changes is not None:
            grid.changes = self.changes.copy()
        return grid


class GridView:
    """A rectangle of a Grid, addressed with the grid's own coordinates.

    Writes go straight to the parent buffer. Two views over disjoint
    rectangles never touch the same cell.
    """

    def __init__(self, grid: Grid, x_range: range, y_range: range):
        if (
            x_range.start < 0
            or y_range.start < 0
            or x_range.stop > grid.width
            or y_range.stop > grid.height
        ):
            raise IndexError(
                f"View {x_range}x{y_range} exceeds grid {grid.width}x{grid.height}"
            )
        self.grid = grid
        self.x_range = x_range
        self.y_range = y_range

    @property
    def array(self) -> np.ndarray:
        """Numpy view (not a copy) of the covered rectangle."""
        return self.grid.data[
            self.y_range.start:self.y_range.stop, self.x_range.start:self.x_range.stop
        ]

    def _check(self, x: int, y: int):
        if x not in self.x_range or y not in self.y_range:
            raise IndexError(f"({x}, {y}) outside view {self.x_range}x{self.y_range}")

    def get(self, x: int, y: int):
        self._check(x, y)
        return self.grid.get(x, y)

    def insert(self, x: int, y: int, value):
        self._check(x, y)
        self.grid.insert(x, y, value)

    def overlaps(self, other: "GridView") -> bool:
        return (
            self.grid is other.grid
            and self.x_range.start < other.x_range.stop
            and other.x_range.start < self.x_range.stop
            and self.y_range.start < other.y_range.stop
            and other.y_range.start < self.y_range.stop
        )

    def for_each(self, func: Callable[[int, int, Any], None]):
        for y in self.y_range:
            for x in self.x_range:
                func(x, y, self.grid.data[y, x])

    def for_each_mut(self, func: Callable[[int, int, Any], Any]):
        data = self.grid.data
        for y in self.y_range:
            for x in self.x_range:
                current = data[y, x]
                value = func(x, y, current)
                if value is not current:
                    self.grid.insert(x, y, value)
