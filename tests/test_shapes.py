"""Tests for climate outlines."""

import pytest
from py_worldgen.core.shapes import Oval, Rectangle, Triangle


class TestShapes:
    """Test climate shape inside-tests."""

    def test_oval_center(self):
        """Test that the middle of an oval is inside and the corners are not."""
        oval = Oval(offset_y=0.0)

        assert oval.inside(0.5, 0.5)
        assert not oval.inside(0.0, 0.0)
        assert not oval.inside(0.99, 0.99)

    def test_oval_offset_raises_shape(self):
        """Test that the offset lifts the oval towards the top edge."""
        plain = Oval(offset_y=0.0)
        raised = Oval(offset_y=0.2)

        assert not plain.inside(0.5, 0.0)
        assert raised.inside(0.5, 0.0)

    def test_triangle_widens_downwards(self):
        """Test that the triangle is narrow at the top and wide at the bottom."""
        triangle = Triangle(offset_y=0.0)

        assert triangle.inside(0.5, 0.5)
        assert not triangle.inside(0.2, 0.1)
        assert triangle.inside(0.2, 0.9)
        assert not triangle.inside(0.5, 0.0)

    def test_triangle_top_width(self):
        """Test that the offset widens the top edge."""
        triangle = Triangle(offset_y=0.6)

        assert triangle.inside(0.4, 0.0)
        assert not triangle.inside(0.05, 0.0)

    def test_rectangle_without_sheer(self):
        """Test that an unsheered rectangle covers the whole area."""
        rectangle = Rectangle(sheer=0.0)

        for x, y in [(0.01, 0.01), (0.99, 0.5), (0.5, 0.99)]:
            assert rectangle.inside(x, y)

    @pytest.mark.parametrize("x,y,expected", [(0.95, 0.05, False), (0.95, 0.95, True), (0.05, 0.05, True), (0.05, 0.95, False)])
    def test_rectangle_sheer(self, x, y, expected):
        """Test that sheer leans the sides towards opposite corners."""
        assert Rectangle(sheer=0.5).inside(x, y) is expected
