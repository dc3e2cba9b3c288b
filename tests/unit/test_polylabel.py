"""Tests for the label point search."""

import math

import pytest

from mapmaker.core.geometry import distance_to_polygon, point_in_ring
from mapmaker.core.polylabel import SQRT_TWO, Cell, get_centroid, label_circle, polylabel
from mapmaker.domain import Point, Polygon, Ring


def make_square(half: float) -> Polygon:
    """Square of side 2*half centered on the origin (counter-clockwise)."""
    return Polygon.from_points(
        [Point(-half, -half), Point(half, -half), Point(half, half), Point(-half, half)]
    )


@pytest.fixture
def rectangle() -> Polygon:
    """20x10 rectangle centered on the origin."""
    return Polygon.from_points([Point(-10, -5), Point(10, -5), Point(10, 5), Point(-10, 5)])


@pytest.fixture
def right_triangle() -> Polygon:
    """Right isosceles triangle with legs of length 10."""
    return Polygon.from_points([Point(0, 0), Point(10, 0), Point(0, 10)])


@pytest.fixture
def square_with_hole() -> Polygon:
    """10x10 square with a 2x2 hole in the middle."""
    return Polygon(
        outer=Ring([Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]),
        inners=[Ring([Point(4, 4), Point(6, 4), Point(6, 6), Point(4, 6)])],
    )


class TestCell:
    """Tests for search cells."""

    def test_bound_adds_half_diagonal(self) -> None:
        square = make_square(5)
        cell = Cell.from_polygon(Point(0, 0), 2.0, square)
        assert cell.distance == pytest.approx(5.0)
        assert cell.max == pytest.approx(5.0 + 2.0 * SQRT_TWO)

    def test_outside_cell_has_negative_distance(self) -> None:
        square = make_square(5)
        cell = Cell.from_polygon(Point(8, 0), 1.0, square)
        assert cell.distance == pytest.approx(-3.0)


class TestCentroid:
    """Tests for the centroid seed."""

    def test_centroid_of_clockwise_square(self) -> None:
        polygon = Polygon.from_points([Point(0, 0), Point(0, 4), Point(4, 4), Point(4, 0)])
        cell = get_centroid(polygon)
        assert cell.center == Point(2.0, 2.0)
        assert cell.half == 0
        assert cell.distance == pytest.approx(2.0)

    def test_centroid_of_clockwise_square_away_from_origin(self) -> None:
        polygon = Polygon.from_points([Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)])
        assert get_centroid(polygon).center == Point(5.0, 5.0)

    def test_centroid_of_clockwise_triangle(self) -> None:
        polygon = Polygon.from_points([Point(0, 0), Point(0, 9), Point(9, 0)])
        center = get_centroid(polygon).center
        assert center.x == pytest.approx(3.0)
        assert center.y == pytest.approx(3.0)

    def test_counterclockwise_ring_falls_back_to_first_vertex(self) -> None:
        polygon = Polygon.from_points([Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)])
        cell = get_centroid(polygon)
        assert cell.center == Point(0, 0)
        assert cell.distance == 0

    def test_counterclockwise_polygon_still_labelled_at_center(self) -> None:
        polygon = Polygon.from_points([Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)])
        assert polylabel(polygon) == (Point(2.0, 2.0), 2.0)


class TestPolylabel:
    """Tests for polylabel."""

    def test_square_label_is_center(self) -> None:
        center, distance = polylabel(make_square(5), precision=1.0)
        assert center == Point(0.0, 0.0)
        assert distance == pytest.approx(5.0)

    def test_rectangle_distance_is_half_height(self, rectangle: Polygon) -> None:
        center, distance = polylabel(rectangle, precision=0.5)
        assert distance == pytest.approx(5.0)
        assert abs(center.y) < 1e-9
        assert -5 <= center.x <= 5

    def test_triangle_within_precision_of_incircle(self, right_triangle: Polygon) -> None:
        inradius = 10 / (2 + math.sqrt(2))
        center, distance = polylabel(right_triangle, precision=0.1)

        assert distance <= inradius + 1e-9
        assert inradius - distance <= 0.1
        assert math.hypot(center.x - inradius, center.y - inradius) < 0.5

    def test_label_point_is_inside(self, right_triangle: Polygon) -> None:
        center, distance = polylabel(right_triangle, precision=1.0)
        assert distance > 0
        assert point_in_ring(center, right_triangle.outer)

    def test_returned_distance_matches_point(self, right_triangle: Polygon) -> None:
        center, distance = polylabel(right_triangle, precision=0.5)
        assert distance == pytest.approx(distance_to_polygon(center, right_triangle))

    def test_label_avoids_hole(self, square_with_hole: Polygon) -> None:
        center, distance = polylabel(square_with_hole, precision=0.1)

        assert not point_in_ring(center, square_with_hole.inners[0])
        assert point_in_ring(center, square_with_hole.outer)
        # Best clearance sits on a diagonal between outer corner and hole corner
        assert 2.2 < distance < 2.4

    @pytest.mark.parametrize("shape", ["square", "rectangle"])
    def test_smaller_precision_never_worse(self, shape: str, rectangle: Polygon) -> None:
        polygon = make_square(5) if shape == "square" else rectangle
        distances = [polylabel(polygon, precision)[1] for precision in (4.0, 2.0, 1.0, 0.5, 0.1)]
        for coarse, fine in zip(distances, distances[1:]):
            assert fine >= coarse

    def test_degenerate_vertical_polygon(self) -> None:
        polygon = Polygon.from_points([Point(0, 0), Point(0, 5), Point(0, 10), Point(0, 2)])
        assert polylabel(polygon) == (Point(0, 0), 0)

    def test_degenerate_horizontal_polygon(self) -> None:
        polygon = Polygon.from_points([Point(3, 7), Point(8, 7), Point(1, 7)])
        assert polylabel(polygon) == (Point(1, 7), 0)

    @pytest.mark.parametrize("precision", [0, -1.0])
    def test_precision_must_be_positive(self, precision: float) -> None:
        with pytest.raises(ValueError, match="Precision must be positive"):
            polylabel(make_square(5), precision=precision)

    def test_integer_coordinates(self) -> None:
        polygon = Polygon.from_points([Point(0, 0), Point(100, 0), Point(100, 50), Point(0, 50)])
        _, distance = polylabel(polygon, precision=1.0)
        assert distance == pytest.approx(25.0)


class TestLabelCircle:
    """Tests for label_circle."""

    def test_circle_matches_polylabel(self) -> None:
        circle = label_circle(make_square(5))
        assert circle.center == Point(0.0, 0.0)
        assert circle.radius == pytest.approx(5.0)
        assert circle.valid
