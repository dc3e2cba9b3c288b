"""Pole of inaccessibility search for territory label points.

The label point of a territory is the interior point farthest from its
boundary. It is found with a best-first branch-and-bound search over square
cells: each cell knows the signed distance of its center to the boundary and
an upper bound on the distance reachable anywhere inside it. Cells whose
bound cannot beat the current best by more than the requested precision are
discarded, all others are split into four.

Key functions:
- get_centroid: Area-weighted centroid of the outer ring as a seed cell
- polylabel: Label point and its distance to the boundary
- label_circle: The same result as a Circle
"""

import heapq
import itertools
import math
from dataclasses import dataclass

from mapmaker.core.geometry import distance_to_polygon, envelope
from mapmaker.domain import Circle, Point, Polygon

SQRT_TWO = math.sqrt(2)


@dataclass(frozen=True, slots=True)
class Cell:
    """A square candidate region of the label search.

    Cells are compared by ``max`` only, through the search queue key.

    Attributes:
        center: Center of the cell
        half: Half of the cell side length
        distance: Signed distance from the center to the polygon boundary
        max: Upper bound of the distance reachable inside the cell
    """

    center: Point
    half: float
    distance: float
    max: float

    @classmethod
    def from_polygon(cls, center: Point, half: float, polygon: Polygon) -> "Cell":
        """Create a cell and score it against the polygon.

        The bound adds the half diagonal to the center distance: no point of
        the cell is farther than that from the center.
        """
        distance = distance_to_polygon(center, polygon)
        return cls(center=center, half=half, distance=distance, max=distance + half * SQRT_TWO)


def get_centroid(polygon: Polygon) -> Cell:
    """Area-weighted centroid of the outer ring as a zero-size cell.

    Each vertex is paired with its predecessor, so the accumulated area is
    positive for clockwise rings. Counter-clockwise and degenerate rings fall
    back to their first vertex.

    Args:
        polygon: The polygon

    Returns:
        Cell centered on the centroid, or on the first outer vertex
    """
    points = polygon.outer.points
    n = len(points)
    area = 0
    cx = 0
    cy = 0

    for i in range(n):
        a = points[i]
        b = points[i - 1]
        f = a.x * b.y - b.x * a.y
        cx += (a.x + b.x) * f
        cy += (a.y + b.y) * f
        area += f * 3

    if area > 0:
        return Cell.from_polygon(Point(cx, cy) / area, 0, polygon)
    return Cell.from_polygon(points[0], 0, polygon)


def polylabel(polygon: Polygon, precision: float = 1.0) -> tuple[Point, float]:
    """Find the point inside a polygon farthest from its boundary.

    Args:
        polygon: The polygon, holes included
        precision: Accepted distance tolerance in map units

    Returns:
        Tuple of (label point, distance to the boundary). The distance is
        within ``precision`` of the true optimum. Polygons with a zero-width
        or zero-height envelope return the envelope's minimum corner with
        distance 0.

    Raises:
        ValueError: If precision is not positive

    Examples:
        >>> square = Polygon.from_points(
        ...     [Point(-5, -5), Point(5, -5), Point(5, 5), Point(-5, 5)]
        ... )
        >>> polylabel(square)
        (Point(x=0.0, y=0.0), 5.0)
    """
    if precision <= 0:
        raise ValueError(f"Precision must be positive, got {precision}")

    bounds = envelope(polygon)
    cell_size = min(bounds.width, bounds.height)
    if cell_size == 0:
        return bounds.min, 0

    half = cell_size / 2

    # Max-heap on the upper bound; the counter keeps pops deterministic
    queue: list[tuple[float, int, Cell]] = []
    counter = itertools.count()

    def push(cell: Cell) -> None:
        heapq.heappush(queue, (-cell.max, next(counter), cell))

    x = bounds.min.x
    while x < bounds.max.x:
        y = bounds.min.y
        while y < bounds.max.y:
            push(Cell.from_polygon(Point(x + half, y + half), half, polygon))
            y += cell_size
        x += cell_size

    best = get_centroid(polygon)
    envelope_cell = Cell.from_polygon(bounds.center(), 0, polygon)
    if envelope_cell.distance > best.distance:
        best = envelope_cell

    while queue:
        _, _, cell = heapq.heappop(queue)

        if cell.distance > best.distance:
            best = cell

        if cell.max - best.distance <= precision:
            continue

        half = cell.half / 2
        cx, cy = cell.center.x, cell.center.y
        push(Cell.from_polygon(Point(cx + half, cy + half), half, polygon))
        push(Cell.from_polygon(Point(cx + half, cy - half), half, polygon))
        push(Cell.from_polygon(Point(cx - half, cy + half), half, polygon))
        push(Cell.from_polygon(Point(cx - half, cy - half), half, polygon))

    return best.center, best.distance


def label_circle(polygon: Polygon, precision: float = 1.0) -> Circle:
    """Largest inscribed circle found by :func:`polylabel`."""
    center, distance = polylabel(polygon, precision)
    return Circle(center=center, radius=distance)
