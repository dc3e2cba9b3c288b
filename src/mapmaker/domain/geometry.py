"""Core geometric value types.

This module defines the passive geometric types used throughout mapmaker:
- Point: A 2D point with arithmetic and a lexicographic total order
- Segment: An ordered pair of points
- Rectangle: An axis-aligned envelope
- Ring: A closed sequence of at least three points
- Polygon: An outer ring with optional holes
- Circle: A center point with a radius

Coordinates are plain Python numbers. Integer maps stay integer through
addition, subtraction and cross products; only division produces floats.
"""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from mapmaker.exceptions import RingError

Coordinate = int | float


@dataclass(frozen=True, slots=True, order=True)
class Point:
    """A point in 2D map space.

    Immutable and hashable for use in sets/dicts. Ordering is lexicographic
    by x, then y, which makes the order strict and total for distinct points.

    Attributes:
        x: X coordinate in map units
        y: Y coordinate in map units
    """

    x: Coordinate
    y: Coordinate

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: Coordinate) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def __truediv__(self, divisor: Coordinate) -> "Point":
        return Point(self.x / divisor, self.y / divisor)

    def to_tuple(self) -> tuple[Coordinate, Coordinate]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_list(self) -> list[Coordinate]:
        """Serialize to a two-element list for JSON."""
        return [self.x, self.y]

    @classmethod
    def from_sequence(cls, data: Sequence[Coordinate]) -> "Point":
        """Deserialize from an (x, y) pair.

        Args:
            data: Two-element sequence of coordinates

        Returns:
            Point instance

        Raises:
            ValueError: If the sequence does not hold exactly two values
        """
        if len(data) != 2:
            raise ValueError(f"Expected 2 coordinates, got {len(data)}")
        return cls(data[0], data[1])


@dataclass(frozen=True, slots=True)
class Segment:
    """A line segment between two points.

    The segment keeps the order in which its points were acquired. Consumers
    that need a canonical direction normalize it themselves.

    Attributes:
        first: Start point
        last: End point
    """

    first: Point
    last: Point

    def length(self) -> float:
        """Euclidean length of the segment."""
        return math.hypot(self.last.x - self.first.x, self.last.y - self.first.y)


@dataclass(frozen=True, slots=True)
class Rectangle:
    """An axis-aligned bounding rectangle.

    Attributes:
        min: Corner with the smallest coordinates
        max: Corner with the largest coordinates
    """

    min: Point
    max: Point

    @property
    def width(self) -> Coordinate:
        return self.max.x - self.min.x

    @property
    def height(self) -> Coordinate:
        return self.max.y - self.min.y

    def center(self) -> Point:
        """Midpoint of the rectangle."""
        return (self.min + self.max) / 2


@dataclass
class Ring:
    """A closed ring of points.

    The first point implicitly connects to the last one, so a ring never
    repeats its starting point.

    Attributes:
        points: List of points forming the ring

    Raises:
        RingError: If fewer than three points are given
    """

    points: list[Point]
    _cached_area: float | None = field(default=None, repr=False, init=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.points) < 3:
            raise RingError(f"A ring needs at least 3 points, got {len(self.points)}")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def segments(self) -> list[Segment]:
        """Return the ring edges, including the closing edge.

        Returns:
            List of segments, one per point
        """
        n = len(self.points)
        return [Segment(self.points[i], self.points[(i + 1) % n]) for i in range(n)]

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Positive for counter-clockwise rings, negative for clockwise ones.
        Result is cached for efficiency.

        Returns:
            Signed area of the ring
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.points)
        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    def envelope(self) -> Rectangle:
        """Calculate the bounding rectangle of the ring."""
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return Rectangle(Point(min(xs), min(ys)), Point(max(xs), max(ys)))

    def to_list(self) -> list[list[Coordinate]]:
        """Serialize to a list of [x, y] pairs."""
        return [p.to_list() for p in self.points]

    @classmethod
    def from_list(cls, data: Sequence[Sequence[Coordinate]]) -> "Ring":
        """Deserialize from a list of [x, y] pairs.

        A trailing point equal to the first one (explicitly closed ring) is
        dropped.

        Args:
            data: Sequence of coordinate pairs

        Returns:
            Ring instance
        """
        points = [Point.from_sequence(pair) for pair in data]
        if len(points) > 1 and points[0] == points[-1]:
            points.pop()
        return cls(points=points)


@dataclass
class Polygon:
    """A polygon with one outer ring and optional holes.

    Attributes:
        outer: The outer boundary
        inners: Holes inside the outer boundary
    """

    outer: Ring
    inners: list[Ring] = field(default_factory=list)

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> "Polygon":
        """Build a hole-free polygon from a point sequence."""
        return cls(outer=Ring(list(points)))

    @property
    def rings(self) -> list[Ring]:
        """Outer ring followed by all holes."""
        return [self.outer, *self.inners]

    def segments(self) -> list[Segment]:
        """Edges of all rings."""
        return [segment for ring in self.rings for segment in ring.segments()]

    def envelope(self) -> Rectangle:
        """Bounding rectangle, which is the envelope of the outer ring."""
        return self.outer.envelope()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with outer and inners coordinate lists
        """
        return {
            "outer": self.outer.to_list(),
            "inners": [ring.to_list() for ring in self.inners],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with outer and optional inners

        Returns:
            Polygon instance
        """
        return cls(
            outer=Ring.from_list(data["outer"]),
            inners=[Ring.from_list(ring) for ring in data.get("inners", [])],
        )


@dataclass(frozen=True, slots=True)
class Circle:
    """A circle, used to describe a label point with its clearance.

    Attributes:
        center: Center point
        radius: Radius in map units (negative when the center lies outside)
    """

    center: Point
    radius: float = 0.0

    @property
    def valid(self) -> bool:
        return self.radius >= 0

    @property
    def diameter(self) -> float:
        return self.radius * 2

    @property
    def area(self) -> float:
        return math.pi * self.radius**2

    @property
    def circumference(self) -> float:
        return 2 * math.pi * self.radius
