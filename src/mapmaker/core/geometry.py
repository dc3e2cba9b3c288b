"""Geometric operations shared by the label engine and the validator.

This module provides core mathematical utilities for:
- Envelope (bounding rectangle) calculation
- Point-in-ring testing (ray casting algorithm)
- Point-to-segment distance
- Signed distance from a point to a polygon boundary
- Orientation of a point relative to a directed line

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math

from mapmaker.domain import Point, Polygon, Rectangle, Ring


def envelope(polygon: Polygon) -> Rectangle:
    """Return the minimal axis-aligned rectangle enclosing the outer ring.

    Examples:
        >>> square = Polygon.from_points(
        ...     [Point(0, 0), Point(4, 0), Point(4, 2), Point(0, 2)]
        ... )
        >>> envelope(square)
        Rectangle(min=Point(x=0, y=0), max=Point(x=4, y=2))
    """
    return polygon.envelope()


def orientation(p: Point, s1: Point, s2: Point) -> float:
    """Signed area of the triangle (s1, s2, p), doubled.

    Args:
        p: The point
        s1: First point of the directed line
        s2: Second point of the directed line

    Returns:
        Positive if p lies left of s1->s2, negative if right, zero if the
        three points are collinear
    """
    return (s2.x - s1.x) * (p.y - s1.y) - (s2.y - s1.y) * (p.x - s1.x)


def point_in_ring(point: Point, ring: Ring) -> bool:
    """Determine if a point is inside a ring using ray casting.

    Casts a horizontal ray from the point to the right and counts intersections
    with ring edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        ring: The ring

    Returns:
        True if point is inside the ring, False otherwise
    """
    inside = False
    x, y = point.x, point.y
    points = ring.points
    j = len(points) - 1

    for i in range(len(points)):
        xi, yi = points[i].x, points[i].y
        xj, yj = points[j].x, points[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def segment_distance_squared(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Squared distance from a point to a line segment.

    Projects the point onto the infinite line, then clamps to the segment
    endpoints. Zero-length segments degrade to point distance.

    Args:
        point: The point
        seg_start: Start point of the segment
        seg_end: End point of the segment

    Returns:
        Squared Euclidean distance
    """
    x, y = seg_start.x, seg_start.y
    dx = seg_end.x - x
    dy = seg_end.y - y

    if dx != 0 or dy != 0:
        t = ((point.x - x) * dx + (point.y - y) * dy) / (dx * dx + dy * dy)
        if t > 1:
            x, y = seg_end.x, seg_end.y
        elif t > 0:
            x += dx * t
            y += dy * t

    dx = point.x - x
    dy = point.y - y
    return dx * dx + dy * dy


def distance_to_polygon(point: Point, polygon: Polygon) -> float:
    """Signed distance from a point to the polygon boundary.

    The magnitude is the distance to the nearest edge of any ring. The sign
    is positive inside the polygon and negative outside it, where a point
    inside a hole counts as outside (even-odd rule over all rings).

    Args:
        point: The point
        polygon: The polygon, holes included

    Returns:
        Signed distance in map units
    """
    inside = False
    min_dist_sq = math.inf

    for ring in polygon.rings:
        if point_in_ring(point, ring):
            inside = not inside
        points = ring.points
        prev = points[-1]
        for current in points:
            d = segment_distance_squared(point, prev, current)
            if d < min_dist_sq:
                min_dist_sq = d
            prev = current

    distance = math.sqrt(min_dist_sq)
    return distance if inside else -distance
