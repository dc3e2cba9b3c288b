"""Sweep-line detection of crossing segments (Shamos-Hoey).

Territory boundaries must be simple rings before they are accepted. The
validator sweeps over all segment endpoints in point order and keeps the
segments that are currently open in an ordered active set. A crossing, if
any exists, shows up between two segments that become neighbours in that set,
so only neighbours have to be tested.

Segments that share an endpoint never count as crossing: consecutive ring
edges always do.

Key classes:
- EventQueue: Endpoint events ordered by point
- SweepLine: Ordered set of open segments

Key functions:
- intersect: Crossing test for two normalized segments
- shamos_hoey: True if any two segments cross
- is_simple_ring / is_valid_polygon: Validation wrappers
"""

import bisect
import heapq
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from mapmaker.core.geometry import orientation
from mapmaker.domain import Point, Polygon, Ring, Segment


class EventType(IntEnum):
    """Which endpoint of a segment an event refers to.

    LEFT sorts before RIGHT so that a segment is always opened before it is
    closed, even when both endpoints coincide.
    """

    LEFT = 0
    RIGHT = 1


@dataclass(frozen=True, slots=True, order=True)
class Event:
    """An endpoint of a segment, ordered by point, type, then segment index.

    Attributes:
        point: The endpoint
        type: LEFT if the point comes first in point order, RIGHT otherwise
        edge: Index of the segment in the input sequence
    """

    point: Point
    type: EventType
    edge: int


class EventQueue:
    """Priority queue of segment endpoint events.

    Each segment contributes one LEFT and one RIGHT event, tagged by
    comparing its two endpoints.
    """

    def __init__(self, segments: Sequence[Segment]) -> None:
        self._heap: list[Event] = []
        for i, segment in enumerate(segments):
            if segment.first < segment.last:
                first_type, last_type = EventType.LEFT, EventType.RIGHT
            else:
                first_type, last_type = EventType.RIGHT, EventType.LEFT
            self._heap.append(Event(segment.first, first_type, i))
            self._heap.append(Event(segment.last, last_type, i))
        heapq.heapify(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def pop(self) -> Event:
        """Remove and return the next event in point order."""
        return heapq.heappop(self._heap)


@dataclass(frozen=True, slots=True, order=True)
class SweepSegment:
    """A segment normalized so that ``left <= right`` in point order.

    Ordered by left point, then right point. The originating index breaks
    ties so that duplicate segments remain distinct entries.

    Attributes:
        left: Endpoint that comes first in point order
        right: Endpoint that comes last in point order
        edge: Index of the segment in the input sequence
    """

    left: Point
    right: Point
    edge: int

    @classmethod
    def from_segment(cls, index: int, segment: Segment) -> "SweepSegment":
        if segment.first < segment.last:
            return cls(segment.first, segment.last, index)
        return cls(segment.last, segment.first, index)


def intersect(s1: SweepSegment, s2: SweepSegment) -> bool:
    """Check whether two normalized segments cross.

    Args:
        s1: First segment
        s2: Second segment

    Returns:
        True if the segments have a common point that is not a shared
        endpoint. Touching the interior of the other segment counts as
        crossing.
    """
    if s1.left == s2.left or s1.right == s2.right or s1.left == s2.right or s1.right == s2.left:
        return False

    l2 = orientation(s2.left, s1.left, s1.right)
    r2 = orientation(s2.right, s1.left, s1.right)
    if l2 * r2 > 0:
        # Both endpoints of s2 lie on the same side of s1
        return False

    l1 = orientation(s1.left, s2.left, s2.right)
    r1 = orientation(s1.right, s2.left, s2.right)
    if l1 * r1 > 0:
        return False

    if l1 == 0 and r1 == 0 and l2 == 0 and r2 == 0:
        # Collinear: the segments cross only if their extents overlap
        return s1.left <= s2.right and s2.left <= s1.right

    return True


class SweepLine:
    """Ordered set of the segments currently open during the sweep.

    Two synchronized structures back the set: a mapping from segment index
    to the raw segment, and a sorted list of normalized segments. The
    mapping turns an index into the exact sort key, which is then located
    by binary search.
    """

    def __init__(self) -> None:
        self._segments: dict[int, Segment] = {}
        self._tree: list[SweepSegment] = []

    def __len__(self) -> int:
        return len(self._tree)

    def __bool__(self) -> bool:
        return bool(self._tree)

    def __iter__(self):
        return iter(self._tree)

    def _get(self, index: int) -> SweepSegment:
        return SweepSegment.from_segment(index, self._segments[index])

    def insert(self, index: int, segment: Segment) -> int:
        """Open a segment.

        Args:
            index: Index of the segment in the input sequence
            segment: The raw segment

        Returns:
            Position of the segment in sweep order
        """
        self._segments[index] = segment
        key = SweepSegment.from_segment(index, segment)
        position = bisect.bisect_left(self._tree, key)
        if position == len(self._tree) or self._tree[position] != key:
            self._tree.insert(position, key)
        return position

    def find(self, index: int) -> int | None:
        """Position of an open segment in sweep order, or None."""
        if index not in self._segments:
            return None
        key = self._get(index)
        position = bisect.bisect_left(self._tree, key)
        if position < len(self._tree) and self._tree[position] == key:
            return position
        return None

    def erase(self, index: int) -> bool:
        """Close a segment.

        Returns:
            True if the segment was open
        """
        position = self.find(index)
        if position is None:
            return False
        del self._tree[position]
        del self._segments[index]
        return True

    def at(self, position: int) -> SweepSegment:
        return self._tree[position]

    def predecessor(self, position: int) -> SweepSegment | None:
        """Segment ordered directly before the given position."""
        if position <= 0:
            return None
        return self._tree[position - 1]

    def successor(self, position: int) -> SweepSegment | None:
        """Segment ordered directly after the given position."""
        if position + 1 >= len(self._tree):
            return None
        return self._tree[position + 1]


def shamos_hoey(segments: Sequence[Segment]) -> bool:
    """Check whether any two segments of a set cross.

    Args:
        segments: Unordered segments; zero-length and duplicate segments are
            accepted

    Returns:
        True on the first detected crossing, False if there is none
    """
    sweep_line = SweepLine()
    events = EventQueue(segments)

    while events:
        event = events.pop()

        if event.type == EventType.LEFT:
            position = sweep_line.insert(event.edge, segments[event.edge])
            current = sweep_line.at(position)

            above = sweep_line.predecessor(position)
            if above is not None and intersect(current, above):
                return True

            below = sweep_line.successor(position)
            if below is not None and intersect(current, below):
                return True

        else:
            position = sweep_line.find(event.edge)
            if position is None:
                continue

            # The closing segment separated these two; they become neighbours
            above = sweep_line.predecessor(position)
            below = sweep_line.successor(position)
            if above is not None and below is not None and intersect(above, below):
                return True

            sweep_line.erase(event.edge)

    return False


def is_simple_ring(ring: Ring) -> bool:
    """True if the ring boundary does not cross itself."""
    return not shamos_hoey(ring.segments())


def is_valid_polygon(polygon: Polygon) -> bool:
    """True if no two edges of any of the polygon's rings cross.

    All rings are swept together, so holes crossing the outer ring or each
    other are detected as well.
    """
    return not shamos_hoey(polygon.segments())
