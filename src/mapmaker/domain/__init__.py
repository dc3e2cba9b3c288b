"""Domain models for mapmaker.

This module contains the geometric value types and the map records the
algorithms operate on. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of any map-source format

Key classes:
- Point, Segment, Rectangle: Geometric primitives
- Ring, Polygon: Closed boundaries with optional holes
- Circle: A label point together with its clearance
- Territory, Bonus, SuperBonus: Map records
- MapData: A complete map handed to the processor
"""

from mapmaker.domain.geometry import Circle, Point, Polygon, Rectangle, Ring, Segment
from mapmaker.domain.map import Bonus, MapData, SuperBonus, Territory

__all__: list[str] = [
    # Geometry
    "Point",
    "Segment",
    "Rectangle",
    "Ring",
    "Polygon",
    "Circle",
    # Map records
    "Territory",
    "Bonus",
    "SuperBonus",
    "MapData",
]
