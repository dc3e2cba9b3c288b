"""Core algorithms for mapmaker.

This module contains the core algorithms for:

- Geometry operations (envelope, point-in-ring, signed boundary distance)
- Label points (pole of inaccessibility search)
- Boundary validation (Shamos-Hoey sweep line)
- Army values (bonus size and exposure scoring)
- Map processing (validation, parallel labelling, scoring)

The geometry, label and sweep functions are stateless and safe to call in
worker processes. The calculators and the processor write their results
onto the map records they are given.

Key functions:
- polylabel: Label point and its distance to the boundary
- get_centroid: Area-weighted centroid seed
- shamos_hoey: Crossing detection over a segment set
- is_simple_ring / is_valid_polygon: Boundary validation
- distance_to_polygon: Signed distance to a polygon boundary

Key classes:
- CenterCalculator: Writes label points onto territories
- ArmyCalculator: Writes army values onto bonuses
- MapProcessor: Runs the whole pipeline
"""

from mapmaker.core.calculator import ArmyCalculator, CenterCalculator, round_half_away
from mapmaker.core.geometry import (
    distance_to_polygon,
    envelope,
    orientation,
    point_in_ring,
    segment_distance_squared,
)
from mapmaker.core.polylabel import Cell, get_centroid, label_circle, polylabel
from mapmaker.core.processor import MapProcessor, build_adjacency_graph, process_territory
from mapmaker.core.shamos_hoey import (
    is_simple_ring,
    is_valid_polygon,
    shamos_hoey,
)

__all__ = [
    # Calculator classes
    "ArmyCalculator",
    "CenterCalculator",
    # Label engine
    "Cell",
    # Processor
    "MapProcessor",
    "build_adjacency_graph",
    # Geometry functions
    "distance_to_polygon",
    "envelope",
    "get_centroid",
    "is_simple_ring",
    "is_valid_polygon",
    "label_circle",
    "orientation",
    "point_in_ring",
    "polylabel",
    "process_territory",
    "round_half_away",
    "segment_distance_squared",
    "shamos_hoey",
]
