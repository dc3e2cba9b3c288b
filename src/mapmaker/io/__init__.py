"""Map description I/O layer for mapmaker.

This module reads and writes JSON map descriptions: already-extracted
territory geometry, bonus membership and adjacency pairs. It provides a
clean abstraction layer between the file format and the domain models.

Key classes:
- MapReader: Load map descriptions into MapData
- MapWriter: Save processed maps
"""

from mapmaker.io.reader import MapReader
from mapmaker.io.writer import MapWriter

__all__ = [
    "MapReader",
    "MapWriter",
]
