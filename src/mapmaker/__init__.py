"""Mapmaker - Geometry and topology core for territory maps.

Mapmaker computes the pieces of a strategy map that need real algorithms:
label points for every territory (pole of inaccessibility), ring validity
(self-intersection sweep), the territory adjacency graph, and army values for
bonuses based on their size and exposure.

Example:
    $ mapmaker europe.json

This will create europe-processed.json with label points, validity flags
and army values filled in.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
