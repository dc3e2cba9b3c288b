"""Adjacency graphs between territories.

Key classes:
- Graph: Abstract vertex/edge container
- UndirectedGraph: Graph storing every edge in both directions
"""

from mapmaker.graph.base import Edge, Graph, Vertex
from mapmaker.graph.undirected import UndirectedGraph

__all__ = [
    "Edge",
    "Graph",
    "UndirectedGraph",
    "Vertex",
]
