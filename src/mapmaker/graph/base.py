"""Abstract graph with vertices and edges."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

Vertex = int
Edge = tuple[Vertex, Vertex]


class Graph(ABC):
    """A graph base class with vertices and edges.

    Vertices are small, dense, non-negative integers. The edge container is
    kept ordered by source, then target, so that all edges leaving a vertex
    form one contiguous range. Subclasses decide what an edge means
    (directed or undirected) by implementing the edge operations.
    """

    def __init__(self) -> None:
        self._vertices: set[Vertex] = set()
        self._edges: list[Edge] = []

    def size(self) -> tuple[int, int]:
        """Pair of (vertex count, edge count)."""
        return (self.vertex_count(), self.edge_count())

    def empty(self) -> bool:
        """True if the graph holds no vertices and no edges."""
        return self.vertex_count() == 0 and self.edge_count() == 0

    # Vertex methods

    def vertices(self) -> set[Vertex]:
        return set(self._vertices)

    def vertex_count(self) -> int:
        return len(self._vertices)

    def insert_vertex(self, vertex: Vertex) -> None:
        self._vertices.add(vertex)

    def contains_vertex(self, vertex: Vertex) -> bool:
        return vertex in self._vertices

    def remove_vertex(self, vertex: Vertex) -> None:
        self._vertices.discard(vertex)

    # Edge methods

    def edges(self) -> Sequence[Edge]:
        """Stored edges, ordered by source then target."""
        return tuple(self._edges)

    def edge_count(self) -> int:
        return len(self._edges)

    @abstractmethod
    def insert_edge(self, edge: Edge) -> None:
        """Insert an edge given as a (vertex, vertex) pair."""

    @abstractmethod
    def contains_edge(self, edge: Edge) -> bool:
        """Check if an edge exists in the graph."""

    @abstractmethod
    def remove_edge(self, edge: Edge) -> None:
        """Remove an edge if it exists."""

    @abstractmethod
    def degree(self, vertex: Vertex) -> int:
        """Number of edges leaving a vertex."""

    @abstractmethod
    def adjacents(self, vertex: Vertex) -> list[Vertex]:
        """Vertices reachable over one edge from a vertex."""
