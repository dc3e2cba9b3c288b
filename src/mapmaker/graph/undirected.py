"""Undirected adjacency graph."""

import bisect
import math

from mapmaker.graph.base import Edge, Graph, Vertex


class UndirectedGraph(Graph):
    """An undirected graph structure with vertices and edges.

    Every edge (u, v) is stored as both (u, v) and (v, u) in one sorted
    list, so the neighbours of a vertex are the range of edges with that
    vertex as source. Degree and adjacency queries are two binary searches.

    No explicit vertex set is kept. The vertex count is the highest vertex
    id ever referenced plus one; it is not lowered when vertices or edges
    are removed, so with sparse ids it is an upper bound on the number of
    vertices in use.

    Example:
        graph = UndirectedGraph()
        graph.insert_edge((0, 1))
        graph.adjacents(1)  # [0]
    """

    def __init__(self) -> None:
        super().__init__()
        self._vertex_count = 0

    @staticmethod
    def reverse(edge: Edge) -> Edge:
        """Swap source and target of an edge."""
        return (edge[1], edge[0])

    def _insert(self, edge: Edge) -> None:
        position = bisect.bisect_left(self._edges, edge)
        if position == len(self._edges) or self._edges[position] != edge:
            self._edges.insert(position, edge)

    def _remove(self, edge: Edge) -> None:
        position = bisect.bisect_left(self._edges, edge)
        if position < len(self._edges) and self._edges[position] == edge:
            del self._edges[position]

    def _edge_range(self, vertex: Vertex) -> tuple[int, int]:
        """Lower and upper offset of the edges with the vertex as source."""
        lower = bisect.bisect_left(self._edges, (vertex, -math.inf))
        upper = bisect.bisect_right(self._edges, (vertex, math.inf))
        return lower, upper

    # Vertex methods

    def vertices(self) -> set[Vertex]:
        return set(range(self._vertex_count))

    def vertex_count(self) -> int:
        return self._vertex_count

    def insert_vertex(self, vertex: Vertex) -> None:
        self._vertex_count = max(self._vertex_count, vertex + 1)

    def contains_vertex(self, vertex: Vertex) -> bool:
        return 0 <= vertex < self._vertex_count

    def remove_vertex(self, vertex: Vertex) -> None:
        """Remove all edges incident to the vertex."""
        for neighbor in self.adjacents(vertex):
            self.remove_edge((vertex, neighbor))

    # Edge methods

    def edge_count(self) -> int:
        return len(self._edges) // 2

    def insert_edge(self, edge: Edge) -> None:
        """Insert an edge in both directions; self-loops are ignored."""
        source, target = edge
        if source == target:
            return
        self._insert((source, target))
        self._insert((target, source))
        self._vertex_count = max(self._vertex_count, source + 1, target + 1)

    def contains_edge(self, edge: Edge) -> bool:
        position = bisect.bisect_left(self._edges, edge)
        return position < len(self._edges) and self._edges[position] == edge

    def remove_edge(self, edge: Edge) -> None:
        self._remove(edge)
        self._remove(self.reverse(edge))

    def degree(self, vertex: Vertex) -> int:
        """Number of neighbours; 0 for vertices without edges."""
        lower, upper = self._edge_range(vertex)
        return upper - lower

    def adjacents(self, vertex: Vertex) -> list[Vertex]:
        """Neighbours in ascending order; empty for vertices without edges."""
        lower, upper = self._edge_range(vertex)
        return [target for _, target in self._edges[lower:upper]]
