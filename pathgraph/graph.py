import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from pathgraph.errors import VertexNotFound

INFINITY = math.inf

# -----------------------------
# Graph Store
# -----------------------------

class Edge:
    """Directed arc owned by the adjacency list of its source vertex."""

    __slots__ = ("dest", "cost")

    def __init__(self, dest: "Vertex", cost: float):
        self.dest = dest
        self.cost = cost

    def __repr__(self) -> str:
        return f"Edge(dest={self.dest.name!r}, cost={self.cost!r})"


class Vertex:
    __slots__ = ("name", "adj")

    def __init__(self, name: str):
        self.name = name
        self.adj: List[Edge] = []

    def __repr__(self) -> str:
        return f"Vertex({self.name!r}, out_degree={len(self.adj)})"


@dataclass
class VertexState:
    """Per-run bookkeeping for one vertex; never stored on the graph itself."""
    distance: float = INFINITY
    predecessor: Optional[str] = None
    visited: bool = False


class Graph:
    """
    Weighted directed multigraph keyed by vertex name.

    - vertices are created on first reference and never removed
    - iteration follows insertion order
    - edge costs are not validated here; Dijkstra rejects negative ones
    """

    def __init__(self):
        self._vertices: Dict[str, Vertex] = {}

    def add_edge(self, source_name: str, dest_name: str, cost: float) -> None:
        v = self.get_vertex(source_name)
        w = self.get_vertex(dest_name)
        v.adj.append(Edge(w, float(cost)))

    def get_vertex(self, name: str) -> Vertex:
        # If name is not present, register a fresh vertex for it
        v = self._vertices.get(name)
        if v is None:
            v = Vertex(name)
            self._vertices[name] = v
        return v

    def vertex(self, name: str, role: str = "Vertex") -> Vertex:
        v = self._vertices.get(name)
        if v is None:
            raise VertexNotFound(name, role)
        return v

    def reset(self) -> Dict[str, VertexState]:
        return {name: VertexState() for name in self._vertices}

    def edges(self) -> Iterator[Tuple[str, str, float]]:
        for v in self._vertices.values():
            for e in v.adj:
                yield v.name, e.dest.name, e.cost

    @property
    def edge_count(self) -> int:
        return sum(len(v.adj) for v in self._vertices.values())

    def dijkstra(self, start_name: str):
        from pathgraph.algo_funcs import dijkstra
        return dijkstra(self, start_name)

    def __contains__(self, name: object) -> bool:
        return name in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[str]:
        return iter(self._vertices)

    def __repr__(self) -> str:
        return f"Graph(vertices={len(self)}, edges={self.edge_count})"
