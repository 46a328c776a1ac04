from typing import Optional

# -----------------------------
# Graph Errors
# -----------------------------

class GraphError(Exception):
    """Base class for everything the graph and its algorithms raise."""


class VertexNotFound(GraphError, KeyError):
    def __init__(self, name: str, role: str = "Vertex"):
        self.name = name
        self.role = role
        super().__init__(f"{role} vertex not found: {name!r}")

    def __str__(self) -> str:
        # KeyError would quote the whole message otherwise
        return self.args[0]


class NegativeEdge(GraphError, ValueError):
    """Dijkstra met an edge with a negative cost while relaxing."""

    def __init__(self, source: str, dest: str, cost: float):
        self.source = source
        self.dest = dest
        self.cost = cost
        super().__init__(f"Graph has negative edges: {source} -> {dest} ({cost})")


class MalformedInputLine(GraphError, ValueError):
    def __init__(self, line: str, reason: Optional[str] = None):
        self.line = line
        self.reason = reason or "expected 'source destination cost'"
        super().__init__(f"Skipping ill-formatted line {line!r}: {self.reason}")
