import heapq
import itertools
import logging
from typing import Dict, List

from pathgraph.errors import NegativeEdge, VertexNotFound
from pathgraph.graph import INFINITY, Graph, VertexState
from pathgraph.models import PathResult

logger = logging.getLogger(__name__)

# -----------------------------
# Pathfinding
# -----------------------------

class ShortestPaths:
    """
    Result of one Dijkstra run: distance, predecessor and visited flag per vertex.
    Owned by the caller, so runs never interfere with each other.
    """

    def __init__(self, start: str, states: Dict[str, VertexState]):
        self.start = start
        self._states = states

    def _state(self, name: str) -> VertexState:
        state = self._states.get(name)
        if state is None:
            raise VertexNotFound(name, "Destination")
        return state

    def distance(self, name: str) -> float:
        return self._state(name).distance

    def is_reachable(self, name: str) -> bool:
        return self._state(name).distance != INFINITY

    def path(self, name: str) -> List[str]:
        """Vertex names from the start to `name`; empty if unreachable."""
        state = self._state(name)
        if state.distance == INFINITY:
            return []

        path = []
        node = name
        while node is not None:
            path.append(node)
            node = self._states[node].predecessor
        path.reverse()
        return path

    def describe(self, name: str) -> PathResult:
        path = self.path(name)
        return PathResult(
            destination=name,
            reachable=bool(path),
            cost=self.distance(name) if path else None,
            path=path,
        )

    @property
    def reached(self) -> int:
        return sum(1 for s in self._states.values() if s.distance != INFINITY)

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __len__(self) -> int:
        return len(self._states)


def dijkstra(graph: Graph, start_name: str) -> ShortestPaths:
    start = graph.vertex(start_name, "Start")

    states = graph.reset()
    states[start.name].distance = 0.0

    counter = itertools.count()  # keeps heap entries comparable on equal distances
    pq = [(0.0, next(counter), start)]  # (distance, seq, vertex)
    nodes_seen = 0
    total = len(graph)

    while pq and nodes_seen < total:
        _, _, v = heapq.heappop(pq)
        v_state = states[v.name]

        # skip outdated elements
        if v_state.visited:
            continue
        v_state.visited = True
        nodes_seen += 1

        for e in v.adj:
            w = e.dest
            if e.cost < 0:
                raise NegativeEdge(v.name, w.name, e.cost)

            w_state = states[w.name]
            new_dist = v_state.distance + e.cost
            if w_state.distance > new_dist:  # dw > dv + cvw
                w_state.distance = new_dist
                w_state.predecessor = v.name
                heapq.heappush(pq, (new_dist, next(counter), w))

    logger.debug("Dijkstra from %r finalized %d of %d vertices", start_name, nodes_seen, total)
    return ShortestPaths(start_name, states)
