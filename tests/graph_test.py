import math
import random

import networkx as nx
import pytest
from pathgraph.algo_funcs import dijkstra, ShortestPaths
from pathgraph.errors import NegativeEdge, VertexNotFound
from pathgraph.graph import Graph, INFINITY

# -----------------------------
# Test Fixtures
# -----------------------------

@pytest.fixture
def small_graph():
    g = Graph()
    g.add_edge("A", "B", 4)
    g.add_edge("A", "C", 1)
    g.add_edge("C", "B", 1)
    g.add_edge("D", "A", 3)  # D exists but nothing reaches it from A
    return g

def random_graph(seed, nodes=12, edges=40, max_cost=10.0):
    rng = random.Random(seed)
    g = Graph()
    names = [f"n{i}" for i in range(nodes)]
    for _ in range(edges):
        g.add_edge(rng.choice(names), rng.choice(names), round(rng.uniform(0, max_cost), 3))
    return g

def bellman_ford_reference(g, start):
    G = nx.MultiDiGraph()
    G.add_nodes_from(g)
    for s, d, c in g.edges():
        G.add_edge(s, d, weight=c)
    return nx.single_source_bellman_ford_path_length(G, start, weight="weight")

# -----------------------------
# Graph Store Tests
# -----------------------------

def test_add_edge_creates_vertices_lazily():
    g = Graph()
    g.add_edge("X", "Y", 2.5)
    assert list(g) == ["X", "Y"]
    assert "X" in g and "Y" in g
    assert list(g.edges()) == [("X", "Y", 2.5)]

def test_get_vertex_is_idempotent():
    g = Graph()
    v = g.get_vertex("A")
    assert g.get_vertex("A") is v
    assert len(g) == 1

def test_parallel_edges_are_kept():
    g = Graph()
    g.add_edge("A", "B", 3)
    g.add_edge("A", "B", 1)
    assert g.edge_count == 2
    assert [e.cost for e in g.get_vertex("A").adj] == [3.0, 1.0]

def test_negative_cost_accepted_on_insert():
    g = Graph()
    g.add_edge("X", "Y", -5)
    assert list(g.edges()) == [("X", "Y", -5.0)]

def test_reset_gives_initial_state_per_vertex(small_graph):
    states = small_graph.reset()
    assert set(states) == {"A", "B", "C", "D"}
    for s in states.values():
        assert s.distance == INFINITY
        assert s.predecessor is None
        assert s.visited is False

def test_vertex_lookup_missing():
    with pytest.raises(VertexNotFound):
        Graph().vertex("nope")

# -----------------------------
# Pathfinding Tests
# -----------------------------

def test_shortest_path_basic(small_graph):
    paths = dijkstra(small_graph, "A")
    assert paths.distance("B") == 2
    assert paths.path("B") == ["A", "C", "B"]
    assert paths.distance("A") == 0
    assert paths.path("A") == ["A"]

def test_unreachable_vertex(small_graph):
    paths = dijkstra(small_graph, "A")
    assert paths.distance("D") == INFINITY
    assert not paths.is_reachable("D")
    assert paths.path("D") == []
    result = paths.describe("D")
    assert result.reachable is False
    assert result.cost is None

def test_missing_start_raises(small_graph):
    with pytest.raises(VertexNotFound):
        dijkstra(small_graph, "Z")

def test_missing_destination_raises(small_graph):
    paths = dijkstra(small_graph, "A")
    with pytest.raises(VertexNotFound):
        paths.path("Z")
    with pytest.raises(VertexNotFound):
        paths.distance("Z")

def test_graph_method_delegates(small_graph):
    paths = small_graph.dijkstra("A")
    assert isinstance(paths, ShortestPaths)
    assert paths.distance("B") == 2

def test_negative_edge_traversed_raises():
    g = Graph()
    g.add_edge("X", "Y", -5)
    with pytest.raises(NegativeEdge) as exc:
        dijkstra(g, "X")
    assert exc.value.source == "X"
    assert exc.value.dest == "Y"
    assert exc.value.cost == -5

def test_negative_edge_not_traversed_does_not_raise():
    g = Graph()
    g.add_edge("A", "B", 1)
    g.add_edge("X", "Y", -5)
    paths = dijkstra(g, "A")
    assert paths.distance("B") == 1
    assert not paths.is_reachable("X")

def test_runs_do_not_share_state(small_graph):
    from_a = dijkstra(small_graph, "A")
    from_d = dijkstra(small_graph, "D")
    # the first result is untouched by the second run
    assert from_a.distance("D") == INFINITY
    assert from_d.distance("B") == 5
    assert from_d.path("B") == ["D", "A", "C", "B"]

def test_repeated_runs_same_distances():
    g = random_graph(7)
    first = dijkstra(g, "n0")
    second = dijkstra(g, "n0")
    for name in g:
        assert first.distance(name) == second.distance(name)

def test_zero_cost_edges():
    g = Graph()
    g.add_edge("0", "1", 0)
    g.add_edge("1", "2", 0)
    paths = dijkstra(g, "0")
    assert paths.distance("2") == 0
    assert paths.path("2") == ["0", "1", "2"]

def test_self_loop_and_cycle():
    g = Graph()
    g.add_edge("A", "A", 1)
    g.add_edge("A", "B", 2)
    g.add_edge("B", "A", 1)
    paths = dijkstra(g, "A")
    assert paths.distance("A") == 0
    assert paths.path("B") == ["A", "B"]

@pytest.mark.parametrize("seed", range(10))
def test_matches_bellman_ford(seed):
    """Property test: distances agree with Bellman-Ford and paths follow real edges."""
    g = random_graph(seed)
    paths = dijkstra(g, "n0")
    expected = bellman_ford_reference(g, "n0")

    for name in g:
        if name not in expected:
            assert paths.distance(name) == INFINITY
            assert paths.path(name) == []
            continue

        assert math.isclose(paths.distance(name), expected[name], abs_tol=1e-9)
        path = paths.path(name)
        assert path[0] == "n0"
        assert path[-1] == name

        # cheapest parallel edge for each hop; the hops must add up to the distance
        total = 0.0
        for u, v in zip(path, path[1:]):
            costs = [e.cost for e in g.get_vertex(u).adj if e.dest.name == v]
            assert costs, f"no edge {u} -> {v}"
            total += min(costs)
        assert math.isclose(total, paths.distance(name), abs_tol=1e-9)
