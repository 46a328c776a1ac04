import logging
import math
from datetime import datetime, timezone
from typing import IO, Iterable, List, Optional, Tuple

from pathgraph.algo_funcs import ShortestPaths
from pathgraph.errors import MalformedInputLine
from pathgraph.graph import Graph
from pathgraph.models import STATE, Edge, Event, GraphModel, PathResult

logger = logging.getLogger(__name__)

EdgeTuple = Tuple[str, str, float]  # (source, destination, cost)

# -----------------------------
# Edge list reading / writing
# -----------------------------

def parse_edge_line(line: str) -> EdgeTuple:
    """
    Parse one "source destination cost" line.

    Raises MalformedInputLine for a wrong token count or a cost that is not a
    finite number. Negative costs parse fine; Dijkstra rejects them later.
    """
    tokens = line.split()
    if len(tokens) != 3:
        raise MalformedInputLine(line, f"expected 3 tokens, got {len(tokens)}")

    source, dest, raw_cost = tokens
    try:
        cost = float(raw_cost)
    except ValueError:
        raise MalformedInputLine(line, f"cost {raw_cost!r} is not a number")
    if not math.isfinite(cost):
        raise MalformedInputLine(line, f"cost {raw_cost!r} is not finite")
    return source, dest, cost


def add_edge_lines(graph: Graph, lines: Iterable[str]) -> Tuple[int, int]:
    """Add every well-formed line to `graph`, skipping the rest. Returns (added, skipped)."""
    added = skipped = 0
    for line in lines:
        line = line.rstrip("\r\n")
        try:
            source, dest, cost = parse_edge_line(line)
        except MalformedInputLine as e:
            logger.warning(str(e))
            skipped += 1
            continue
        graph.add_edge(source, dest, cost)
        added += 1

    logger.info(f"Edge list read: {added} edges added, {skipped} lines skipped, {len(graph)} vertices")
    return added, skipped


def read_edge_list(lines: Iterable[str], graph: Optional[Graph] = None) -> Graph:
    if graph is None:
        graph = Graph()
    add_edge_lines(graph, lines)
    return graph


def load_graph(path: str) -> Graph:
    with open(path, encoding="utf-8") as fin:
        return read_edge_list(fin)


def format_cost(cost: float) -> str:
    # repr keeps full precision and renders integral costs as "2.0"
    return repr(float(cost))


def dump_edge_list(graph: Graph, stream: IO[str]) -> int:
    count = 0
    for source, dest, cost in graph.edges():
        stream.write(f"{source} {dest} {format_cost(cost)}\n")
        count += 1
    return count


def graph_to_model(graph: Graph) -> GraphModel:
    return GraphModel(
        nodes=list(graph),
        edges=[Edge(**{"from": s, "to": d, "weight": c}) for s, d, c in graph.edges()],
    )

# -----------------------------
# Synthetic edge list
# -----------------------------

def convert(x: int) -> float:
    """Cost of the edge x -> 2x: x * (1 + log2 x)."""
    return x * (1 + math.log2(x))


def generate_edge_list(size: int = 1000) -> List[EdgeTuple]:
    """
    Vertices "0".."size": a zero-cost edge 0 -> 1, then i -> i+1 costing i
    and i -> 2i costing convert(i) wherever the target stays within size.
    """
    edges: List[EdgeTuple] = [("0", "1", 0.0)]
    for i in range(1, size + 1):
        if i + 1 <= size:
            edges.append((str(i), str(i + 1), float(i)))
        if 2 * i <= size:
            edges.append((str(i), str(2 * i), convert(i)))
    return edges


def write_generated_edge_list(path: str, size: int = 1000) -> int:
    edges = generate_edge_list(size)
    with open(path, "w", encoding="utf-8") as fout:
        for source, dest, cost in edges:
            fout.write(f"{source} {dest} {format_cost(cost)}\n")
    logger.info(f"Wrote {len(edges)} edges over {size + 1} vertices to {path}")
    return len(edges)

# -----------------------------
# Path reporting
# -----------------------------

def format_path_line(result: PathResult) -> str:
    if not result.reachable:
        return f"{result.destination} is unreachable"
    return f"(Cost is: {format_cost(result.cost)}) " + " to ".join(result.path)


def print_path(paths: ShortestPaths, dest_name: str, stream: IO[str]) -> None:
    stream.write(format_path_line(paths.describe(dest_name)) + "\n")


def report_lines(paths: ShortestPaths, destinations: Iterable[str]) -> List[str]:
    """Every destination formatted up front, so an unknown one raises before any output."""
    return [format_path_line(paths.describe(dest)) for dest in destinations]


def write_report(paths: ShortestPaths, destinations: Iterable[str], stream: IO[str]) -> int:
    lines = report_lines(paths, destinations)
    for line in lines:
        stream.write(line + "\n")
    return len(lines)

# logger
def log_event(type_: str, detail: dict):
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    STATE["events"].append(Event(time=now, type=type_, detail=detail))
