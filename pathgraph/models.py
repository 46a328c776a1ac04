from typing import List, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from pathgraph.graph import Graph

# -----------------------------
# Domain Models (Pydantic)
# -----------------------------

class Edge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    weight: float = 1.0

class GraphModel(BaseModel):
    nodes: List[str]
    edges: List[Edge]

class PathResult(BaseModel):
    destination: str
    reachable: bool
    cost: Optional[float] = None  # None when unreachable
    path: List[str]  # sequence of node names, source first

class Event(BaseModel):
    time: str
    type: str
    detail: dict

# -----------------------------
# API Schemas
# -----------------------------

class AddEdgeRequest(BaseModel):
    # names and weight must survive a round trip through the edge-list format
    source: str = Field(pattern=r"^\S+$")
    target: str = Field(pattern=r"^\S+$")
    weight: float = Field(allow_inf_nan=False)

class LoadEdgesRequest(BaseModel):
    text: str  # edge list, one "source destination cost" per line
    replace: bool = False

class LoadEdgesResponse(BaseModel):
    added: int
    skipped: int
    nodes: int

class DijkstraRequest(BaseModel):
    start: str

class DijkstraResponse(BaseModel):
    start: str
    reached: int
    nodes: int

# -----------------------------
# In-memory State (Replace with DB for prod)
# -----------------------------

STATE: Dict[str, object] = {
    "graph": Graph(),
    "paths": None,  # ShortestPaths of the latest /dijkstra call
    "events": [],
}
