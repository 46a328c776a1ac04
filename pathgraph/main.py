from typing import List, Optional
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from pathgraph import config
from pathgraph.algo_funcs import dijkstra
from pathgraph.errors import NegativeEdge, VertexNotFound
from pathgraph.graph import Graph
from pathgraph.helpers import add_edge_lines, format_path_line, graph_to_model, load_graph, log_event
from pathgraph.models import *

# -----------------------------
# App Setup
# -----------------------------

app = FastAPI(
    title="Pathgraph Shortest Path API",
    version="0.1.0",
    description=(
        "Weighted directed graph with single-source shortest paths (Dijkstra).\n\n"
        "Endpoints provided: /addEdge, /loadEdges, /getGraph, /dijkstra, /path/{dest}, /report.\n"
        "State is in-memory and resets on restart."
    ),
)

# CORS for local dev frontends (Vite/Next/CRA)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite default
        "http://localhost:3000",  # CRA/Next.js
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# Helpers
# -----------------------------

def _graph() -> Graph:
    return STATE["graph"]

def _require_paths():
    paths = STATE.get("paths")
    if paths is None:
        raise HTTPException(status_code=409, detail="Run /dijkstra before asking for paths")
    return paths

# -----------------------------
# Lifecycle
# -----------------------------

@app.on_event("startup")
async def seed_state() -> None:
    # Seed only once per process start
    if config.EDGE_FILE:
        STATE["graph"] = load_graph(config.EDGE_FILE)
        STATE["paths"] = None
        log_event("graph_loaded", {"file": config.EDGE_FILE, "nodes": len(STATE["graph"])})

# -----------------------------
# Endpoints
# -----------------------------

@app.get("/healthz")
async def healthz():
    return {"ok": True}

@app.get("/events", response_model=List[Event])
async def get_events(limit: Optional[int] = None, since: Optional[str] = None):
    """
    Retrieve events, optionally limited and filtered by a 'since' timestamp (ISO 8601).
    """
    events = STATE.get("events", [])

    if since is not None:
        try:
            since_dt = datetime.fromisoformat(since.replace("Z", "+00:00"))
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid ISO 8601 timestamp for 'since'")
        if since_dt.tzinfo is None:
            since_dt = since_dt.replace(tzinfo=timezone.utc)
        events = [
            e for e in events
            if datetime.fromisoformat(e.time.replace("Z", "+00:00")) > since_dt
        ]

    if limit is not None:
        events = events[-limit:]

    return events[::-1]

@app.post("/addEdge", response_model=Edge, tags=["graph"])
async def add_edge(req: AddEdgeRequest) -> Edge:
    _graph().add_edge(req.source, req.target, req.weight)
    # earlier results no longer describe the graph
    STATE["paths"] = None
    log_event("edge_added", {"from": req.source, "to": req.target, "weight": req.weight})
    return Edge(**{"from": req.source, "to": req.target, "weight": req.weight})

@app.post("/loadEdges", response_model=LoadEdgesResponse, tags=["graph"])
async def load_edges(req: LoadEdgesRequest) -> LoadEdgesResponse:
    graph = Graph() if req.replace else _graph()
    added, skipped = add_edge_lines(graph, req.text.splitlines())

    STATE["graph"] = graph
    STATE["paths"] = None
    resp = LoadEdgesResponse(added=added, skipped=skipped, nodes=len(graph))
    log_event("edges_loaded", resp.model_dump())
    return resp

@app.get("/getGraph", response_model=GraphModel, tags=["graph"])
async def get_graph() -> GraphModel:
    return graph_to_model(_graph())

@app.post("/dijkstra", response_model=DijkstraResponse, tags=["paths"])
async def run_dijkstra(req: DijkstraRequest) -> DijkstraResponse:
    try:
        paths = dijkstra(_graph(), req.start)
    except VertexNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NegativeEdge as e:
        STATE["paths"] = None
        log_event("dijkstra_failed", {"start": req.start, "reason": str(e)})
        raise HTTPException(status_code=422, detail=str(e))

    STATE["paths"] = paths
    log_event("dijkstra_completed", {"start": req.start, "reached": paths.reached})
    return DijkstraResponse(start=req.start, reached=paths.reached, nodes=len(paths))

@app.get("/path/{dest}", response_model=PathResult, tags=["paths"])
async def get_path(dest: str) -> PathResult:
    paths = _require_paths()
    try:
        return paths.describe(dest)
    except VertexNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

@app.get("/report", response_class=PlainTextResponse, tags=["paths"])
async def report(dest: List[str] = Query(default=[])) -> str:
    """
    One line per destination in the edge-list report format; every vertex
    except the start when no destination is given.
    """
    paths = _require_paths()
    destinations = dest or [name for name in _graph() if name != paths.start]
    lines = []
    for name in destinations:
        try:
            lines.append(format_path_line(paths.describe(name)))
        except VertexNotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
    return "\n".join(lines) + "\n" if lines else ""

# -----------------------------
# Run (if executed directly)
# -----------------------------

# Use: uvicorn pathgraph.main:app --reload // or python -m pathgraph.main
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pathgraph.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=True,
    )
