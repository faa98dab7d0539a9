"""Graph file import/export — JSON snapshots on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from graphsandbox.errors import InvalidArgument
from graphsandbox.graph_model import GraphModel
from graphsandbox.logger import logger
from graphsandbox.model import GraphSnapshot


class ParseError(Exception):
    """Raised when a graph file is unreadable or not a valid snapshot."""


def load_graph(path: Path) -> GraphModel:
    """Read a snapshot file into a fresh GraphModel (flow reset to 0)."""
    raw = _load_json(Path(str(path)))
    try:
        snapshot = GraphSnapshot.model_validate(raw)
    except ValidationError as e:
        raise ParseError(f"{path} is not a valid graph file: {e}") from e
    try:
        graph = GraphModel.from_snapshot(snapshot)
    except InvalidArgument as e:
        raise ParseError(f"{path}: {e}") from e
    logger.info("Loaded %s: %d node(s), %d edge(s)", path, len(graph), len(graph.edges()))
    return graph


def save_graph(graph: GraphModel, path: Path) -> Path:
    """Write a deterministic snapshot file and return its path."""
    out_file = Path(str(path))
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(dump_snapshot(graph), encoding="utf-8")
    return out_file


def dump_snapshot(graph: GraphModel) -> str:
    data = graph.to_snapshot().model_dump(mode="json", by_alias=True)
    return json.dumps(data, sort_keys=True, indent=2) + "\n"


def _load_json(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ParseError(f"File not found: {path}") from None
    except OSError as e:
        raise ParseError(f"Cannot read file {path}: {e}") from None
    try:
        data: object = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"{path} is not valid JSON.") from e
    if not isinstance(data, dict):
        raise ParseError(f"{path} is not a valid graph file (expected JSON object).")
    return data


_DEMO_NODES: list[tuple[float, float, str]] = [
    (100, 100, "Main gate"),
    (300, 50, "Faculty building A"),
    (300, 250, "Library"),
    (500, 150, "Laboratory"),
    (700, 350, "Dormitory"),
    (500, 400, "Sports field"),
]

_DEMO_EDGES: list[tuple[str, str, float]] = [
    ("A", "B", 5),
    ("A", "C", 3),
    ("B", "D", 2),
    ("C", "D", 7),
    ("D", "E", 4),
    ("F", "E", 1),
    ("C", "F", 6),
    ("B", "C", 6),
]


def demo_graph(directed: bool = False, weighted: bool = True) -> GraphModel:
    """Six-node undirected campus map used as the starting sandbox."""
    graph = GraphModel(directed=directed, weighted=weighted)
    for x, y, name in _DEMO_NODES:
        graph.add_node(x, y, name)
    for u, v, w in _DEMO_EDGES:
        graph.add_or_update_edge(u, v, w)
    return graph
