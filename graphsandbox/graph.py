"""Adjacency projection — build_adjacency, trace_path."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from graphsandbox.errors import InvalidArgument
from graphsandbox.logger import logger

if TYPE_CHECKING:
    from graphsandbox.graph_model import GraphModel


class AdjacencyEntry(NamedTuple):
    neighbor: str
    weight: float
    edge_id: str


class EdgeRef(NamedTuple):
    id: str
    from_id: str
    to_id: str
    weight: float
    directed: bool


@dataclass(frozen=True)
class AdjacencyView:
    """Read-only snapshot of a graph taken at the start of a run.

    ``adjacency`` maps every node id to its neighbor entries in edge
    insertion order. Undirected edges appear in both endpoints' lists.
    Weights are already effective: 1 everywhere for unweighted graphs.
    """

    nodes: tuple[str, ...] = ()
    adjacency: dict[str, tuple[AdjacencyEntry, ...]] = field(default_factory=dict)
    edges: tuple[EdgeRef, ...] = ()
    directed: bool = False
    weighted: bool = True
    revision: int = 0

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.adjacency

    def neighbors(self, node_id: str) -> tuple[AdjacencyEntry, ...]:
        return self.adjacency.get(node_id, ())

    def require(self, *node_ids: str | None) -> None:
        """Raise InvalidArgument unless every id names a node in the view."""
        for node_id in node_ids:
            if node_id is None or node_id not in self.adjacency:
                raise InvalidArgument(f"Node {node_id!r} is not in the graph")


def build_adjacency(graph: GraphModel) -> AdjacencyView:
    """Project a GraphModel into an AdjacencyView. O(V + E)."""
    adjacency: dict[str, list[AdjacencyEntry]] = {n.id: [] for n in graph.nodes()}
    edges: list[EdgeRef] = []
    for edge in graph.edges():
        weight = edge.weight if graph.weighted else 1.0
        edges.append(EdgeRef(edge.id, edge.from_id, edge.to_id, weight, edge.directed))
        adjacency[edge.from_id].append(AdjacencyEntry(edge.to_id, weight, edge.id))
        if not edge.directed:
            adjacency[edge.to_id].append(AdjacencyEntry(edge.from_id, weight, edge.id))

    view = AdjacencyView(
        nodes=tuple(adjacency),
        adjacency={node_id: tuple(entries) for node_id, entries in adjacency.items()},
        edges=tuple(edges),
        directed=graph.directed or any(e.directed for e in edges),
        weighted=graph.weighted,
        revision=graph.revision,
    )
    logger.debug(
        "Built adjacency view: %d node(s), %d edge(s), revision %d",
        len(view.nodes),
        len(view.edges),
        view.revision,
    )
    return view


@dataclass
class PathResult:
    path: list[str] = field(default_factory=list)
    hops: int = 0


def trace_path(parents: dict[str, str], start_id: str, target_id: str) -> PathResult:
    """Walk a parent map back from target to start; empty if target unreached."""
    if target_id == start_id:
        return PathResult(path=[start_id], hops=0)
    if target_id not in parents:
        return PathResult()

    path: list[str] = [target_id]
    current = target_id
    while current in parents:
        current = parents[current]
        path.append(current)
    path.reverse()

    if path[0] != start_id:
        return PathResult()
    return PathResult(path=path, hops=len(path) - 1)
