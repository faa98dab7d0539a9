"""Dijkstra shortest path over non-negative weights."""

from __future__ import annotations

import heapq
import itertools
import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graphsandbox.errors import InvalidArgument, InvalidState
from graphsandbox.graph import trace_path
from graphsandbox.steps import Step, done, edge_used, final_result, settle

if TYPE_CHECKING:
    from graphsandbox.graph import AdjacencyView


@dataclass
class ShortestPathResult:
    start: str
    target: str
    distance: float = math.inf
    path: list[str] = field(default_factory=list)
    path_edges: list[str] = field(default_factory=list)
    distances: dict[str, float] = field(default_factory=dict)
    predecessors: dict[str, str] = field(default_factory=dict)

    @property
    def reachable(self) -> bool:
        return math.isfinite(self.distance)


def dijkstra_steps(view: AdjacencyView, start_id: str, target_id: str) -> Iterator[Step]:
    """Validate, then return the lazy Dijkstra step sequence.

    Ties between equal tentative distances go to the node that reached that
    distance first. An unreachable target is a normal result with an
    infinite distance and an empty path.
    """
    view.require(start_id, target_id)
    if start_id == target_id:
        raise InvalidArgument("Start and target must be different nodes")
    negative = [e.id for e in view.edges if e.weight < 0]
    if negative:
        raise InvalidState(f"Negative edge weight on {', '.join(negative)}")
    return _dijkstra(view, start_id, target_id)


def _dijkstra(view: AdjacencyView, start_id: str, target_id: str) -> Iterator[Step]:
    dist: dict[str, float] = {node_id: math.inf for node_id in view.nodes}
    dist[start_id] = 0.0
    predecessors: dict[str, str] = {}
    via_edge: dict[str, str] = {}
    settled: set[str] = set()
    counter = itertools.count()
    heap: list[tuple[float, int, str]] = [(0.0, next(counter), start_id)]

    while heap:
        d, _, u = heapq.heappop(heap)
        if u in settled or d > dist[u]:
            continue
        settled.add(u)
        yield settle(u, distance=d)
        if u == target_id:
            break
        for v, weight, edge_id in view.neighbors(u):
            if v in settled:
                continue
            candidate = d + weight
            if candidate < dist[v]:
                dist[v] = candidate
                predecessors[v] = u
                via_edge[v] = edge_id
                heapq.heappush(heap, (candidate, next(counter), v))
                yield edge_used(edge_id, node_id=v, distance=candidate, parent=u)

    result = ShortestPathResult(
        start=start_id,
        target=target_id,
        distance=dist[target_id],
        distances=dist,
        predecessors=predecessors,
    )
    if target_id in settled:
        result.path = trace_path(predecessors, start_id, target_id).path
        result.path_edges = [via_edge[n] for n in result.path[1:]]
    yield done(result)


def dijkstra(view: AdjacencyView, start_id: str, target_id: str) -> ShortestPathResult:
    return final_result(dijkstra_steps(view, start_id, target_id))
