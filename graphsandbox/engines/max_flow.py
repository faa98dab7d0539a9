"""Maximum flow — Edmonds–Karp over a capacity matrix."""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graphsandbox.errors import InvalidArgument
from graphsandbox.steps import Step, done, edge_used, final_result, visit

if TYPE_CHECKING:
    from graphsandbox.graph import AdjacencyView

Matrix = dict[str, dict[str, float]]


@dataclass
class EdgeFlow:
    edge_id: str
    from_id: str
    to_id: str
    flow: float
    capacity: float


@dataclass
class MaxFlowResult:
    source: str
    sink: str
    value: float = 0.0
    edge_flows: list[EdgeFlow] = field(default_factory=list)
    augmenting_paths: list[list[str]] = field(default_factory=list)
    min_cut: list[str] = field(default_factory=list)

    def flows_by_edge(self) -> dict[str, float]:
        return {ef.edge_id: ef.flow for ef in self.edge_flows}


def max_flow_steps(view: AdjacencyView, source_id: str, sink_id: str) -> Iterator[Step]:
    """Validate, then return the lazy Edmonds–Karp step sequence.

    Undirected edges give each direction its own independent capacity equal
    to the weight; parallel edges between one pair add up.
    """
    view.require(source_id, sink_id)
    if source_id == sink_id:
        raise InvalidArgument("Source and sink must be different nodes")
    return _edmonds_karp(view, source_id, sink_id)


def _capacities(view: AdjacencyView) -> Matrix:
    capacity: Matrix = defaultdict(lambda: defaultdict(float))
    for edge in view.edges:
        capacity[edge.from_id][edge.to_id] += edge.weight
        if not edge.directed:
            capacity[edge.to_id][edge.from_id] += edge.weight
    return capacity


def _edmonds_karp(view: AdjacencyView, source_id: str, sink_id: str) -> Iterator[Step]:
    capacity = _capacities(view)
    residual: Matrix = defaultdict(lambda: defaultdict(float))
    for u, row in capacity.items():
        for v, c in row.items():
            residual[u][v] = c
            # make sure the reverse arc is known to the BFS
            residual[v].setdefault(u, 0.0)

    result = MaxFlowResult(source=source_id, sink=sink_id)
    while True:
        parents = _augmenting_path(residual, source_id, sink_id)
        if parents is None:
            break
        path = [sink_id]
        while path[-1] != source_id:
            path.append(parents[path[-1]])
        path.reverse()
        bottleneck = min(residual[u][v] for u, v in zip(path, path[1:]))
        for u, v in zip(path, path[1:]):
            residual[u][v] -= bottleneck
            residual[v][u] += bottleneck
        result.value += bottleneck
        result.augmenting_paths.append(path)
        yield visit(sink_id, path=path, bottleneck=bottleneck, total=result.value)

    result.edge_flows = _assign_edge_flows(view, capacity, residual)
    for ef in result.edge_flows:
        if ef.flow > 0:
            yield edge_used(ef.edge_id, node_id=ef.to_id, flow=ef.flow, capacity=ef.capacity)
    result.min_cut = sorted(_reachable(residual, source_id))
    yield done(result)


def _augmenting_path(residual: Matrix, source_id: str, sink_id: str) -> dict[str, str] | None:
    parents: dict[str, str] = {}
    seen = {source_id}
    queue: deque[str] = deque([source_id])
    while queue:
        u = queue.popleft()
        for v, r in residual[u].items():
            if r > 0 and v not in seen:
                seen.add(v)
                parents[v] = u
                if v == sink_id:
                    return parents
                queue.append(v)
    return None


def _reachable(residual: Matrix, source_id: str) -> set[str]:
    seen = {source_id}
    queue: deque[str] = deque([source_id])
    while queue:
        u = queue.popleft()
        for v, r in residual[u].items():
            if r > 0 and v not in seen:
                seen.add(v)
                queue.append(v)
    return seen


def _assign_edge_flows(view: AdjacencyView, capacity: Matrix, residual: Matrix) -> list[EdgeFlow]:
    # Realized flow per arc, shared among the edges feeding that arc in
    # insertion order, each edge taking at most its own weight.
    remaining: dict[tuple[str, str], float] = {}
    for u, row in capacity.items():
        for v, c in row.items():
            remaining[(u, v)] = max(0.0, c - residual[u][v])

    def take(u: str, v: str, limit: float) -> float:
        amount = min(limit, remaining.get((u, v), 0.0))
        if amount > 0:
            remaining[(u, v)] -= amount
        return amount

    flows: list[EdgeFlow] = []
    for edge in view.edges:
        forward = take(edge.from_id, edge.to_id, edge.weight)
        backward = 0.0
        if not edge.directed and edge.from_id != edge.to_id:
            backward = take(edge.to_id, edge.from_id, edge.weight)
        if backward > forward:
            flows.append(EdgeFlow(edge.id, edge.to_id, edge.from_id, backward, edge.weight))
        else:
            flows.append(EdgeFlow(edge.id, edge.from_id, edge.to_id, forward, edge.weight))
    return flows


def max_flow(view: AdjacencyView, source_id: str, sink_id: str) -> MaxFlowResult:
    return final_result(max_flow_steps(view, source_id, sink_id))
