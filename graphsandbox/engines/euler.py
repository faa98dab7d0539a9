"""Eulerian trail and circuit — existence check and construction."""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from graphsandbox.errors import InvalidArgument
from graphsandbox.steps import Step, done, edge_used, final_result, visit

if TYPE_CHECKING:
    from graphsandbox.graph import AdjacencyView


class EulerKind(StrEnum):
    CIRCUIT = "circuit"
    PATH = "path"
    NONE = "none"


class EulerMethod(StrEnum):
    HIERHOLZER = "hierholzer"
    FLEURY = "fleury"


@dataclass
class EulerResult:
    kind: EulerKind
    path: list[str] = field(default_factory=list)
    edge_ids: list[str] = field(default_factory=list)
    odd_nodes: list[str] = field(default_factory=list)
    reason: str = ""

    @property
    def exists(self) -> bool:
        return self.kind != EulerKind.NONE


@dataclass
class _Analysis:
    kind: EulerKind
    starts: list[str]
    odd_nodes: list[str] = field(default_factory=list)
    reason: str = ""


# Incidence lists: node -> [(other end, edge id)]
Incidence = dict[str, list[tuple[str, str]]]


def analyze(view: AdjacencyView, respect_direction: bool = False) -> _Analysis:
    """Decide whether a circuit, a path or nothing exists, and where to start.

    By default the graph is read as undirected and odd degrees are counted.
    With *respect_direction* every edge keeps its direction and in-degree
    must match out-degree (one surplus node each way for a path).
    """
    if not view.edges:
        return _Analysis(EulerKind.NONE, [], reason="Graph has no edges")
    directed = respect_direction and view.directed
    if not _edges_connected(view):
        return _Analysis(EulerKind.NONE, [], reason="Edges span more than one component")

    if directed:
        return _analyze_directed(view)

    degree: dict[str, int] = defaultdict(int)
    for edge in view.edges:
        degree[edge.from_id] += 1
        degree[edge.to_id] += 1
    odd = [n for n in view.nodes if degree[n] % 2 == 1]
    if not odd:
        starts = [n for n in view.nodes if degree[n] > 0]
        return _Analysis(EulerKind.CIRCUIT, starts)
    if len(odd) == 2:
        return _Analysis(EulerKind.PATH, odd, odd_nodes=odd)
    return _Analysis(
        EulerKind.NONE,
        [],
        odd_nodes=odd,
        reason=f"{len(odd)} nodes have odd degree",
    )


def _analyze_directed(view: AdjacencyView) -> _Analysis:
    balance: dict[str, int] = defaultdict(int)
    touched: set[str] = set()
    for edge in view.edges:
        balance[edge.from_id] += 1
        balance[edge.to_id] -= 1
        touched.update((edge.from_id, edge.to_id))
    unbalanced = [n for n in view.nodes if balance[n] != 0]
    if not unbalanced:
        return _Analysis(EulerKind.CIRCUIT, [n for n in view.nodes if n in touched])
    heads = [n for n in unbalanced if balance[n] == 1]
    tails = [n for n in unbalanced if balance[n] == -1]
    if len(unbalanced) == 2 and len(heads) == 1 and len(tails) == 1:
        return _Analysis(EulerKind.PATH, heads, odd_nodes=unbalanced)
    return _Analysis(
        EulerKind.NONE,
        [],
        odd_nodes=unbalanced,
        reason="In-degree and out-degree differ on too many nodes",
    )


def _edges_connected(view: AdjacencyView) -> bool:
    neighbors: dict[str, set[str]] = defaultdict(set)
    for edge in view.edges:
        neighbors[edge.from_id].add(edge.to_id)
        neighbors[edge.to_id].add(edge.from_id)
    first = view.edges[0].from_id
    seen = {first}
    queue: deque[str] = deque([first])
    while queue:
        u = queue.popleft()
        for v in neighbors[u]:
            if v not in seen:
                seen.add(v)
                queue.append(v)
    return len(seen) == len(neighbors)


def _incidence(view: AdjacencyView, directed: bool) -> Incidence:
    lists: Incidence = {n: [] for n in view.nodes}
    for edge in view.edges:
        lists[edge.from_id].append((edge.to_id, edge.id))
        if not directed:
            lists[edge.to_id].append((edge.from_id, edge.id))
    return lists


def euler_steps(
    view: AdjacencyView,
    start_id: str | None = None,
    method: EulerMethod | str = EulerMethod.HIERHOLZER,
    respect_direction: bool = False,
) -> Iterator[Step]:
    """Validate, then return the lazy Euler step sequence.

    Non-existence is reported through the result, never raised. A *start_id*
    that cannot begin the trail is rejected.
    """
    try:
        method = EulerMethod(method)
    except ValueError:
        valid = ", ".join(EulerMethod)
        raise InvalidArgument(f"Unknown Euler method {method!r}. Valid values: {valid}") from None
    directed = respect_direction and view.directed
    if method == EulerMethod.FLEURY and directed:
        raise InvalidArgument("Fleury's construction is only offered for undirected graphs")
    if start_id is not None:
        view.require(start_id)

    analysis = analyze(view, respect_direction)
    if analysis.kind != EulerKind.NONE and start_id is not None:
        if start_id not in analysis.starts:
            allowed = ", ".join(analysis.starts)
            raise InvalidArgument(f"An Eulerian {analysis.kind} must start at one of: {allowed}")
    return _euler(view, analysis, start_id, method, directed)


def _euler(
    view: AdjacencyView,
    analysis: _Analysis,
    start_id: str | None,
    method: EulerMethod,
    directed: bool,
) -> Iterator[Step]:
    if analysis.kind == EulerKind.NONE:
        yield done(
            EulerResult(
                kind=EulerKind.NONE,
                odd_nodes=analysis.odd_nodes,
                reason=analysis.reason,
            )
        )
        return

    start = start_id if start_id is not None else analysis.starts[0]
    lists = _incidence(view, directed)
    result = EulerResult(kind=analysis.kind, odd_nodes=analysis.odd_nodes)
    if method == EulerMethod.FLEURY:
        yield from _fleury(lists, start, result)
    else:
        yield from _hierholzer(lists, start, result)
    yield done(result)


def _hierholzer(lists: Incidence, start: str, result: EulerResult) -> Iterator[Step]:
    used: set[str] = set()
    cursor: dict[str, int] = dict.fromkeys(lists, 0)
    stack: list[str] = [start]
    edge_stack: list[str] = []
    circuit: list[str] = []
    circuit_edges: list[str] = []

    while stack:
        v = stack[-1]
        incident = lists[v]
        while cursor[v] < len(incident) and incident[cursor[v]][1] in used:
            cursor[v] += 1
        if cursor[v] < len(incident):
            w, edge_id = incident[cursor[v]]
            cursor[v] += 1
            used.add(edge_id)
            stack.append(w)
            edge_stack.append(edge_id)
            yield edge_used(edge_id, node_id=w, parent=v)
        else:
            # stuck: v is final at this position of the circuit
            circuit.append(stack.pop())
            if edge_stack:
                circuit_edges.append(edge_stack.pop())
            yield visit(v, position=len(circuit) - 1)

    result.path = circuit[::-1]
    result.edge_ids = circuit_edges[::-1]


def _fleury(lists: Incidence, start: str, result: EulerResult) -> Iterator[Step]:
    used: set[str] = set()
    current = start
    result.path = [start]
    yield visit(start, position=0)
    while True:
        available = [(w, eid) for w, eid in lists[current] if eid not in used]
        if not available:
            break
        chosen = available[0]
        if len(available) > 1:
            for w, eid in available:
                if not _is_bridge(lists, used, current, eid):
                    chosen = (w, eid)
                    break
        w, edge_id = chosen
        used.add(edge_id)
        result.edge_ids.append(edge_id)
        result.path.append(w)
        yield edge_used(edge_id, node_id=w, parent=current)
        current = w


def _is_bridge(lists: Incidence, used: set[str], u: str, edge_id: str) -> bool:
    before = _count_reachable(lists, used, u)
    after = _count_reachable(lists, used | {edge_id}, u)
    return after < before


def _count_reachable(lists: Incidence, used: set[str], start: str) -> int:
    seen = {start}
    stack = [start]
    while stack:
        u = stack.pop()
        for v, eid in lists[u]:
            if eid not in used and v not in seen:
                seen.add(v)
                stack.append(v)
    return len(seen)


def euler(
    view: AdjacencyView,
    start_id: str | None = None,
    method: EulerMethod | str = EulerMethod.HIERHOLZER,
    respect_direction: bool = False,
) -> EulerResult:
    return final_result(euler_steps(view, start_id, method, respect_direction))
