"""Two-coloring check, component by component."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graphsandbox.steps import Step, done, edge_used, final_result, visit

if TYPE_CHECKING:
    from graphsandbox.graph import AdjacencyView


@dataclass
class Conflict:
    node_id: str
    neighbor_id: str
    edge_id: str


@dataclass
class BipartiteResult:
    is_bipartite: bool
    coloring: dict[str, int] = field(default_factory=dict)
    conflict: Conflict | None = None

    def partition(self) -> tuple[list[str], list[str]]:
        left = [n for n, c in self.coloring.items() if c == 0]
        right = [n for n, c in self.coloring.items() if c == 1]
        return left, right


def bipartite_steps(view: AdjacencyView) -> Iterator[Step]:
    return _bipartite(view)


def _bipartite(view: AdjacencyView) -> Iterator[Step]:
    # Edge direction is ignored: coloring is a property of the underlying
    # undirected graph.
    undirected = _undirected_neighbors(view)
    color: dict[str, int] = {}

    for root in view.nodes:
        if root in color:
            continue
        color[root] = 0
        yield visit(root, color=0, root=True)
        queue: deque[str] = deque([root])
        while queue:
            u = queue.popleft()
            for v, edge_id in undirected[u]:
                if v not in color:
                    color[v] = 1 - color[u]
                    queue.append(v)
                    yield visit(v, color=color[v], parent=u)
                elif color[v] == color[u]:
                    yield edge_used(edge_id, node_id=v, conflict=True)
                    # coloring is partial here, so it is not reported
                    yield done(
                        BipartiteResult(
                            is_bipartite=False,
                            conflict=Conflict(node_id=u, neighbor_id=v, edge_id=edge_id),
                        )
                    )
                    return

    yield done(BipartiteResult(is_bipartite=True, coloring=color))


def _undirected_neighbors(view: AdjacencyView) -> dict[str, list[tuple[str, str]]]:
    neighbors: dict[str, list[tuple[str, str]]] = {n: [] for n in view.nodes}
    for edge in view.edges:
        neighbors[edge.from_id].append((edge.to_id, edge.id))
        if edge.from_id != edge.to_id:
            neighbors[edge.to_id].append((edge.from_id, edge.id))
    return neighbors


def check_bipartite(view: AdjacencyView) -> BipartiteResult:
    return final_result(bipartite_steps(view))
