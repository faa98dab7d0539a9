"""Minimum spanning forest — Prim and Kruskal."""

from __future__ import annotations

import heapq
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graphsandbox.errors import InvalidState
from graphsandbox.steps import Step, done, edge_used, final_result, visit

if TYPE_CHECKING:
    from graphsandbox.graph import AdjacencyView


@dataclass
class SpanningForestResult:
    algorithm: str
    edge_ids: list[str] = field(default_factory=list)
    total_weight: float = 0.0
    trees: int = 0


class DisjointSet:
    """Union-find with path compression and union by rank."""

    def __init__(self, items: tuple[str, ...] | list[str]) -> None:
        self.parent: dict[str, str] = {item: item for item in items}
        self.rank: dict[str, int] = dict.fromkeys(items, 0)

    def find(self, item: str) -> str:
        root = item
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[item] != root:
            self.parent[item], item = root, self.parent[item]
        return root

    def union(self, a: str, b: str) -> bool:
        """Merge the sets of *a* and *b*; False if they were already one."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        return True


def _require_undirected(view: AdjacencyView) -> None:
    if view.directed:
        raise InvalidState("Minimum spanning trees need an undirected graph")


def prim_steps(view: AdjacencyView, root_id: str | None = None) -> Iterator[Step]:
    """Validate, then return the lazy Prim step sequence.

    Each component is grown from its first node in insertion order; *root_id*,
    when given, seeds the first tree.
    """
    _require_undirected(view)
    if root_id is not None:
        view.require(root_id)
    return _prim(view, root_id)


def _prim(view: AdjacencyView, root_id: str | None) -> Iterator[Step]:
    result = SpanningForestResult(algorithm="prim")
    order = {edge.id: index for index, edge in enumerate(view.edges)}
    in_tree: set[str] = set()
    roots = list(view.nodes)
    if root_id is not None:
        roots.remove(root_id)
        roots.insert(0, root_id)

    for root in roots:
        if root in in_tree:
            continue
        result.trees += 1
        in_tree.add(root)
        yield visit(root, root=True, tree=result.trees)
        # (weight, insertion index, edge id, node outside the tree)
        heap: list[tuple[float, int, str, str]] = []
        _push_frontier(heap, view, root, in_tree, order)
        while heap:
            weight, _, edge_id, v = heapq.heappop(heap)
            if v in in_tree:
                continue
            in_tree.add(v)
            result.edge_ids.append(edge_id)
            result.total_weight += weight
            yield edge_used(edge_id, node_id=v, weight=weight, total=result.total_weight)
            yield visit(v, tree=result.trees)
            _push_frontier(heap, view, v, in_tree, order)

    yield done(result)


def _push_frontier(
    heap: list[tuple[float, int, str, str]],
    view: AdjacencyView,
    u: str,
    in_tree: set[str],
    order: dict[str, int],
) -> None:
    for v, weight, edge_id in view.neighbors(u):
        if v not in in_tree:
            heapq.heappush(heap, (weight, order[edge_id], edge_id, v))


def kruskal_steps(view: AdjacencyView) -> Iterator[Step]:
    _require_undirected(view)
    return _kruskal(view)


def _kruskal(view: AdjacencyView) -> Iterator[Step]:
    result = SpanningForestResult(algorithm="kruskal")
    components = DisjointSet(view.nodes)
    target = max(len(view.nodes) - 1, 0)

    # sorted() is stable, so equal weights keep insertion order
    for edge in sorted(view.edges, key=lambda e: e.weight):
        if len(result.edge_ids) >= target:
            break
        accepted = components.union(edge.from_id, edge.to_id)
        if accepted:
            result.edge_ids.append(edge.id)
            result.total_weight += edge.weight
        yield edge_used(
            edge.id,
            weight=edge.weight,
            accepted=accepted,
            total=result.total_weight,
        )

    result.trees = len(view.nodes) - len(result.edge_ids)
    yield done(result)


def prim(view: AdjacencyView, root_id: str | None = None) -> SpanningForestResult:
    return final_result(prim_steps(view, root_id))


def kruskal(view: AdjacencyView) -> SpanningForestResult:
    return final_result(kruskal_steps(view))
