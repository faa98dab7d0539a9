"""Breadth-first and depth-first traversal."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graphsandbox.graph import PathResult, trace_path
from graphsandbox.steps import Step, done, edge_used, final_result, visit

if TYPE_CHECKING:
    from graphsandbox.graph import AdjacencyView


@dataclass
class TraversalResult:
    algorithm: str
    start: str
    order: list[str] = field(default_factory=list)
    parents: dict[str, str] = field(default_factory=dict)
    tree_edges: list[str] = field(default_factory=list)

    def path_to(self, target_id: str) -> PathResult:
        """Tree path from start to *target_id* (shortest by hops for BFS)."""
        return trace_path(self.parents, self.start, target_id)


def bfs_steps(view: AdjacencyView, start_id: str) -> Iterator[Step]:
    """Validate, then return the lazy BFS step sequence."""
    view.require(start_id)
    return _bfs(view, start_id)


def _bfs(view: AdjacencyView, start_id: str) -> Iterator[Step]:
    result = TraversalResult(algorithm="bfs", start=start_id)
    visited: set[str] = {start_id}
    queue: deque[str] = deque([start_id])

    while queue:
        current = queue.popleft()
        result.order.append(current)
        yield visit(current, index=len(result.order) - 1, frontier=list(queue))
        for neighbor, _weight, edge_id in view.neighbors(current):
            if neighbor in visited:
                continue
            # marked on enqueue so a node never sits in the queue twice
            visited.add(neighbor)
            result.parents[neighbor] = current
            result.tree_edges.append(edge_id)
            queue.append(neighbor)
            yield edge_used(edge_id, node_id=neighbor, parent=current)

    yield done(result)


def dfs_steps(view: AdjacencyView, start_id: str) -> Iterator[Step]:
    """Validate, then return the lazy DFS step sequence."""
    view.require(start_id)
    return _dfs(view, start_id)


def _dfs(view: AdjacencyView, start_id: str) -> Iterator[Step]:
    result = TraversalResult(algorithm="dfs", start=start_id)
    visited: set[str] = set()
    # (node, parent, edge that led here)
    stack: list[tuple[str, str | None, str | None]] = [(start_id, None, None)]

    while stack:
        current, parent, via = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        result.order.append(current)
        if parent is not None and via is not None:
            result.parents[current] = parent
            result.tree_edges.append(via)
            yield edge_used(via, node_id=current, parent=parent)
        yield visit(current, index=len(result.order) - 1, stack=[s[0] for s in stack])

        # reversed so the first neighbor is popped first
        for neighbor, _weight, edge_id in reversed(view.neighbors(current)):
            if neighbor not in visited:
                stack.append((neighbor, current, edge_id))

    yield done(result)


def bfs(view: AdjacencyView, start_id: str) -> TraversalResult:
    return final_result(bfs_steps(view, start_id))


def dfs(view: AdjacencyView, start_id: str) -> TraversalResult:
    return final_result(dfs_steps(view, start_id))
