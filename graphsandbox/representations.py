"""Alternative representations of a graph: matrix, adjacency list, edge list."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphsandbox.graph import AdjacencyView, EdgeRef


def adjacency_matrix(view: AdjacencyView) -> tuple[list[str], list[list[float]]]:
    """Weights indexed by sorted node id; 0 means no edge.

    Undirected edges fill both cells. Parallel edges keep the last weight.
    """
    ids = sorted(view.nodes)
    index = {node_id: i for i, node_id in enumerate(ids)}
    matrix = [[0.0] * len(ids) for _ in ids]
    for edge in view.edges:
        u, v = index[edge.from_id], index[edge.to_id]
        matrix[u][v] = edge.weight
        if not edge.directed:
            matrix[v][u] = edge.weight
    return ids, matrix


def adjacency_list(view: AdjacencyView) -> dict[str, list[tuple[str, float]]]:
    return {
        node_id: [(entry.neighbor, entry.weight) for entry in view.neighbors(node_id)]
        for node_id in view.nodes
    }


def edge_list(view: AdjacencyView) -> list[EdgeRef]:
    return list(view.edges)


def format_weight(weight: float) -> str:
    return str(int(weight)) if float(weight).is_integer() else f"{weight:g}"


def format_adjacency_list(view: AdjacencyView) -> str:
    lines = []
    for node_id, entries in adjacency_list(view).items():
        rendered = ", ".join(f"{n}({format_weight(w)})" for n, w in entries)
        lines.append(f"{node_id}: {rendered}")
    return "\n".join(lines)
