"""Tests for engines.bipartite.check_bipartite."""

from __future__ import annotations

from graphsandbox.engines.bipartite import check_bipartite
from graphsandbox.graph import build_adjacency
from graphsandbox.graph_model import GraphModel


def _graph(n: int, edges: list[tuple[str, str]], directed: bool = False) -> GraphModel:
    graph = GraphModel(directed=directed)
    for _ in range(n):
        graph.add_node()
    for u, v in edges:
        graph.add_or_update_edge(u, v, 1)
    return graph


class TestNotBipartite:
    def test_triangle(self) -> None:
        result = check_bipartite(build_adjacency(_graph(3, [("A", "B"), ("B", "C"), ("C", "A")])))
        assert result.is_bipartite is False
        assert result.conflict is not None
        assert result.coloring == {}

    def test_self_loop(self) -> None:
        result = check_bipartite(build_adjacency(_graph(2, [("A", "B"), ("B", "B")])))
        assert result.is_bipartite is False
        assert result.conflict is not None
        assert result.conflict.edge_id == "e2"

    def test_directed_triangle_read_as_undirected(self) -> None:
        graph = _graph(3, [("A", "B"), ("B", "C"), ("C", "A")], directed=True)
        assert check_bipartite(build_adjacency(graph)).is_bipartite is False


class TestBipartite:
    def test_four_cycle_has_valid_coloring(self) -> None:
        edges = [("A", "B"), ("B", "C"), ("C", "D"), ("D", "A")]
        result = check_bipartite(build_adjacency(_graph(4, edges)))
        assert result.is_bipartite is True
        assert set(result.coloring) == {"A", "B", "C", "D"}
        for u, v in edges:
            assert result.coloring[u] != result.coloring[v]

    def test_every_component_colored(self) -> None:
        result = check_bipartite(build_adjacency(_graph(5, [("A", "B"), ("C", "D")])))
        assert result.is_bipartite is True
        assert result.coloring == {"A": 0, "B": 1, "C": 0, "D": 1, "E": 0}
        left, right = result.partition()
        assert left == ["A", "C", "E"]
        assert right == ["B", "D"]

    def test_empty_graph(self) -> None:
        result = check_bipartite(build_adjacency(GraphModel()))
        assert result.is_bipartite is True
        assert result.coloring == {}
