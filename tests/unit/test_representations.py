"""Tests for representations: matrix, adjacency list, edge list."""

from __future__ import annotations

from graphsandbox.graph import build_adjacency
from graphsandbox.graph_model import GraphModel
from graphsandbox.representations import (
    adjacency_matrix,
    edge_list,
    format_adjacency_list,
    format_weight,
)


class TestAdjacencyMatrix:
    def test_undirected_is_symmetric(self, campus: GraphModel) -> None:
        ids, matrix = adjacency_matrix(build_adjacency(campus))
        assert ids == ["A", "B", "C", "D", "E", "F"]
        for i in range(len(ids)):
            for j in range(len(ids)):
                assert matrix[i][j] == matrix[j][i]
        assert matrix[0][1] == 5
        assert matrix[0][4] == 0

    def test_directed_fills_one_cell(self) -> None:
        graph = GraphModel(directed=True)
        graph.add_node()
        graph.add_node()
        graph.add_or_update_edge("B", "A", 2)
        _, matrix = adjacency_matrix(build_adjacency(graph))
        assert matrix == [[0, 0], [2, 0]]

    def test_unweighted_uses_one(self, campus: GraphModel) -> None:
        campus.set_weighted(False)
        _, matrix = adjacency_matrix(build_adjacency(campus))
        assert {cell for row in matrix for cell in row} == {0, 1}


class TestAdjacencyList:
    def test_campus_text(self, campus: GraphModel) -> None:
        text = format_adjacency_list(build_adjacency(campus))
        assert text.splitlines() == [
            "A: B(5), C(3)",
            "B: A(5), D(2), C(6)",
            "C: A(3), D(7), F(6), B(6)",
            "D: B(2), C(7), E(4)",
            "E: D(4), F(1)",
            "F: E(1), C(6)",
        ]

    def test_isolated_node_listed(self) -> None:
        graph = GraphModel()
        graph.add_node()
        assert format_adjacency_list(build_adjacency(graph)) == "A: "


class TestEdgeList:
    def test_insertion_order(self, campus: GraphModel) -> None:
        edges = edge_list(build_adjacency(campus))
        assert [e.id for e in edges] == [f"e{i}" for i in range(1, 9)]
        assert (edges[5].from_id, edges[5].to_id, edges[5].weight) == ("F", "E", 1)


class TestFormatWeight:
    def test_integral(self) -> None:
        assert format_weight(5.0) == "5"

    def test_fractional(self) -> None:
        assert format_weight(2.5) == "2.5"
