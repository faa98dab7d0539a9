"""Tests for engines.traversal BFS and DFS."""

from __future__ import annotations

import pytest

from graphsandbox.engines.traversal import bfs, bfs_steps, dfs
from graphsandbox.errors import InvalidArgument
from graphsandbox.graph import build_adjacency
from graphsandbox.graph_model import GraphModel
from graphsandbox.steps import StepKind


def _graph(n: int, edges: list[tuple[str, str]], directed: bool = False) -> GraphModel:
    graph = GraphModel(directed=directed)
    for _ in range(n):
        graph.add_node()
    for u, v in edges:
        graph.add_or_update_edge(u, v, 1)
    return graph


class TestBfsChain:
    def test_from_end(self) -> None:
        view = build_adjacency(_graph(4, [("A", "B"), ("B", "C"), ("C", "D")]))
        assert bfs(view, "A").order == ["A", "B", "C", "D"]

    def test_from_middle_follows_insertion_order(self) -> None:
        view = build_adjacency(_graph(4, [("A", "B"), ("B", "C"), ("C", "D")]))
        assert bfs(view, "C").order == ["C", "B", "D", "A"]

    def test_from_middle_other_insertion_order(self) -> None:
        view = build_adjacency(_graph(4, [("C", "D"), ("B", "C"), ("A", "B")]))
        assert bfs(view, "C").order == ["C", "D", "B", "A"]


class TestBfsPaths:
    def test_shortest_hop_path(self) -> None:
        view = build_adjacency(
            _graph(5, [("A", "B"), ("B", "C"), ("C", "E"), ("A", "D"), ("D", "E")])
        )
        result = bfs(view, "A")
        path = result.path_to("E")
        assert path.hops == 2
        assert path.path == ["A", "D", "E"]

    def test_disconnected_nodes_absent(self) -> None:
        view = build_adjacency(_graph(4, [("A", "B")]))
        result = bfs(view, "A")
        assert result.order == ["A", "B"]
        assert result.path_to("D").path == []

    def test_directed_edges_respected(self) -> None:
        view = build_adjacency(_graph(3, [("A", "B"), ("C", "A")], directed=True))
        assert bfs(view, "A").order == ["A", "B"]


class TestBfsSteps:
    def test_visit_steps_then_done(self) -> None:
        view = build_adjacency(_graph(3, [("A", "B"), ("A", "C")]))
        steps = list(bfs_steps(view, "A"))
        visits = [s.node_id for s in steps if s.kind == StepKind.VISIT]
        assert visits == ["A", "B", "C"]
        assert steps[-1].kind == StepKind.DONE
        assert steps[-1].result.order == ["A", "B", "C"]
        assert [s.edge_id for s in steps if s.kind == StepKind.EDGE_USED] == ["e1", "e2"]

    def test_unknown_start_fails_before_any_step(self) -> None:
        view = build_adjacency(_graph(2, [("A", "B")]))
        with pytest.raises(InvalidArgument):
            bfs_steps(view, "Z")


class TestDfs:
    def test_goes_deep_first(self) -> None:
        view = build_adjacency(_graph(4, [("A", "B"), ("A", "C"), ("B", "D")]))
        result = dfs(view, "A")
        assert result.order == ["A", "B", "D", "C"]
        assert result.parents == {"B": "A", "D": "B", "C": "A"}

    def test_cycle_visits_each_node_once(self) -> None:
        view = build_adjacency(_graph(3, [("A", "B"), ("B", "C"), ("C", "A")]))
        assert dfs(view, "A").order == ["A", "B", "C"]

    def test_unknown_start(self) -> None:
        view = build_adjacency(_graph(1, []))
        with pytest.raises(InvalidArgument):
            dfs(view, "Q")
