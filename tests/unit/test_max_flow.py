"""Tests for engines.max_flow Edmonds–Karp."""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path

import pytest

from graphsandbox.engines.max_flow import MaxFlowResult, max_flow, max_flow_steps
from graphsandbox.errors import InvalidArgument
from graphsandbox.graph import AdjacencyView, build_adjacency
from graphsandbox.graph_model import GraphModel
from graphsandbox.snapshot_io import load_graph


def _network(edges: list[tuple[str, str, float]], directed: bool = True) -> GraphModel:
    node_ids = list(dict.fromkeys(n for u, v, _ in edges for n in (u, v)))
    return GraphModel.from_snapshot(
        {
            "directed": directed,
            "nodes": [{"id": n} for n in node_ids],
            "edges": [
                {"id": f"e{i + 1}", "from": u, "to": v, "weight": w, "directed": directed}
                for i, (u, v, w) in enumerate(edges)
            ],
        }
    )


def _assert_valid_flow(view: AdjacencyView, result: MaxFlowResult) -> None:
    balance: dict[str, float] = defaultdict(float)
    for ef in result.edge_flows:
        assert 0 <= ef.flow <= ef.capacity
        balance[ef.from_id] -= ef.flow
        balance[ef.to_id] += ef.flow
    for node_id in view.nodes:
        if node_id not in (result.source, result.sink):
            assert balance[node_id] == pytest.approx(0)
    assert -balance[result.source] == pytest.approx(result.value)


class TestTextbookNetwork:
    def test_value_matches_min_cut(self, fixtures_dir: Path) -> None:
        view = build_adjacency(load_graph(fixtures_dir / "clrs-flow.json"))
        result = max_flow(view, "s", "t")

        assert result.value == 23
        cut_side = set(result.min_cut)
        assert "s" in cut_side
        assert "t" not in cut_side
        cut_capacity = sum(
            e.weight for e in view.edges if e.from_id in cut_side and e.to_id not in cut_side
        )
        assert cut_capacity == result.value

    def test_conservation_and_capacity(self, fixtures_dir: Path) -> None:
        view = build_adjacency(load_graph(fixtures_dir / "clrs-flow.json"))
        _assert_valid_flow(view, max_flow(view, "s", "t"))


class TestUndirectedCapacity:
    def test_each_direction_has_full_capacity(self) -> None:
        view = build_adjacency(_network([("A", "B", 5)], directed=False))
        result = max_flow(view, "B", "A")
        assert result.value == 5
        (ef,) = result.edge_flows
        assert (ef.from_id, ef.to_id, ef.flow) == ("B", "A", 5)

    def test_parallel_edges_accumulate(self) -> None:
        view = build_adjacency(_network([("A", "B", 3), ("B", "A", 4)], directed=False))
        result = max_flow(view, "A", "B")
        assert result.value == 7
        flows = {ef.edge_id: (ef.from_id, ef.to_id, ef.flow) for ef in result.edge_flows}
        assert flows == {"e1": ("A", "B", 3), "e2": ("A", "B", 4)}
        _assert_valid_flow(view, result)

    def test_campus_map(self, campus: GraphModel) -> None:
        view = build_adjacency(campus)
        result = max_flow(view, "A", "E")
        # bounded by E's edges: D-E 4 + F-E 1
        assert result.value == 5
        _assert_valid_flow(view, result)


class TestNoFlow:
    def test_unreachable_sink_gives_zero(self) -> None:
        view = build_adjacency(_network([("A", "B", 3), ("C", "B", 2)]))
        result = max_flow(view, "A", "C")
        assert result.value == 0
        assert all(ef.flow == 0 for ef in result.edge_flows)
        assert result.augmenting_paths == []

    def test_unweighted_graph_uses_unit_capacity(self) -> None:
        graph = _network([("A", "B", 7), ("A", "C", 7), ("B", "D", 7), ("C", "D", 7)])
        graph.set_weighted(False)
        assert max_flow(build_adjacency(graph), "A", "D").value == 2


class TestErrors:
    def test_source_equals_sink(self) -> None:
        view = build_adjacency(_network([("A", "B", 1)]))
        with pytest.raises(InvalidArgument):
            max_flow_steps(view, "A", "A")

    def test_unknown_sink(self) -> None:
        view = build_adjacency(_network([("A", "B", 1)]))
        with pytest.raises(InvalidArgument):
            max_flow_steps(view, "A", "Z")
