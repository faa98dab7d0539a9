"""Integration tests for the graphsandbox CLI."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from graphsandbox.cli import app

FIXTURES = Path(__file__).parent.parent / "fixtures"
runner = CliRunner()


class TestRun:
    def test_dijkstra_on_legacy_file(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            [
                "run",
                "dijkstra",
                "--graph",
                str(FIXTURES / "campus-legacy.json"),
                "--start",
                "A",
                "--target",
                "E",
                "--out",
                str(tmp_path),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "A -> C -> F -> E" in result.output
        assert "total distance: 10" in result.output

        data = json.loads((tmp_path / "result.json").read_text(encoding="utf-8"))
        assert data["algorithm"] == "dijkstra"
        assert data["distance"] == 10
        assert data["path"] == ["A", "C", "F", "E"]
        assert data["reachable"] is True

        meta = json.loads((tmp_path / "run-metadata.json").read_text(encoding="utf-8"))
        assert meta["algorithm"] == "dijkstra"
        assert meta["timestamp_utc"].endswith("Z")

    def test_max_flow_writes_graph_with_flow(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            [
                "run",
                "max_flow",
                "--graph",
                str(FIXTURES / "clrs-flow.json"),
                "--source",
                "s",
                "--sink",
                "t",
                "--quiet",
                "--out",
                str(tmp_path),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Maximum flow: 23" in result.output

        saved = json.loads((tmp_path / "graph-with-flow.json").read_text(encoding="utf-8"))
        into_sink = sum(e["flow"] for e in saved["edges"] if e["to"] == "t")
        assert into_sink == 23

    def test_steps_are_printed(self) -> None:
        result = runner.invoke(
            app, ["run", "bfs", "--graph", str(FIXTURES / "campus-legacy.json"), "--start", "A"]
        )
        assert result.exit_code == 0, result.output
        assert "visit" in result.output
        assert "BFS order: A" in result.output

    def test_quiet_hides_steps(self) -> None:
        result = runner.invoke(
            app,
            ["run", "kruskal", "--graph", str(FIXTURES / "campus-legacy.json"), "--quiet"],
        )
        assert result.exit_code == 0, result.output
        assert "edgeUsed" not in result.output
        assert "Total weight: 15" in result.output

    def test_euler_reports_absence(self, tmp_path: Path) -> None:
        graph = tmp_path / "star.json"
        graph.write_text(
            json.dumps(
                {
                    "nodes": [{"id": n} for n in "ABCD"],
                    "edges": [["A", "B", 1], ["A", "C", 1], ["A", "D", 1]],
                }
            )
        )
        result = runner.invoke(app, ["run", "euler", "--graph", str(graph), "--quiet"])
        assert result.exit_code == 0, result.output
        assert "No Eulerian path or circuit" in result.output


class TestRunErrors:
    def test_missing_required_node(self) -> None:
        result = runner.invoke(
            app,
            ["run", "dijkstra", "--graph", str(FIXTURES / "campus-legacy.json"), "--start", "A"],
        )
        assert result.exit_code == 2
        assert "Pass --target" in result.output

    def test_unknown_algorithm(self) -> None:
        result = runner.invoke(
            app, ["run", "floyd", "--graph", str(FIXTURES / "campus-legacy.json")]
        )
        assert result.exit_code == 2
        assert "Unknown algorithm" in result.output

    def test_unknown_euler_method(self) -> None:
        result = runner.invoke(
            app,
            ["run", "euler", "--graph", str(FIXTURES / "campus-legacy.json"), "--method", "bogus"],
        )
        assert result.exit_code == 2
        assert "Unknown Euler method" in result.output

    def test_unknown_node(self) -> None:
        result = runner.invoke(
            app, ["run", "bfs", "--graph", str(FIXTURES / "campus-legacy.json"), "--start", "Z"]
        )
        assert result.exit_code == 2

    def test_malformed_graph_file(self) -> None:
        result = runner.invoke(
            app, ["run", "bfs", "--graph", str(FIXTURES / "truncated.json"), "--start", "A"]
        )
        assert result.exit_code == 2
        assert "not valid JSON" in result.output


class TestShow:
    def test_adjacency_list(self) -> None:
        result = runner.invoke(app, ["show", "--graph", str(FIXTURES / "campus-legacy.json")])
        assert result.exit_code == 0, result.output
        assert "A: B(5), C(3)" in result.output

    def test_matrix(self) -> None:
        result = runner.invoke(
            app,
            ["show", "--graph", str(FIXTURES / "campus-legacy.json"), "--format", "matrix"],
        )
        assert result.exit_code == 0, result.output
        assert "Adjacency matrix" in result.output


class TestDemo:
    def test_writes_campus_map(self, tmp_path: Path) -> None:
        out = tmp_path / "campus.json"
        result = runner.invoke(app, ["demo", "--out", str(out)])
        assert result.exit_code == 0, result.output

        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data["nodes"]) == 6
        assert len(data["edges"]) == 8

    def test_config_makes_demo_directed(self, tmp_path: Path) -> None:
        cfg = tmp_path / "graphsandbox.yml"
        cfg.write_text("graph:\n  directed: true\n")
        out = tmp_path / "campus.json"
        result = runner.invoke(app, ["demo", "--out", str(out), "--config", str(cfg)])
        assert result.exit_code == 0, result.output

        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["directed"] is True
        assert all(e["directed"] for e in data["edges"])
