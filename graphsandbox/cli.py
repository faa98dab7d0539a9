"""CLI entry point — load a graph, run an algorithm, render the steps."""

from __future__ import annotations

import datetime
import time
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from graphsandbox.config import load_config
from graphsandbox.errors import GraphError, InputRequired
from graphsandbox.graph import build_adjacency
from graphsandbox.graph_model import GraphModel
from graphsandbox.outputs.output_console import (
    render_edge_list,
    render_matrix,
    render_result,
    render_step,
)
from graphsandbox.outputs.output_json import render_json, write_run_metadata
from graphsandbox.representations import adjacency_matrix, format_adjacency_list
from graphsandbox.runner import ALGORITHMS, Runner
from graphsandbox.snapshot_io import ParseError, demo_graph, load_graph, save_graph
from graphsandbox.steps import StepKind

app = typer.Typer(no_args_is_help=True)


class ShowFormat(StrEnum):
    LIST = "list"
    MATRIX = "matrix"
    EDGES = "edges"


@app.callback(invoke_without_command=True)
def _callback() -> None:
    """Graph Sandbox — step through classical graph algorithms."""


@app.command()
def run(
    algorithm: Annotated[str, typer.Argument(help=f"One of: {', '.join(ALGORITHMS)}")],
    graph_path: Annotated[Path, typer.Option("--graph", help="Path to graph JSON file")],
    start: Annotated[str | None, typer.Option("--start", help="Start node id")] = None,
    target: Annotated[str | None, typer.Option("--target", help="Target node id")] = None,
    source: Annotated[str | None, typer.Option("--source", help="Flow source node id")] = None,
    sink: Annotated[str | None, typer.Option("--sink", help="Flow sink node id")] = None,
    method: Annotated[
        str | None, typer.Option("--method", help="Euler construction: hierholzer or fleury")
    ] = None,
    directed_euler: Annotated[
        bool, typer.Option("--directed-euler", help="Respect edge direction for Euler")
    ] = False,
    config_path: Annotated[
        Path | None, typer.Option("--config", help="Path to graphsandbox.yml")
    ] = None,
    out: Annotated[
        Path | None, typer.Option("--out", help="Directory for result.json")
    ] = None,
    animate: Annotated[
        bool, typer.Option("--animate", help="Pause between steps (animation.step_delay_ms)")
    ] = False,
    quiet: Annotated[bool, typer.Option("--quiet", help="Print only the result")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable verbose logging")] = False,
) -> None:
    """Run ALGORITHM against a graph file and print its steps and result."""
    if verbose:
        import logging

        logging.basicConfig(level=logging.DEBUG)

    cfg = load_config(config_path)
    graph = _load_or_exit(graph_path)

    params: dict[str, object] = {
        "start": start,
        "target": target,
        "source": source,
        "sink": sink,
        "method": method,
    }
    if directed_euler:
        params["respect_direction"] = True

    runner = Runner(graph)
    try:
        active = runner.start(algorithm, **params)
    except InputRequired as e:
        typer.echo(f"Error: {e}. Pass --{e.parameter}.", err=True)
        raise SystemExit(2)  # noqa: B904
    except GraphError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(2)  # noqa: B904

    console = Console()
    delay = cfg.animation.step_delay_ms / 1000 if animate else 0.0
    max_steps = cfg.animation.max_steps
    try:
        for index, step in enumerate(active):
            if quiet or step.kind == StepKind.DONE:
                continue
            if max_steps is not None and index >= max_steps:
                continue
            render_step(console, index, step)
            if delay:
                time.sleep(delay)
    except GraphError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(2)  # noqa: B904

    render_result(console, algorithm, active.result)

    if out is not None:
        json_path = render_json(algorithm, active.result, out)
        typer.echo(f"Wrote result (JSON): {json_path.resolve()}")
        meta_path = write_run_metadata(
            {
                "timestamp_utc": (
                    datetime.datetime.now(datetime.UTC).isoformat().replace("+00:00", "Z")
                ),
                "graph_path": str(graph_path.resolve()),
                "algorithm": algorithm,
                "steps": str(active.steps_delivered),
            },
            out,
        )
        typer.echo(f"Wrote run metadata (JSON): {meta_path.resolve()}")
        if ALGORITHMS[algorithm].commits_flow:
            saved = save_graph(graph, Path(out, "graph-with-flow.json"))
            typer.echo(f"Wrote graph with flow (JSON): {saved.resolve()}")


@app.command()
def show(
    graph_path: Annotated[Path, typer.Option("--graph", help="Path to graph JSON file")],
    fmt: Annotated[ShowFormat, typer.Option("--format", help="list, matrix or edges")] = (
        ShowFormat.LIST
    ),
) -> None:
    """Print a graph as an adjacency list, adjacency matrix or edge list."""
    view = build_adjacency(_load_or_exit(graph_path))
    console = Console()
    if fmt == ShowFormat.MATRIX:
        ids, matrix = adjacency_matrix(view)
        render_matrix(console, ids, matrix)
    elif fmt == ShowFormat.EDGES:
        render_edge_list(console, view)
    else:
        console.print(format_adjacency_list(view))


@app.command()
def demo(
    out: Annotated[Path, typer.Option("--out", help="Where to write the demo graph")] = Path(
        "campus_map.json"
    ),
    config_path: Annotated[
        Path | None, typer.Option("--config", help="Path to graphsandbox.yml")
    ] = None,
) -> None:
    """Write the six-node campus demo graph."""
    cfg = load_config(config_path)
    graph = demo_graph(directed=cfg.graph.directed, weighted=cfg.graph.weighted)
    path = save_graph(graph, out)
    typer.echo(f"Wrote demo graph (JSON): {path.resolve()}")


def _load_or_exit(path: Path) -> GraphModel:
    try:
        return load_graph(path)
    except ParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(2)  # noqa: B904
