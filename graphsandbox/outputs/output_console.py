"""Console output — step log and result summaries with Rich tables."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from graphsandbox.engines import (
    BipartiteResult,
    EulerResult,
    MaxFlowResult,
    ShortestPathResult,
    SpanningForestResult,
    TraversalResult,
)
from graphsandbox.representations import format_weight

if TYPE_CHECKING:
    from graphsandbox.graph import AdjacencyView
    from graphsandbox.steps import Step


def render_step(console: Console, index: int, step: Step) -> None:
    target = step.node_id or ""
    if step.edge_id:
        target = f"{step.edge_id} -> {target}" if target else step.edge_id
    details = ", ".join(f"{k}={_short(v)}" for k, v in sorted(step.payload.items()))
    console.print(
        f"[dim]{index:>4}[/dim] [bold]{step.kind.value:<8}[/bold] {escape(target)}  {escape(details)}"
    )


def render_result(console: Console, algorithm: str, result: Any) -> None:
    """Print a summary for any engine result."""
    if isinstance(result, TraversalResult):
        console.print(f"[bold]{algorithm.upper()} order:[/bold] {' -> '.join(result.order)}")
    elif isinstance(result, ShortestPathResult):
        _render_shortest_path(console, result)
    elif isinstance(result, BipartiteResult):
        _render_bipartite(console, result)
    elif isinstance(result, SpanningForestResult):
        console.print(
            f"[bold]Spanning forest ({result.algorithm}):[/bold] "
            f"{', '.join(result.edge_ids) or '(empty)'}"
        )
        console.print(
            f"Total weight: {format_weight(result.total_weight)}  Trees: {result.trees}"
        )
    elif isinstance(result, MaxFlowResult):
        _render_max_flow(console, result)
    elif isinstance(result, EulerResult):
        _render_euler(console, result)
    else:
        console.print(repr(result))


def render_matrix(console: Console, ids: list[str], matrix: list[list[float]]) -> None:
    table = Table(title="Adjacency matrix")
    table.add_column("")
    for node_id in ids:
        table.add_column(node_id, justify="right")
    for node_id, row in zip(ids, matrix):
        table.add_row(node_id, *(format_weight(w) for w in row))
    console.print(table)


def render_edge_list(console: Console, view: AdjacencyView) -> None:
    table = Table(title="Edge list")
    table.add_column("Id")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Weight", justify="right")
    table.add_column("Directed")
    for edge in view.edges:
        table.add_row(
            edge.id, edge.from_id, edge.to_id, format_weight(edge.weight), str(edge.directed)
        )
    console.print(table)


def _render_shortest_path(console: Console, result: ShortestPathResult) -> None:
    if not result.reachable:
        console.print(f"No path from {result.start} to {result.target}.")
        return
    console.print(
        f"[bold]Shortest path:[/bold] {' -> '.join(result.path)} "
        f"(total distance: {format_weight(result.distance)})"
    )


def _render_bipartite(console: Console, result: BipartiteResult) -> None:
    if not result.is_bipartite:
        conflict = result.conflict
        where = f" ({conflict.node_id}-{conflict.neighbor_id})" if conflict else ""
        console.print(f"[red]Graph is not bipartite[/red]{where}")
        return
    left, right = result.partition()
    console.print("[green]Graph is bipartite[/green]")
    console.print(f"  Side 0: {', '.join(left)}")
    console.print(f"  Side 1: {', '.join(right)}")


def _render_max_flow(console: Console, result: MaxFlowResult) -> None:
    table = Table(title=f"Max flow {result.source} -> {result.sink}")
    table.add_column("Edge")
    table.add_column("Direction")
    table.add_column("Flow / capacity", justify="right")
    for ef in result.edge_flows:
        table.add_row(
            ef.edge_id,
            f"{ef.from_id} -> {ef.to_id}",
            f"{format_weight(ef.flow)} / {format_weight(ef.capacity)}",
        )
    console.print(table)
    console.print(f"[bold]Maximum flow:[/bold] {format_weight(result.value)}")


def _render_euler(console: Console, result: EulerResult) -> None:
    if not result.exists:
        console.print(f"[red]No Eulerian path or circuit:[/red] {result.reason}")
        return
    console.print(f"[bold]Eulerian {result.kind.value}:[/bold] {' -> '.join(result.path)}")


def _short(value: Any) -> str:
    if isinstance(value, float):
        return "inf" if math.isinf(value) else format_weight(value)
    if isinstance(value, list):
        return "[" + ",".join(str(v) for v in value) + "]"
    return str(value)
