"""Algorithm registry and step-by-step runs over a GraphModel."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from graphsandbox.engines import (
    bfs_steps,
    bipartite_steps,
    dfs_steps,
    dijkstra_steps,
    euler_steps,
    kruskal_steps,
    max_flow_steps,
    prim_steps,
)
from graphsandbox.errors import ConcurrentModification, InputRequired, InvalidArgument
from graphsandbox.graph import build_adjacency
from graphsandbox.logger import logger
from graphsandbox.steps import Step, StepKind

if TYPE_CHECKING:
    from graphsandbox.graph import AdjacencyView
    from graphsandbox.graph_model import GraphModel


@dataclass(frozen=True)
class AlgorithmSpec:
    name: str
    label: str
    factory: Callable[..., Iterator[Step]]
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    commits_flow: bool = False


ALGORITHMS: dict[str, AlgorithmSpec] = {
    "bfs": AlgorithmSpec(
        "bfs",
        "Breadth-first search",
        lambda view, start: bfs_steps(view, start),
        required=("start",),
    ),
    "dfs": AlgorithmSpec(
        "dfs",
        "Depth-first search",
        lambda view, start: dfs_steps(view, start),
        required=("start",),
    ),
    "dijkstra": AlgorithmSpec(
        "dijkstra",
        "Dijkstra shortest path",
        lambda view, start, target: dijkstra_steps(view, start, target),
        required=("start", "target"),
    ),
    "bipartite": AlgorithmSpec(
        "bipartite",
        "Bipartiteness check",
        lambda view: bipartite_steps(view),
    ),
    "prim": AlgorithmSpec(
        "prim",
        "Prim minimum spanning forest",
        lambda view, start=None: prim_steps(view, start),
        optional=("start",),
    ),
    "kruskal": AlgorithmSpec(
        "kruskal",
        "Kruskal minimum spanning forest",
        lambda view: kruskal_steps(view),
    ),
    "max_flow": AlgorithmSpec(
        "max_flow",
        "Edmonds-Karp maximum flow",
        lambda view, source, sink: max_flow_steps(view, source, sink),
        required=("source", "sink"),
        commits_flow=True,
    ),
    "euler": AlgorithmSpec(
        "euler",
        "Eulerian path / circuit",
        lambda view, start=None, method="hierholzer", respect_direction=False: euler_steps(
            view, start, method, respect_direction
        ),
        optional=("start", "method", "respect_direction"),
    ),
}


def get_algorithm(name: str) -> AlgorithmSpec:
    """Look up an algorithm by name; unknown names are an InvalidArgument."""
    try:
        return ALGORITHMS[name]
    except KeyError:
        valid = ", ".join(ALGORITHMS)
        raise InvalidArgument(f"Unknown algorithm {name!r}. Valid values: {valid}") from None


class RunState(StrEnum):
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class RunAnnotations:
    """Per-run scratch state keyed by node and edge id."""

    nodes: dict[str, dict[str, Any]] = field(default_factory=dict)
    edges: dict[str, dict[str, Any]] = field(default_factory=dict)
    current_node: str | None = None
    current_edge: str | None = None

    def record(self, step: Step) -> None:
        if step.node_id is not None:
            self.current_node = step.node_id
            node = self.nodes.setdefault(step.node_id, {})
            if step.kind == StepKind.VISIT:
                node["visited"] = True
            elif step.kind == StepKind.SETTLE:
                node["settled"] = True
            if step.kind != StepKind.EDGE_USED:
                node.update(step.payload)
        if step.edge_id is not None:
            self.current_edge = step.edge_id
            edge = self.edges.setdefault(step.edge_id, {})
            edge["active"] = True
            edge.update(step.payload)


class Run:
    """One invocation of an algorithm against a snapshot of a GraphModel.

    Arguments are validated when the run is created, before any step is
    delivered. Iterating yields steps on the caller's schedule. Before each
    step the graph revision is compared with the snapshot's; an edit in
    between raises ``ConcurrentModification``. ``cancel()`` stops delivery,
    leaving ``annotations`` as they were and ``result`` unset.
    """

    def __init__(self, spec: AlgorithmSpec, graph: GraphModel, params: dict[str, Any]) -> None:
        self.spec = spec
        self.graph = graph
        self.params = params
        self._start()

    def _start(self) -> None:
        self.view: AdjacencyView = build_adjacency(self.graph)
        self._steps = self.spec.factory(self.view, **self.params)
        self.state = RunState.RUNNING
        self.result: Any = None
        self.annotations = RunAnnotations()
        self.steps_delivered = 0

    def __iter__(self) -> Iterator[Step]:
        return self

    def __next__(self) -> Step:
        if self.state != RunState.RUNNING:
            raise StopIteration
        self._check_revision()
        try:
            step = next(self._steps)
        except StopIteration:
            self.state = RunState.FAILED
            raise RuntimeError(f"{self.spec.name} ended without a done step") from None

        self.steps_delivered += 1
        if step.kind == StepKind.DONE:
            self._commit(step.result)
        else:
            self.annotations.record(step)
        return step

    def _check_revision(self) -> None:
        if self.graph.revision != self.view.revision:
            self.state = RunState.FAILED
            self._steps.close()
            raise ConcurrentModification(
                f"Graph changed during {self.spec.name} "
                f"(revision {self.view.revision} -> {self.graph.revision})"
            )

    def _commit(self, result: Any) -> None:
        if self.spec.commits_flow:
            self.graph.commit_flows(result.flows_by_edge())
        self.result = result
        self.state = RunState.COMPLETED
        logger.info("%s finished after %d step(s)", self.spec.name, self.steps_delivered)

    def is_running(self) -> bool:
        return self.state == RunState.RUNNING

    def cancel(self) -> None:
        if self.state != RunState.RUNNING:
            return
        self._steps.close()
        self.state = RunState.CANCELLED
        logger.info("%s cancelled after %d step(s)", self.spec.name, self.steps_delivered)

    def restart(self) -> None:
        """Start over from a fresh snapshot of the graph."""
        if self.state == RunState.RUNNING:
            self._steps.close()
        self._start()

    def drain(self) -> Any:
        """Deliver every remaining step and return the result."""
        for _ in self:
            pass
        return self.result


class Runner:
    """Keeps at most one run active against a GraphModel."""

    def __init__(self, graph: GraphModel) -> None:
        self.graph = graph
        self.active: Run | None = None

    def start(self, name: str, **params: Any) -> Run:
        spec = get_algorithm(name)
        given = {k: v for k, v in params.items() if v is not None}
        for required in spec.required:
            if required not in given:
                raise InputRequired(required, name)
        unknown = set(given) - set(spec.required) - set(spec.optional)
        if unknown:
            raise InvalidArgument(f"{name} does not take: {', '.join(sorted(unknown))}")

        run = Run(spec, self.graph, given)
        if self.active is not None:
            self.active.cancel()
        self.active = run
        logger.info("Started %s with %s", name, given or "no parameters")
        return run

    def run(self, name: str, **params: Any) -> Any:
        """Start a run and drain it synchronously."""
        return self.start(name, **params).drain()

    def cancel(self) -> None:
        if self.active is not None:
            self.active.cancel()

    def is_running(self) -> bool:
        return self.active is not None and self.active.is_running()

    @property
    def annotations(self) -> RunAnnotations:
        if self.active is None:
            return RunAnnotations()
        return self.active.annotations
