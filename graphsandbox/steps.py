"""Step events emitted by the engines while they run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class StepKind(StrEnum):
    VISIT = "visit"
    SETTLE = "settle"
    EDGE_USED = "edgeUsed"
    DONE = "done"


@dataclass(frozen=True)
class Step:
    """One incremental event. Only a DONE step carries ``result``."""

    kind: StepKind
    node_id: str | None = None
    edge_id: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    result: Any = None


def visit(node_id: str, **payload: Any) -> Step:
    return Step(StepKind.VISIT, node_id=node_id, payload=payload)


def settle(node_id: str, **payload: Any) -> Step:
    return Step(StepKind.SETTLE, node_id=node_id, payload=payload)


def edge_used(edge_id: str, node_id: str | None = None, **payload: Any) -> Step:
    return Step(StepKind.EDGE_USED, node_id=node_id, edge_id=edge_id, payload=payload)


def done(result: Any) -> Step:
    return Step(StepKind.DONE, result=result)


def final_result(steps: Any) -> Any:
    """Drain a step iterator and return the result of its DONE step."""
    for step in steps:
        if step.kind == StepKind.DONE:
            return step.result
    raise RuntimeError("Step sequence ended without a done step")
