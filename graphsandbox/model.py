"""Canonical model — nodes, edges, snapshots, config."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Node(BaseModel):
    id: str
    x: float = 0.0
    y: float = 0.0
    name: str = ""  # display label only, engines never read it

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Edge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    weight: float = Field(default=1.0, ge=0)
    directed: bool = False
    flow: float = Field(default=0.0, ge=0)

    @field_validator("id", "from_id", "to_id", mode="before")
    @classmethod
    def _coerce_ids(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def pair_key(self) -> tuple[str, str]:
        """Key under which at most one edge may exist (unordered when undirected)."""
        if self.directed:
            return (self.from_id, self.to_id)
        a, b = sorted((self.from_id, self.to_id))
        return (a, b)


class GraphSnapshot(BaseModel):
    """Serialized form of a graph, as exchanged with import/export."""

    directed: bool = False
    weighted: bool = True
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    @field_validator("edges", mode="before")
    @classmethod
    def _accept_legacy_edges(cls, value: object) -> object:
        # Older exports stored edges as bare [from, to, weight] arrays.
        if not isinstance(value, list):
            return value
        converted: list[Any] = []
        for index, item in enumerate(value):
            if isinstance(item, list | tuple) and len(item) in (2, 3):
                converted.append(
                    {
                        "id": f"e{index + 1}",
                        "from": item[0],
                        "to": item[1],
                        "weight": item[2] if len(item) == 3 else 1.0,
                    }
                )
            else:
                converted.append(item)
        return converted


class GraphDefaults(BaseModel):
    directed: bool = False
    weighted: bool = True


class AnimationConfig(BaseModel):
    step_delay_ms: int = Field(default=500, ge=0)
    max_steps: int | None = Field(default=None, ge=1)


class SandboxConfig(BaseModel):
    graph: GraphDefaults = Field(default_factory=GraphDefaults)
    animation: AnimationConfig = Field(default_factory=AnimationConfig)
