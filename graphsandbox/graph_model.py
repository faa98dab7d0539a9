"""Mutable graph model — the single source of truth for user edits."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from graphsandbox.errors import InvalidArgument, NotFound
from graphsandbox.logger import logger
from graphsandbox.model import Edge, GraphSnapshot, Node


def node_label(index: int) -> str:
    """Spreadsheet-style label for a zero-based counter: A..Z, AA, AB, ..."""
    label = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        label = chr(ord("A") + rem) + label
    return label


class GraphModel:
    """Owns nodes and edges and keeps the structural invariants.

    Edge endpoints always reference live nodes; removing a node removes its
    incident edges in the same call. At most one edge exists per ordered
    pair (directed) or unordered pair (undirected); re-adding a pair updates
    the existing edge and keeps its id. Self-loops are allowed. Every edit
    that references a missing id raises ``NotFound``.

    Ids are generated from monotonic counters and are never handed out twice
    within the lifetime of the model, loads included.
    """

    def __init__(self, directed: bool = False, weighted: bool = True) -> None:
        self.directed = directed
        self.weighted = weighted
        self._nodes: dict[str, Node] = {}
        self._edges: dict[str, Edge] = {}
        self._node_counter = 0
        self._edge_counter = 0
        self._issued_node_ids: set[str] = set()
        self._issued_edge_ids: set[str] = set()
        self.revision = 0

    # -- queries ---------------------------------------------------------

    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NotFound(f"No node with id {node_id!r}") from None

    def get_edge(self, edge_id: str) -> Edge:
        try:
            return self._edges[edge_id]
        except KeyError:
            raise NotFound(f"No edge with id {edge_id!r}") from None

    def find_edge(self, from_id: str, to_id: str, directed: bool | None = None) -> Edge | None:
        """Return the edge occupying the (from, to) slot, if any."""
        if directed is None:
            directed = self.directed
        for edge in self._edges.values():
            if edge.from_id == from_id and edge.to_id == to_id:
                return edge
            if not directed and not edge.directed:
                if edge.from_id == to_id and edge.to_id == from_id:
                    return edge
        return None

    def __len__(self) -> int:
        return len(self._nodes)

    # -- node edits ------------------------------------------------------

    def add_node(self, x: float = 0.0, y: float = 0.0, name: str = "") -> str:
        node_id = self._next_node_id()
        self._nodes[node_id] = Node(id=node_id, x=x, y=y, name=name)
        self._touch()
        logger.debug("Added node %s at (%s, %s)", node_id, x, y)
        return node_id

    def move_node(self, node_id: str, x: float, y: float) -> None:
        # Position is presentation state; it does not invalidate runs.
        node = self.get_node(node_id)
        node.x = x
        node.y = y

    def rename_node(self, node_id: str, name: str) -> None:
        self.get_node(node_id).name = name

    def remove_node(self, node_id: str) -> None:
        if node_id not in self._nodes:
            raise NotFound(f"No node with id {node_id!r}")
        incident = [
            eid
            for eid, e in self._edges.items()
            if e.from_id == node_id or e.to_id == node_id
        ]
        for eid in incident:
            del self._edges[eid]
        del self._nodes[node_id]
        self._touch()
        logger.debug("Removed node %s and %d incident edge(s)", node_id, len(incident))

    # -- edge edits ------------------------------------------------------

    def add_or_update_edge(
        self,
        from_id: str,
        to_id: str,
        weight: float = 1.0,
        directed: bool | None = None,
    ) -> str:
        """Connect two nodes, or update the weight of the edge already there."""
        for endpoint in (from_id, to_id):
            if endpoint not in self._nodes:
                raise NotFound(f"No node with id {endpoint!r}")
        # also catches NaN
        if not weight >= 0:
            raise InvalidArgument(f"Edge weight must be non-negative, got {weight}")
        if directed is None:
            directed = self.directed

        existing = self.find_edge(from_id, to_id, directed)
        if existing is not None:
            existing.weight = weight
            existing.directed = directed
            self._touch()
            logger.debug("Updated edge %s (%s-%s) weight=%s", existing.id, from_id, to_id, weight)
            return existing.id

        edge_id = self._next_edge_id()
        self._edges[edge_id] = Edge(
            id=edge_id, from_id=from_id, to_id=to_id, weight=weight, directed=directed
        )
        self._touch()
        logger.debug("Added edge %s (%s-%s) weight=%s", edge_id, from_id, to_id, weight)
        return edge_id

    def remove_edge(self, edge_id: str) -> None:
        if edge_id not in self._edges:
            raise NotFound(f"No edge with id {edge_id!r}")
        del self._edges[edge_id]
        self._touch()
        logger.debug("Removed edge %s", edge_id)

    # -- graph-level edits -----------------------------------------------

    def clear(self) -> None:
        self._nodes.clear()
        self._edges.clear()
        self._touch()
        logger.debug("Cleared graph")

    def set_global_directed(self, directed: bool) -> None:
        """Switch the graph kind; every existing edge takes the new setting.

        Going undirected folds edges that now share an unordered pair into
        the earliest one, which keeps its id and takes the latest weight.
        """
        self.directed = directed
        for edge in self._edges.values():
            edge.directed = directed
        if not directed:
            self._merge_parallel_edges()
        self._touch()

    def _merge_parallel_edges(self) -> None:
        kept: dict[tuple[str, str], Edge] = {}
        for edge_id, edge in list(self._edges.items()):
            first = kept.setdefault(edge.pair_key(), edge)
            if first is edge:
                continue
            first.weight = edge.weight
            del self._edges[edge_id]
            logger.info(
                "Merged edge %s into %s (%s-%s) weight=%s",
                edge_id,
                first.id,
                first.from_id,
                first.to_id,
                first.weight,
            )

    def set_weighted(self, weighted: bool) -> None:
        self.weighted = weighted
        self._touch()

    def commit_flows(self, flows: Mapping[str, float]) -> None:
        """Store a max-flow assignment; edges missing from *flows* get 0.

        Flow is bounded by the effective capacity the run saw: the weight on
        a weighted graph, 1 on an unweighted one, whatever the stored weight.
        Flow is derived state and does not count as a structural edit.
        """
        for edge_id, edge in self._edges.items():
            edge.flow = flows.get(edge_id, 0.0)
        logger.info("Committed flow on %d edge(s)", sum(1 for f in flows.values() if f > 0))

    def reset_flows(self) -> None:
        for edge in self._edges.values():
            edge.flow = 0.0

    # -- serialization ---------------------------------------------------

    def to_snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(
            directed=self.directed,
            weighted=self.weighted,
            nodes=[n.model_copy() for n in self._nodes.values()],
            edges=[e.model_copy() for e in self._edges.values()],
        )

    def load_snapshot(self, data: GraphSnapshot | Mapping[str, Any]) -> None:
        """Replace the whole graph with *data*; flow is reset to 0."""
        snapshot = _validate_snapshot(data)
        nodes = _index_unique(snapshot.nodes, "node")
        edges = _index_unique(snapshot.edges, "edge")
        for edge in edges.values():
            for endpoint in (edge.from_id, edge.to_id):
                if endpoint not in nodes:
                    raise InvalidArgument(
                        f"Edge {edge.id} references unknown node {endpoint!r}"
                    )
            edge.flow = 0.0

        self.directed = snapshot.directed
        self.weighted = snapshot.weighted
        self._nodes = nodes
        self._edges = edges
        self._issued_node_ids.update(nodes)
        self._issued_edge_ids.update(edges)
        self._touch()
        logger.debug("Loaded snapshot: %d node(s), %d edge(s)", len(nodes), len(edges))

    @classmethod
    def from_snapshot(cls, data: GraphSnapshot | Mapping[str, Any]) -> GraphModel:
        graph = cls()
        graph.load_snapshot(data)
        return graph

    # -- internals -------------------------------------------------------

    def _touch(self) -> None:
        self.revision += 1

    def _next_node_id(self) -> str:
        while True:
            candidate = node_label(self._node_counter)
            self._node_counter += 1
            if candidate not in self._issued_node_ids:
                self._issued_node_ids.add(candidate)
                return candidate

    def _next_edge_id(self) -> str:
        while True:
            self._edge_counter += 1
            candidate = f"e{self._edge_counter}"
            if candidate not in self._issued_edge_ids:
                self._issued_edge_ids.add(candidate)
                return candidate


def _validate_snapshot(data: GraphSnapshot | Mapping[str, Any]) -> GraphSnapshot:
    if isinstance(data, GraphSnapshot):
        return data.model_copy(deep=True)
    try:
        return GraphSnapshot.model_validate(dict(data))
    except ValidationError as e:
        raise InvalidArgument(f"Invalid graph snapshot: {e}") from e


def _index_unique(items: Iterable[Any], what: str) -> dict[str, Any]:
    indexed: dict[str, Any] = {}
    for item in items:
        if item.id in indexed:
            raise InvalidArgument(f"Duplicate {what} id {item.id!r}")
        indexed[item.id] = item
    return indexed
