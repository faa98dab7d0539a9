"""Graph algorithm engines.

Every engine comes in two forms: ``<name>_steps(view, ...)`` validates its
arguments immediately and returns a lazy iterator of steps ending in one
``done`` step, and ``<name>(view, ...)`` drains that iterator and returns
the result.
"""

from graphsandbox.engines.bipartite import BipartiteResult, bipartite_steps, check_bipartite
from graphsandbox.engines.euler import EulerKind, EulerMethod, EulerResult, euler, euler_steps
from graphsandbox.engines.max_flow import EdgeFlow, MaxFlowResult, max_flow, max_flow_steps
from graphsandbox.engines.mst import (
    DisjointSet,
    SpanningForestResult,
    kruskal,
    kruskal_steps,
    prim,
    prim_steps,
)
from graphsandbox.engines.shortest_path import ShortestPathResult, dijkstra, dijkstra_steps
from graphsandbox.engines.traversal import TraversalResult, bfs, bfs_steps, dfs, dfs_steps

__all__ = [
    "BipartiteResult",
    "DisjointSet",
    "EdgeFlow",
    "EulerKind",
    "EulerMethod",
    "EulerResult",
    "MaxFlowResult",
    "ShortestPathResult",
    "SpanningForestResult",
    "TraversalResult",
    "bfs",
    "bfs_steps",
    "bipartite_steps",
    "check_bipartite",
    "dfs",
    "dfs_steps",
    "dijkstra",
    "dijkstra_steps",
    "euler",
    "euler_steps",
    "kruskal",
    "kruskal_steps",
    "max_flow",
    "max_flow_steps",
    "prim",
    "prim_steps",
]
