"""Error taxonomy shared by the graph model and the engines."""

from __future__ import annotations


class GraphError(Exception):
    """Base class for every condition reported by the sandbox core."""


class InvalidArgument(GraphError):
    """Unknown node id, source == sink, start == target and similar."""


class InputRequired(InvalidArgument):
    """A required run parameter was not supplied by the caller."""

    def __init__(self, parameter: str, algorithm: str) -> None:
        super().__init__(f"{algorithm} needs a '{parameter}' node")
        self.parameter = parameter
        self.algorithm = algorithm


class InvalidState(GraphError):
    """Algorithm preconditions unmet, e.g. MST on a directed graph."""


class NotFound(GraphError):
    """A graph edit referenced a node or edge that does not exist."""


class ConcurrentModification(GraphError):
    """The graph changed while a run's steps were still being delivered."""
