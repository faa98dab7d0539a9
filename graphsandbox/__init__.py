"""Graph Sandbox — interactive graph-algorithm engine."""

__version__ = "0.1.0"
