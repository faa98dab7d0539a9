"""Shared test fixtures."""

from pathlib import Path

import pytest

from graphsandbox.graph_model import GraphModel

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture()
def campus() -> GraphModel:
    """The six-node campus map, nodes A..F."""
    from graphsandbox.snapshot_io import demo_graph

    return demo_graph()
