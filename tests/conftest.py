"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from graphlab.algorithms import GraphAlgorithms
from graphlab.graph import Graph


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def scripts_dir(project_root: Path) -> Iterator[Path]:
    """Put scripts/ on sys.path so CLI scripts import as modules."""
    path = project_root / "scripts"
    sys.path.insert(0, str(path))
    yield path
    sys.path.remove(str(path))


@pytest.fixture
def weighted_graph() -> Graph:
    """A, B, C, D with weighted undirected edges A-B(1), B-C(2), A-C(4), C-D(3)."""
    graph = Graph(weighted=True)
    for node_id in "ABCD":
        graph.add_node(node_id)
    graph.add_edge("A", "B", 1)
    graph.add_edge("B", "C", 2)
    graph.add_edge("A", "C", 4)
    graph.add_edge("C", "D", 3)
    return graph


@pytest.fixture
def chain_graph() -> Graph:
    """Unweighted undirected chain A - B - C - D."""
    graph = Graph()
    for node_id in "ABCD":
        graph.add_node(node_id)
    graph.add_edge("A", "B")
    graph.add_edge("B", "C")
    graph.add_edge("C", "D")
    return graph


@pytest.fixture
def numbered_graph() -> Graph:
    """
    Unweighted undirected graph with numbered ids, added out of order.

        S1 - S10, S1 - S2, S1 - S3, S2 - S4, S3 - S4
    """
    graph = Graph()
    for node_id in ["S1", "S10", "S3", "S2", "S4"]:
        graph.add_node(node_id)
    graph.add_edge("S1", "S10")
    graph.add_edge("S1", "S3")
    graph.add_edge("S1", "S2")
    graph.add_edge("S2", "S4")
    graph.add_edge("S3", "S4")
    return graph


@pytest.fixture
def algorithms(weighted_graph: Graph) -> GraphAlgorithms:
    return GraphAlgorithms(weighted_graph)
