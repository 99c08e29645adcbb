"""
Save and load graph snapshots as files.

The codec is picked from the file suffix:
    .json     - UTF-8 JSON, human readable
    .msgpack  - compact binary

Usage:
    from graphlab.graph.storage import load_graph, save_graph

    save_graph(graph, "graphs/demo.json")
    graph = load_graph("graphs/demo.json")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import msgpack

from graphlab.config import JSON_SUFFIX, MSGPACK_SUFFIX, SNAPSHOT_SUFFIXES
from graphlab.graph.model import Graph

logger = logging.getLogger(__name__)


def _suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SNAPSHOT_SUFFIXES:
        supported = ", ".join(SNAPSHOT_SUFFIXES)
        raise ValueError(f"Unsupported snapshot file '{path.name}'. Supported: {supported}")
    return suffix


def save_graph(graph: Graph, path: str | Path) -> Path:
    """
    Write a snapshot of the graph to disk.

    Args:
        graph: Graph to save
        path: Destination file (.json or .msgpack)

    Returns:
        The path written
    """
    path = Path(path)
    suffix = _suffix(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    snapshot = graph.to_json()
    if suffix == JSON_SUFFIX:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(snapshot, f, indent=2, ensure_ascii=False)
    elif suffix == MSGPACK_SUFFIX:
        with open(path, "wb") as f:
            msgpack.pack(snapshot, f)

    logger.info(f"Saved graph ({len(graph.nodes)} nodes, {len(graph.edges)} edges) to {path}")
    return path


def load_graph(path: str | Path) -> Graph:
    """
    Read a graph snapshot from disk.

    Args:
        path: Source file (.json or .msgpack)

    Returns:
        A new Graph holding the snapshot
    """
    path = Path(path)
    suffix = _suffix(path)

    logger.info(f"Loading graph from {path}...")
    if suffix == JSON_SUFFIX:
        with open(path, encoding="utf-8") as f:
            snapshot = json.load(f)
    else:
        with open(path, "rb") as f:
            snapshot = msgpack.load(f)

    graph = Graph()
    graph.from_json(snapshot)
    logger.info(f"Loaded {len(graph.nodes):,} nodes and {len(graph.edges):,} edges")
    return graph
