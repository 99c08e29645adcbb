"""
Graph model module.

Provides the editable graph and its persistence:
- Graph: Nodes, edges and structural invariants
- Node / Edge: Stored records
- GraphStatistics: Summary returned by Graph.get_statistics()
- save_graph / load_graph: Snapshot files (.json, .msgpack)
"""

from graphlab.graph.errors import (
    DuplicateEdgeError,
    DuplicateIdError,
    GraphError,
    MissingEndpointError,
    UnknownNodeError,
    UnweightedGraphError,
)
from graphlab.graph.model import Edge, Graph, GraphStatistics, Node
from graphlab.graph.storage import load_graph, save_graph

__all__ = [
    "Graph",
    "Node",
    "Edge",
    "GraphStatistics",
    "GraphError",
    "DuplicateIdError",
    "MissingEndpointError",
    "DuplicateEdgeError",
    "UnknownNodeError",
    "UnweightedGraphError",
    "load_graph",
    "save_graph",
]
