"""
Graph data model: nodes, edges and the Graph that owns them.

The Graph enforces its structural invariants on every mutation:
edges always reference existing nodes, no two edges share the same
(unordered, or ordered if directed) endpoint pair, unweighted graphs
treat every edge as weight 1, and removing a node removes its edges.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np

from graphlab.config import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    CANVAS_X_MIN,
    CANVAS_Y_MIN,
    CYCLE_MIN_NODES,
    DEFAULT_EDGE_PROBABILITY,
    DEFAULT_EDGE_WEIGHT,
    DEFAULT_RANDOM_NODES,
    EDGE_ID_PREFIX,
    ID_COUNTER_START,
    NODE_ID_PREFIX,
    RANDOM_WEIGHT_MAX,
    RANDOM_WEIGHT_MIN,
)
from graphlab.graph.errors import (
    DuplicateEdgeError,
    DuplicateIdError,
    MissingEndpointError,
)

logger = logging.getLogger(__name__)

# Fields that update_node / update_edge may change
NODE_UPDATABLE_FIELDS = frozenset({"label", "x", "y", "data"})
EDGE_UPDATABLE_FIELDS = frozenset({"label", "weight"})


@dataclass
class Node:
    """
    A graph vertex.

    Attributes:
        id: Unique key within the graph
        label: Display text (defaults to the id)
        x: Layout x coordinate
        y: Layout y coordinate
        data: Opaque attribute bag
    """

    id: str
    label: str
    x: float = 0
    y: float = 0
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Edge:
    """
    A connection between two nodes.

    Attributes:
        id: Unique key within the graph
        source: Id of the source node
        target: Id of the target node
        weight: Positive weight (meaningful only on weighted graphs)
        label: Display text
        directed: Graph directedness at the time the edge was created
    """

    id: str
    source: str
    target: str
    weight: float = DEFAULT_EDGE_WEIGHT
    label: str = ""
    directed: bool = False

    def other_end(self, node_id: str) -> str:
        """Return the endpoint opposite to node_id."""
        return self.target if node_id == self.source else self.source

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class GraphStatistics:
    """Summary numbers for a graph, as returned by Graph.get_statistics()."""

    node_count: int
    edge_count: int
    density: float
    average_degree: float
    max_degree: int
    min_degree: int
    is_connected: bool
    has_cycles: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodeCount": self.node_count,
            "edgeCount": self.edge_count,
            "density": self.density,
            "averageDegree": self.average_degree,
            "maxDegree": self.max_degree,
            "minDegree": self.min_degree,
            "isConnected": self.is_connected,
            "hasCycles": self.has_cycles,
        }


def letter_label(index: int) -> str:
    """Spreadsheet-style label for a 0-based index: A..Z, AA, AB, ..."""
    label = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        label = chr(ord("A") + remainder) + label
    return label


def _check_weight(weight: float) -> None:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight <= 0:
        raise ValueError(f"Edge weight must be a positive number, got {weight!r}")


class Graph:
    """
    Mutable graph of nodes and edges.

    The Graph is owned by the caller. Algorithms receive it by reference
    and only read from it.

    Attributes:
        nodes: Mapping of node id to Node
        edges: Mapping of edge id to Edge
        is_directed: Whether new edges are directed
        is_weighted: Whether edge weights are meaningful
        node_id_counter: Next number for auto-generated node ids
        edge_id_counter: Next number for auto-generated edge ids
    """

    def __init__(self, directed: bool = False, weighted: bool = False) -> None:
        self.nodes: dict[str, Node] = {}
        self.edges: dict[str, Edge] = {}
        self.is_directed = directed
        self.is_weighted = weighted
        self.node_id_counter = ID_COUNTER_START
        self.edge_id_counter = ID_COUNTER_START

    def __repr__(self) -> str:
        return (
            f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)}, "
            f"directed={self.is_directed}, weighted={self.is_weighted})"
        )

    def set_graph_type(self, directed: bool = False, weighted: bool = False) -> None:
        """
        Set directedness and weightedness for the graph.

        Raises:
            DuplicateEdgeError: If making the graph undirected would leave
                A->B and B->A on the same pair
        """
        if self.is_directed and not directed:
            seen: set[frozenset[str]] = set()
            for edge in self.edges.values():
                pair = frozenset((edge.source, edge.target))
                if pair in seen:
                    raise DuplicateEdgeError(edge.source, edge.target)
                seen.add(pair)

        self.is_directed = directed
        self.is_weighted = weighted

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def add_node(
        self,
        node_id: str | None = None,
        label: str = "",
        x: float = 0,
        y: float = 0,
        data: dict[str, Any] | None = None,
    ) -> Node:
        """
        Add a node to the graph.

        Args:
            node_id: Unique id (auto-generated as node_<n> when omitted)
            label: Display text (defaults to the id)
            x: Layout x coordinate
            y: Layout y coordinate
            data: Attribute bag (copied)

        Returns:
            The created Node

        Raises:
            DuplicateIdError: If a node with this id already exists
        """
        if not node_id:
            # Skip numbers already taken by explicit ids
            while f"{NODE_ID_PREFIX}{self.node_id_counter}" in self.nodes:
                self.node_id_counter += 1
            node_id = f"{NODE_ID_PREFIX}{self.node_id_counter}"
            self.node_id_counter += 1
        elif node_id in self.nodes:
            raise DuplicateIdError(node_id)

        node = Node(id=node_id, label=label or node_id, x=x, y=y, data=dict(data or {}))
        self.nodes[node_id] = node
        logger.debug(f"Added node '{node_id}'")
        return node

    def remove_node(self, node_id: str) -> bool:
        """Remove a node and every edge that references it."""
        if node_id not in self.nodes:
            return False

        doomed = [
            edge_id
            for edge_id, edge in self.edges.items()
            if edge.source == node_id or edge.target == node_id
        ]
        for edge_id in doomed:
            del self.edges[edge_id]
        del self.nodes[node_id]

        logger.debug(f"Removed node '{node_id}' and {len(doomed)} edge(s)")
        return True

    def get_node(self, node_id: str) -> Node | None:
        return self.nodes.get(node_id)

    def get_nodes(self) -> list[Node]:
        return list(self.nodes.values())

    def update_node_position(self, node_id: str, x: float, y: float) -> bool:
        node = self.nodes.get(node_id)
        if node is None:
            return False
        node.x = x
        node.y = y
        return True

    def update_node(self, node_id: str, **properties: Any) -> bool:
        """
        Update label, position or data of a node.

        Returns:
            False if the node does not exist

        Raises:
            ValueError: If properties include anything else (ids are immutable)
        """
        forbidden = set(properties) - NODE_UPDATABLE_FIELDS
        if forbidden:
            raise ValueError(f"Cannot update node field(s): {', '.join(sorted(forbidden))}")

        node = self.nodes.get(node_id)
        if node is None:
            return False
        for name, value in properties.items():
            setattr(node, name, dict(value) if name == "data" else value)
        return True

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def add_edge(
        self,
        source: str,
        target: str,
        weight: float = DEFAULT_EDGE_WEIGHT,
        label: str = "",
        edge_id: str | None = None,
    ) -> Edge:
        """
        Add an edge between two existing nodes.

        On unweighted graphs the weight is forced to 1. On weighted graphs
        the label defaults to the weight.

        Args:
            source: Source node id
            target: Target node id
            weight: Positive edge weight
            label: Display text
            edge_id: Unique id (auto-generated as edge_<n> when omitted)

        Returns:
            The created Edge

        Raises:
            MissingEndpointError: If either endpoint does not exist
            DuplicateEdgeError: If an edge already joins these nodes
            DuplicateIdError: If an edge with this id already exists
            ValueError: If the weight is not positive
        """
        if source not in self.nodes or target not in self.nodes:
            raise MissingEndpointError(source, target)

        if self.is_weighted:
            _check_weight(weight)
        else:
            weight = DEFAULT_EDGE_WEIGHT

        if self.find_edge(source, target) is not None:
            raise DuplicateEdgeError(source, target, self.is_directed)

        if not edge_id:
            while f"{EDGE_ID_PREFIX}{self.edge_id_counter}" in self.edges:
                self.edge_id_counter += 1
            edge_id = f"{EDGE_ID_PREFIX}{self.edge_id_counter}"
            self.edge_id_counter += 1
        elif edge_id in self.edges:
            raise DuplicateIdError(edge_id, kind="Edge")

        edge = Edge(
            id=edge_id,
            source=source,
            target=target,
            weight=weight,
            label=label or (str(weight) if self.is_weighted else ""),
            directed=self.is_directed,
        )
        self.edges[edge_id] = edge
        logger.debug(f"Added edge '{edge_id}': {source} -> {target} (w={weight})")
        return edge

    def remove_edge(self, edge_id: str) -> bool:
        return self.edges.pop(edge_id, None) is not None

    def get_edge(self, edge_id: str) -> Edge | None:
        return self.edges.get(edge_id)

    def get_edges(self) -> list[Edge]:
        return list(self.edges.values())

    def update_edge(self, edge_id: str, **properties: Any) -> bool:
        """
        Update the label or weight of an edge.

        Endpoints and ids cannot change; remove and re-add the edge instead.

        Returns:
            False if the edge does not exist

        Raises:
            ValueError: If properties include other fields, or weight is not positive
        """
        forbidden = set(properties) - EDGE_UPDATABLE_FIELDS
        if forbidden:
            raise ValueError(f"Cannot update edge field(s): {', '.join(sorted(forbidden))}")

        edge = self.edges.get(edge_id)
        if edge is None:
            return False

        if "weight" in properties:
            if self.is_weighted:
                _check_weight(properties["weight"])
                # Keep the default label in step with the weight
                if "label" not in properties and edge.label == str(edge.weight):
                    properties["label"] = str(properties["weight"])
            else:
                properties["weight"] = DEFAULT_EDGE_WEIGHT
        for name, value in properties.items():
            setattr(edge, name, value)
        return True

    def find_edge(self, source: str, target: str) -> Edge | None:
        """Return the edge joining source -> target (either way if undirected)."""
        for edge in self.edges.values():
            if edge.source == source and edge.target == target:
                return edge
            if not self.is_directed and edge.source == target and edge.target == source:
                return edge
        return None

    def has_edge(self, source: str, target: str) -> bool:
        return self.find_edge(source, target) is not None

    def effective_weight(self, edge: Edge) -> float:
        """Weight used by algorithms: the stored weight, or 1 if unweighted."""
        return edge.weight if self.is_weighted else DEFAULT_EDGE_WEIGHT

    def get_edge_weight(self, source: str, target: str) -> float:
        """Weight of the edge source -> target, or math.inf if there is none."""
        edge = self.find_edge(source, target)
        if edge is None:
            return math.inf
        return self.effective_weight(edge)

    # -------------------------------------------------------------------------
    # Adjacency
    # -------------------------------------------------------------------------

    def get_neighbors(self, node_id: str) -> list[str]:
        """
        Ids adjacent to node_id, unique, in edge insertion order.

        Directed graphs follow outgoing edges only.
        """
        neighbors: dict[str, None] = {}
        for edge in self.edges.values():
            if edge.source == node_id:
                neighbors[edge.target] = None
            elif not self.is_directed and edge.target == node_id:
                neighbors[edge.source] = None
        return list(neighbors)

    def get_node_edges(self, node_id: str) -> list[Edge]:
        """Edges leaving node_id (or touching it, if undirected)."""
        return [
            edge
            for edge in self.edges.values()
            if edge.source == node_id or (not self.is_directed and edge.target == node_id)
        ]

    # -------------------------------------------------------------------------
    # Whole-graph queries
    # -------------------------------------------------------------------------

    def get_statistics(self) -> GraphStatistics:
        node_count = len(self.nodes)
        edge_count = len(self.edges)

        if node_count > 1:
            max_edges = node_count * (node_count - 1)
            if not self.is_directed:
                max_edges /= 2
            density = edge_count / max_edges * 100
        else:
            density = 0

        degrees = dict.fromkeys(self.nodes, 0)
        for edge in self.edges.values():
            degrees[edge.source] += 1
            if not self.is_directed:
                degrees[edge.target] += 1

        values = list(degrees.values())
        average = sum(values) / len(values) if values else 0

        return GraphStatistics(
            node_count=node_count,
            edge_count=edge_count,
            density=round(density, 2),
            average_degree=round(average, 2),
            max_degree=max(values, default=0),
            min_degree=min(values, default=0),
            is_connected=self.is_connected(),
            has_cycles=self.has_cycles(),
        )

    def is_connected(self) -> bool:
        """Whether every node is reachable from the first node."""
        if len(self.nodes) <= 1:
            return True

        start = next(iter(self.nodes))
        visited: set[str] = set()
        stack = [start]

        while stack:
            node_id = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)
            stack.extend(n for n in self.get_neighbors(node_id) if n not in visited)

        return len(visited) == len(self.nodes)

    def has_cycles(self) -> bool:
        """
        Whether the graph contains a cycle.

        Depth-first search tracking the nodes on the current path. Undirected
        graphs ignore the edge back to the immediate parent. Graphs with two
        nodes or fewer never have cycles.
        """
        if len(self.nodes) < CYCLE_MIN_NODES:
            return False

        visited: set[str] = set()
        on_path: set[str] = set()

        for root in self.nodes:
            if root in visited:
                continue

            visited.add(root)
            on_path.add(root)
            # Frames: (node, parent, remaining neighbors)
            stack = [(root, None, iter(self.get_neighbors(root)))]

            while stack:
                node_id, parent, neighbors = stack[-1]
                for neighbor in neighbors:
                    if not self.is_directed and neighbor == parent:
                        continue
                    if neighbor not in visited:
                        visited.add(neighbor)
                        on_path.add(neighbor)
                        stack.append((neighbor, node_id, iter(self.get_neighbors(neighbor))))
                        break
                    if neighbor in on_path:
                        return True
                else:
                    on_path.discard(node_id)
                    stack.pop()

        return False

    # -------------------------------------------------------------------------
    # Lifecycle and snapshots
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """Remove all nodes and edges and reset the id counters."""
        self.nodes.clear()
        self.edges.clear()
        self.node_id_counter = ID_COUNTER_START
        self.edge_id_counter = ID_COUNTER_START

    def clone(self) -> Graph:
        """Independent copy of this graph, id counters included."""
        copy = Graph()
        copy.from_json(self.to_json())
        return copy

    def to_json(self) -> dict[str, Any]:
        """Snapshot of the full graph state as plain data."""
        return {
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "edges": [edge.to_dict() for edge in self.edges.values()],
            "isDirected": self.is_directed,
            "isWeighted": self.is_weighted,
            "nodeIdCounter": self.node_id_counter,
            "edgeIdCounter": self.edge_id_counter,
        }

    def from_json(self, data: dict[str, Any] | str) -> None:
        """
        Replace the graph state with a snapshot produced by to_json().

        Accepts the snapshot dict or its JSON text. The snapshot is validated
        before anything is replaced, so a bad snapshot leaves the graph as it was.

        Raises:
            DuplicateIdError: If node or edge ids repeat
            MissingEndpointError: If an edge references an unknown node
            DuplicateEdgeError: If two edges join the same endpoints
        """
        if isinstance(data, str):
            data = json.loads(data)

        staging = Graph(
            directed=bool(data.get("isDirected", False)),
            weighted=bool(data.get("isWeighted", False)),
        )

        for raw in data.get("nodes") or []:
            node = Node(
                id=raw["id"],
                label=raw.get("label") or raw["id"],
                x=raw.get("x", 0),
                y=raw.get("y", 0),
                data=dict(raw.get("data") or {}),
            )
            if node.id in staging.nodes:
                raise DuplicateIdError(node.id)
            staging.nodes[node.id] = node

        for raw in data.get("edges") or []:
            edge = Edge(
                id=raw["id"],
                source=raw["source"],
                target=raw["target"],
                weight=raw.get("weight", DEFAULT_EDGE_WEIGHT),
                label=raw.get("label", ""),
                directed=bool(raw.get("directed", staging.is_directed)),
            )
            if staging.is_weighted:
                _check_weight(edge.weight)
            if edge.source not in staging.nodes or edge.target not in staging.nodes:
                raise MissingEndpointError(edge.source, edge.target)
            if edge.id in staging.edges:
                raise DuplicateIdError(edge.id, kind="Edge")
            if staging.find_edge(edge.source, edge.target) is not None:
                raise DuplicateEdgeError(edge.source, edge.target, staging.is_directed)
            staging.edges[edge.id] = edge

        self.nodes = staging.nodes
        self.edges = staging.edges
        self.is_directed = staging.is_directed
        self.is_weighted = staging.is_weighted
        self.node_id_counter = int(data.get("nodeIdCounter") or ID_COUNTER_START)
        self.edge_id_counter = int(data.get("edgeIdCounter") or ID_COUNTER_START)

        logger.debug(f"Loaded snapshot: {len(self.nodes)} nodes, {len(self.edges)} edges")

    def generate_random(
        self,
        node_count: int = DEFAULT_RANDOM_NODES,
        edge_probability: float = DEFAULT_EDGE_PROBABILITY,
        weighted: bool = False,
        directed: bool = False,
        seed: int | None = None,
    ) -> None:
        """
        Replace the graph with a random one.

        Nodes are labelled A, B, C, ... and placed at random on the canvas.
        Every node pair (ordered pairs if directed) gets an edge with
        probability edge_probability; weights are uniform in [1, 10].

        Args:
            node_count: Number of nodes
            edge_probability: Chance of each possible edge
            weighted: Whether the graph is weighted
            directed: Whether the graph is directed
            seed: Random seed for reproducibility
        """
        if not 0 <= edge_probability <= 1:
            raise ValueError(f"edge_probability must be in [0, 1], got {edge_probability}")

        rng = np.random.default_rng(seed)
        self.clear()
        self.set_graph_type(directed=directed, weighted=weighted)

        for i in range(node_count):
            node_id = letter_label(i)
            self.add_node(
                node_id,
                node_id,
                x=float(rng.random() * CANVAS_WIDTH + CANVAS_X_MIN),
                y=float(rng.random() * CANVAS_HEIGHT + CANVAS_Y_MIN),
            )

        node_ids = list(self.nodes)
        for i, source in enumerate(node_ids):
            first = 0 if directed else i + 1
            for j in range(first, len(node_ids)):
                if i == j or rng.random() >= edge_probability:
                    continue
                weight = (
                    int(rng.integers(RANDOM_WEIGHT_MIN, RANDOM_WEIGHT_MAX + 1))
                    if weighted
                    else DEFAULT_EDGE_WEIGHT
                )
                try:
                    self.add_edge(source, node_ids[j], weight)
                except DuplicateEdgeError:
                    logger.debug(f"Skipped duplicate random edge {source} -> {node_ids[j]}")

        logger.info(
            f"Generated random graph: {len(self.nodes)} nodes, {len(self.edges)} edges "
            f"(p={edge_probability}, directed={directed}, weighted={weighted})"
        )
