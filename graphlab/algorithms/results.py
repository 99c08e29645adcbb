"""
Result records returned by GraphAlgorithms.

One immutable dataclass per algorithm, tagged by its `algorithm` name.
Edges inside a result are copies taken at run time, so later graph
edits do not change a finished result.

to_dict() produces the camelCase records consumed by rendering and
export code (startNode, visitOrder, mstEdges, totalWeight, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from graphlab.graph.model import Edge


def _edges(edges: tuple[Edge, ...]) -> list[dict[str, Any]]:
    return [edge.to_dict() for edge in edges]


# =============================================================================
# Traversals
# =============================================================================


@dataclass(frozen=True)
class TraversalStatistics:
    """
    Attributes:
        nodes_visited: Nodes marked visited during the run
        total_nodes: Nodes in the graph
        path_length: Number of ids in the result path
        search_type: "targeted" when a target was given, else "complete"
    """

    nodes_visited: int
    total_nodes: int
    path_length: int
    search_type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodesVisited": self.nodes_visited,
            "totalNodes": self.total_nodes,
            "pathLength": self.path_length,
            "searchType": self.search_type,
        }


@dataclass(frozen=True)
class DFSResult:
    """
    Depth-first traversal record.

    Attributes:
        start_node: Id the search started from
        target_node: Id searched for (None for a complete traversal)
        visit_order: Ids in the order they were processed
        path: Start-to-target path, or the visit order for a complete traversal
        found: Whether the target was reached (always True without a target)
        distance: Edges on the path (-1 when the target was not found)
        is_complete: True when no target was given
        statistics: Counters for the run
    """

    algorithm: ClassVar[str] = "DFS"

    start_node: str
    target_node: str | None
    visit_order: tuple[str, ...]
    path: tuple[str, ...]
    found: bool
    distance: int
    is_complete: bool
    statistics: TraversalStatistics

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "startNode": self.start_node,
            "targetNode": self.target_node,
            "visitOrder": list(self.visit_order),
            "path": list(self.path),
            "found": self.found,
            "distance": self.distance,
            "isComplete": self.is_complete,
            "statistics": self.statistics.to_dict(),
        }


@dataclass(frozen=True)
class BFSResult:
    """
    Breadth-first traversal record.

    Same fields as DFSResult without is_complete, plus `distances`:
    hop count from the start for every node reached so far.
    """

    algorithm: ClassVar[str] = "BFS"

    start_node: str
    target_node: str | None
    visit_order: tuple[str, ...]
    path: tuple[str, ...]
    found: bool
    distance: int
    distances: dict[str, int]
    statistics: TraversalStatistics

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "startNode": self.start_node,
            "targetNode": self.target_node,
            "visitOrder": list(self.visit_order),
            "path": list(self.path),
            "found": self.found,
            "distance": self.distance,
            "distances": dict(self.distances),
            "statistics": self.statistics.to_dict(),
        }


# =============================================================================
# Minimum spanning trees
# =============================================================================


@dataclass(frozen=True)
class KruskalStep:
    """One edge considered by Kruskal, and the tree after deciding on it."""

    edge: Edge
    action: str
    reason: str
    current_mst: tuple[Edge, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "edge": self.edge.to_dict(),
            "action": self.action,
            "reason": self.reason,
            "currentMST": _edges(self.current_mst),
        }


@dataclass(frozen=True)
class PrimStep:
    """One boundary edge accepted by Prim."""

    edge: Edge
    action: str
    new_node: str
    current_mst: tuple[Edge, ...]
    nodes_in_mst: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "edge": self.edge.to_dict(),
            "action": self.action,
            "newNode": self.new_node,
            "currentMST": _edges(self.current_mst),
            "nodesInMST": list(self.nodes_in_mst),
        }


@dataclass(frozen=True)
class KruskalStatistics:
    """
    Attributes:
        original_edges: Edges in the graph
        mst_edges: Edges accepted into the tree
        total_nodes: Nodes in the graph
        efficiency: mst_edges / (n - 1) * 100; below 100 means disconnected
    """

    original_edges: int
    mst_edges: int
    total_nodes: int
    efficiency: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalEdges": self.original_edges,
            "mstEdges": self.mst_edges,
            "totalNodes": self.total_nodes,
            "efficiency": self.efficiency,
        }


@dataclass(frozen=True)
class PrimStatistics:
    total_nodes: int
    mst_edges: int
    nodes_reached: int
    is_complete: bool
    efficiency: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalNodes": self.total_nodes,
            "mstEdges": self.mst_edges,
            "nodesReached": self.nodes_reached,
            "isComplete": self.is_complete,
            "efficiency": self.efficiency,
        }


@dataclass(frozen=True)
class KruskalResult:
    algorithm: ClassVar[str] = "Kruskal"

    mst_edges: tuple[Edge, ...]
    total_weight: float
    steps: tuple[KruskalStep, ...]
    statistics: KruskalStatistics

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "mstEdges": _edges(self.mst_edges),
            "totalWeight": self.total_weight,
            "steps": [step.to_dict() for step in self.steps],
            "statistics": self.statistics.to_dict(),
        }


@dataclass(frozen=True)
class PrimResult:
    algorithm: ClassVar[str] = "Prim"

    start_node: str | None
    mst_edges: tuple[Edge, ...]
    total_weight: float
    steps: tuple[PrimStep, ...]
    statistics: PrimStatistics

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "startNode": self.start_node,
            "mstEdges": _edges(self.mst_edges),
            "totalWeight": self.total_weight,
            "steps": [step.to_dict() for step in self.steps],
            "statistics": self.statistics.to_dict(),
        }


@dataclass(frozen=True)
class MSTComparison:
    """
    Kruskal and Prim run on the same graph.

    Attributes:
        kruskal: Kruskal result
        prim: Prim result
        same_weight: Totals agree within MST_WEIGHT_TOLERANCE
        identical: Both trees contain the same edges (order independent)
    """

    algorithm: ClassVar[str] = "MSTComparison"

    kruskal: KruskalResult
    prim: PrimResult
    same_weight: bool
    identical: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithms": [self.kruskal.algorithm, self.prim.algorithm],
            "results": {
                "kruskal": self.kruskal.to_dict(),
                "prim": self.prim.to_dict(),
            },
            "comparison": {
                "sameWeight": self.same_weight,
                "kruskalWeight": self.kruskal.total_weight,
                "primWeight": self.prim.total_weight,
                "kruskalEdges": len(self.kruskal.mst_edges),
                "primEdges": len(self.prim.mst_edges),
                "identical": self.identical,
            },
        }


# =============================================================================
# Whole-graph analysis
# =============================================================================


@dataclass(frozen=True)
class ConnectivityResult:
    """Connected components, in discovery order."""

    algorithm: ClassVar[str] = "Connectivity"

    components: tuple[tuple[str, ...], ...]

    @property
    def component_count(self) -> int:
        return len(self.components)

    @property
    def is_connected(self) -> bool:
        return len(self.components) <= 1

    @property
    def largest_component(self) -> tuple[str, ...]:
        """Biggest component; the first one found wins ties."""
        largest: tuple[str, ...] = ()
        for component in self.components:
            if len(component) > len(largest):
                largest = component
        return largest

    def to_dict(self) -> dict[str, Any]:
        return {
            "isConnected": self.is_connected,
            "componentCount": self.component_count,
            "components": [list(c) for c in self.components],
            "largestComponent": list(self.largest_component),
        }


AlgorithmResult = Union[
    DFSResult,
    BFSResult,
    KruskalResult,
    PrimResult,
    MSTComparison,
    ConnectivityResult,
]
