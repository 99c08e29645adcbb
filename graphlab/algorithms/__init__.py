"""
Algorithms module.

Provides read-only algorithms over a Graph:
- GraphAlgorithms: DFS, BFS, Kruskal, Prim, MST comparison,
  cycle detection and connectivity analysis
- DisjointSet: Union-find used by Kruskal
- Result records: One immutable dataclass per algorithm
"""

from graphlab.algorithms.disjoint_set import DisjointSet
from graphlab.algorithms.engine import (
    GraphAlgorithms,
    neighbor_sort_key,
    reconstruct_path,
    same_edge_set,
)
from graphlab.algorithms.results import (
    AlgorithmResult,
    BFSResult,
    ConnectivityResult,
    DFSResult,
    KruskalResult,
    KruskalStep,
    MSTComparison,
    PrimResult,
    PrimStep,
)

__all__ = [
    "GraphAlgorithms",
    "DisjointSet",
    "neighbor_sort_key",
    "reconstruct_path",
    "same_edge_set",
    "AlgorithmResult",
    "DFSResult",
    "BFSResult",
    "KruskalResult",
    "KruskalStep",
    "PrimResult",
    "PrimStep",
    "MSTComparison",
    "ConnectivityResult",
]
