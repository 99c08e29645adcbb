"""
Graph algorithms: traversals, minimum spanning trees and whole-graph analysis.

GraphAlgorithms holds a reference to a Graph it never modifies. Every
call reads the graph as it is at call time and returns an immutable
result record (see graphlab.algorithms.results).

Traversals visit neighbors in a fixed order so results are reproducible:
ascending by the first number embedded in the id ("S10" -> 10, "Node5" -> 5,
no digits -> 0), ties broken by comparing the full ids.
"""

from __future__ import annotations

import logging
import math
import re
from collections import deque
from dataclasses import replace

from graphlab.algorithms.disjoint_set import DisjointSet
from graphlab.algorithms.results import (
    BFSResult,
    ConnectivityResult,
    DFSResult,
    KruskalResult,
    KruskalStatistics,
    KruskalStep,
    MSTComparison,
    PrimResult,
    PrimStatistics,
    PrimStep,
    TraversalStatistics,
)
from graphlab.config import MST_WEIGHT_TOLERANCE
from graphlab.graph.errors import UnknownNodeError, UnweightedGraphError
from graphlab.graph.model import Edge, Graph

logger = logging.getLogger(__name__)

_FIRST_NUMBER = re.compile(r"\d+")

# Kruskal step vocabulary
ADDED = "added"
REJECTED = "rejected"
NO_CYCLE = "no cycle"
WOULD_FORM_CYCLE = "would form cycle"


def neighbor_sort_key(node_id: str) -> tuple[int, str]:
    """Ordering key for traversal: (first embedded integer or 0, id)."""
    match = _FIRST_NUMBER.search(node_id)
    return (int(match.group()) if match else 0, node_id)


def reconstruct_path(
    parent: dict[str, str | None],
    start: str,
    end: str,
) -> list[str]:
    """
    Walk parent pointers from end back to start.

    Returns:
        The path start -> end, or [] if the walk does not reach start
    """
    path = []
    current: str | None = end
    seen: set[str] = set()
    while current is not None and current not in seen:
        seen.add(current)
        path.append(current)
        current = parent.get(current)
    path.reverse()
    return path if path and path[0] == start else []


def _efficiency(mst_edges: int, node_count: int) -> float:
    return mst_edges / (node_count - 1) * 100 if node_count > 1 else 0


class GraphAlgorithms:
    """
    Stateless algorithm runner over a borrowed Graph.

    Usage:
        algorithms = GraphAlgorithms(graph)
        result = algorithms.bfs("A", "D")
        result.path  # ('A', 'B', 'C', 'D')
    """

    def __init__(self, graph: Graph) -> None:
        self._graph = graph

    @property
    def graph(self) -> Graph:
        return self._graph

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_node(self, node_id: str, role: str) -> None:
        if node_id not in self._graph.nodes:
            raise UnknownNodeError(node_id, role)

    def _require_weighted(self, algorithm: str) -> None:
        if not self._graph.is_weighted:
            raise UnweightedGraphError(algorithm)

    def _adjacency(self) -> dict[str, dict[str, Edge]]:
        """
        Neighbor -> edge mapping per node, in Graph.get_neighbors() order.

        Built once per call so algorithms do not rescan the edge list.
        """
        adjacency: dict[str, dict[str, Edge]] = {node_id: {} for node_id in self._graph.nodes}
        for edge in self._graph.edges.values():
            adjacency[edge.source].setdefault(edge.target, edge)
            if not self._graph.is_directed:
                adjacency[edge.target].setdefault(edge.source, edge)
        return adjacency

    def _snapshot(self, edge: Edge) -> Edge:
        """Copy of an edge carrying its effective weight."""
        return replace(edge, weight=self._graph.effective_weight(edge))

    def sorted_neighbors(self, node_id: str) -> list[str]:
        """Neighbors of node_id in traversal order."""
        return sorted(self._graph.get_neighbors(node_id), key=neighbor_sort_key)

    # -------------------------------------------------------------------------
    # Traversals
    # -------------------------------------------------------------------------

    def dfs(self, start: str, target: str | None = None) -> DFSResult:
        """
        Depth-first search with an explicit stack.

        A node is visited when popped, so it may be pushed several times but
        is processed once. Neighbors are pushed in reverse order, so the one
        with the smallest ordering key is explored first. Each node's parent
        is the first node that pushed it.

        Args:
            start: Node to start from
            target: Node to stop at (None for a complete traversal)

        Raises:
            UnknownNodeError: If start or target is not in the graph
        """
        self._require_node(start, "start node")
        if target is not None:
            self._require_node(target, "target node")

        adjacency = self._adjacency()
        visited: set[str] = set()
        visit_order: list[str] = []
        parent: dict[str, str | None] = {start: None}
        found = False
        stack = [start]

        while stack:
            current = stack.pop()
            if current in visited:
                continue

            visited.add(current)
            visit_order.append(current)

            if target is not None and current == target:
                found = True
                break

            neighbors = sorted(adjacency[current], key=neighbor_sort_key)
            for neighbor in reversed(neighbors):
                if neighbor not in visited:
                    stack.append(neighbor)
                    parent.setdefault(neighbor, current)

        if target is None:
            path = list(visit_order)
            distance = len(path) - 1
        elif found:
            path = reconstruct_path(parent, start, target)
            distance = len(path) - 1 if path else -1
        else:
            path = []
            distance = -1

        logger.debug(f"DFS from '{start}' visited {len(visit_order)} node(s): {visit_order}")

        return DFSResult(
            start_node=start,
            target_node=target,
            visit_order=tuple(visit_order),
            path=tuple(path),
            found=found if target is not None else True,
            distance=distance,
            is_complete=target is None,
            statistics=TraversalStatistics(
                nodes_visited=len(visited),
                total_nodes=len(self._graph.nodes),
                path_length=len(path),
                search_type="targeted" if target is not None else "complete",
            ),
        )

    def bfs(self, start: str, target: str | None = None) -> BFSResult:
        """
        Breadth-first search.

        Nodes are marked visited when enqueued, so distances are minimum
        hop counts from start. Stops as soon as target is dequeued.

        Args:
            start: Node to start from
            target: Node to stop at (None for a complete traversal)

        Raises:
            UnknownNodeError: If start or target is not in the graph
        """
        self._require_node(start, "start node")
        if target is not None:
            self._require_node(target, "target node")

        adjacency = self._adjacency()
        visited = {start}
        visit_order: list[str] = []
        parent: dict[str, str | None] = {start: None}
        distances = {start: 0}
        found = False
        queue = deque([start])

        while queue:
            current = queue.popleft()
            visit_order.append(current)

            if target is not None and current == target:
                found = True
                break

            for neighbor in sorted(adjacency[current], key=neighbor_sort_key):
                if neighbor not in visited:
                    visited.add(neighbor)
                    parent[neighbor] = current
                    distances[neighbor] = distances[current] + 1
                    queue.append(neighbor)

        if target is None:
            path = list(visit_order)
            distance = -1
        elif found:
            path = reconstruct_path(parent, start, target)
            distance = distances[target]
        else:
            path = []
            distance = -1

        logger.debug(f"BFS from '{start}' visited {len(visit_order)} node(s): {visit_order}")

        return BFSResult(
            start_node=start,
            target_node=target,
            visit_order=tuple(visit_order),
            path=tuple(path),
            found=found if target is not None else True,
            distance=distance,
            distances=distances,
            statistics=TraversalStatistics(
                nodes_visited=len(visited),
                total_nodes=len(self._graph.nodes),
                path_length=len(path),
                search_type="targeted" if target is not None else "complete",
            ),
        )

    def shortest_path(self, start: str, target: str) -> list[str]:
        """Fewest-hops path from start to target ([] if unreachable)."""
        return list(self.bfs(start, target).path)

    def has_path(self, start: str, target: str) -> bool:
        return self.bfs(start, target).found

    def shortest_distances(self, start: str) -> dict[str, int]:
        """Hop count from start to every reachable node."""
        return dict(self.bfs(start).distances)

    # -------------------------------------------------------------------------
    # Minimum spanning trees
    # -------------------------------------------------------------------------

    def kruskal(self) -> KruskalResult:
        """
        Kruskal's minimum spanning tree (forest, if disconnected).

        Edges are taken in ascending weight order (ties keep insertion
        order); an edge is accepted when its endpoints are in different
        components. Stops once n - 1 edges are accepted.

        Raises:
            UnweightedGraphError: If the graph is not weighted
        """
        self._require_weighted("Kruskal")

        node_count = len(self._graph.nodes)
        edges = sorted(
            (self._snapshot(edge) for edge in self._graph.edges.values()),
            key=lambda edge: float(edge.weight),
        )
        components = DisjointSet(self._graph.nodes)
        mst_edges: list[Edge] = []
        steps: list[KruskalStep] = []
        total_weight = 0

        for edge in edges:
            if components.union(edge.source, edge.target):
                mst_edges.append(edge)
                total_weight += edge.weight
                action, reason = ADDED, NO_CYCLE
            else:
                action, reason = REJECTED, WOULD_FORM_CYCLE

            logger.debug(f"Kruskal: {edge.source}-{edge.target} ({edge.weight}) {action}")
            steps.append(KruskalStep(edge, action, reason, tuple(mst_edges)))

            if len(mst_edges) == node_count - 1:
                break

        efficiency = _efficiency(len(mst_edges), node_count)
        if node_count > 1 and len(mst_edges) < node_count - 1:
            logger.warning(
                f"Kruskal: graph is disconnected, spanning forest has "
                f"{len(mst_edges)}/{node_count - 1} edges"
            )
        logger.info(f"Kruskal: {len(mst_edges)} edge(s), total weight {total_weight}")

        return KruskalResult(
            mst_edges=tuple(mst_edges),
            total_weight=total_weight,
            steps=tuple(steps),
            statistics=KruskalStatistics(
                original_edges=len(edges),
                mst_edges=len(mst_edges),
                total_nodes=node_count,
                efficiency=efficiency,
            ),
        )

    def prim(self, start: str | None = None) -> PrimResult:
        """
        Prim's minimum spanning tree grown from start.

        Each round scans every boundary edge and takes the lightest one.
        Ties go to the first edge found: tree nodes are scanned in the
        order they joined the tree, and each node's neighbors in
        Graph.get_neighbors() order. Stops early with a partial tree when
        no boundary edge is left.

        Args:
            start: Root node (the first node in the graph when omitted)

        Raises:
            UnweightedGraphError: If the graph is not weighted
            UnknownNodeError: If start is not in the graph
        """
        self._require_weighted("Prim")

        node_count = len(self._graph.nodes)
        if node_count == 0:
            return PrimResult(
                start_node=None,
                mst_edges=(),
                total_weight=0,
                steps=(),
                statistics=PrimStatistics(0, 0, 0, True, 0),
            )

        if start is None:
            start = next(iter(self._graph.nodes))
        else:
            self._require_node(start, "start node")

        adjacency = self._adjacency()
        # dict keeps join order for the scan
        in_tree: dict[str, None] = {start: None}
        mst_edges: list[Edge] = []
        steps: list[PrimStep] = []
        total_weight = 0

        while len(in_tree) < node_count:
            best: Edge | None = None
            best_node = None
            best_weight = math.inf

            for tree_node in in_tree:
                for neighbor, edge in adjacency[tree_node].items():
                    if neighbor in in_tree:
                        continue
                    weight = self._graph.effective_weight(edge)
                    if weight < best_weight:
                        best, best_node, best_weight = edge, neighbor, weight

            if best is None:
                logger.warning(
                    f"Prim: no boundary edge left after reaching "
                    f"{len(in_tree)}/{node_count} nodes"
                )
                break

            edge = self._snapshot(best)
            mst_edges.append(edge)
            total_weight += best_weight
            in_tree[best_node] = None

            logger.debug(f"Prim: {edge.source}-{edge.target} ({best_weight}) adds '{best_node}'")
            steps.append(
                PrimStep(
                    edge=edge,
                    action=ADDED,
                    new_node=best_node,
                    current_mst=tuple(mst_edges),
                    nodes_in_mst=tuple(in_tree),
                )
            )

        logger.info(f"Prim from '{start}': {len(mst_edges)} edge(s), total weight {total_weight}")

        return PrimResult(
            start_node=start,
            mst_edges=tuple(mst_edges),
            total_weight=total_weight,
            steps=tuple(steps),
            statistics=PrimStatistics(
                total_nodes=node_count,
                mst_edges=len(mst_edges),
                nodes_reached=len(in_tree),
                is_complete=len(in_tree) == node_count,
                efficiency=_efficiency(len(mst_edges), node_count),
            ),
        )

    def compare_mst(self) -> MSTComparison:
        """
        Run Kruskal and Prim and compare their trees.

        Raises:
            UnweightedGraphError: If the graph is not weighted
        """
        kruskal = self.kruskal()
        prim = self.prim()

        return MSTComparison(
            kruskal=kruskal,
            prim=prim,
            same_weight=abs(kruskal.total_weight - prim.total_weight) < MST_WEIGHT_TOLERANCE,
            identical=same_edge_set(kruskal.mst_edges, prim.mst_edges),
        )

    # -------------------------------------------------------------------------
    # Whole-graph analysis
    # -------------------------------------------------------------------------

    def detect_cycles(self) -> list[list[str]]:
        """
        List the cycles found by a depth-first walk of the whole graph.

        A neighbor already on the current path closes a cycle; a neighbor
        that was visited on another branch is skipped. Undirected graphs
        ignore the edge back to the immediate parent. Each cycle is closed,
        e.g. ['A', 'B', 'C', 'A'].
        """
        adjacency = self._adjacency()
        undirected = not self._graph.is_directed
        visited: set[str] = set()
        cycles: list[list[str]] = []

        for root in self._graph.nodes:
            if root in visited:
                continue

            visited.add(root)
            # Frames: (node, parent, path to node, remaining neighbors)
            stack = [(root, None, (root,), iter(adjacency[root]))]

            while stack:
                node_id, parent, path, neighbors = stack[-1]
                for neighbor in neighbors:
                    if undirected and neighbor == parent:
                        continue
                    if neighbor in path:
                        cycles.append(list(path[path.index(neighbor):]) + [neighbor])
                    elif neighbor not in visited:
                        visited.add(neighbor)
                        stack.append(
                            (neighbor, node_id, path + (neighbor,), iter(adjacency[neighbor]))
                        )
                        break
                else:
                    stack.pop()

        logger.debug(f"Found {len(cycles)} cycle(s)")
        return cycles

    def connectivity_analysis(self) -> ConnectivityResult:
        """Split the graph into connected components (following edge direction)."""
        adjacency = self._adjacency()
        visited: set[str] = set()
        components: list[tuple[str, ...]] = []

        for node_id in self._graph.nodes:
            if node_id in visited:
                continue

            component = []
            stack = [node_id]
            while stack:
                current = stack.pop()
                if current in visited:
                    continue
                visited.add(current)
                component.append(current)
                stack.extend(n for n in adjacency[current] if n not in visited)

            components.append(tuple(component))

        logger.debug(f"Found {len(components)} connected component(s)")
        return ConnectivityResult(components=tuple(components))


def mst_edge_key(edge: Edge) -> tuple[str, str, float]:
    """Order-independent identity of an MST edge: (low id, high id, weight)."""
    low, high = sorted((edge.source, edge.target))
    return (low, high, float(edge.weight))


def same_edge_set(first: tuple[Edge, ...], second: tuple[Edge, ...]) -> bool:
    """Whether two edge collections hold the same edges, ignoring order and direction."""
    if len(first) != len(second):
        return False
    return {mst_edge_key(e) for e in first} == {mst_edge_key(e) for e in second}
