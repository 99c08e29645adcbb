"""
Disjoint-set (union-find) over a fixed set of elements.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable


class DisjointSet:
    """
    Union-find with path compression and union by rank.

    Used by Kruskal to check whether an edge would close a cycle.
    """

    def __init__(self, elements: Iterable[Hashable]) -> None:
        self._parent: dict[Hashable, Hashable] = {}
        self._rank: dict[Hashable, int] = {}
        for element in elements:
            self._parent[element] = element
            self._rank[element] = 0

    def __len__(self) -> int:
        return len(self._parent)

    def __contains__(self, element: Hashable) -> bool:
        return element in self._parent

    def find(self, element: Hashable) -> Hashable:
        """
        Representative of the element's class.

        Flattens the lookup chain so later finds are cheaper.

        Raises:
            KeyError: If the element was not part of the initial set
        """
        root = element
        while self._parent[root] != root:
            root = self._parent[root]

        while self._parent[element] != root:
            self._parent[element], element = root, self._parent[element]

        return root

    def union(self, a: Hashable, b: Hashable) -> bool:
        """
        Merge the classes of a and b.

        Returns:
            False if they were already in the same class
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        rank_a = self._rank[root_a]
        rank_b = self._rank[root_b]
        if rank_a < rank_b:
            self._parent[root_a] = root_b
        elif rank_a > rank_b:
            self._parent[root_b] = root_a
        else:
            self._parent[root_b] = root_a
            self._rank[root_a] = rank_a + 1
        return True

    def connected(self, a: Hashable, b: Hashable) -> bool:
        return self.find(a) == self.find(b)
