"""
Exceptions raised by the graph model and algorithm engine.

Every error is a rejected operation: the graph is left unchanged.
"""


class GraphError(Exception):
    """Base class for all graph errors."""


class DuplicateIdError(GraphError):
    """A node (or edge) with this id already exists."""

    def __init__(self, item_id: str, kind: str = "Node") -> None:
        super().__init__(f"{kind} '{item_id}' already exists")
        self.item_id = item_id
        self.kind = kind


class MissingEndpointError(GraphError):
    """An edge references a node that is not in the graph."""

    def __init__(self, source: str, target: str) -> None:
        super().__init__(
            f"Edge endpoints must exist: '{source}' -> '{target}'"
        )
        self.source = source
        self.target = target


class DuplicateEdgeError(GraphError):
    """An edge between these nodes (or with this id) already exists."""

    def __init__(self, source: str, target: str, directed: bool = False) -> None:
        kind = "directed edge" if directed else "edge"
        super().__init__(f"A {kind} already exists between '{source}' and '{target}'")
        self.source = source
        self.target = target


class UnknownNodeError(GraphError):
    """An algorithm was given a node id that does not exist."""

    def __init__(self, node_id: str, role: str = "node") -> None:
        super().__init__(f"The {role} '{node_id}' does not exist")
        self.node_id = node_id
        self.role = role


class UnweightedGraphError(GraphError):
    """An algorithm that needs edge weights ran on an unweighted graph."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"{algorithm} requires a weighted graph")
        self.algorithm = algorithm
