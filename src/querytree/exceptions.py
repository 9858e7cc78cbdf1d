"""
Query Tree Exception Hierarchy

Contains all exception classes raised while reifying and selecting queries.
"""

from typing import Optional, Sequence


class QueryTreeError(Exception):
    """
    Base exception for all query tree operations.
    """
    pass


class MissingNodeError(QueryTreeError, LookupError):
    """
    Raised when a referenced node id is absent from the node store.

    This is a state-integrity defect upstream: the store should never
    reference an id it does not hold. It is not recovered locally.
    """

    def __init__(self, node_id: int, parent_id: Optional[int] = None):
        self.node_id = node_id
        self.parent_id = parent_id
        if parent_id is None:
            message = f"Node {node_id} is not in the node store"
        else:
            message = f"Node {node_id} (referenced by node {parent_id}) is not in the node store"
        super().__init__(message)


class CyclicQueryError(QueryTreeError):
    """
    Raised when a node is reachable from itself during reification.
    """

    def __init__(self, path: Sequence[int]):
        self.path = tuple(path)
        rendered = " -> ".join(str(node_id) for node_id in self.path)
        super().__init__(f"Query nodes form a cycle: {rendered}")


class UnknownNodeKindError(QueryTreeError):
    """
    Raised for an unrecognized node kind when strict kinds are enabled.

    By default unknown kinds pass through the API reifier verbatim.
    """

    def __init__(self, kind: str, node_id: int):
        self.kind = kind
        self.node_id = node_id
        super().__init__(f"Node {node_id} has unknown kind {kind!r}")


class InvalidStateError(QueryTreeError):
    """
    Raised when a raw application state cannot be validated.

    Wraps the underlying pydantic ValidationError as ``__cause__``.
    """
    pass


__all__ = [
    "QueryTreeError",
    "MissingNodeError",
    "CyclicQueryError",
    "UnknownNodeKindError",
    "InvalidStateError",
]
