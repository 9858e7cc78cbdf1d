"""
Tree Reifier

Rebuilds a nested tree from the flat, id-indexed node store. There are
two output shapes, one function each:

- reify_for_api: ``{kind: fields}`` mappings with ``kind`` and ``id``
  stripped; Containing nodes become ``{"Containing": [lhs, rhs]}``.
- reify_for_ui: every original field plus the node's own ``id``, with
  ``lhs``/``rhs`` replaced by their reified sub-trees.

Both walk depth-first from the root with no memoization: a node shared by
two parents is reified once per parent, so a DAG comes out as a tree with
duplicated sub-trees. Output is a fresh copy with no link back to the store.
"""

from typing import Mapping, Optional, Tuple

from .exceptions import CyclicQueryError, MissingNodeError, UnknownNodeKindError
from .logging_config import configure_logger_for_debug_trace
from .models import ContainingNode, OpaqueNode, QueryNode, ReifiedApiNode, ReifiedUiNode

logger = configure_logger_for_debug_trace(__name__)

ROOT_ID = 0

Path = Tuple[int, ...]


def _lookup(store: Mapping[int, QueryNode], node_id: int, parent_id: Optional[int], path: Path) -> QueryNode:
    if node_id in path:
        raise CyclicQueryError(path + (node_id,))
    try:
        return store[node_id]
    except KeyError:
        raise MissingNodeError(node_id, parent_id) from None


def reify_for_api(store: Mapping[int, QueryNode], root_id: int = ROOT_ID, *,
                  strict_kinds: bool = False) -> ReifiedApiNode:
    """
    Reify the tree under ``root_id`` into its API shape.

    Nodes of unknown kind are wrapped as ``{kind: raw_fields}`` unless
    ``strict_kinds`` is set, in which case they raise.

    Raises:
        MissingNodeError: the root or a referenced child is not in the store
        CyclicQueryError: a node is its own ancestor
        UnknownNodeKindError: strict_kinds and a node of unknown kind
    """
    visited = 0

    def treeify(node_id: int, parent_id: Optional[int], path: Path) -> ReifiedApiNode:
        nonlocal visited
        node = _lookup(store, node_id, parent_id, path)
        visited += 1
        path = path + (node_id,)

        if isinstance(node, ContainingNode):
            return {node.kind: [treeify(node.lhs, node_id, path), treeify(node.rhs, node_id, path)]}
        if strict_kinds and isinstance(node, OpaqueNode):
            raise UnknownNodeKindError(node.kind, node_id)
        return {node.kind: node.fields()}

    tree = treeify(root_id, None, ())
    logger.debug("Reified %d node(s) from root %d for API", visited, root_id)
    return tree


def reify_for_ui(store: Mapping[int, QueryNode], root_id: int = ROOT_ID, *,
                 strict_kinds: bool = False) -> ReifiedUiNode:
    """
    Reify the tree under ``root_id`` into its UI shape.

    Each output node carries its own ``id``; for Containing nodes
    ``output["lhs"]["id"]`` is the lhs child's id.

    Raises:
        MissingNodeError: the root or a referenced child is not in the store
        CyclicQueryError: a node is its own ancestor
        UnknownNodeKindError: strict_kinds and a node of unknown kind
    """
    visited = 0

    def treeify(node_id: int, parent_id: Optional[int], path: Path) -> ReifiedUiNode:
        nonlocal visited
        node = _lookup(store, node_id, parent_id, path)
        visited += 1
        path = path + (node_id,)

        if strict_kinds and isinstance(node, OpaqueNode):
            raise UnknownNodeKindError(node.kind, node_id)

        # lhs/rhs keep their positions from the dump, only their values change
        reified = {**node.model_dump(), "id": node_id}
        if isinstance(node, ContainingNode):
            reified["lhs"] = treeify(node.lhs, node_id, path)
            reified["rhs"] = treeify(node.rhs, node_id, path)
        return reified

    tree = treeify(root_id, None, ())
    logger.debug("Reified %d node(s) from root %d for UI", visited, root_id)
    return tree
