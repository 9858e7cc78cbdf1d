"""
querytree - flat query node stores to nested query trees

Reifies an id-indexed store of query nodes into the nested tree a search
API expects, or the id-annotated tree a query builder UI renders, and
selects between that structured path and raw advanced-mode text.
"""

__version__ = "0.1.0"

from .config import SelectorConfig
from .exceptions import (
    QueryTreeError,
    MissingNodeError,
    CyclicQueryError,
    UnknownNodeKindError,
    InvalidStateError,
)
from .models import (
    AdvancedQuery,
    AppState,
    ContainingNode,
    NodeStore,
    OpaqueNode,
    QueryNode,
    QuerySelection,
    TerminalNode,
    build_node_store,
    parse_node,
)
from .reifier import reify_for_api, reify_for_ui
from .selectors import select_query, select_tree_query, select_tree_query_for_api
from .wire import from_wire, to_wire

# The MCP server is lazy-imported (it pulls in fastmcp)
_SERVER_ATTRS = {"create_server", "QueryTreeServer"}


def __getattr__(name):
    if name in _SERVER_ATTRS:
        from . import mcp_server
        return getattr(mcp_server, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "SelectorConfig",
    "QueryTreeError",
    "MissingNodeError",
    "CyclicQueryError",
    "UnknownNodeKindError",
    "InvalidStateError",
    "AdvancedQuery",
    "AppState",
    "ContainingNode",
    "NodeStore",
    "OpaqueNode",
    "QueryNode",
    "QuerySelection",
    "TerminalNode",
    "build_node_store",
    "parse_node",
    "reify_for_api",
    "reify_for_ui",
    "select_query",
    "select_tree_query",
    "select_tree_query_for_api",
    "from_wire",
    "to_wire",
    "create_server",
    "QueryTreeServer",
]
