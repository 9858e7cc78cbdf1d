"""
querytree MCP Server

Exposes the query selectors as MCP tools over stdio, so an editor or agent
can turn an application state snapshot into request parameters or a UI tree.
"""

import signal
import sys
from functools import wraps
from typing import Any, Callable, Dict

from fastmcp import FastMCP

from .config import SelectorConfig
from .exceptions import QueryTreeError
from .logging_config import configure_logger_for_debug_trace
from .selectors import select_query, select_tree_query, select_tree_query_for_api

logger = configure_logger_for_debug_trace(__name__)

SERVER_INSTRUCTIONS = """querytree turns a query-builder application state into search request parameters.

State shape: {"isAdvanced": bool, "advanced": {"query": str, "highlight": str},
"structuredQuery": [nodes...]} where nodes are {"kind": "Terminal", "name", "value"}
or {"kind": "Containing", "lhs": id, "rhs": id} and node 0 is the root.

Tools:
- `select_query` - the {q, h} pair for the search API
- `select_tree_query` - the id-annotated nested tree for rendering
- `select_tree_query_for_api` - the nested API tree before serialization"""


def handle_query_tree_errors(func: Callable[..., Dict[str, Any]]) -> Callable[..., Dict[str, Any]]:
    """
    Decorator to turn QueryTreeError into an error response.

    Example:
        @app.tool()
        @handle_query_tree_errors
        def my_tool(...) -> Dict[str, Any]:
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            return func(*args, **kwargs)
        except QueryTreeError as e:
            logger.error("%s failed: %s", func.__name__, e)
            return {
                "success": False,
                "error": str(e),
                "error_type": type(e).__name__,
            }
    return wrapper


@handle_query_tree_errors
def select_query_tool(state: Dict[str, Any]) -> Dict[str, Any]:
    """Build the {q, h} search parameters from an application state snapshot."""
    selection = select_query(state, SelectorConfig())
    return {"success": True, "q": selection.q, "h": selection.h}


@handle_query_tree_errors
def select_tree_query_tool(state: Dict[str, Any]) -> Dict[str, Any]:
    """Build the id-annotated nested query tree used for rendering."""
    return {"success": True, "tree": select_tree_query(state, SelectorConfig())}


@handle_query_tree_errors
def select_tree_query_for_api_tool(state: Dict[str, Any]) -> Dict[str, Any]:
    """Build the nested API query tree without serializing it."""
    return {"success": True, "tree": select_tree_query_for_api(state, SelectorConfig())}


TOOLS = {
    "select_query": select_query_tool,
    "select_tree_query": select_tree_query_tool,
    "select_tree_query_for_api": select_tree_query_for_api_tool,
}


def register_all_tools(app: FastMCP) -> None:
    """Register every selector tool on the FastMCP app."""
    for name, tool in TOOLS.items():
        app.tool(name=name)(tool)
        logger.debug("Registered tool %s", name)


class QueryTreeServer:
    """
    querytree MCP server.

    Stateless: each tool call validates its own state snapshot.
    """

    def __init__(self):
        self.app = FastMCP("querytree", instructions=SERVER_INSTRUCTIONS)
        register_all_tools(self.app)

    def run(self):
        """
        Start the MCP server with graceful shutdown support.
        """
        def signal_handler(signum, frame):
            """Handle shutdown signals gracefully"""
            sig_name = signal.Signals(signum).name
            logger.warning("Received %s, shutting down...", sig_name)
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        try:
            logger.info("querytree MCP server starting...")
            self.app.run()
        except KeyboardInterrupt:
            logger.warning("Keyboard interrupt received, shutting down...")
        finally:
            logger.info("Server shutdown complete")


def create_server() -> QueryTreeServer:
    """Factory function to create server instance"""
    return QueryTreeServer()
