"""
Tests for the MCP tool functions and their registration.
"""

import pytest

from querytree.mcp_server import (
    TOOLS,
    handle_query_tree_errors,
    register_all_tools,
    select_query_tool,
    select_tree_query_for_api_tool,
    select_tree_query_tool,
)
from querytree.exceptions import MissingNodeError


class RecordingApp:
    """Stands in for FastMCP; records what gets registered."""

    def __init__(self):
        self.tools = {}

    def tool(self, name=None):
        def decorator(func):
            self.tools[name] = func
            return func
        return decorator


class TestTools:

    def test_select_query_structured(self, raw_structured_state):
        result = select_query_tool(raw_structured_state)
        assert result["success"] is True
        assert result["q"].startswith('{"Containing":[')
        assert result["h"] == '[{"Terminal":{"name":"ident","value":"pm"}}]'

    def test_select_query_advanced(self):
        result = select_query_tool({"isAdvanced": True, "advanced": {"query": "foo AND bar", "highlight": "foo"}})
        assert result == {"success": True, "q": "foo AND bar", "h": "foo"}

    def test_select_tree_query(self, raw_structured_state):
        result = select_tree_query_tool(raw_structured_state)
        assert result["success"] is True
        assert result["tree"]["lhs"]["id"] == 1

    def test_select_tree_query_for_api(self, raw_structured_state):
        result = select_tree_query_for_api_tool(raw_structured_state)
        assert result["tree"]["Containing"][1] == {"Terminal": {"name": "ident", "value": "bar"}}

    def test_missing_node_becomes_error_payload(self):
        result = select_query_tool({"isAdvanced": False, "structuredQuery": []})
        assert result["success"] is False
        assert result["error_type"] == "MissingNodeError"
        assert "Node 0" in result["error"]

    def test_invalid_state_becomes_error_payload(self):
        result = select_tree_query_tool({"structuredQuery": {"root": {}}})
        assert result["success"] is False
        assert result["error_type"] == "InvalidStateError"

    def test_unhashable_kind_becomes_error_payload(self):
        result = select_query_tool({"structuredQuery": [{"kind": ["x"], "a": 1}]})
        assert result["success"] is False
        assert result["error_type"] == "InvalidStateError"


class TestErrorHandling:

    def test_other_exceptions_propagate(self):
        @handle_query_tree_errors
        def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            broken()

    def test_wrapper_keeps_name(self):
        @handle_query_tree_errors
        def my_tool():
            raise MissingNodeError(3)

        assert my_tool.__name__ == "my_tool"
        assert my_tool()["error"] == "Node 3 is not in the node store"


class TestRegistration:

    def test_all_tools_registered_by_name(self):
        app = RecordingApp()
        register_all_tools(app)
        assert app.tools == TOOLS
        assert set(app.tools) == {"select_query", "select_tree_query", "select_tree_query_for_api"}
