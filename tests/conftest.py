"""
Shared pytest fixtures for querytree tests.

Provides the node stores and application states used across test modules,
and keeps QUERYTREE_* environment variables from leaking between tests.
"""

import os

import pytest

from querytree import AppState, build_node_store


@pytest.fixture(autouse=True)
def clean_environment():
    """
    Remove QUERYTREE_* variables for each test and restore the environment after.

    ConfigLoader writes os.environ directly, so a snapshot is restored
    rather than relying on monkeypatch bookkeeping.
    """
    saved = dict(os.environ)
    for key in list(os.environ):
        if key.startswith("QUERYTREE_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def raw_scenario_store():
    """
    Containing(foo, bar) as a JSON array, the shape a query builder keeps.
    """
    return [
        {"kind": "Containing", "lhs": 1, "rhs": 2},
        {"kind": "Terminal", "name": "ident", "value": "foo"},
        {"kind": "Terminal", "name": "ident", "value": "bar"},
    ]


@pytest.fixture
def scenario_store(raw_scenario_store):
    """
    The scenario store validated into query node models.
    """
    return build_node_store(raw_scenario_store)


@pytest.fixture
def raw_structured_state(raw_scenario_store):
    """
    A structured-mode application state as it arrives over the wire.
    """
    return {
        "isAdvanced": False,
        "advanced": {"query": "", "highlight": ""},
        "structuredQuery": raw_scenario_store,
    }


@pytest.fixture
def structured_state(raw_structured_state):
    return AppState.model_validate(raw_structured_state)


@pytest.fixture
def advanced_state(raw_scenario_store):
    """
    An advanced-mode state; its node store must never be consulted.
    """
    return AppState.model_validate({
        "isAdvanced": True,
        "advanced": {"query": "foo AND bar", "highlight": "foo"},
        "structuredQuery": raw_scenario_store,
    })


@pytest.fixture
def nested_store():
    """
    Containing(Containing(a, b), c), with ids out of tree order.

    Returns:
        NodeStore: 0 -> Containing(3, 1); 3 -> Containing(2, 4)
    """
    return build_node_store({
        "0": {"kind": "Containing", "lhs": 3, "rhs": 1},
        "1": {"kind": "Terminal", "name": "ident", "value": "c"},
        "2": {"kind": "Terminal", "name": "ident", "value": "a"},
        "3": {"kind": "Containing", "lhs": 2, "rhs": 4},
        "4": {"kind": "Terminal", "name": "ident", "value": "b"},
    })
