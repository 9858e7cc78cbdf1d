"""
Query Selectors

Derive what the API request builder and the UI tree renderer need from
one application state snapshot.

select_query dispatches on the advanced-mode flag:

- advanced: the user's raw ``query``/``highlight`` text, unchanged. The
  node store is never touched.
- structured: the node store reified from root 0 and serialized together
  with the fixed default highlight.

There is no empty-query fallback: a structured state whose store lacks
the root fails with MissingNodeError.
"""

from typing import Any, Mapping, Optional, Union

from pydantic import TypeAdapter, ValidationError

from .config import SelectorConfig
from .exceptions import InvalidStateError
from .logging_config import configure_logger_for_debug_trace
from .models import AppState, QuerySelection, ReifiedApiNode, ReifiedUiNode
from .reifier import ROOT_ID, reify_for_api, reify_for_ui
from .wire import to_wire

logger = configure_logger_for_debug_trace(__name__)

StateLike = Union[AppState, Mapping[str, Any]]

_flag_adapter = TypeAdapter(bool)


def _is_advanced(raw: Mapping[str, Any]) -> bool:
    """The advanced flag as AppState would read it; an invalid flag counts as structured."""
    flag = raw.get("isAdvanced", raw.get("is_advanced", False))
    try:
        return _flag_adapter.validate_python(flag)
    except ValidationError:
        # AppState validation reports the bad flag
        return False


def coerce_state(state: StateLike) -> AppState:
    """Validate a raw state mapping into an AppState; AppState passes through."""
    if isinstance(state, AppState):
        return state
    raw = dict(state)
    if _is_advanced(raw):
        # Advanced mode never reads the node store, so it is not validated either
        raw.pop("structuredQuery", None)
        raw.pop("structured_query", None)
    try:
        return AppState.model_validate(raw)
    except ValidationError as e:
        raise InvalidStateError(f"Invalid application state: {e}") from e


def select_tree_query_for_api(state: StateLike, config: Optional[SelectorConfig] = None) -> ReifiedApiNode:
    """The API tree before serialization."""
    state = coerce_state(state)
    config = config or SelectorConfig()
    return reify_for_api(state.structured_query, ROOT_ID, strict_kinds=config.strict_kinds)


def select_query(state: StateLike, config: Optional[SelectorConfig] = None) -> QuerySelection:
    """
    Build the ``{q, h}`` pair sent with a search request.

    Args:
        state: Application state snapshot (AppState or raw mapping)
        config: Selector configuration; defaults come from the environment

    Returns:
        QuerySelection. In advanced mode q/h are the raw user text; in
        structured mode they are compact JSON.

    Raises:
        MissingNodeError: structured mode and the store lacks a referenced id
        InvalidStateError: a raw mapping could not be validated
    """
    state = coerce_state(state)

    if state.is_advanced:
        logger.debug("Advanced mode: passing raw query through")
        return QuerySelection(q=state.advanced.query, h=state.advanced.highlight)

    config = config or SelectorConfig()
    structured_query = select_tree_query_for_api(state, config)
    structured_highlight = config.default_highlight()

    selection = QuerySelection(q=to_wire(structured_query), h=to_wire(structured_highlight))
    logger.debug("Structured mode: q=%s h=%s", selection.q, selection.h)
    return selection


def select_tree_query(state: StateLike, config: Optional[SelectorConfig] = None) -> ReifiedUiNode:
    """
    The id-annotated tree for the UI renderer.

    Raises:
        MissingNodeError: the store lacks a referenced id
        InvalidStateError: a raw mapping could not be validated
    """
    state = coerce_state(state)
    config = config or SelectorConfig()
    return reify_for_ui(state.structured_query, ROOT_ID, strict_kinds=config.strict_kinds)
