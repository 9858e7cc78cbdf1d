"""
Data models for query trees

Pydantic models for the flat node store, the application state the
selectors read, and the selection they produce.
"""

from typing import Annotated, Any, Dict, List, Literal, Mapping, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    NonNegativeInt,
    Tag,
    TypeAdapter,
    field_validator,
)


NodeId = NonNegativeInt


# ============================================================================
# Query Nodes
# ============================================================================

class TerminalNode(BaseModel):
    """Leaf predicate, e.g. an identifier match"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["Terminal"] = "Terminal"
    name: str
    value: str

    def fields(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


class ContainingNode(BaseModel):
    """Binary combinator; lhs and rhs are ids into the same node store"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["Containing"] = "Containing"
    lhs: NodeId
    rhs: NodeId

    def fields(self) -> Dict[str, Any]:
        return {"lhs": self.lhs, "rhs": self.rhs}


class OpaqueNode(BaseModel):
    """
    Node of a kind this package does not know.

    Its raw fields are kept in their original order so reification can
    pass them through untouched.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    kind: str

    def fields(self) -> Dict[str, Any]:
        # The node's own id is positional, never a field
        return {key: value for key, value in (self.model_extra or {}).items() if key != "id"}


NODE_KINDS = {
    "Terminal": TerminalNode,
    "Containing": ContainingNode,
}


def _node_tag(raw: Any) -> str:
    if isinstance(raw, Mapping):
        kind = raw.get("kind")
    else:
        kind = getattr(raw, "kind", None)
    # Non-string kinds fall to OpaqueNode, whose str kind rejects them
    return kind if isinstance(kind, str) and kind in NODE_KINDS else "Opaque"


QueryNode = Annotated[
    Union[
        Annotated[TerminalNode, Tag("Terminal")],
        Annotated[ContainingNode, Tag("Containing")],
        Annotated[OpaqueNode, Tag("Opaque")],
    ],
    Discriminator(_node_tag),
]

NodeStore = Dict[NodeId, QueryNode]

_node_adapter = TypeAdapter(QueryNode)
_store_adapter = TypeAdapter(NodeStore)


def _store_items(raw: Any) -> Any:
    """A JSON array is indexed by position; anything else is passed on as-is."""
    if isinstance(raw, (list, tuple)):
        return dict(enumerate(raw))
    return raw


def parse_node(raw: Any) -> Union[TerminalNode, ContainingNode, OpaqueNode]:
    """Validate one raw node mapping into its tagged variant."""
    return _node_adapter.validate_python(raw)


def build_node_store(raw: Any) -> NodeStore:
    """
    Build a node store from a JSON array (index is the id) or a mapping
    keyed by integer ids or their decimal strings.

    Raises:
        pydantic.ValidationError: if a key is not a non-negative integer or
            a node does not fit its kind
    """
    return _store_adapter.validate_python(_store_items(raw))


# ============================================================================
# Application State
# ============================================================================

class AdvancedQuery(BaseModel):
    """Raw text typed by the user in advanced mode"""
    query: str = ""
    highlight: str = ""


class AppState(BaseModel):
    """
    Snapshot of the application state the selectors read.

    Accepts the camelCase names used on the wire as well as the
    snake_case attribute names.
    """
    model_config = ConfigDict(populate_by_name=True)

    is_advanced: bool = Field(False, alias="isAdvanced")
    advanced: AdvancedQuery = Field(default_factory=AdvancedQuery)
    structured_query: NodeStore = Field(default_factory=dict, alias="structuredQuery")

    @field_validator("structured_query", mode="before")
    @classmethod
    def _index_array_store(cls, value: Any) -> Any:
        return _store_items(value)


# ============================================================================
# Selector Output
# ============================================================================

class QuerySelection(BaseModel):
    """
    Output of select_query.

    In structured mode q and h are compact JSON; in advanced mode they are
    the user's free-form text.
    """
    model_config = ConfigDict(frozen=True)

    q: str
    h: str


ReifiedApiNode = Dict[str, Any]
ReifiedUiNode = Dict[str, Any]
HighlightSpec = List[Dict[str, Any]]
