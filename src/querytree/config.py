"""
Selector Configuration.

Configuration dataclass and environment variable support for query selection.
"""

from dataclasses import dataclass, field
import os

from .models import HighlightSpec


# =============================================================================
# Default Values
# =============================================================================

DEFAULT_HIGHLIGHT_NAME = "ident"
DEFAULT_HIGHLIGHT_VALUE = "pm"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass
class SelectorConfig:
    """Configuration for the query selectors.

    Supports environment variables:
    - QUERYTREE_HIGHLIGHT_NAME: Terminal name of the default highlight (default: ident)
    - QUERYTREE_HIGHLIGHT_VALUE: Terminal value of the default highlight (default: pm)
    - QUERYTREE_STRICT_KINDS: Reject unknown node kinds instead of passing
      them through (default: false)
    """

    highlight_name: str = field(
        default_factory=lambda: os.environ.get("QUERYTREE_HIGHLIGHT_NAME", DEFAULT_HIGHLIGHT_NAME))
    highlight_value: str = field(
        default_factory=lambda: os.environ.get("QUERYTREE_HIGHLIGHT_VALUE", DEFAULT_HIGHLIGHT_VALUE))
    strict_kinds: bool = field(default_factory=lambda: _env_flag("QUERYTREE_STRICT_KINDS"))

    def default_highlight(self) -> HighlightSpec:
        """The fixed highlight specification sent with structured queries."""
        return [{"Terminal": {"name": self.highlight_name, "value": self.highlight_value}}]
