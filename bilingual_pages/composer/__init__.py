"""Template composition engine: component loading, expansion, and path markers."""

from .errors import (
    CompositionError,
    CyclicExpansionError,
    MalformedCompoundError,
    MissingComponentError,
    UndecodableComponentError,
    UnresolvedPathMarkerError,
)
from .expander import MARKER_PATTERN, PlaceholderExpander, find_markers
from .loader import ComponentLoader, read_text_verbatim
from .models import (
    ComponentDictionary,
    ComponentEntry,
    CompoundComponent,
    Page,
    count_leaves,
)
from .paths import PathResolver

__all__ = [
    "MARKER_PATTERN",
    "ComponentDictionary",
    "ComponentEntry",
    "ComponentLoader",
    "CompositionError",
    "CompoundComponent",
    "CyclicExpansionError",
    "MalformedCompoundError",
    "MissingComponentError",
    "Page",
    "PathResolver",
    "PlaceholderExpander",
    "UndecodableComponentError",
    "UnresolvedPathMarkerError",
    "count_leaves",
    "find_markers",
    "read_text_verbatim",
]
