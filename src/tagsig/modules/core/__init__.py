"""Core lookup pipeline: extract, query, filter, format, cycle."""

from .api import (
    SignatureDisplay,
    cycle,
    format_candidates,
    hover_text,
    hover_word,
    lookup,
    signature_for_call,
    tooltip_text,
)
from .candidate_filter import filter_candidates, looks_callable
from .config import SignatureConfig, load_config
from .cycle_state import CycleState, call_closed, paren_depth
from .errors import TagIndexError, TagIndexFormatError, TagIndexUnavailableError
from .identifier import call_context, extract, word_at
from .path_utils import shorten
from .signature_format import SignatureFormatter, trim_display
from .tag_index import TagFile, TagIndex, discover_tag_files
from .tag_query import QueryResult, TagQuery
from .tag_record import TagRecord, parse_tag_line

__all__ = [
    "CycleState",
    "QueryResult",
    "SignatureConfig",
    "SignatureDisplay",
    "SignatureFormatter",
    "TagFile",
    "TagIndex",
    "TagIndexError",
    "TagIndexFormatError",
    "TagIndexUnavailableError",
    "TagQuery",
    "TagRecord",
    "call_closed",
    "call_context",
    "cycle",
    "discover_tag_files",
    "extract",
    "filter_candidates",
    "format_candidates",
    "hover_text",
    "hover_word",
    "load_config",
    "lookup",
    "looks_callable",
    "paren_depth",
    "parse_tag_line",
    "shorten",
    "signature_for_call",
    "tooltip_text",
    "trim_display",
    "word_at",
]
