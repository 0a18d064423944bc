"""
tagsig API - signatures for the call being typed.

Usage:
    from tagsig.modules.core.api import signature_for_call, cycle

    state = CycleState()                  # one per editor window
    index = TagIndex(["tags"])
    shown = signature_for_call(state, "total = add(", index, language="c")
    print(shown.inline)                   # int add(int,int) (1/2) src/m.c
    print(cycle(state, "next").inline)    # second candidate

Nothing here raises on lookup problems: a missing tags file or an
unmatched name leaves an empty display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .candidate_filter import filter_candidates
from .config import SignatureConfig
from .cycle_state import CycleState
from .errors import TagIndexUnavailableError, log_and_return_empty
from .identifier import call_context, extract, word_at
from .signature_format import SignatureFormatter, trim_display
from .tag_index import TagIndex
from .tag_query import TagQuery
from .tag_record import TagRecord

__all__ = [
    "SignatureDisplay",
    "lookup",
    "format_candidates",
    "signature_for_call",
    "cycle",
    "hover_text",
    "hover_word",
    "tooltip_text",
]

logger = logging.getLogger(__name__)


@dataclass
class SignatureDisplay:
    """What the editor should show: one inline line and/or a tooltip."""

    inline: str = ""
    tooltip: str = ""

    def __bool__(self) -> bool:
        return bool(self.inline or self.tooltip)


def lookup(
    name: str,
    index: TagIndex,
    language: str | None = None,
    config: SignatureConfig | None = None,
    require_callable: bool = True,
) -> list[TagRecord]:
    """Filtered tag records for `name`, in index order."""
    if not name:
        return []
    config = config or SignatureConfig()
    try:
        result = TagQuery(index, language).query(name)
    except TagIndexUnavailableError as e:
        return log_and_return_empty(logger, logging.DEBUG, f"No tags for {name!r}", e)

    matches = filter_candidates(
        result.records,
        target_language=language,
        require_callable=require_callable,
        pattern=result.pattern,
        subject=name,
        language_map=config.language_map,
    )
    logger.debug("%s: %d of %d tags kept", name, len(matches), len(result.records))
    return matches


def format_candidates(
    records: list[TagRecord],
    language: str | None = None,
    config: SignatureConfig | None = None,
) -> list[str]:
    config = config or SignatureConfig()
    formatter = SignatureFormatter(language, config.path_rules, config.path_style)
    return formatter.format_all(records)


def tooltip_text(candidates: list[str], max_lines: int) -> str:
    return "\n".join(candidates[: max(max_lines, 0)])


def _display(state: CycleState, config: SignatureConfig) -> SignatureDisplay:
    if not state:
        return SignatureDisplay()
    if config.tooltip_only:
        return SignatureDisplay(tooltip=tooltip_text(state.candidates, config.max_tooltip_lines))
    return SignatureDisplay(inline=trim_display(state.current(), config.display_trim))


def signature_for_call(
    state: CycleState,
    text: str,
    index: TagIndex,
    language: str | None = None,
    config: SignatureConfig | None = None,
    previous_line: str = "",
) -> SignatureDisplay:
    """Handle a typed "(": look the callee up and load `state` with the results.

    Args:
        state: The window's cycle state; always replaced, never merged
        text: Line text up to and including the "("
        index: Tags to search
        language: Editor language of the buffer
        config: Options; defaults when omitted
        previous_line: Line above, used when the "(" stands alone
    """
    config = config or SignatureConfig()
    name = extract(call_context(text, previous_line))
    if not name:
        state.reset()
        return SignatureDisplay()

    candidates = format_candidates(lookup(name, index, language, config), language, config)
    state.load(candidates, span="(")
    return _display(state, config)


def cycle(
    state: CycleState,
    direction: int | str = "next",
    config: SignatureConfig | None = None,
) -> SignatureDisplay:
    """Show the next or previous candidate of the current call."""
    config = config or SignatureConfig()
    state.advance(direction)
    return _display(state, config)


def hover_word(
    word: str,
    index: TagIndex,
    language: str | None = None,
    config: SignatureConfig | None = None,
) -> str:
    """Tooltip for `word`: every matching tag, callable or not."""
    config = config or SignatureConfig()
    records = lookup(word, index, language, config, require_callable=False)
    return tooltip_text(format_candidates(records, language, config), config.max_tooltip_lines)


def hover_text(
    line: str,
    column: int,
    index: TagIndex,
    language: str | None = None,
    config: SignatureConfig | None = None,
) -> str:
    """Tooltip for the name under `column` (0-based) of `line`."""
    return hover_word(word_at(line, column), index, language, config)
