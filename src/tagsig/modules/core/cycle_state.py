"""Per-window candidate list and the paren tracking that clears it."""

from __future__ import annotations

from dataclasses import dataclass, field

NEXT = 1
PREV = -1

_DIRECTIONS = {"next": NEXT, "prev": PREV, "previous": PREV}


def paren_depth(span: str) -> tuple[int, int]:
    """Count "(" and ")" in `span`, skipping quoted string and char literals."""
    opens = closes = 0
    quote: str | None = None
    escaped = False
    for ch in span:
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in ("'", '"'):
            quote = ch
        elif ch == "(":
            opens += 1
        elif ch == ")":
            closes += 1
    return opens, closes


def call_closed(span: str) -> bool:
    """True once every "(" typed in `span` has its ")"."""
    opens, closes = paren_depth(span)
    return opens > 0 and closes >= opens


@dataclass
class CycleState:
    """Formatted candidates for one window and the 1-based one on display.

    The editing surface owns one instance per window and passes it into
    every pipeline call.
    """

    candidates: list[str] = field(default_factory=list)
    cursor: int = 1
    span: str = ""

    def __bool__(self) -> bool:
        return bool(self.candidates)

    def __len__(self) -> int:
        return len(self.candidates)

    def reset(self) -> None:
        self.candidates = []
        self.cursor = 1
        self.span = ""

    def load(self, candidates: list[str], span: str = "") -> str:
        """Replace the state with a fresh candidate list.

        `span` is text already typed from the call's opening paren on.
        """
        self.candidates = list(candidates)
        self.cursor = 1
        self.span = span if candidates else ""
        return self.current()

    def current(self) -> str:
        if not self.candidates:
            return ""
        return self.candidates[self.cursor - 1]

    def advance(self, direction: int | str = NEXT) -> str:
        """Step to the next or previous candidate, wrapping at both ends."""
        if isinstance(direction, str):
            if direction.lower() not in _DIRECTIONS:
                raise ValueError(
                    f"Unknown direction {direction!r}; expected one of {', '.join(_DIRECTIONS)}"
                )
            direction = _DIRECTIONS[direction.lower()]
        if direction == 0:
            raise ValueError("Direction must be positive (next) or negative (prev)")
        if not self.candidates:
            return ""
        step = 1 if direction > 0 else -1
        self.cursor = (self.cursor - 1 + step) % len(self.candidates) + 1
        return self.current()

    def on_typed(self, text: str) -> bool:
        """Record text typed after the opening paren.

        Returns True when the call closed and the state was reset.
        """
        if not self.candidates:
            return False
        self.span += text
        if call_closed(self.span):
            self.reset()
            return True
        return False
