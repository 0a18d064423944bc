"""
Pull the called name out of the text in front of a typed "(".

Handles qualified C++ names (A::B::c), destructors (~A, A::~A) and operator
overloads. Operator names are normalized to the spelling ctags writes:
"operator" followed by exactly one space.
"""

from __future__ import annotations

import re

_IDENT = r"[A-Za-z_]\w*"
_QUALIFIER = rf"(?:{_IDENT}\s*::\s*)*"

_OPERATOR_SYMBOL = r"(?:\(\s*\)|\[\s*\]|->\*|<=>|[-+*/%<>=!~^&|]{1,2}=?)"
_OPERATOR_ALLOC = r"(?:new|delete)(?:\s*\[\s*\])?"

_OPERATOR_RE = re.compile(
    rf"(?<![\w~])(?P<token>{_QUALIFIER}operator(?:\s*{_OPERATOR_SYMBOL}|\s+{_OPERATOR_ALLOC}))\s*\(?\s*$"
)
_NAME_RE = re.compile(rf"(?<![\w~])(?P<token>~?{_QUALIFIER}~?{_IDENT})\s*\(?\s*$")
_WORD_RE = re.compile(
    rf"{_QUALIFIER}operator(?:\s*{_OPERATOR_SYMBOL}|\s+{_OPERATOR_ALLOC})|~?{_QUALIFIER}~?{_IDENT}"
)


_OPERATOR_TAIL_RE = re.compile(r"\boperator\b\s*(?P<symbol>\S.*)$")


def _normalize(token: str) -> str:
    token = re.sub(r"\s*::\s*", "::", token)
    return _OPERATOR_TAIL_RE.sub(
        lambda m: "operator " + re.sub(r"\s+", "", m.group("symbol")), token
    )


def extract(text: str) -> str:
    """Name being called at the end of `text`, or "" when there is none.

    >>> extract("x = foo::bar::baz(")
    'foo::bar::baz'
    >>> extract("a.operator  +(")
    'operator +'
    """
    text = text.rstrip()
    match = _OPERATOR_RE.search(text)
    if match is None:
        match = _NAME_RE.search(text)
        if match is None:
            return ""
        # "operator" alone is a keyword, not a callable name
        if match.group("token").rsplit("::", 1)[-1] == "operator":
            return ""
    return _normalize(match.group("token"))


def call_context(line: str, previous_line: str = "") -> str:
    """Text to extract from when "(" was typed at the end of `line`.

    A paren alone on its line belongs to the name on the line above.
    """
    before = line.rstrip()
    if before.endswith("("):
        before = before[:-1]
    if before.strip():
        return line
    return previous_line.rstrip() + "("


def word_at(line: str, column: int) -> str:
    """Qualified name covering `column` (0-based), for hover lookups."""
    for match in _WORD_RE.finditer(line):
        if match.start() <= column < match.end():
            return _normalize(match.group(0))
        if match.start() > column:
            break
    return ""
