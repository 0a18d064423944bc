"""
Render tag records as one-line signatures.

The declaration text is recovered from the tag's search pattern, so a record
for `add` found at `/^int add(int a, int b)$/` with signature `(int,int)`
renders as:

    int add(int,int) (1/3) ~/src/m.c
"""

from __future__ import annotations

import re

from .languages import NAMESPACE_LANGUAGE, declaration_terminator
from .path_utils import PathRule, shorten
from .tag_record import TagRecord

DECLARATION_KINDS = frozenset({"function", "prototype", "member", "variable", "typedef"})
TYPE_KINDS = frozenset({"class", "struct", "union"})

_WHITESPACE_RE = re.compile(r"\s+")
_QUALIFIED_PREFIX = r"(?:[A-Za-z_]\w*::)*"


def bare_name(name: str) -> str:
    """`ns::Klass::method` -> `method`."""
    return name.rsplit("::", 1)[-1]


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def trim_display(text: str, width: int) -> str:
    """Cut `text` to `width` characters, marking the cut with "..."."""
    if width <= 0 or len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[: width - 3] + "..."


class SignatureFormatter:
    def __init__(
        self,
        language: str | None = None,
        path_rules: list[PathRule] | None = None,
        path_style: int = 0,
    ) -> None:
        self.language = language
        self.path_rules = path_rules or []
        self.path_style = path_style

    def _strip_pattern(self, name: str) -> re.Pattern:
        bare = re.escape(bare_name(name))
        if self.language == NAMESPACE_LANGUAGE:
            bare = re.sub(r"^operator(?:\\ )*", r"operator\\s*", bare)
            return re.compile(r"(?<!\w)" + _QUALIFIED_PREFIX + bare + r"\s*\(.*")
        return re.compile(r"(?<!\w)" + bare + r"(?!\w).*")

    def _with_signature(self, record: TagRecord) -> str:
        text = record.pattern_text
        leading = ""
        if text:
            match = self._strip_pattern(record.name).search(text)
            if match:
                leading = text[: match.start()]
        return f"{leading}{record.name}{record.signature}"

    def _isolate_declaration(self, record: TagRecord) -> str | None:
        text = record.pattern_text
        if not text:
            return None
        decl_re = re.compile(
            r"^(.*?(?<!\w)" + re.escape(bare_name(record.name)) + r"(?!\w).*?)"
            + declaration_terminator(self.language)
        )
        match = decl_re.search(text)
        return match.group(1) if match else None

    def _without_signature(self, record: TagRecord) -> str:
        kind = record.kind
        if kind == "macro":
            return f"macro {record.name}"
        if kind in TYPE_KINDS:
            return f"{kind} {record.name}"
        if kind not in DECLARATION_KINDS:
            return record.name

        text = self._isolate_declaration(record)
        if text is None:
            if kind == "typedef":
                text = f"typedef {record.name}"
            elif kind == "variable":
                text = f"var {record.name}"
            else:
                text = record.name
        if kind == "member" and record.owner:
            owner_kind, owner = record.owner
            text = f"{text} <-- {owner_kind} {owner}"
        return text

    def declaration(self, record: TagRecord) -> str:
        """Declaration text for `record` without the position suffix."""
        if record.kind and record.signature is not None:
            text = self._with_signature(record)
        elif record.kind:
            text = self._without_signature(record)
        else:
            text = record.name
        return collapse_whitespace(text)

    def location(self, record: TagRecord) -> str:
        where = shorten(record.filename, self.path_rules, self.path_style)
        if record.has_line_locator:
            where = f"{where}:{record.cmd}"
        return where

    def format(self, record: TagRecord, ordinal: int, total: int) -> str:
        """One display line: declaration, "(ordinal/total)", shortened file."""
        return f"{self.declaration(record)} ({ordinal}/{total}) {self.location(record)}"

    def format_all(self, records: list[TagRecord]) -> list[str]:
        total = len(records)
        return [self.format(r, i, total) for i, r in enumerate(records, start=1)]
