"""Tag records as read from Exuberant/Universal ctags files."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

# Single-letter kinds written without --fields=+K
KIND_LETTERS = {
    "c": "class",
    "d": "macro",
    "e": "enumerator",
    "f": "function",
    "g": "enum",
    "l": "local",
    "m": "member",
    "n": "namespace",
    "p": "prototype",
    "s": "struct",
    "t": "typedef",
    "u": "union",
    "v": "variable",
    "x": "externvar",
}

OWNER_FIELDS = ("class", "struct", "union")

_FIELD_ESCAPES = {"t": "\t", "r": "\r", "n": "\n", "\\": "\\"}
_PATTERN_ESCAPE_RE = re.compile(r"\\([\\/?$^])")


@dataclass(frozen=True)
class TagRecord:
    """One tags file entry. Optional fields are None when the indexer left them out."""

    name: str
    filename: str
    cmd: str
    kind: str | None = None
    language: str | None = None
    signature: str | None = None
    class_: str | None = None
    struct: str | None = None
    union: str | None = None
    extras: Mapping[str, str] = field(default_factory=dict, hash=False, compare=False)

    @property
    def has_line_locator(self) -> bool:
        return self.cmd.isdigit()

    @property
    def pattern_text(self) -> str | None:
        """Body of a /^...$/ locator with delimiters and escapes removed."""
        cmd = self.cmd
        if len(cmd) < 2 or cmd[0] not in "/?":
            return None
        delim = cmd[0]
        body = cmd[1:-1] if cmd.endswith(delim) else cmd[1:]
        if body.startswith("^"):
            body = body[1:]
        if body.endswith("$") and not body.endswith("\\$"):
            body = body[:-1]
        return _PATTERN_ESCAPE_RE.sub(r"\1", body)

    @property
    def owner(self) -> tuple[str, str] | None:
        """(kind, name) of the enclosing class, struct or union."""
        for kind, value in zip(OWNER_FIELDS, (self.class_, self.struct, self.union)):
            if value:
                return kind, value
        return None

    def to_dict(self) -> dict:
        data = {"name": self.name, "filename": self.filename, "cmd": self.cmd}
        for key in ("kind", "language", "signature", "struct", "union"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.class_ is not None:
            data["class"] = self.class_
        data.update(self.extras)
        return data


def _unescape_field(value: str) -> str:
    if "\\" not in value:
        return value
    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value):
            out.append(_FIELD_ESCAPES.get(value[i + 1], value[i + 1]))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _split_cmd(rest: str) -> tuple[str, str]:
    """Split 'cmd;"<TAB>fields' into (cmd, fields)."""
    if rest[:1] in ("/", "?"):
        delim = rest[0]
        i = 1
        while i < len(rest):
            if rest[i] == "\\":
                i += 2
                continue
            if rest[i] == delim:
                break
            i += 1
        cmd = rest[: i + 1]
        tail = rest[i + 1 :]
    else:
        cut = rest.find(';"')
        if cut == -1:
            cut = rest.find("\t")
        if cut == -1:
            return rest, ""
        cmd, tail = rest[:cut], rest[cut:]
    if tail.startswith(';"'):
        tail = tail[2:]
    return cmd, tail.lstrip("\t")


def parse_tag_line(line: str) -> TagRecord | None:
    """Parse one tags file line. Returns None for headers and malformed lines."""
    line = line.rstrip("\r\n")
    if not line or line.startswith("!_TAG_"):
        return None

    parts = line.split("\t", 2)
    if len(parts) < 3 or not parts[0]:
        logger.debug("Skipping malformed tag line: %r", line[:80])
        return None

    name, filename, rest = parts
    cmd, tail = _split_cmd(rest)

    kind: str | None = None
    attrs: dict[str, str] = {}
    extras: dict[str, str] = {}
    for item in tail.split("\t") if tail else []:
        if not item:
            continue
        if ":" not in item:
            kind = KIND_LETTERS.get(item, item)
            continue
        key, value = item.split(":", 1)
        value = _unescape_field(value)
        if key == "kind":
            kind = KIND_LETTERS.get(value, value)
        elif key in ("language", "signature", "class", "struct", "union"):
            attrs[key] = value
        else:
            extras[key] = value

    return TagRecord(
        name=name,
        filename=filename,
        cmd=cmd,
        kind=kind,
        language=attrs.get("language"),
        signature=attrs.get("signature"),
        class_=attrs.get("class"),
        struct=attrs.get("struct"),
        union=attrs.get("union"),
        extras=MappingProxyType(extras),
    )
