"""Display-only shortening of tag file paths."""

from __future__ import annotations

import re

# Style bits
STYLE_PARENT = 1
STYLE_INCLUDE = 2
STYLE_ABBREVIATE = 4

PathRule = tuple[str, str]

_DOT_SEGMENT_RE = re.compile(r"[\\/]\.(?=[\\/])")
_SEPARATOR_RE = re.compile(r"([\\/])")
_ABBREVIATE_RE = re.compile(r"([^\\/:])[^\\/:]*(?=[\\/])")


def _trim_include(path: str, keep_parent: bool) -> str:
    """Drop everything through the last `include` directory."""
    parts = _SEPARATOR_RE.split(path)
    segments = parts[0::2]
    # The last segment is the file itself, never an include directory
    for i in range(len(segments) - 2, -1, -1):
        if segments[i] != "include":
            continue
        rest = "".join(parts[2 * i + 2 :])
        if keep_parent and i > 0 and segments[i - 1]:
            return f"{segments[i - 1]}:{rest}"
        return rest
    return path


def apply_path_rules(path: str, rules: list[PathRule] | None) -> str:
    for prefix, replacement in rules or []:
        if prefix:
            path = path.replace(prefix, replacement)
    return path


def shorten(path: str, rules: list[PathRule] | None = None, style: int = 0) -> str:
    """Shorten `path` for display.

    Args:
        path: File name from a tag
        rules: (literal prefix, replacement) pairs applied in order
        style: Bitmask; 2 trims through the last include/ directory (1 keeps
               its parent as "parent:"), 4 cuts directories to one character

    >>> shorten("/usr/local/include/foo/bar/baz", style=3)
    'local:foo/bar/baz'
    """
    path = _DOT_SEGMENT_RE.sub("", path)
    path = apply_path_rules(path, rules)
    if style <= 1:
        return path
    if style & STYLE_INCLUDE:
        path = _trim_include(path, keep_parent=bool(style & STYLE_PARENT))
    if style & STYLE_ABBREVIATE:
        path = _ABBREVIATE_RE.sub(r"\1", path)
    return path


def parse_path_rule(text: str) -> PathRule:
    """Parse a "PREFIX=REPLACEMENT" command line rule."""
    if "=" not in text:
        raise ValueError(f"Path rule must look like PREFIX=REPLACEMENT: {text!r}")
    prefix, replacement = text.split("=", 1)
    if not prefix:
        raise ValueError(f"Path rule has an empty prefix: {text!r}")
    return prefix, replacement
