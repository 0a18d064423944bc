"""
Read-only query service over ctags tags files.

A tags file whose header says it is sorted is searched with a binary search
on the literal prefix of an anchored pattern, the way editors do it. When the
file lies about its order the search raises TagIndexFormatError; callers can
retry inside degraded_mode(), which forces a linear scan.
"""

from __future__ import annotations

import bisect
import dataclasses
import logging
import os
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import TagIndexFormatError, TagIndexUnavailableError
from .tag_record import TagRecord, parse_tag_line

logger = logging.getLogger(__name__)

DEFAULT_TAG_FILENAMES = ("tags", ".tags")

# !_TAG_FILE_SORTED values
UNSORTED = 0
SORTED = 1
FOLDCASE_SORTED = 2

_REGEX_SPECIAL = set(".^$*+?{}[]|()")


def literal_prefix(pattern: str) -> str | None:
    """Literal text an anchored pattern must start with, or None if unanchored."""
    if not pattern.startswith("^"):
        return None
    out: list[str] = []
    i = 1
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            if i + 1 < len(pattern) and not pattern[i + 1].isalnum():
                out.append(pattern[i + 1])
                i += 2
                continue
            break
        if ch in _REGEX_SPECIAL:
            break
        out.append(ch)
        i += 1
    return "".join(out)


class TagFile:
    """One tags file, loaded lazily and reloaded when its mtime changes."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.sort_mode = UNSORTED
        self._mtime: float | None = None
        self._names: list[str] = []
        self._lines: list[str] = []

    def _load(self) -> None:
        try:
            mtime = self.path.stat().st_mtime
        except OSError as e:
            raise TagIndexUnavailableError(f"Cannot stat {self.path}: {e}") from e
        if self._mtime == mtime:
            return

        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise TagIndexUnavailableError(f"Cannot read {self.path}: {e}") from e

        sort_mode = UNSORTED
        names: list[str] = []
        lines: list[str] = []
        for line in text.splitlines():
            if line.startswith("!_TAG_"):
                if line.startswith("!_TAG_FILE_SORTED\t"):
                    value = line.split("\t")[1]
                    sort_mode = int(value) if value.isdigit() else UNSORTED
                continue
            if not line:
                continue
            names.append(line.split("\t", 1)[0])
            lines.append(line)

        self.sort_mode = sort_mode
        self._names = names
        self._lines = lines
        self._mtime = mtime
        logger.debug("Loaded %d tags from %s (sorted=%d)", len(lines), self.path, sort_mode)

    def reload(self) -> None:
        self._mtime = None
        self._load()

    def __len__(self) -> int:
        self._load()
        return len(self._lines)

    def _record(self, line: str) -> TagRecord | None:
        record = parse_tag_line(line)
        if record is None:
            return None
        if not os.path.isabs(record.filename):
            filename = os.path.normpath(os.path.join(str(self.path.parent), record.filename))
            record = dataclasses.replace(record, filename=filename)
        return record

    def _candidate_range(self, prefix: str, fold: bool) -> range:
        keys = [n.lower() for n in self._names] if fold else self._names
        key = prefix.lower() if fold else prefix
        lo = bisect.bisect_left(keys, key)
        hi = lo
        while hi < len(keys) and keys[hi].startswith(key):
            hi += 1

        # The window around the hit must itself be ordered
        for j in range(max(lo - 1, 0), min(hi + 1, len(keys) - 1)):
            if keys[j] > keys[j + 1]:
                raise TagIndexFormatError(f"{self.path}: tags not sorted near {prefix!r}")
        return range(lo, hi)

    def find(self, pattern: str, *, bsearch: bool = True, ignore_case: bool = False) -> list[TagRecord]:
        """Records whose name matches the regex `pattern`, in file order."""
        self._load()
        regex = re.compile(pattern, re.IGNORECASE if ignore_case else 0)

        prefix = literal_prefix(pattern)
        indices: range
        if bsearch and prefix and self.sort_mode != UNSORTED and not (
            ignore_case and self.sort_mode == SORTED
        ):
            indices = self._candidate_range(prefix, fold=self.sort_mode == FOLDCASE_SORTED or ignore_case)
        else:
            indices = range(len(self._lines))

        results: list[TagRecord] = []
        for i in indices:
            if not regex.search(self._names[i]):
                continue
            record = self._record(self._lines[i])
            if record is not None:
                results.append(record)
        return results


class TagIndex:
    """Ordered list of tags files searched as one index."""

    def __init__(
        self,
        paths: list[str | Path],
        *,
        bsearch: bool = True,
        ignore_case: bool = False,
    ) -> None:
        self.files = [TagFile(p) for p in paths]
        self.bsearch = bsearch
        self.ignore_case = ignore_case

    @property
    def paths(self) -> list[str]:
        return [str(f.path) for f in self.files]

    def find(self, pattern: str) -> list[TagRecord]:
        """Query every file in order.

        Raises:
            TagIndexFormatError: A sorted file turned out not to be sorted
            TagIndexUnavailableError: None of the files could be read
        """
        results: list[TagRecord] = []
        readable = 0
        for tag_file in self.files:
            try:
                results.extend(
                    tag_file.find(pattern, bsearch=self.bsearch, ignore_case=self.ignore_case)
                )
            except TagIndexUnavailableError as e:
                logger.debug("Skipping tags file: %s", e)
                continue
            readable += 1
        if not readable:
            raise TagIndexUnavailableError(
                "No readable tags file among: " + ", ".join(self.paths or ["(none)"])
            )
        return results

    @contextmanager
    def degraded_mode(self) -> Iterator["TagIndex"]:
        """Disable binary search for the duration of the block."""
        saved = self.bsearch
        self.bsearch = False
        try:
            yield self
        finally:
            self.bsearch = saved


def discover_tag_files(start: str | Path, names: tuple[str, ...] = DEFAULT_TAG_FILENAMES) -> list[Path]:
    """Tags files in `start` and its parents, nearest first."""
    found: list[Path] = []
    current = Path(start).resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        for name in names:
            candidate = directory / name
            if candidate.is_file():
                found.append(candidate)
    return found
