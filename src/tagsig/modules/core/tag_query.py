from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .errors import TagIndexFormatError
from .languages import NAMESPACE_LANGUAGE
from .tag_index import TagIndex
from .tag_record import TagRecord

logger = logging.getLogger(__name__)


def exact_pattern(name: str) -> str:
    return f"^{re.escape(name)}$"


def qualified_pattern(name: str) -> str:
    return f"::{re.escape(name)}$"


@dataclass
class QueryResult:
    """Records for one name plus the pattern that found them."""

    subject: str
    pattern: str
    records: list[TagRecord]


class TagQuery:
    """Name lookups against a TagIndex for one editor language."""

    def __init__(self, index: TagIndex, language: str | None = None) -> None:
        self.index = index
        self.language = language

    def _find(self, pattern: str) -> list[TagRecord]:
        try:
            return self.index.find(pattern)
        except TagIndexFormatError as e:
            logger.warning("Tags file out of order, retrying without binary search: %s", e)
            with self.index.degraded_mode():
                return self.index.find(pattern)

    def query(self, name: str) -> QueryResult:
        """Look up `name`.

        For C++ an empty exact lookup is retried once as `::name$`, since
        tags for namespaced definitions often carry the qualifier while call
        sites leave it out.

        Raises:
            TagIndexUnavailableError: No tags file could be read
        """
        pattern = exact_pattern(name)
        logger.debug("Tag query %s", pattern)
        records = self._find(pattern)

        if not records and self.language == NAMESPACE_LANGUAGE:
            pattern = qualified_pattern(name)
            logger.debug("Retrying qualified tag query %s", pattern)
            records = self._find(pattern)

        return QueryResult(subject=name, pattern=pattern, records=records)
