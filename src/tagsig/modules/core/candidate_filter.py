from __future__ import annotations

import logging
import re

from .languages import DEFAULT_LANGUAGE_MAP, NAMESPACE_LANGUAGE, accepts
from .tag_record import TagRecord

logger = logging.getLogger(__name__)

CALLABLE_KINDS = frozenset({"prototype", "function"})


def looks_callable(record: TagRecord) -> bool:
    """Functions, prototypes, and members whose locator shows a parameter list."""
    if record.kind in CALLABLE_KINDS:
        return True
    return record.kind == "member" and "(" in record.cmd


def filter_candidates(
    records: list[TagRecord],
    target_language: str | None,
    require_callable: bool,
    pattern: str,
    subject: str,
    language_map: dict[str, list[str]] | None = None,
) -> list[TagRecord]:
    """Narrow raw query results to the ones worth showing, keeping their order.

    Args:
        records: Query results in index order
        target_language: Editor language of the buffer
        require_callable: Only keep things that can be called
        pattern: Regex the query used; rechecked case-sensitively
        subject: Name the user typed; kind-less tags must equal it
        language_map: Editor language -> accepted tag languages
    """
    if language_map is None:
        language_map = DEFAULT_LANGUAGE_MAP
    name_re = re.compile(pattern)

    kept: list[TagRecord] = []
    for record in records:
        if not record.name:
            continue
        if record.language and not accepts(language_map, target_language, record.language):
            logger.debug("Dropping %s: language %s", record.name, record.language)
            continue

        if record.kind:
            if require_callable and not looks_callable(record):
                continue
            if not name_re.search(record.name):
                continue
            if (
                target_language == NAMESPACE_LANGUAGE
                and record.class_
                and "::" in record.name
                and record.class_ not in record.name
            ):
                logger.debug("Dropping %s: not a member of %s", record.name, record.class_)
                continue
        else:
            if require_callable or record.name != subject:
                continue

        kept.append(record)
    return kept
