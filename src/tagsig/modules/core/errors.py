"""
Tag lookup errors and structured error codes for machine output.

Error codes that callers can programmatically handle:
- TAGSIG_ERR_NO_INDEX: No tags file could be read
- TAGSIG_ERR_NOT_FOUND: Nothing matched the queried name
- TAGSIG_ERR_USAGE: Bad command line input
"""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


# Error codes
ERR_NO_INDEX = "TAGSIG_ERR_NO_INDEX"
ERR_NOT_FOUND = "TAGSIG_ERR_NOT_FOUND"
ERR_USAGE = "TAGSIG_ERR_USAGE"


class TagIndexError(Exception):
    """Base class for failures reported by a tag index."""


class TagIndexFormatError(TagIndexError):
    """The sorted-file binary search hit lines that are out of order.

    The index itself is still readable; a linear scan gives correct results.
    """


class TagIndexUnavailableError(TagIndexError):
    """No tags file could be opened or read."""


@dataclass
class TagSigError:
    """Failure reported by the CLI under --machine as {"success": false, ...}."""

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"error": True, "code": self.code, "message": self.message, "details": self.details}


def make_error(code: str, message: str, **details) -> dict:
    return TagSigError(code=code, message=message, details=details).to_dict()


def log_and_return_empty(
    logger_: logging.Logger,
    level: int,
    message: str,
    exc: Exception | None = None,
    return_value: Any = None,
) -> Any:
    """Log a lookup failure and hand back an empty result.

    The editor shows nothing rather than an error; `--verbose` surfaces the log line.
    `return_value` defaults to an empty candidate list.
    """
    if exc is not None:
        logger_.log(level, "%s: %s", message, exc)
    else:
        logger_.log(level, message)
    return [] if return_value is None else return_value


def make_no_index_error(tag_files: list[str]) -> dict:
    """None of `tag_files` (explicit, TAGSIG_TAGS or discovered) exists."""
    return make_error(
        ERR_NO_INDEX,
        "No readable tags file. Generate one with 'ctags -R --fields=+lS .'",
        tag_files=tag_files,
        hint="ctags -R --fields=+lS --extras=+q .",
    )


def make_not_found_error(item_type: str, name: str) -> dict:
    return make_error(ERR_NOT_FOUND, f"No {item_type} tags for {name!r}", type=item_type, name=name)
