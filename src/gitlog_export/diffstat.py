"""Extraction of ``--shortstat`` counts from the trailer of a log record."""

import re
from typing import NamedTuple, Optional

from .config import IntegerWidth
from .errors import NumericOverflowError

FILES_CHANGED = re.compile(r"(\d+) files? changed", re.ASCII)
INSERTIONS = re.compile(r"(\d+) insertions?", re.ASCII)
DELETIONS = re.compile(r"(\d+) deletions?", re.ASCII)


class DiffStat(NamedTuple):
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


def _parse_count(
    field: str, match: Optional["re.Match[str]"], width: IntegerWidth
) -> int:
    if match is None:
        return 0

    text = match.group(1)
    value = int(text)
    if value > width.max_value:
        raise NumericOverflowError(field, text, width.value)
    return value


def extract_diffstat(trailer: str, width: IntegerWidth = IntegerWidth.U32) -> DiffStat:
    """
    Pull files changed, insertions and deletions out of free-form trailer text.

    Each quantity is searched for independently and defaults to 0 when its
    phrase is missing, which is the normal case for merge and empty commits.

    Args:
        trailer: Text following the structured fields, e.g.
            "3 files changed, 10 insertions(+), 2 deletions(-)"
        width: Integer width every count must fit in

    Returns:
        DiffStat with the three counts

    Raises:
        NumericOverflowError: If a count exceeds the configured width
    """
    return DiffStat(
        files_changed=_parse_count(
            "files_changed", FILES_CHANGED.search(trailer), width
        ),
        insertions=_parse_count("insertions", INSERTIONS.search(trailer), width),
        deletions=_parse_count("deletions", DELETIONS.search(trailer), width),
    )
