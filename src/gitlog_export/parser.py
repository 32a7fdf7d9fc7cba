"""
Parser for NUL-delimited ``git log --shortstat`` records.

Each record looks like::

    <hash> <author date> <author email> <committer date>
    <optional shortstat line>

and becomes one immutable Commit. Records are parsed lazily, strictly in the
order git emits them.
"""

import logging
import re
from typing import Iterable, Iterator, List

from .config import IntegerWidth, ParseErrorPolicy
from .diffstat import extract_diffstat
from .errors import InvalidHashError, RecordParseError
from .models import Commit
from .timestamps import Timestamp

logger = logging.getLogger(__name__)

HASH_LENGTH = 40
RECORD_SEPARATOR = b"\x00"

_COMMIT_HASH = re.compile(r"[0-9a-fA-F]{40}", re.ASCII)
_TOKEN_SEPARATOR = re.compile(r"[ \n]")


def _split_tokens(record: str) -> List[str]:
    """Split into hash, author date, email, committer date and trailer."""
    parts = [part.strip() for part in _TOKEN_SEPARATOR.split(record, maxsplit=4)]
    # Missing tokens fail validation below instead of raising IndexError
    parts.extend([""] * (5 - len(parts)))
    return parts


def parse_commit(record: str, width: IntegerWidth = IntegerWidth.U32) -> Commit:
    """Parse one raw log record into a Commit.

    Args:
        record: Text of a single record, without its NUL separator
        width: Integer width the diffstat counts must fit in

    Returns:
        The parsed Commit

    Raises:
        InvalidHashError: If the hash is not exactly 40 hex characters
        InvalidTimestampError: If either date is not strict ISO 8601
        NumericOverflowError: If a diffstat count exceeds the width
    """
    hash_, author_date, author_email, commit_date, trailer = _split_tokens(
        record.strip()
    )

    if len(hash_) != HASH_LENGTH or not _COMMIT_HASH.fullmatch(hash_):
        raise InvalidHashError(hash_)

    author_timestamp = Timestamp.parse(author_date)
    commit_timestamp = Timestamp.parse(commit_date)
    stats = extract_diffstat(trailer, width)

    return Commit(
        hash=hash_,
        author_timestamp=author_timestamp,
        author_email=author_email,
        commit_timestamp=commit_timestamp,
        files_changed=stats.files_changed,
        insertions=stats.insertions,
        deletions=stats.deletions,
    )


def split_records(chunks: Iterable[bytes]) -> Iterator[str]:
    """Reassemble byte chunks into trimmed, non-empty NUL-separated records.

    Invalid UTF-8 is replaced rather than rejected. Only the current record
    and one chunk are held in memory.
    """
    pending = b""
    for chunk in chunks:
        pending += chunk
        *complete, pending = pending.split(RECORD_SEPARATOR)
        for raw in complete:
            record = raw.decode("utf-8", errors="replace").strip()
            if record:
                yield record

    record = pending.decode("utf-8", errors="replace").strip()
    if record:
        yield record


def iter_commits(
    records: Iterable[str],
    width: IntegerWidth = IntegerWidth.U32,
    on_error: ParseErrorPolicy = ParseErrorPolicy.ABORT,
) -> Iterator[Commit]:
    """Lazily parse records into commits.

    With ParseErrorPolicy.ABORT the first malformed record stops the run by
    propagating its RecordParseError. With ParseErrorPolicy.SKIP the record
    is logged and dropped.
    """
    skipped = 0
    for index, record in enumerate(records):
        try:
            yield parse_commit(record, width)
        except RecordParseError as e:
            if on_error is not ParseErrorPolicy.SKIP:
                raise
            skipped += 1
            logger.warning(f"Skipping malformed record #{index + 1}: {e}")

    if skipped:
        logger.warning(f"Skipped {skipped} malformed record(s)")
