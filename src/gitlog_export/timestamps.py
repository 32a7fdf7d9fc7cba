"""
Strict ISO 8601 timestamp validation for git author and committer dates.

Only the extended profile produced by ``git log --format=%aI`` is accepted:

    YYYY-MM-DDTHH:MM:SS(Z|+HH:MM|-HH:MM)

Values are kept verbatim. No timezone conversion or normalization happens,
so the original offset survives every output format.
"""

import calendar
import re
from dataclasses import dataclass

from .errors import InvalidTimestampError

ISO8601_TIMESTAMP = re.compile(
    r"""
    ^
    (?P<year>[1-9]\d{3})-(?P<month>0[1-9]|1[0-2])-(?P<day>0[1-9]|[12]\d|3[01])
    T
    (?:[01]\d|2[0-3]):[0-5]\d:[0-5]\d
    (?:Z|[+-][01]\d:[0-5]\d)
    \Z
    """,
    re.VERBOSE | re.ASCII,
)


def is_valid_timestamp(text: str) -> bool:
    """Return True if text is a calendar-correct extended ISO 8601 timestamp."""
    match = ISO8601_TIMESTAMP.match(text)
    if not match:
        return False

    year, month, day = (int(match.group(g)) for g in ("year", "month", "day"))
    _, days_in_month = calendar.monthrange(year, month)
    return day <= days_in_month


@dataclass(frozen=True)
class Timestamp:
    """A validated timestamp that serializes back to its exact input text."""

    value: str

    @classmethod
    def parse(cls, text: str) -> "Timestamp":
        """
        Validate text and wrap it.

        Raises:
            InvalidTimestampError: If text is not in the accepted profile,
                including near misses such as a missing offset, fractional
                seconds or a day that does not exist (2023-02-29).
        """
        if not is_valid_timestamp(text):
            raise InvalidTimestampError(text)
        return cls(text)

    def __str__(self) -> str:
        return self.value
