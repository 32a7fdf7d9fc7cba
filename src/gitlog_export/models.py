"""Commit record produced by the log parser."""

from dataclasses import dataclass, fields
from typing import Tuple, Union

from .timestamps import Timestamp

FieldValue = Union[str, int]


@dataclass(frozen=True)
class Commit:
    """One parsed history entry.

    Field order is the export order for every output format.
    """

    hash: str
    author_timestamp: Timestamp
    author_email: str
    commit_timestamp: Timestamp
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0

    def display_value(self, field_name: str) -> FieldValue:
        """Value of one field as written to output (timestamps verbatim)."""
        value = getattr(self, field_name)
        if isinstance(value, Timestamp):
            return str(value)
        return value

    def as_row(self) -> Tuple[FieldValue, ...]:
        """All display values in field order."""
        return tuple(self.display_value(f.name) for f in fields(self))

