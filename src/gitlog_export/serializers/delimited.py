"""Delimited text (CSV) output."""

from typing import Iterable, Iterator

from ..models import Commit
from ..schema import SchemaDescriptor


def to_csv(
    commits: Iterable[Commit], schema: SchemaDescriptor, separator: str = ","
) -> Iterator[str]:
    """Yield a header line of field names, then one line per commit.

    Values are joined as-is. A separator or newline inside author_email is
    not escaped and will break that line.
    """
    yield separator.join(schema.field_names)
    for commit in commits:
        yield separator.join(str(value) for value in commit.as_row())
