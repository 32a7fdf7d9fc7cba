"""JSON Lines output: one self-describing object per commit."""

import json
from typing import Any, Dict, Iterable, Iterator

from ..models import Commit
from ..schema import SchemaDescriptor


def commit_to_dict(commit: Commit, schema: SchemaDescriptor) -> Dict[str, Any]:
    """Map a commit to an ordered dict with schema-typed values.

    Counts stay ints so they become JSON numbers; timestamps are plain
    strings holding the original text, offset included.
    """
    document: Dict[str, Any] = {}
    for schema_field in schema.fields:
        value = commit.display_value(schema_field.name)
        document[schema_field.name] = (
            int(value) if schema_field.is_numeric else str(value)
        )
    return document


def to_json(commits: Iterable[Commit], schema: SchemaDescriptor) -> Iterator[str]:
    for commit in commits:
        yield json.dumps(
            commit_to_dict(commit, schema), separators=(",", ":"), ensure_ascii=False
        )
