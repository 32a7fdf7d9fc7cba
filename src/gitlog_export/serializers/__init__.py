"""Output serializers and the format registry."""

from enum import Enum
from typing import Callable, Dict, Iterable, Iterator

from ..config import ExportConfig
from ..models import Commit
from ..schema import SchemaDescriptor
from .delimited import to_csv
from .document import commit_to_dict, to_json
from .relational import create_table_statement, insert_statement, to_postgres

Serializer = Callable[[Iterable[Commit], SchemaDescriptor, ExportConfig], Iterator[str]]


class OutputFormat(str, Enum):
    """Output formats accepted on the command line."""

    CSV = "csv"
    JSON = "json"
    POSTGRES = "postgres"

    @classmethod
    def choices(cls) -> list:
        return [fmt.value for fmt in cls]


_SERIALIZERS: Dict[OutputFormat, Serializer] = {
    OutputFormat.CSV: lambda commits, schema, config: to_csv(
        commits, schema, separator=config.separator
    ),
    OutputFormat.JSON: lambda commits, schema, config: to_json(commits, schema),
    OutputFormat.POSTGRES: lambda commits, schema, config: to_postgres(
        commits, schema, table_name=config.table_name
    ),
}


def get_serializer(output_format: OutputFormat) -> Serializer:
    """Look up the serializer for output_format.

    Raises:
        ValueError: If output_format is not a known format
    """
    return _SERIALIZERS[OutputFormat(output_format)]


def serialize(
    output_format: OutputFormat,
    commits: Iterable[Commit],
    schema: SchemaDescriptor,
    config: ExportConfig,
) -> Iterator[str]:
    return get_serializer(output_format)(commits, schema, config)


__all__ = [
    "OutputFormat",
    "Serializer",
    "commit_to_dict",
    "create_table_statement",
    "get_serializer",
    "insert_statement",
    "serialize",
    "to_csv",
    "to_json",
    "to_postgres",
]
