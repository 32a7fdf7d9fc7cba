"""
PostgreSQL load script output.

The script is one ``create table if not exists`` statement followed by one
``insert`` per commit. Values are interpolated as literal text without
escaping or parameter binding; this is only safe for trusted local history.
"""

from typing import Iterable, Iterator

from ..models import Commit
from ..schema import SchemaDescriptor

PRIMARY_KEY = "hash"


def create_table_statement(schema: SchemaDescriptor, table_name: str) -> str:
    """Build the DDL statement with name and type columns aligned."""
    columns = schema.sql_types()
    name_width = max(len(name) for name, _ in columns) + 1
    type_width = max(len(sql_type) for _, sql_type in columns) + 1

    lines = []
    for name, sql_type in columns:
        constraint = "primary key" if name == PRIMARY_KEY else ""
        line = f"  {name:<{name_width}}{sql_type:<{type_width}}{constraint}"
        lines.append(line.rstrip())

    body = ",\n".join(lines)
    return f"create table if not exists {table_name} (\n{body}\n);"


def insert_statement(
    commit: Commit, schema: SchemaDescriptor, table_name: str
) -> str:
    values = []
    for schema_field, value in zip(schema.fields, commit.as_row()):
        values.append(str(value) if schema_field.is_numeric else f"'{value}'")

    columns = ", ".join(schema.field_names)
    return f"insert into {table_name} ({columns}) values ({', '.join(values)});"


def to_postgres(
    commits: Iterable[Commit], schema: SchemaDescriptor, table_name: str = "commits"
) -> Iterator[str]:
    yield create_table_statement(schema, table_name)
    for commit in commits:
        yield insert_statement(commit, schema, table_name)
