"""
Schema descriptor shared by every serializer.

The descriptor is derived from the Commit layout and the configured integer
width. It holds type metadata only: field names for headers and column
lists, abstract field types for JSON fidelity and SQL DDL.
"""

from dataclasses import dataclass, fields as dataclass_fields
from enum import Enum
from functools import lru_cache
from typing import Dict, Tuple

from .config import IntegerWidth
from .models import Commit
from .parser import HASH_LENGTH

# RFC 5321 limit for a forward path
EMAIL_MAX_LENGTH = 254


class FieldType(Enum):
    """Abstract field types understood by the serializers."""

    FIXED_STRING = "fixed_string"
    FREE_STRING = "free_string"
    TIMESTAMP = "timestamp"
    UNSIGNED_INT = "unsigned_int"


@dataclass(frozen=True)
class SchemaField:
    name: str
    field_type: FieldType
    # fixed/max length for strings, bit width for integers, 0 for timestamps
    size: int = 0

    @property
    def is_numeric(self) -> bool:
        return self.field_type is FieldType.UNSIGNED_INT


SQL_TYPES: Dict[Tuple[FieldType, int], str] = {
    (FieldType.FIXED_STRING, HASH_LENGTH): f"char({HASH_LENGTH})",
    (FieldType.FREE_STRING, EMAIL_MAX_LENGTH): f"varchar({EMAIL_MAX_LENGTH})",
    (FieldType.TIMESTAMP, 0): "timestamp with time zone",
    (FieldType.UNSIGNED_INT, 16): "smallint",
    (FieldType.UNSIGNED_INT, 32): "integer",
    (FieldType.UNSIGNED_INT, 64): "bigint",
}


@dataclass(frozen=True)
class SchemaDescriptor:
    """Ordered, read-only (field name, abstract type) description of a Commit."""

    fields: Tuple[SchemaField, ...]

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def field(self, name: str) -> SchemaField:
        for schema_field in self.fields:
            if schema_field.name == name:
                return schema_field
        raise KeyError(name)

    def type_of(self, name: str) -> FieldType:
        """Abstract type of the named field.

        Raises:
            KeyError: If the schema has no such field
        """
        return self.field(name).field_type

    def sql_type(self, name: str) -> str:
        schema_field = self.field(name)
        return SQL_TYPES[(schema_field.field_type, schema_field.size)]

    def sql_types(self) -> Tuple[Tuple[str, str], ...]:
        """Ordered (column name, SQL type) pairs."""
        return tuple((name, self.sql_type(name)) for name in self.field_names)


@lru_cache(maxsize=None)
def build_schema(width: IntegerWidth = IntegerWidth.U32) -> SchemaDescriptor:
    """Build the descriptor for the given integer width.

    The result is cached, so every serializer in a run shares one instance.
    """
    field_types = {
        "hash": (FieldType.FIXED_STRING, HASH_LENGTH),
        "author_timestamp": (FieldType.TIMESTAMP, 0),
        "author_email": (FieldType.FREE_STRING, EMAIL_MAX_LENGTH),
        "commit_timestamp": (FieldType.TIMESTAMP, 0),
        "files_changed": (FieldType.UNSIGNED_INT, width.bits),
        "insertions": (FieldType.UNSIGNED_INT, width.bits),
        "deletions": (FieldType.UNSIGNED_INT, width.bits),
    }
    # Order comes from the Commit dataclass itself
    return SchemaDescriptor(
        fields=tuple(
            SchemaField(f.name, *field_types[f.name]) for f in dataclass_fields(Commit)
        )
    )
