from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Page size used when the caller passes 0 or an out-of-range limit
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

# Returned by Cursor.create_id() when a record cannot be encoded
INVALID_CURSOR_ID = "INVALID"


class ValueKind(Enum):
    """Kinds of values a cursor field can hold."""

    INTEGER = "integer"
    STRING = "string"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Represents one field of a record shape that may be used as a cursor.

    ``kind`` is None when the field is marked for pagination but declared
    with a type that cannot be paginated on; selecting such a field fails.
    """

    name: str
    kind: ValueKind | None
    is_default: bool = False
    desc: bool = False
    annotation: Any = None

    @property
    def is_asc(self) -> bool:
        return not self.desc


@dataclass
class ShapeOptions:
    """
    Internal container for cursor metadata of a record shape.
    Populated once per shape by the resolver.
    """

    shape_name: str
    fields: dict[str, FieldDescriptor] = field(default_factory=dict)
    default_field: str | None = None

    def get_field(self, name: str) -> FieldDescriptor | None:
        """
        Get a field descriptor by field name.

        Args:
            name: Name of the field to retrieve

        Returns:
            FieldDescriptor if the field is marked for pagination, None otherwise
        """
        return self.fields.get(name)

    def has_field(self, name: str) -> bool:
        """Check if a field is marked for pagination on this shape."""
        return name in self.fields

    def get_default(self) -> FieldDescriptor | None:
        """Get the descriptor of the default cursor field, if any."""
        if self.default_field is None:
            return None
        return self.fields[self.default_field]
