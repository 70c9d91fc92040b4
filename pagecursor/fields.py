from typing import Any

from pydantic import Field

# Marker values stored under the "_cursor" flag
DEFAULT_MARKER = "default"
EXPLICIT_MARKER = ""


def _cursor_field(marker: str, default: Any, desc: bool, **kwargs: Any) -> Any:
    # Extract existing extra dict or create new one
    json_schema_extra = kwargs.pop("json_schema_extra", None) or {}

    # Inject our internal flags
    json_schema_extra["_cursor"] = marker
    json_schema_extra["_cursor_desc"] = desc

    # The '...' (Ellipsis) is Pydantic's way of saying "Required field" if no default is provided.
    return Field(default, json_schema_extra=json_schema_extra, **kwargs)


def CursorField(default: Any = ..., *, desc: bool = False, **kwargs: Any) -> Any:
    """
    Marks a Pydantic field as selectable for cursor pagination.

    A cursor id naming this field is accepted, but the field is not used
    when no id is supplied.

    Usage:
        id: str = CursorField()
        score: int = CursorField(desc=True)

    Args:
        default: Default value for the field
        desc: True if the field's intrinsic sort order is descending
        **kwargs: Additional Pydantic Field arguments

    Returns:
        Pydantic Field instance with cursor metadata
    """
    return _cursor_field(EXPLICIT_MARKER, default, desc, **kwargs)


def DefaultCursorField(default: Any = ..., *, desc: bool = False, **kwargs: Any) -> Any:
    """
    Marks a Pydantic field as the default cursor field.

    First-page queries (no cursor id) paginate on this field.
    A shape can have only one default field.

    Usage:
        created_at: datetime = DefaultCursorField(desc=True)

    Architectural Note:
    -------------------
    This function wraps the standard Pydantic Field. It injects hidden flags
    ('_cursor' and '_cursor_desc') into 'json_schema_extra'. The resolver
    reads these flags once per shape to build its field descriptors, so
    no attribute lookup by name happens on the hot path.
    """
    return _cursor_field(DEFAULT_MARKER, default, desc, **kwargs)
