from .builder import BackendKind, SQLBuilder, get_builder
from .config import DEFAULT_LIMIT, INVALID_CURSOR_ID, MAX_LIMIT, FieldDescriptor, ValueKind
from .cursor import Cursor, Direction, Params, normalize_limit
from .exceptions import (
    CursorError,
    InvalidCursorIDError,
    InvalidDirectionError,
    InvalidValueError,
    MissingDefaultFieldError,
    UnsupportedBackendError,
    UnsupportedCursorFieldError,
    UnsupportedFieldTypeError,
)
from .fields import CursorField, DefaultCursorField
from .fragment import SQLFragment
from .pagination import PageInfo, PageResult, get_result, paginate
from .resolver import CursorModel, describe_shape, resolve_field

__all__ = [
    "CursorModel",
    "CursorField",
    "DefaultCursorField",
    "FieldDescriptor",
    "ValueKind",
    "describe_shape",
    "resolve_field",
    # Cursor
    "Cursor",
    "Direction",
    "Params",
    "normalize_limit",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "INVALID_CURSOR_ID",
    # Pages
    "PageInfo",
    "PageResult",
    "get_result",
    "paginate",
    # SQL
    "BackendKind",
    "SQLBuilder",
    "SQLFragment",
    "get_builder",
    # Exceptions
    "CursorError",
    "MissingDefaultFieldError",
    "UnsupportedCursorFieldError",
    "UnsupportedFieldTypeError",
    "InvalidCursorIDError",
    "InvalidValueError",
    "InvalidDirectionError",
    "UnsupportedBackendError",
]
