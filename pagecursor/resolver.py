"""
Field resolution for cursor pagination.

A record shape is a Pydantic model whose paginable fields are declared with
CursorField() / DefaultCursorField(). The resolver reads those markers ONCE
per shape into a ShapeOptions descriptor; every later lookup is a dict access.
"""

import types
from datetime import datetime
from functools import lru_cache
from typing import Any, ClassVar, Union, get_args, get_origin

from pydantic import AwareDatetime, BaseModel, FutureDatetime, NaiveDatetime, PastDatetime

# We must inherit from Pydantic's internal metaclass to coexist with BaseModel
from pydantic._internal._model_construction import ModelMetaclass

from ._logging import logger
from .config import FieldDescriptor, ShapeOptions, ValueKind
from .exceptions import (
    MissingDefaultFieldError,
    UnsupportedCursorFieldError,
    UnsupportedFieldTypeError,
)
from .fields import DEFAULT_MARKER

Shape = type[BaseModel] | BaseModel

# Pydantic timestamp types are not datetime subclasses
_PYDANTIC_DATETIMES = (AwareDatetime, NaiveDatetime, PastDatetime, FutureDatetime)


def classify_annotation(annotation: Any) -> ValueKind | None:
    """
    Maps a declared field type to a cursor value kind.

    Optional[X] is classified as X. bool is rejected even though it is an
    int subclass. Returns None for anything that cannot be paginated on.
    """
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) != 1:
            return None
        annotation = args[0]
        origin = get_origin(annotation)

    if annotation in _PYDANTIC_DATETIMES:
        return ValueKind.TIMESTAMP

    # Parametrized generics (list[int], ...) are never paginable
    if origin is not None or not isinstance(annotation, type):
        return None
    if issubclass(annotation, bool):
        return None
    if issubclass(annotation, int):
        return ValueKind.INTEGER
    if issubclass(annotation, str):
        return ValueKind.STRING
    if issubclass(annotation, datetime):
        return ValueKind.TIMESTAMP
    return None


def is_naive_timestamp(annotation: Any) -> bool:
    """True for NaiveDatetime and Optional[NaiveDatetime] fields."""
    if get_origin(annotation) in (Union, types.UnionType):
        return NaiveDatetime in get_args(annotation)
    return annotation is NaiveDatetime


def _shape_class(shape: Shape) -> type[BaseModel]:
    if isinstance(shape, type):
        return shape
    return type(shape)


@lru_cache(maxsize=None)
def _describe(shape_cls: type[BaseModel]) -> ShapeOptions:
    name = shape_cls.__name__
    options = ShapeOptions(shape_name=name)

    # model_fields keeps declaration order, so does options.fields
    for field_name, field_info in shape_cls.model_fields.items():
        extra = field_info.json_schema_extra
        if not isinstance(extra, dict) or "_cursor" not in extra:
            continue

        is_default = extra["_cursor"] == DEFAULT_MARKER
        if is_default:
            if options.default_field is not None:
                raise ValueError(
                    f"Shape {name} can have only one field defined with DefaultCursorField()"
                )
            options.default_field = field_name

        options.fields[field_name] = FieldDescriptor(
            name=field_name,
            kind=classify_annotation(field_info.annotation),
            is_default=is_default,
            desc=bool(extra.get("_cursor_desc", False)),
            annotation=field_info.annotation,
        )

    logger.debug(
        "Described cursor shape",
        extra={
            "shape": name,
            "cursor_fields": list(options.fields),
            "default_field": options.default_field,
        },
    )
    return options


def describe_shape(shape: Shape) -> ShapeOptions:
    """
    Returns the cursor metadata of a shape (model class or instance).

    The result is cached per class. Shape metadata never changes at runtime,
    so the cached descriptor is shared read-only by every caller.

    Raises:
        ValueError: If the shape declares more than one DefaultCursorField()
    """
    return _describe(_shape_class(shape))


def resolve_field(shape: Shape, name: str | None = None) -> FieldDescriptor:
    """
    Locates the pagination field of a shape and checks its value kind.

    Args:
        shape: Model class or instance
        name: Explicit field name. Empty or None selects the default field.

    Raises:
        MissingDefaultFieldError: No name given and the shape has no default field
        UnsupportedCursorFieldError: The named field is absent or not marked
        UnsupportedFieldTypeError: The field's declared type cannot be paginated on
    """
    options = describe_shape(shape)

    if not name:
        descriptor = options.get_default()
        if descriptor is None:
            raise MissingDefaultFieldError(options.shape_name)
    else:
        descriptor = options.get_field(name)
        if descriptor is None:
            raise UnsupportedCursorFieldError(name)

    if descriptor.kind is None:
        raise UnsupportedFieldTypeError(descriptor.name, descriptor.annotation)
    return descriptor


class CursorMeta(ModelMetaclass):
    """
    Describes the cursor fields when the class is defined (imported),
    so that definition errors surface at import time instead of on the first request.
    """

    def __new__(
        cls, name: str, bases: tuple[type, ...], namespace: dict[str, Any], **kwargs: Any
    ) -> Any:
        new_cls = super().__new__(cls, name, bases, namespace, **kwargs)

        # Stop processing if it's the base CursorModel class itself
        if name == "CursorModel" and namespace.get("__module__") == __name__:
            return new_cls

        new_cls._cursor_meta = describe_shape(new_cls)
        return new_cls


class CursorModel(BaseModel, metaclass=CursorMeta):
    """
    Optional base class for record shapes.
    Plain BaseModel subclasses work too; they are described on first use.
    """

    # Type Hinting for the configuration injected by Metaclass
    _cursor_meta: ClassVar[ShapeOptions]
