"""
The page cursor value object.

A Cursor is built per page request and discarded once the page is served.
It is immutable: every configuration step returns a new Cursor or raises,
so a failed step never leaves a half-configured cursor behind.

Usage:
    # One shot
    cursor = Cursor.create(Message, cursor_id=request_id, limit=10)

    # Step by step
    cursor = Cursor.default(Message).with_limit(10).with_cursor_id(request_id)

    # From request parameters
    cursor = Cursor.from_params(Message, Params(id=request_id, direction=1, limit=10))
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from ._logging import logger, redact_value
from .config import DEFAULT_LIMIT, INVALID_CURSOR_ID, MAX_LIMIT, ValueKind
from .exceptions import InvalidDirectionError, UnsupportedCursorFieldError
from .resolver import Shape, is_naive_timestamp, resolve_field
from .serializer import SEPARATOR, CursorSerializer

if TYPE_CHECKING:
    from .builder import BackendKind, SQLBuilder


class Direction(IntEnum):
    """Page direction relative to the cursor's reference row."""

    FORWARD = 0
    BACKWARD = 1

    @classmethod
    def parse(cls, value: Any) -> Direction:
        """
        Accepts a Direction or its integer code (0 = forward, 1 = backward).

        Raises:
            InvalidDirectionError: For any other value
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDirectionError(value)
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidDirectionError(value, original_error=e) from e


def normalize_limit(limit: Any) -> int:
    """
    Returns the effective page size.
    0, negative and over-the-maximum limits fall back to DEFAULT_LIMIT (not to MAX_LIMIT),
    as do None, bool and anything that is not an int.
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        return DEFAULT_LIMIT
    if limit <= 0 or limit > MAX_LIMIT:
        return DEFAULT_LIMIT
    return limit


class Params(BaseModel):
    """
    Page request parameters as sent by a client.

    Attributes:
        id: Opaque cursor id of the reference row. Empty for the first page.
        direction: 0 = forward, 1 = backward. Also accepted as "dir".
        limit: Page size. 0 selects the default page size.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    direction: int = Field(default=0, alias="dir")
    limit: int = Field(default=0, ge=0)


@dataclass(frozen=True)
class Cursor:
    """
    Page cursor: the field to paginate on, the boundary value and the page geometry.

    Invariants:
    - id == "": first page. field is the shape's default field and value is None.
    - id != "": field, kind and value were decoded from id and validated
      against the shape.
    - 1 <= limit <= MAX_LIMIT.
    """

    id: str
    field: str
    kind: ValueKind
    value: Any
    limit: int
    direction: Direction
    shape: type[BaseModel]
    desc: bool = False

    _serializer = CursorSerializer()

    # --- CONSTRUCTORS ---

    @classmethod
    def default(cls, shape: Shape) -> Cursor:
        """
        First-page cursor on the shape's default field, default limit, forward.

        Raises:
            MissingDefaultFieldError: If the shape has no default field
            UnsupportedFieldTypeError: If the default field cannot be paginated on
        """
        descriptor = resolve_field(shape)
        return cls(
            id="",
            field=descriptor.name,
            kind=descriptor.kind,  # type: ignore[arg-type]
            value=None,
            limit=DEFAULT_LIMIT,
            direction=Direction.FORWARD,
            shape=shape if isinstance(shape, type) else type(shape),
            desc=descriptor.desc,
        )

    @classmethod
    def create(
        cls,
        shape: Shape,
        cursor_id: str = "",
        limit: int = 0,
        direction: Direction | int = Direction.FORWARD,
    ) -> Cursor:
        """
        Builds a cursor in one call. All inputs are validated before anything is returned.

        Args:
            shape: Model class or instance describing the records
            cursor_id: Opaque id from a previous page, empty for the first page
            limit: Page size, normalized with normalize_limit()
            direction: Direction or its integer code

        Raises:
            InvalidDirectionError: Direction is not 0/1
            InvalidCursorIDError: cursor_id is not a valid opaque id
            UnsupportedCursorFieldError: cursor_id names a field not marked for pagination
            UnsupportedFieldTypeError: The field's type cannot be paginated on
            InvalidValueError: The value part does not parse for the field kind
            MissingDefaultFieldError: No cursor_id and the shape has no default field
        """
        direction = Direction.parse(direction)
        shape_cls = shape if isinstance(shape, type) else type(shape)

        # An explicit id does not need a default field on the shape
        if cursor_id:
            return cls._decode(shape_cls, cursor_id, normalize_limit(limit), direction)

        first = cls.default(shape_cls)
        return dataclasses.replace(first, limit=normalize_limit(limit), direction=direction)

    @classmethod
    def from_params(cls, shape: Shape, params: Params) -> Cursor:
        """Builds a cursor from client request parameters."""
        return cls.create(
            shape, cursor_id=params.id, limit=params.limit, direction=params.direction
        )

    # --- CONFIGURATION STEPS ---

    def with_limit(self, limit: int) -> Cursor:
        """Returns a copy with the page size set (normalized, never rejected)."""
        return dataclasses.replace(self, limit=normalize_limit(limit))

    def with_direction(self, direction: Direction | int) -> Cursor:
        """
        Returns a copy paging in the given direction.

        Raises:
            InvalidDirectionError: Direction is not 0/1
        """
        return dataclasses.replace(self, direction=Direction.parse(direction))

    def with_cursor_id(self, cursor_id: str) -> Cursor:
        """
        Returns a copy positioned after the row the id was created from.
        An empty id returns a first-page cursor on the default field.

        Raises:
            InvalidCursorIDError, UnsupportedCursorFieldError,
            UnsupportedFieldTypeError, InvalidValueError
        """
        if not cursor_id:
            first = self.default(self.shape)
            return dataclasses.replace(first, limit=self.limit, direction=self.direction)
        return self._decode(self.shape, cursor_id, self.limit, self.direction)

    @classmethod
    def _decode(
        cls, shape: type[BaseModel], cursor_id: str, limit: int, direction: Direction
    ) -> Cursor:
        field_name, raw = cls._serializer.decode_id(cursor_id)
        if not field_name:
            # An empty name would otherwise select the default field
            raise UnsupportedCursorFieldError(field_name)

        descriptor = resolve_field(shape, field_name)
        kind: ValueKind = descriptor.kind  # type: ignore[assignment]
        value = cls._serializer.decode_value(kind, raw)
        if kind is ValueKind.TIMESTAMP and is_naive_timestamp(descriptor.annotation):
            value = value.replace(tzinfo=None)

        logger.debug(
            "Decoded cursor id",
            extra={
                "shape": shape.__name__,
                "field": field_name,
                "kind": kind.value,
                "value_hash": redact_value(value),
            },
        )

        return cls(
            id=cursor_id,
            field=descriptor.name,
            kind=kind,
            value=value,
            limit=limit,
            direction=direction,
            shape=shape,
            desc=descriptor.desc,
        )

    # --- ACCESSORS ---

    @property
    def is_forward(self) -> bool:
        return self.direction is Direction.FORWARD

    @property
    def is_backward(self) -> bool:
        return self.direction is Direction.BACKWARD

    @property
    def is_asc(self) -> bool:
        return not self.desc

    @property
    def is_desc(self) -> bool:
        return self.desc

    @property
    def is_first_page(self) -> bool:
        return self.id == ""

    # --- ID CREATION ---

    def create_id(self, record: Any) -> str:
        """
        Builds the opaque id that points at ``record``.

        Reads the cursor field from a model instance (attribute) or a mapping (key).
        If the record has no such value, or the value does not match the cursor kind,
        INVALID_CURSOR_ID is returned instead of raising. The same applies to string
        values containing ":", which could not be decoded again.

        Timestamps decode as aware UTC datetimes, except on NaiveDatetime fields where
        they decode as naive UTC. A naive value on a plain datetime field therefore
        does not compare equal to its decoded counterpart.
        """
        if isinstance(record, Mapping):
            value = record.get(self.field)
        else:
            value = getattr(record, self.field, None)

        if not _matches_kind(self.kind, value) or (
            self.kind is ValueKind.STRING
            and SEPARATOR in self._serializer.encode_value(self.kind, value)
        ):
            logger.warning(
                "Cannot create cursor id for record",
                extra={
                    "shape": self.shape.__name__,
                    "field": self.field,
                    "kind": self.kind.value,
                    "record_type": type(record).__name__,
                },
            )
            return INVALID_CURSOR_ID

        return self._serializer.encode_id(self.field, self.kind, value)

    # --- SQL ---

    def builder(self, kind: BackendKind | int) -> SQLBuilder:
        """
        Returns a SQL builder for this cursor.

        Usage:
            sql, params = cursor.builder(BackendKind.SPANNER).with_sql(base_sql).to_sql()
        """
        from .builder import SQLBuilder

        return SQLBuilder(self, kind)


def _matches_kind(kind: ValueKind, value: Any) -> bool:
    if kind is ValueKind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is ValueKind.STRING:
        return isinstance(value, str)
    if kind is ValueKind.TIMESTAMP:
        return isinstance(value, datetime)
    return False
