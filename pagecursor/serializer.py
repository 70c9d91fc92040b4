import base64
import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from .config import ValueKind
from .exceptions import (
    InvalidCursorIDError,
    InvalidValueError,
    UnsupportedFieldTypeError,
    handle_decode_errors,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MICROSECOND = timedelta(microseconds=1)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")

# Joins the field name and the value inside an opaque id
SEPARATOR = ":"


class CursorSerializer:
    """
    Handles the conversion between cursor values and opaque cursor ids.

    Wire format:
    ------------
    An id is the standard base64 encoding of the UTF-8 string
    "<field>:<value>", where <value> is:
    - INTEGER: base-10 signed decimal
    - STRING: the raw string
    - TIMESTAMP: base-10 microseconds since the Unix epoch (UTC)
    """

    def encode_value(self, kind: ValueKind, value: Any) -> str:
        """Stringifies a cursor value. E.g.: datetime(2022, 9, 26, ...) -> '1664177281445676'"""
        if kind is ValueKind.INTEGER:
            return str(int(value))
        if kind is ValueKind.STRING:
            if isinstance(value, Enum):
                return str(value.value)
            return str(value)
        if kind is ValueKind.TIMESTAMP:
            return str(self._to_micros(value))
        raise UnsupportedFieldTypeError(str(kind))

    def decode_value(self, kind: ValueKind, raw: str) -> Any:
        """
        Parses a stringified cursor value back to a Python value.

        TIMESTAMP values come back timezone-aware in UTC, whatever the tzinfo
        of the datetime that was encoded.

        Raises:
            InvalidValueError: If raw is not a base-10 int64 for INTEGER/TIMESTAMP kinds
        """
        if kind is ValueKind.STRING:
            return raw
        if kind is ValueKind.INTEGER:
            return self._parse_int64(kind, raw)
        if kind is ValueKind.TIMESTAMP:
            micros = self._parse_int64(kind, raw)
            try:
                return EPOCH + micros * ONE_MICROSECOND
            except OverflowError as e:
                # int64 microseconds reach far beyond datetime's year 9999
                raise InvalidValueError(kind, raw, original_error=e) from e
        raise UnsupportedFieldTypeError(str(kind))

    def encode_id(self, field: str, kind: ValueKind, value: Any) -> str:
        """Builds an opaque cursor id for a field value."""
        payload = field + SEPARATOR + self.encode_value(kind, value)
        return base64.b64encode(payload.encode("utf-8")).decode("ascii")

    def decode_id(self, cursor_id: str) -> tuple[str, str]:
        """
        Splits an opaque cursor id into (field name, raw value string).

        Raises:
            InvalidCursorIDError: If the id is not standard base64 of "<field>:<value>"
        """
        with handle_decode_errors(cursor_id):
            # validate=True rejects characters outside of the standard alphabet
            payload = base64.b64decode(cursor_id, validate=True).decode("utf-8")

        parts = payload.split(SEPARATOR)
        if len(parts) != 2:
            raise InvalidCursorIDError(cursor_id, reason="expected '<field>:<value>'")
        return parts[0], parts[1]

    @staticmethod
    def _parse_int64(kind: ValueKind, raw: str) -> int:
        if not _DECIMAL_RE.fullmatch(raw):
            raise InvalidValueError(kind, raw)
        value = int(raw)
        if not INT64_MIN <= value <= INT64_MAX:
            raise InvalidValueError(kind, raw)
        return value

    @staticmethod
    def _to_micros(value: datetime) -> int:
        # Naive datetimes are taken as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (value - EPOCH) // ONE_MICROSECOND
