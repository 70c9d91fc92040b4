import binascii
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any


class CursorError(Exception):
    """
    Base exception for all pagecursor errors.

    Every failure raised by this library is an invalid-argument failure:
    the caller passed a shape, id, direction or backend that cannot be used.
    The ``code`` attribute carries that classification for callers that map
    errors onto status codes (gRPC, HTTP 400, ...).
    """

    code = "InvalidArgument"

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class MissingDefaultFieldError(CursorError):
    """Raised when a shape has no field marked with DefaultCursorField()."""

    def __init__(self, shape_name: str, original_error: Exception | None = None) -> None:
        super().__init__(f"Default field for cursor not found on '{shape_name}'", original_error)
        self.shape_name = shape_name


class UnsupportedCursorFieldError(CursorError):
    """Raised when the requested field does not exist or is not marked for pagination."""

    def __init__(self, field: str, original_error: Exception | None = None) -> None:
        super().__init__(f"Not supported cursor field: '{field}'", original_error)
        self.field = field


class UnsupportedFieldTypeError(CursorError):
    """Raised when a cursor field is declared with a type that cannot be paginated on."""

    def __init__(
        self, field: str, annotation: Any | None = None, original_error: Exception | None = None
    ) -> None:
        msg = f"Not supported cursor type for field '{field}'"
        if annotation is not None:
            msg += f": {annotation!r}"
        super().__init__(msg, original_error)
        self.field = field
        self.annotation = annotation


class InvalidCursorIDError(CursorError):
    """Raised when an opaque cursor id cannot be decoded."""

    def __init__(
        self, cursor_id: str, reason: str | None = None, original_error: Exception | None = None
    ) -> None:
        msg = "Invalid cursor id"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, original_error)
        self.cursor_id = cursor_id


class InvalidValueError(CursorError):
    """Raised when the value part of a cursor id does not parse for the field kind."""

    def __init__(self, kind: Any, raw: str, original_error: Exception | None = None) -> None:
        super().__init__(f"Invalid cursor value {raw!r} for kind {kind}", original_error)
        self.kind = kind
        self.raw = raw


class InvalidDirectionError(CursorError):
    """Raised for a page direction outside of Forward/Backward."""

    def __init__(self, direction: Any, original_error: Exception | None = None) -> None:
        super().__init__(f"Invalid page direction: {direction!r}", original_error)
        self.direction = direction


class UnsupportedBackendError(CursorError):
    """Raised when a SQL builder is asked for an unknown backend kind."""

    def __init__(self, kind: Any, original_error: Exception | None = None) -> None:
        super().__init__(f"Invalid builder type: {kind!r}", original_error)
        self.kind = kind


@contextmanager
def handle_decode_errors(cursor_id: str) -> Generator[None, None, None]:
    """
    Context manager that catches the low-level errors raised while decoding
    an opaque id and raises InvalidCursorIDError instead.

    Cursor ids come from external clients, so a malformed one must always
    surface as an ordinary error.

    Usage:
        with handle_decode_errors(cursor_id):
            raw = base64.b64decode(cursor_id, validate=True).decode("utf-8")
    """
    try:
        yield
    except binascii.Error as e:
        raise InvalidCursorIDError(
            cursor_id, reason="failed to decode base64", original_error=e
        ) from e
    except UnicodeDecodeError as e:
        raise InvalidCursorIDError(cursor_id, reason="not valid UTF-8", original_error=e) from e
    except ValueError as e:
        raise InvalidCursorIDError(cursor_id, reason=str(e), original_error=e) from e
