"""
SQL builder for cursor pagination.

Implements the Builder Pattern on top of a caller's base query: the cursor
condition, ORDER BY and LIMIT clauses are appended and the parameters merged.

Usage:
    sql, params = (
        get_builder(cursor, BackendKind.SPANNER)
        .with_sql("SELECT * FROM Objects WHERE Kind = @Kind")
        .with_params({"Kind": 1})
        .to_sql()
    )
    # SELECT * FROM Objects WHERE Kind = @Kind AND CreatedAt < @CreatedAt
    #   ORDER BY CreatedAt DESC LIMIT 21
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from ._logging import logger, redact_value
from .backends import spanner
from .exceptions import UnsupportedBackendError
from .fragment import SQLFragment

if TYPE_CHECKING:
    from .cursor import Cursor

_WHERE_RE = re.compile(r"\bWHERE\b", re.IGNORECASE)


class BackendKind(IntEnum):
    """SQL dialects supported by the builder."""

    SPANNER = 1


_RENDERERS: dict[BackendKind, Callable[[Cursor], SQLFragment]] = {
    BackendKind.SPANNER: spanner.build_fragment,
}


def build_fragment(cursor: Cursor, kind: BackendKind | int) -> SQLFragment:
    """
    Renders the cursor clauses for a backend.

    Raises:
        UnsupportedBackendError: If kind is not a known BackendKind
    """
    try:
        renderer = _RENDERERS[BackendKind(kind)]
    except (ValueError, KeyError) as e:
        raise UnsupportedBackendError(kind, original_error=e) from e
    return renderer(cursor)


class SQLBuilder:
    """
    Combines a base query with the clauses of a cursor.

    The caller's SQL and params are only read; to_sql() returns new objects
    and can be called more than once.
    """

    def __init__(self, cursor: Cursor, kind: BackendKind | int):
        self.cursor = cursor
        self.kind = kind
        self.sql = ""
        self.params: dict[str, Any] = {}

    def with_sql(self, sql: str) -> SQLBuilder:
        """Sets the base query the cursor clauses are appended to."""
        self.sql = sql
        return self

    def with_params(self, params: Mapping[str, Any]) -> SQLBuilder:
        """
        Sets the parameters of the base query.
        The cursor parameter is bound under the cursor field's name and wins
        over a caller parameter of the same name.
        """
        self.params = dict(params)
        return self

    def to_sql(self) -> tuple[str, dict[str, Any]]:
        """
        Builds the final query.

        Returns:
            (sql, params) ready to be executed with named parameters

        Raises:
            UnsupportedBackendError: If the builder kind is not supported
        """
        fragment = build_fragment(self.cursor, self.kind)

        parts = []
        base = self.sql.strip()
        if base:
            parts.append(base)

        if fragment.condition:
            keyword = "AND" if _WHERE_RE.search(base) else "WHERE"
            parts.append(f"{keyword} {fragment.condition}")

        parts.append(fragment.order)
        parts.append(fragment.limit)

        # Merge caller params with cursor params
        params = {**self.params, **fragment.params}

        logger.debug(
            "Built cursor query",
            extra={
                "backend": BackendKind(self.kind).name,
                "field": self.cursor.field,
                "direction": self.cursor.direction.name,
                "limit": self.cursor.limit,
                "has_condition": bool(fragment.condition),
                "value_hash": redact_value(self.cursor.value),
            },
        )

        return " ".join(parts), params


def get_builder(cursor: Cursor, kind: BackendKind | int) -> SQLBuilder:
    """Returns a SQL builder for a cursor and a backend kind."""
    return SQLBuilder(cursor, kind)
