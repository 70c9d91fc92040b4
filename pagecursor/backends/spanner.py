"""
Cloud Spanner (GoogleSQL) rendering of cursor clauses.

Parameters use the named "@name" placeholder style; the cursor value is
bound under the cursor field's name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..fragment import SQLFragment

if TYPE_CHECKING:
    from ..cursor import Cursor


def _compare_operator(cursor: Cursor) -> str:
    # Forward on an ascending field seeks to greater values,
    # each flip (backward, or a descending field) inverts it.
    if cursor.is_forward == cursor.is_asc:
        return ">"
    return "<"


def _sort_order(cursor: Cursor) -> str:
    if cursor.is_forward == cursor.is_asc:
        return "ASC"
    return "DESC"


def build_fragment(cursor: Cursor) -> SQLFragment:
    """Renders the condition, ORDER BY and LIMIT clauses for a cursor."""
    field = cursor.field
    params: dict[str, Any] = {}

    condition = ""
    if cursor.value is not None:
        condition = f"{field} {_compare_operator(cursor)} @{field}"
        params[field] = cursor.value

    return SQLFragment(
        condition=condition,
        order=f"ORDER BY {field} {_sort_order(cursor)}",
        limit=f"LIMIT {cursor.limit + 1}",
        params=params,
    )
