"""
Page slicing for keyset pagination.

The caller queries with LIMIT cursor.limit + 1 (the SQL builder does this).
The extra row only proves that a next page exists; it is cut off here and
the boundary ids of the remaining rows are encoded for the next round trip.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from .cursor import Cursor

T = TypeVar("T")


@dataclass(frozen=True)
class PageInfo:
    """
    Boundaries of one served page.

    Attributes:
        first_id: Cursor id of the first row ("" for an empty page)
        last_id: Cursor id of the last row ("" for an empty page)
        has_prev: True if the request carried a cursor id.
            This is a heuristic: an id pointing past the last row still
            reports a previous page.
        has_next: True if the over-fetched row was present
        length: Number of rows in the page
    """

    first_id: str = ""
    last_id: str = ""
    has_prev: bool = False
    has_next: bool = False
    length: int = 0


@dataclass
class PageResult(Generic[T]):
    """
    Represents a single page of results with its page info.

    Attributes:
        items: Rows of this page (the over-fetched row removed)
        page_info: Boundaries of this page
    """

    items: list[T]
    page_info: PageInfo

    @property
    def has_more(self) -> bool:
        """Returns True if there are more pages in the cursor's direction."""
        return self.page_info.has_next


def get_result(cursor: "Cursor", rows: Sequence[T]) -> tuple[list[T], PageInfo]:
    """
    Trims over-fetched rows to the page and computes the page info.

    Args:
        cursor: The cursor the query was built with
        rows: Query result fetched with LIMIT cursor.limit + 1

    Returns:
        (page rows, page info). Never raises.
    """
    if not rows:
        return [], PageInfo()

    length = min(len(rows), cursor.limit)
    items = list(rows[:length])

    page_info = PageInfo(
        first_id=cursor.create_id(items[0]),
        last_id=cursor.create_id(items[length - 1]),
        has_prev=cursor.id != "",
        has_next=len(rows) > cursor.limit,
        length=length,
    )
    return items, page_info


def paginate(cursor: "Cursor", rows: Sequence[T]) -> PageResult[T]:
    """
    Same as get_result(), bundled in a PageResult.

    Usage:
        page = paginate(cursor, rows)
        if page.has_more:
            next_cursor = cursor.with_cursor_id(page.page_info.last_id)
    """
    items, page_info = get_result(cursor, rows)
    return PageResult(items=items, page_info=page_info)
