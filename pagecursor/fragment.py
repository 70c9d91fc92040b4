from dataclasses import dataclass, field
from typing import Any


@dataclass
class SQLFragment:
    """
    Clauses rendered for one cursor.
    Produced fresh by every build; the builder never keeps it.

    Attributes:
        condition: Keyset comparison without WHERE/AND ("" on the first page)
        order: ORDER BY clause
        limit: LIMIT clause, one row over the page size
        params: Bound parameters of the condition
    """

    condition: str
    order: str
    limit: str
    params: dict[str, Any] = field(default_factory=dict)
