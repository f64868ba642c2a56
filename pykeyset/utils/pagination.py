from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from pykeyset.core.order import Direction
from pykeyset.core.page import Page
from pykeyset.core.result import normalize_page_result

T = TypeVar("T")


@dataclass(frozen=True)
class KeysetPage(Generic[T]):
    """Keyset pagination result in display order.

    ``next_cursor`` is derived from the last row and continues forward with
    ``Direction.NEXT``; ``prev_cursor`` is derived from the first row and goes
    back with ``Direction.PREVIOUS``. Both are None for an empty page.
    """

    items: list[T]
    limit: int
    direction: Direction
    next_cursor: str | None
    prev_cursor: str | None

    @property
    def is_full(self) -> bool:
        """True when the page holds ``limit`` rows, so more may follow."""
        return len(self.items) >= self.limit


def build_keyset_page(page: Page, rows: list[T], encode_row: Callable[[T], str]) -> KeysetPage[T]:
    """Normalize rows fetched for ``page`` and derive the outbound cursors.

    Args:
        page: Pagination state the rows were fetched with
        rows: Rows in SQL order; reversed in place for previous-page fetches
        encode_row: Builds a cursor from a row's key field(s)
    """
    items = normalize_page_result(page, rows)
    return KeysetPage(
        items=items,
        limit=page.limit,
        direction=page.direction,
        next_cursor=encode_row(items[-1]) if items else None,
        prev_cursor=encode_row(items[0]) if items else None,
    )
