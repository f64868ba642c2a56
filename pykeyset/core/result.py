from __future__ import annotations

from collections.abc import MutableSequence
from typing import TypeVar

from pykeyset.core.order import Direction
from pykeyset.core.page import Page

S = TypeVar("S", bound=MutableSequence)


def normalize_page_result(page: Page, rows: S) -> S:
    """Restore display order after a fetch.

    A previous-page fetch runs in reversed order, so its rows are reversed
    in place. Other directions are left untouched. Returns ``rows``.
    """
    if page.direction is Direction.PREVIOUS:
        rows.reverse()
    return rows
