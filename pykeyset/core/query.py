"""Keyset query composition for raw SQL.

ORM-agnostic: the composer only appends text to a base ``SELECT ... FROM ...
[WHERE ...]`` prefix and collects bind values, which makes it usable with
sqlite3, psycopg, asyncpg or any other DB-API style driver::

    base = "SELECT id, title, created_at FROM posts"
    page = Page(limit=10)
    sql, args = query_by_time_and_id(
        base, page, Order.DESCENDING, "created_at", "id", placeholder_dollar
    )
    rows = await conn.fetch(sql, *args)
    rows = normalize_page_result(page, list(rows))

Column and table names are trusted input and are never quoted or escaped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pykeyset.core.cursor import CursorKind
from pykeyset.core.order import Order, effective_order
from pykeyset.core.page import Page
from pykeyset.core.window import (
    build_window,
    order_clause,
    placeholder_dollar,
    placeholder_numeric,
    placeholder_question,
    resolve_cursor,
)
from pykeyset.utils.types import BindValues, Placeholder

logger = logging.getLogger(__name__)

__all__ = [
    "KeyColumns",
    "compose",
    "has_where",
    "query_by_id",
    "query_by_time",
    "query_by_time_and_id",
    "placeholder_dollar",
    "placeholder_numeric",
    "placeholder_question",
]

# Textual heuristic, not a parser: a WHERE inside a string literal or a
# quoted identifier is also matched.
_WHERE_TOKEN = re.compile(r"\swhere(?:\s|$)", re.IGNORECASE)


@dataclass(frozen=True)
class KeyColumns:
    """Key column names together with the cursor shape they are paged by."""

    kind: CursorKind
    columns: tuple[str, ...]

    @classmethod
    def int64(cls, col: str) -> KeyColumns:
        return cls(CursorKind.INT64, (col,))

    @classmethod
    def time(cls, col: str) -> KeyColumns:
        return cls(CursorKind.TIME, (col,))

    @classmethod
    def time_and_id(cls, time_col: str, id_col: str) -> KeyColumns:
        return cls(CursorKind.TIME_AND_INT64, (time_col, id_col))

    def __post_init__(self) -> None:
        if len(self.columns) != self.kind.columns:
            raise ValueError(
                f"{self.kind.value} keys need {self.kind.columns} column(s), got {len(self.columns)}"
            )


def has_where(base: str) -> bool:
    """True if ``base`` appears to contain a standalone WHERE keyword."""
    return _WHERE_TOKEN.search(base) is not None


def compose(
    base: str,
    page: Page,
    order: Order,
    key: KeyColumns,
    placeholder: Placeholder = placeholder_question,
) -> tuple[str, BindValues]:
    """Append the keyset window, ORDER BY and LIMIT to ``base``.

    Args:
        base: Statement prefix, without ORDER BY or LIMIT
        page: Pagination state
        order: Base (display) order
        key: Key columns and cursor shape
        placeholder: Bind placeholder renderer

    Returns:
        The final SQL text and its bind values: window values, then the limit.
        An empty or undecodable cursor contributes no window.
    """
    page = page.ensure_defaults()
    effective = effective_order(order, page.direction)

    parts = [base]
    args: BindValues = []
    index = 1

    boundary = resolve_cursor(key.kind, page.cursor)
    if boundary is not None:
        window = build_window(key.kind, key.columns, effective, boundary, placeholder, index)
        if has_where(base):
            condition = window.sql
            if key.kind is CursorKind.TIME_AND_INT64:
                condition = f"({condition})"
            parts.append(f"AND {condition}")
        else:
            parts.append(f"WHERE {window.sql}")
        args.extend(window.values)
        index += len(window.values)

    parts.append(f"ORDER BY {order_clause(key.columns, effective)}")
    parts.append(f"LIMIT {placeholder(index)}")
    args.append(page.limit)

    sql = " ".join(parts)
    logger.debug("Composed keyset query: %s args=%r", sql, args)
    return sql, args


def query_by_id(
    base: str,
    page: Page,
    order: Order,
    col: str,
    placeholder: Placeholder = placeholder_question,
) -> tuple[str, BindValues]:
    """Keyset query over a single integer column (``encode_int64_cursor`` cursors)."""
    return compose(base, page, order, KeyColumns.int64(col), placeholder)


def query_by_time(
    base: str,
    page: Page,
    order: Order,
    col: str,
    placeholder: Placeholder = placeholder_question,
) -> tuple[str, BindValues]:
    """Keyset query over a single time column (``encode_time_cursor`` cursors)."""
    return compose(base, page, order, KeyColumns.time(col), placeholder)


def query_by_time_and_id(
    base: str,
    page: Page,
    order: Order,
    time_col: str,
    id_col: str,
    placeholder: Placeholder = placeholder_question,
) -> tuple[str, BindValues]:
    """Keyset query over a composite (time, id) key.

    Window, for the effective order of the fetch:

        DESC: (time < t) OR (time = t AND id < id)
        ASC:  (time > t) OR (time = t AND id > id)
    """
    return compose(base, page, order, KeyColumns.time_and_id(time_col, id_col), placeholder)
