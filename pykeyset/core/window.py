"""Stable-window boundary predicates.

The builders here only compose SQL fragments and bind values; how the
fragment is attached to a statement is left to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pykeyset.core.cursor import CursorKind
from pykeyset.core.order import Order, inequality_operator, sql_keyword
from pykeyset.lifecycle.observability import report_invalid_cursor
from pykeyset.utils.exceptions import CursorError
from pykeyset.utils.types import Placeholder


def placeholder_question(_: int) -> str:
    """``?`` for any index (SQLite, MySQL, DB-API qmark style)."""
    return "?"


def placeholder_dollar(n: int) -> str:
    """``$n`` (PostgreSQL, asyncpg)."""
    return f"${n}"


def placeholder_numeric(n: int) -> str:
    """``:n`` (DB-API numeric style)."""
    return f":{n}"


@dataclass(frozen=True)
class Window:
    """A boundary predicate and the values bound to its placeholders."""

    sql: str
    values: tuple[Any, ...]


def single_column_window(
    col: str,
    order: Order,
    value: Any,
    placeholder: Placeholder = placeholder_question,
    start: int = 1,
) -> Window:
    """``col > value`` for Ascending, ``col < value`` for Descending.

    ``order`` is the effective order of the fetch, not the base order.
    """
    return Window(f"{col} {inequality_operator(order)} {placeholder(start)}", (value,))


def time_and_id_window(
    time_col: str,
    id_col: str,
    order: Order,
    t: Any,
    id: Any,
    placeholder: Placeholder = placeholder_question,
    start: int = 1,
) -> Window:
    """Strict lexicographic boundary over a (time, id) key.

    Ascending:  ``(time_col > t) OR (time_col = t AND id_col > id)``
    Descending: ``(time_col < t) OR (time_col = t AND id_col < id)``

    Values are bound as ``(t, t, id)``.
    """
    op = inequality_operator(order)
    sql = (
        f"({time_col} {op} {placeholder(start)})"
        f" OR ({time_col} = {placeholder(start + 1)} AND {id_col} {op} {placeholder(start + 2)})"
    )
    return Window(sql, (t, t, id))


def stable_where_time_and_id(time_col: str, id_col: str, order: Order) -> str:
    """The composite boundary fragment with ``?`` placeholders, bound as (t, t, id)."""
    return time_and_id_window(time_col, id_col, order, None, None).sql


def order_clause(cols: Sequence[str], order: Order) -> str:
    """Comma-joined ORDER BY body, e.g. ``"created_at DESC, id DESC"``."""
    keyword = sql_keyword(order)
    return ", ".join(f"{col} {keyword}" for col in cols)


def resolve_cursor(kind: CursorKind, cursor: str) -> tuple[Any, ...] | None:
    """Decode a cursor for use as a window boundary.

    Returns None for an empty cursor. An undecodable cursor is reported as a
    warning and also yields None, so the fetch starts from the first page in
    the requested direction instead of failing.
    """
    if not cursor:
        return None
    try:
        return kind.decode(cursor)
    except CursorError as e:
        report_invalid_cursor(cursor, kind.value, e)
        return None


def build_window(
    kind: CursorKind,
    columns: Sequence[str],
    order: Order,
    values: Sequence[Any],
    placeholder: Placeholder = placeholder_question,
    start: int = 1,
) -> Window:
    """Window for decoded key values of the given shape."""
    if kind is CursorKind.TIME_AND_INT64:
        time_col, id_col = columns
        t, id = values
        return time_and_id_window(time_col, id_col, order, t, id, placeholder, start)
    (col,) = columns
    (value,) = values
    return single_column_window(col, order, value, placeholder, start)
