from pykeyset.core.cursor import (
    CursorKind,
    encode_int64_cursor,
    decode_int64_cursor,
    encode_time_cursor,
    decode_time_cursor,
    encode_time_ns_cursor,
    decode_time_ns_cursor,
    encode_time_and_int64_cursor,
    decode_time_and_int64_cursor,
)
from pykeyset.core.order import (
    Order,
    Direction,
    effective_order,
    reverse,
    inequality_operator,
    sql_keyword,
)
from pykeyset.core.page import Page
from pykeyset.core.window import (
    Window,
    single_column_window,
    time_and_id_window,
    stable_where_time_and_id,
    order_clause,
    resolve_cursor,
)
from pykeyset.core.query import (
    KeyColumns,
    compose,
    has_where,
    query_by_id,
    query_by_time,
    query_by_time_and_id,
    placeholder_question,
    placeholder_dollar,
    placeholder_numeric,
)
from pykeyset.core.result import normalize_page_result

__all__ = [
    "CursorKind",
    "encode_int64_cursor",
    "decode_int64_cursor",
    "encode_time_cursor",
    "decode_time_cursor",
    "encode_time_ns_cursor",
    "decode_time_ns_cursor",
    "encode_time_and_int64_cursor",
    "decode_time_and_int64_cursor",
    "Order",
    "Direction",
    "effective_order",
    "reverse",
    "inequality_operator",
    "sql_keyword",
    "Page",
    "Window",
    "single_column_window",
    "time_and_id_window",
    "stable_where_time_and_id",
    "order_clause",
    "resolve_cursor",
    "KeyColumns",
    "compose",
    "has_where",
    "query_by_id",
    "query_by_time",
    "query_by_time_and_id",
    "placeholder_question",
    "placeholder_dollar",
    "placeholder_numeric",
    "normalize_page_result",
]
