from pykeyset.core import (
    CursorKind,
    encode_int64_cursor,
    decode_int64_cursor,
    encode_time_cursor,
    decode_time_cursor,
    encode_time_ns_cursor,
    decode_time_ns_cursor,
    encode_time_and_int64_cursor,
    decode_time_and_int64_cursor,
    Order,
    Direction,
    effective_order,
    Page,
    Window,
    single_column_window,
    time_and_id_window,
    stable_where_time_and_id,
    order_clause,
    KeyColumns,
    compose,
    query_by_id,
    query_by_time,
    query_by_time_and_id,
    placeholder_question,
    placeholder_dollar,
    placeholder_numeric,
    normalize_page_result,
)
from pykeyset.integrations import KeysetQuerySet
from pykeyset.lifecycle import (
    enable_tracing,
    disable_tracing,
    QueryEvent,
    CursorRejected,
    add_listener,
)
from pykeyset.utils import (
    KeysetError,
    CursorError,
    InvalidEncoding,
    InvalidLength,
    InvalidOrder,
    InvalidDirection,
    KeysetPage,
    build_keyset_page,
)

__all__ = [
    # Cursor codec
    "CursorKind",
    "encode_int64_cursor",
    "decode_int64_cursor",
    "encode_time_cursor",
    "decode_time_cursor",
    "encode_time_ns_cursor",
    "decode_time_ns_cursor",
    "encode_time_and_int64_cursor",
    "decode_time_and_int64_cursor",
    # Order algebra
    "Order",
    "Direction",
    "effective_order",
    "Page",
    # Windows and queries
    "Window",
    "single_column_window",
    "time_and_id_window",
    "stable_where_time_and_id",
    "order_clause",
    "KeyColumns",
    "compose",
    "query_by_id",
    "query_by_time",
    "query_by_time_and_id",
    "placeholder_question",
    "placeholder_dollar",
    "placeholder_numeric",
    "normalize_page_result",
    # Integrations
    "KeysetQuerySet",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "QueryEvent",
    "CursorRejected",
    "add_listener",
    # Utils
    "KeysetError",
    "CursorError",
    "InvalidEncoding",
    "InvalidLength",
    "InvalidOrder",
    "InvalidDirection",
    "KeysetPage",
    "build_keyset_page",
]
