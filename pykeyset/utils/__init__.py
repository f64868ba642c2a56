from pykeyset.utils.exceptions import (
    KeysetError,
    CursorError,
    InvalidEncoding,
    InvalidLength,
    InvalidOrder,
    InvalidDirection,
)
from pykeyset.utils.pagination import KeysetPage, build_keyset_page
from pykeyset.utils.types import (
    BindValues,
    FilterSpec,
    SortSpec,
    Placeholder,
    merge_filters,
    DEFAULT_LIMIT,
    MAX_LIMIT,
)

__all__ = [
    "KeysetError",
    "CursorError",
    "InvalidEncoding",
    "InvalidLength",
    "InvalidOrder",
    "InvalidDirection",
    "KeysetPage",
    "build_keyset_page",
    "BindValues",
    "FilterSpec",
    "SortSpec",
    "Placeholder",
    "merge_filters",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
]
