from typing import Any, Callable

# Type aliases for better clarity
BindValues = list[Any]
FilterSpec = dict[str, Any]
SortSpec = list[tuple[str, int]]

# Renders the bind placeholder for the n-th (1-based) parameter
Placeholder = Callable[[int], str]

# Constants
DEFAULT_LIMIT = 50
MAX_LIMIT = 100  # Upper bound applied to HTTP-supplied limits
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def merge_filters(*filters: FilterSpec | None) -> FilterSpec:
    """Combine MongoDB filters with ``$and``, skipping empty ones.

    Args:
        *filters: Filter dicts, in order of application

    Returns:
        The single non-empty filter, an ``$and`` of several, or ``{}``
    """
    parts = [f for f in filters if f]
    if not parts:
        return {}
    if len(parts) == 1:
        return dict(parts[0])
    return {"$and": parts}
