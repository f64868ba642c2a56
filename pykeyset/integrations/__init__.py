from pykeyset.integrations.mongo import KeysetQuerySet, window_filter

__all__ = [
    "KeysetQuerySet",
    "window_filter",
]
