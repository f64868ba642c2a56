from __future__ import annotations

from enum import Enum
from typing import Any

from pymongo import ASCENDING, DESCENDING

from pykeyset.utils.exceptions import InvalidDirection, InvalidOrder


class Order(Enum):
    """Natural sort order of a result set, independent of paging direction."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value: Any) -> Order:
        """Convert ``"asc"``/``"desc"`` (any case) or an Order into an Order.

        Raises:
            InvalidOrder: For anything else
        """
        if isinstance(value, Order):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("asc", "ascending"):
                return cls.ASCENDING
            if key in ("desc", "descending"):
                return cls.DESCENDING
        raise InvalidOrder(f"invalid order: {value!r}")

    def reverse(self) -> Order:
        return Order.DESCENDING if self is Order.ASCENDING else Order.ASCENDING

    def inequality_op(self) -> str:
        """Operator selecting rows strictly beyond a boundary in this order."""
        return ">" if self is Order.ASCENDING else "<"

    def sql_keyword(self) -> str:
        return "ASC" if self is Order.ASCENDING else "DESC"

    def mongo_direction(self) -> int:
        return ASCENDING if self is Order.ASCENDING else DESCENDING


class Direction(Enum):
    """Paging direction relative to the cursor."""

    NEXT = "next"
    PREVIOUS = "previous"

    @classmethod
    def parse(cls, value: Any) -> Direction:
        """Convert external input into a Direction, falling back to NEXT."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, str) and value.strip().lower() in ("prev", "previous"):
            return cls.PREVIOUS
        return cls.NEXT


def _require_order(order: Any) -> Order:
    if not isinstance(order, Order):
        raise InvalidOrder(f"invalid order: {order!r}")
    return order


def reverse(order: Order) -> Order:
    """Ascending <-> Descending."""
    return _require_order(order).reverse()


def inequality_operator(order: Order) -> str:
    """``">"`` for Ascending, ``"<"`` for Descending."""
    return _require_order(order).inequality_op()


def sql_keyword(order: Order) -> str:
    """``"ASC"`` or ``"DESC"``. Unknown values map to ``"ASC"``."""
    if isinstance(order, Order):
        return order.sql_keyword()
    return "ASC"


def effective_order(order: Order, direction: Direction) -> Order:
    """Order applied to a single fetch.

    Fetching the previous page scans from the boundary in the opposite
    direction, so the base order is reversed for ``Direction.PREVIOUS``.
    """
    order = _require_order(order)
    if not isinstance(direction, Direction):
        raise InvalidDirection(f"invalid direction: {direction!r}")
    if direction is Direction.PREVIOUS:
        return order.reverse()
    return order
