from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from pykeyset.core.order import Direction
from pykeyset.utils.types import DEFAULT_LIMIT


class Page(BaseModel):
    """Keyset pagination request state.

    Defaults are applied during validation, so a constructed Page is always
    normalized: a non-positive ``limit`` becomes ``DEFAULT_LIMIT`` and an
    unrecognized ``direction`` becomes ``Direction.NEXT``. An empty
    ``cursor`` means "start of the sequence".

    Example: Page(cursor=token, limit=20, direction="prev")
    """

    model_config = {"frozen": True}

    cursor: str = ""
    limit: int = DEFAULT_LIMIT
    direction: Direction = Direction.NEXT

    @field_validator("cursor", mode="before")
    @classmethod
    def _cursor_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("limit", mode="before")
    @classmethod
    def _limit_default(cls, value: Any) -> Any:
        return DEFAULT_LIMIT if value is None else value

    @field_validator("limit")
    @classmethod
    def _limit_positive(cls, value: int) -> int:
        return value if value > 0 else DEFAULT_LIMIT

    @field_validator("direction", mode="before")
    @classmethod
    def _direction_default(cls, value: Any) -> Direction:
        return Direction.parse(value)

    def ensure_defaults(self) -> Page:
        """Return a normalized copy.

        Only needed for instances built with ``model_construct``, which
        skips validation.
        """
        limit = self.limit if isinstance(self.limit, int) and self.limit > 0 else DEFAULT_LIMIT
        direction = Direction.parse(self.direction)
        cursor = self.cursor or ""
        if (cursor, limit, direction) == (self.cursor, self.limit, self.direction):
            return self
        return Page.model_construct(cursor=cursor, limit=limit, direction=direction)

    @property
    def is_first(self) -> bool:
        """True when no cursor was supplied."""
        return not self.cursor
