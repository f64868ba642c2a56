from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from pykeyset.core.order import Direction
from pykeyset.core.page import Page
from pykeyset.utils.exceptions import CursorError, KeysetError
from pykeyset.utils.pagination import KeysetPage
from pykeyset.utils.types import DEFAULT_LIMIT, MAX_LIMIT

T = TypeVar("T")


def register_exception_handlers(app: Any) -> None:
    """Register pykeyset exception handlers on a FastAPI app.

    Paging helpers never raise for bad cursors; the 400 handler covers
    endpoints that decode cursors themselves with the strict codec.
    """
    from starlette.responses import JSONResponse

    @app.exception_handler(CursorError)
    async def cursor_error_handler(request: Any, exc: CursorError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(KeysetError)
    async def keyset_error_handler(request: Any, exc: KeysetError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})


class KeysetParams:
    """FastAPI dependency for keyset pagination query parameters.

    Usage: ``params: KeysetParams = Depends()``
    """

    def __init__(
        self,
        cursor: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
        direction: str = Direction.NEXT.value,
    ):
        self.cursor = cursor or ""
        self.limit = min(limit, MAX_LIMIT) if limit > 0 else DEFAULT_LIMIT
        self.direction = Direction.parse(direction)

    @property
    def page(self) -> Page:
        return Page(cursor=self.cursor, limit=self.limit, direction=self.direction)


class KeysetResponse(BaseModel, Generic[T]):
    """Keyset-paginated response model for API endpoints."""

    items: list[T]
    limit: int
    direction: Direction
    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None

    @classmethod
    def from_page(cls, page_obj: KeysetPage) -> KeysetResponse:
        return cls(
            items=page_obj.items,
            limit=page_obj.limit,
            direction=page_obj.direction,
            next_cursor=page_obj.next_cursor,
            prev_cursor=page_obj.prev_cursor,
        )
