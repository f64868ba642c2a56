from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Generic, TypeVar

from pymongo.asynchronous.collection import AsyncCollection

from pykeyset.core.cursor import CursorKind
from pykeyset.core.order import Order, effective_order
from pykeyset.core.page import Page
from pykeyset.core.result import normalize_page_result
from pykeyset.core.window import resolve_cursor
from pykeyset.lifecycle.observability import track_query
from pykeyset.utils.pagination import KeysetPage, build_keyset_page
from pykeyset.utils.types import FilterSpec, SortSpec, merge_filters

T = TypeVar("T")

_MONGO_OPS = {">": "$gt", "<": "$lt"}


def window_filter(kind: CursorKind, fields: tuple[str, ...], order: Order, values: tuple[Any, ...]) -> FilterSpec:
    """Render a keyset boundary as a MongoDB filter.

    Single field: ``{f: {"$gt": v}}``. Composite (time, id):
    ``{"$or": [{t: {"$gt": tv}}, {t: tv, id: {"$gt": iv}}]}``.
    ``$lt`` replaces ``$gt`` for a descending effective order.
    """
    op = _MONGO_OPS[order.inequality_op()]
    if kind is CursorKind.TIME_AND_INT64:
        time_field, id_field = fields
        t, id = values
        return {"$or": [{time_field: {op: t}}, {time_field: t, id_field: {op: id}}]}
    return {fields[0]: {op: values[0]}}


def _field_value(row: Any, field: str) -> Any:
    if isinstance(row, Mapping):
        return row[field]
    return getattr(row, field)


class KeysetQuerySet(Generic[T]):
    """Fluent, lazy, immutable keyset query builder over a pymongo collection.

    Each chainable method returns a new instance; the query runs only when a
    terminal coroutine is awaited::

        qs = KeysetQuerySet(db.posts, {"status": "published"})
        page = await qs.page_by_time_and_id(
            Page(cursor=token), Order.DESCENDING, "created_at", "seq"
        ).keyset_page()

    Integer and composite keys need int64 values in the id field. Default
    ObjectId ``_id`` values cannot be encoded, so page by an integer field
    such as ``seq`` or store integer ``_id`` values.
    """

    def __init__(
        self,
        collection: AsyncCollection,
        filter: FilterSpec | None = None,
        projection: dict[str, int] | None = None,
        factory: Callable[[dict[str, Any]], T] | None = None,
        page: Page | None = None,
        kind: CursorKind | None = None,
        fields: tuple[str, ...] = (),
        window: FilterSpec | None = None,
        sort: SortSpec | None = None,
    ) -> None:
        self._collection = collection
        self._filter: FilterSpec = filter or {}
        self._projection = projection
        self._factory = factory
        self._page = page
        self._kind = kind
        self._fields = fields
        self._window = window
        self._sort: SortSpec = sort or []

    def _clone(self, **overrides: Any) -> KeysetQuerySet[T]:
        """Return a new KeysetQuerySet with merged overrides."""
        defaults = {
            "collection": self._collection,
            "filter": self._filter.copy(),
            "projection": self._projection.copy() if self._projection else None,
            "factory": self._factory,
            "page": self._page,
            "kind": self._kind,
            "fields": self._fields,
            "window": self._window,
            "sort": self._sort.copy(),
        }
        defaults.update(overrides)
        return KeysetQuerySet(**defaults)

    # --- Chainable methods ---

    def filter(self, _filter: FilterSpec | None = None, **kwargs: Any) -> KeysetQuerySet[T]:
        """Add filter conditions, merged over the existing filter."""
        return self._clone(filter={**self._filter, **(_filter or {}), **kwargs})

    def select(self, *fields: str) -> KeysetQuerySet[T]:
        """Set field projection. Key fields are always included."""
        projection = {f: 1 for f in fields}
        for f in self._fields:
            projection[f] = 1
        return self._clone(projection=projection)

    def as_model(self, factory: Callable[[dict[str, Any]], T]) -> KeysetQuerySet[T]:
        """Build each row with ``factory``, e.g. a pydantic ``Model.model_validate``."""
        return self._clone(factory=factory)

    def page_by_id(self, page: Page, order: Order, field: str) -> KeysetQuerySet[T]:
        """Keyset window over a single integer field (``encode_int64_cursor`` cursors)."""
        return self._paginate(page, order, CursorKind.INT64, (field,))

    def page_by_time(self, page: Page, order: Order, field: str) -> KeysetQuerySet[T]:
        """Keyset window over a single datetime field (``encode_time_cursor`` cursors)."""
        return self._paginate(page, order, CursorKind.TIME, (field,))

    def page_by_time_and_id(
        self, page: Page, order: Order, time_field: str, id_field: str
    ) -> KeysetQuerySet[T]:
        """Keyset window over a composite (time, id) key.

        Stable window (DESC): ``time < t OR (time = t AND id < id)``
        Stable window (ASC):  ``time > t OR (time = t AND id > id)``
        """
        return self._paginate(page, order, CursorKind.TIME_AND_INT64, (time_field, id_field))

    def _paginate(
        self, page: Page, order: Order, kind: CursorKind, fields: tuple[str, ...]
    ) -> KeysetQuerySet[T]:
        page = page.ensure_defaults()
        effective = effective_order(order, page.direction)

        window = None
        boundary = resolve_cursor(kind, page.cursor)
        if boundary is not None:
            window = window_filter(kind, fields, effective, boundary)

        direction = effective.mongo_direction()
        sort: SortSpec = [(f, direction) for f in fields]
        projection = None
        if self._projection:
            projection = {**self._projection, **{f: 1 for f in fields}}
        return self._clone(
            page=page, kind=kind, fields=fields, window=window, sort=sort, projection=projection
        )

    # --- Inspection ---

    @property
    def page(self) -> Page | None:
        return self._page

    def build_filter(self) -> FilterSpec:
        """The base filter combined with the keyset window, if any."""
        return merge_filters(self._filter, self._window)

    def build_sort(self) -> SortSpec:
        return list(self._sort)

    # --- Terminal methods ---

    async def all(self) -> list[T]:
        """Execute the query and return rows in fetch (SQL) order."""
        filter_spec = self.build_filter()
        limit = self._page.limit if self._page else None
        async with track_query(
            "keyset_find", self._collection.name, filter=filter_spec, sort=self._sort, limit=limit
        ) as ctx:
            cursor = self._collection.find(filter_spec, self._projection)
            if self._sort:
                cursor = cursor.sort(self._sort)
            if limit:
                cursor = cursor.limit(limit)
            results = []
            async for raw in cursor:
                results.append(self._factory(raw) if self._factory else raw)
            ctx["result_count"] = len(results)
        return results

    async def find_page(self) -> list[T]:
        """Execute the query and return rows in display order."""
        results = await self.all()
        if self._page is not None:
            normalize_page_result(self._page, results)
        return results

    async def keyset_page(self, encode_row: Callable[[T], str] | None = None) -> KeysetPage[T]:
        """Execute the query and return a KeysetPage with outbound cursors.

        By default cursors are encoded from the paged key fields of the
        boundary rows.
        """
        if self._page is None or self._kind is None:
            raise ValueError("keyset_page() requires page_by_id/page_by_time/page_by_time_and_id first")
        rows = await self.all()
        return build_keyset_page(self._page, rows, encode_row or self._encode_row)

    def _encode_row(self, row: T) -> str:
        values = [_field_value(row, f) for f in self._fields]
        return self._kind.encode(*values)
