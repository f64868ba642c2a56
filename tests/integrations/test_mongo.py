from datetime import datetime, timedelta, timezone

import pytest
from pydantic import BaseModel, Field
from pymongo import ASCENDING, DESCENDING

from pykeyset import KeysetQuerySet
from pykeyset.core.cursor import (
    CursorKind,
    decode_time_and_int64_cursor,
    encode_int64_cursor,
    encode_time_and_int64_cursor,
    encode_time_cursor,
)
from pykeyset.core.order import Direction, Order
from pykeyset.core.page import Page
from pykeyset.integrations.mongo import window_filter
from pykeyset.lifecycle.observability import QueryEvent, enable_tracing, get_events

BASE = datetime(2025, 11, 12, tzinfo=timezone.utc)


def _matches(doc: dict, spec: dict) -> bool:
    for key, cond in spec.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in cond):
                return False
        elif key == "$and":
            if not all(_matches(doc, sub) for sub in cond):
                return False
        elif isinstance(cond, dict):
            for op, value in cond.items():
                if op == "$gt" and not doc[key] > value:
                    return False
                if op == "$lt" and not doc[key] < value:
                    return False
        elif doc.get(key) != cond:
            return False
    return True


class FakeCursor:
    """Minimal stand-in for pymongo's AsyncCursor."""

    def __init__(self, docs: list[dict]) -> None:
        self._docs = docs
        self._sort: list[tuple[str, int]] = []
        self._limit = 0

    def sort(self, spec):
        self._sort = spec
        return self

    def limit(self, n):
        self._limit = n
        return self

    async def __aiter__(self):
        docs = list(self._docs)
        for field, direction in reversed(self._sort):
            docs.sort(key=lambda d: d[field], reverse=direction == DESCENDING)
        if self._limit:
            docs = docs[: self._limit]
        for doc in docs:
            yield doc


class FakeCollection:
    name = "posts"

    def __init__(self, docs: list[dict]) -> None:
        self.docs = docs
        self.calls: list[tuple[dict, dict | None]] = []

    def find(self, filter=None, projection=None):
        self.calls.append((filter, projection))
        return FakeCursor([d for d in self.docs if _matches(d, filter or {})])


@pytest.fixture
def posts():
    minute = timedelta(minutes=1)
    times = {1: BASE, 2: BASE, 3: BASE + minute, 4: BASE + minute, 5: BASE + minute, 6: BASE + 2 * minute, 7: BASE + 3 * minute}
    return FakeCollection(
        [{"_id": i, "created_at": t, "status": "published" if i != 3 else "draft"} for i, t in times.items()]
    )


class TestWindowFilter:
    def test_single_field(self):
        assert window_filter(CursorKind.INT64, ("_id",), Order.ASCENDING, (10,)) == {"_id": {"$gt": 10}}
        assert window_filter(CursorKind.INT64, ("_id",), Order.DESCENDING, (10,)) == {"_id": {"$lt": 10}}

    def test_composite(self):
        spec = window_filter(CursorKind.TIME_AND_INT64, ("created_at", "_id"), Order.DESCENDING, (BASE, 4))
        assert spec == {"$or": [{"created_at": {"$lt": BASE}}, {"created_at": BASE, "_id": {"$lt": 4}}]}


class TestKeysetQuerySet:
    def test_chainable_methods_return_new_instances(self, posts):
        qs = KeysetQuerySet(posts)
        filtered = qs.filter(status="published")
        assert filtered is not qs
        assert qs.build_filter() == {}
        assert filtered.build_filter() == {"status": "published"}

    def test_page_by_id_builds_filter_and_sort(self, posts):
        qs = KeysetQuerySet(posts, {"status": "published"}).page_by_id(
            Page(cursor=encode_int64_cursor(10), limit=5), Order.DESCENDING, "_id"
        )
        assert qs.build_filter() == {"$and": [{"status": "published"}, {"_id": {"$lt": 10}}]}
        assert qs.build_sort() == [("_id", DESCENDING)]
        assert qs.page.limit == 5

    def test_previous_direction_flips_sort(self, posts):
        qs = KeysetQuerySet(posts).page_by_time(
            Page(cursor=encode_time_cursor(BASE), direction=Direction.PREVIOUS), Order.DESCENDING, "created_at"
        )
        assert qs.build_filter() == {"created_at": {"$gt": BASE}}
        assert qs.build_sort() == [("created_at", ASCENDING)]

    async def test_select_keeps_key_fields(self, posts):
        await KeysetQuerySet(posts).select("status").page_by_id(Page(), Order.ASCENDING, "_id").all()
        _, projection = posts.calls[-1]
        assert projection == {"status": 1, "_id": 1}

    async def test_all_applies_limit_and_sort(self, posts):
        rows = await KeysetQuerySet(posts).page_by_id(Page(limit=2), Order.DESCENDING, "_id").all()
        assert [r["_id"] for r in rows] == [7, 6]

    async def test_keyset_page_requires_pagination(self, posts):
        with pytest.raises(ValueError):
            await KeysetQuerySet(posts).keyset_page()

    async def test_as_model_with_custom_encoder(self, posts):
        class Post(BaseModel):
            id: int = Field(alias="_id")
            created_at: datetime

        result = await (
            KeysetQuerySet(posts)
            .as_model(Post.model_validate)
            .page_by_time_and_id(
                Page(cursor=encode_time_and_int64_cursor(BASE + timedelta(minutes=1), 4), limit=10),
                Order.DESCENDING,
                "created_at",
                "_id",
            )
            .keyset_page(lambda p: encode_time_and_int64_cursor(p.created_at, p.id))
        )
        assert all(isinstance(p, Post) for p in result.items)
        assert [p.id for p in result.items] == [3, 2, 1]
        assert decode_time_and_int64_cursor(result.next_cursor) == (BASE, 1)

    async def test_find_emits_query_event(self, posts):
        enable_tracing(capture_events=True)
        await KeysetQuerySet(posts, {"status": "published"}).page_by_id(Page(limit=3), Order.ASCENDING, "_id").all()
        events = [e for e in get_events() if isinstance(e, QueryEvent)]
        assert len(events) == 1
        assert events[0].operation == "keyset_find"
        assert events[0].collection == "posts"
        assert events[0].limit == 3
        assert events[0].result_count == 3
