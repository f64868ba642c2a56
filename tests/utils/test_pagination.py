from pykeyset.core.cursor import decode_int64_cursor, encode_int64_cursor
from pykeyset.core.order import Direction
from pykeyset.core.page import Page
from pykeyset.utils.pagination import KeysetPage, build_keyset_page


def _encode(row: dict) -> str:
    return encode_int64_cursor(row["id"])


class TestBuildKeysetPage:
    def test_next_page_cursors(self):
        rows = [{"id": 9}, {"id": 8}, {"id": 7}]
        page = build_keyset_page(Page(limit=3), rows, _encode)
        assert isinstance(page, KeysetPage)
        assert [r["id"] for r in page.items] == [9, 8, 7]
        assert decode_int64_cursor(page.next_cursor) == 7
        assert decode_int64_cursor(page.prev_cursor) == 9
        assert page.direction is Direction.NEXT
        assert page.is_full

    def test_previous_page_is_normalized_first(self):
        rows = [{"id": 5}, {"id": 6}, {"id": 7}]
        page = build_keyset_page(Page(limit=5, direction="prev"), rows, _encode)
        assert [r["id"] for r in page.items] == [7, 6, 5]
        assert decode_int64_cursor(page.next_cursor) == 5
        assert decode_int64_cursor(page.prev_cursor) == 7
        assert not page.is_full

    def test_empty_page(self):
        page = build_keyset_page(Page(limit=3), [], _encode)
        assert page.items == []
        assert page.next_cursor is None
        assert page.prev_cursor is None
        assert page.limit == 3
