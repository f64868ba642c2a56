from pykeyset.core.order import Direction
from pykeyset.core.page import Page
from pykeyset.core.result import normalize_page_result


def test_previous_reverses_in_place():
    rows = ["r5", "r4", "r3"]
    result = normalize_page_result(Page(direction=Direction.PREVIOUS), rows)
    assert result is rows
    assert rows == ["r3", "r4", "r5"]


def test_next_is_unchanged():
    rows = ["r1", "r2", "r3"]
    assert normalize_page_result(Page(), rows) == ["r1", "r2", "r3"]


def test_empty_rows():
    assert normalize_page_result(Page(direction=Direction.PREVIOUS), []) == []
