from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from pykeyset.core.cursor import decode_int64_cursor, encode_int64_cursor
from pykeyset.core.order import Direction
from pykeyset.core.page import Page
from pykeyset.integrations.fastapi import KeysetParams, KeysetResponse, register_exception_handlers
from pykeyset.utils.exceptions import InvalidOrder
from pykeyset.utils.pagination import build_keyset_page


def test_keyset_params_defaults():
    p = KeysetParams()
    assert p.cursor == ""
    assert p.limit == 50
    assert p.direction is Direction.NEXT
    assert p.page == Page()


def test_keyset_params_clamps_max():
    assert KeysetParams(limit=999).limit == 100


def test_keyset_params_non_positive_limit():
    assert KeysetParams(limit=0).limit == 50
    assert KeysetParams(limit=-3).limit == 50


def test_keyset_params_direction():
    assert KeysetParams(direction="prev").page.direction is Direction.PREVIOUS
    assert KeysetParams(direction="upwards").page.direction is Direction.NEXT


def test_keyset_response_from_page():
    page = build_keyset_page(Page(limit=2), [{"id": 2}, {"id": 1}], lambda r: encode_int64_cursor(r["id"]))
    resp = KeysetResponse[dict].from_page(page)
    assert resp.items == [{"id": 2}, {"id": 1}]
    assert resp.limit == 2
    assert resp.direction is Direction.NEXT
    assert decode_int64_cursor(resp.next_cursor) == 1
    assert decode_int64_cursor(resp.prev_cursor) == 2


def test_dependency_parses_query_string():
    app = FastAPI()

    @app.get("/items")
    async def list_items(params: KeysetParams = Depends()):
        page = params.page
        return {"cursor": page.cursor, "limit": page.limit, "direction": page.direction.value}

    client = TestClient(app)
    resp = client.get("/items", params={"cursor": "AAAAAAAAAAE", "limit": 500, "direction": "prev"})
    assert resp.status_code == 200
    assert resp.json() == {"cursor": "AAAAAAAAAAE", "limit": 100, "direction": "previous"}


def test_cursor_error_handler_400():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/strict")
    async def strict(cursor: str):
        return {"id": decode_int64_cursor(cursor)}

    client = TestClient(app)
    assert client.get("/strict", params={"cursor": "AAAAAAAAAAE"}).json() == {"id": 1}
    resp = client.get("/strict", params={"cursor": "AAAA"})
    assert resp.status_code == 400
    assert "invalid cursor length" in resp.json()["detail"]


def test_keyset_error_handler_500():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/error")
    async def error_endpoint():
        raise InvalidOrder("invalid order: 'sideways'")

    client = TestClient(app)
    resp = client.get("/error")
    assert resp.status_code == 500
    assert "invalid order" in resp.json()["detail"]
