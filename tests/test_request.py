"""Tests for wren.http.request: frozen Request with async body access."""

import json

import pytest

from wren.http.request import Request
from wren.routing.params import Params


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        scope = _make_scope(method="POST", path="/users", raw_path=b"/users")
        req = Request.from_asgi(scope, _make_receive())

        assert req.method == "POST"
        assert req.path == "/users"
        assert req.http_version == "1.1"
        assert req.server == ("localhost", 8000)
        assert req.client == ("127.0.0.1", 54321)

    def test_params_start_empty(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        assert req.params == Params()

    def test_method_token_kept_verbatim(self) -> None:
        req = Request.from_asgi(_make_scope(method="get"), _make_receive())
        assert req.method == "get"

    def test_raw_path_preferred(self) -> None:
        scope = _make_scope(path="/a b", raw_path=b"/a%20b")
        req = Request.from_asgi(scope, _make_receive())
        assert req.path == "/a%20b"

    def test_raw_path_query_stripped(self) -> None:
        scope = _make_scope(path="/search", raw_path=b"/search?q=1")
        req = Request.from_asgi(scope, _make_receive())
        assert req.path == "/search"

    def test_falls_back_to_path(self) -> None:
        scope = _make_scope(path="/users")
        del scope["raw_path"]
        req = Request.from_asgi(scope, _make_receive())
        assert req.path == "/users"

    def test_headers_and_query(self) -> None:
        scope = _make_scope(
            headers=[(b"content-type", b"application/json")],
            query_string=b"q=hello",
        )
        req = Request.from_asgi(scope, _make_receive())

        assert req.content_type == "application/json"
        assert req.query["q"] == "hello"

    def test_missing_server_and_client(self) -> None:
        scope = _make_scope()
        del scope["server"]
        del scope["client"]
        req = Request.from_asgi(scope, _make_receive())

        assert req.server is None
        assert req.client is None

    def test_url(self) -> None:
        scope = _make_scope(raw_path=b"/search", query_string=b"q=hello")
        req = Request.from_asgi(scope, _make_receive())
        assert req.url == "/search?q=hello"


class TestWithParams:
    def test_returns_copy(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        bound = req.with_params(Params([("id", "1")]))

        assert bound.params["id"] == "1"
        assert req.params == Params()
        assert bound.path == req.path

    async def test_body_cache_shared(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"payload"))
        first = req.with_params(Params([("a", "1")]))
        second = req.with_params(Params([("b", "2")]))

        assert await first.body() == b"payload"
        # The receive iterator is exhausted; a second read must hit the cache
        assert await second.body() == b"payload"


class TestRequestBody:
    async def test_body_chunked(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hello ", b"world"))
        assert await req.body() == b"hello world"

    async def test_body_empty(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        assert await req.body() == b""

    async def test_text(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hello"))
        assert await req.text() == "hello"

    async def test_json(self) -> None:
        data = json.dumps({"key": "value"}).encode()
        req = Request.from_asgi(_make_scope(), _make_receive(data))
        assert await req.json() == {"key": "value"}

    async def test_stream(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"chunk1", b"chunk2"))
        chunks = [chunk async for chunk in req.stream()]
        assert chunks == [b"chunk1", b"chunk2"]


class TestRequestFrozen:
    def test_cannot_mutate(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())

        with pytest.raises(AttributeError):
            req.method = "POST"  # type: ignore[misc]
