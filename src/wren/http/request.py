"""The request as handlers and route patterns see it.

One ``Request`` is built per ASGI scope. Each matching route gets a copy
with its own captures in ``params``; the original keeps empty ``params``.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field, replace
from typing import Any

from wren._internal.asgi import Receive
from wren.http.headers import Headers
from wren.http.query import QueryParams
from wren.routing.params import Params


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``method`` is the raw method token as received. ``path`` is the
    undecoded request path without the query string, which is what route
    patterns match against.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    params: Params
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    _receive: Receive
    # Shared by every copy made with with_params()
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """``path``, plus ``?`` and the raw query string when there is one."""
        query = self.query.raw.decode("latin-1")
        return f"{self.path}?{query}" if query else self.path

    def with_params(self, params: Params) -> Request:
        """Copy of this request with *params* bound.

        Copies share one body cache, so the body can be read by every
        handler that sees the request, declined ones included.
        """
        return replace(self, params=params)

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield body chunks straight from ASGI ``receive``. Not cached."""
        more = True
        while more:
            message = await self._receive()
            more = message.get("more_body", False)
            if chunk := message.get("body", b""):
                yield chunk

    async def body(self) -> bytes:
        """The whole body, read from ASGI on first call and cached."""
        if "body" not in self._cache:
            self._cache["body"] = b"".join([chunk async for chunk in self.stream()])
        return self._cache["body"]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        return json.loads(await self.body())

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Build the request for an ``http`` scope.

        ``path`` comes from ``raw_path`` when the server provides it, so
        percent-escapes reach the route patterns undecoded.
        """
        raw_path = scope.get("raw_path")
        if raw_path:
            path = raw_path.decode("latin-1").partition("?")[0]
        else:
            path = scope["path"]
        server, client = scope.get("server"), scope.get("client")
        return cls(
            method=scope["method"],
            path=path,
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            params=Params(),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
