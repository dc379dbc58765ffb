"""Middleware around the route table.

A middleware sees a request before dispatch and the ``Response`` after
it. ``next`` walks the rest of the chain and then the routes in
registration order; it never returns for a request no route answered,
because the exhausted table raises ``NotFound`` through it, as does any
other ``HTTPError`` or handler failure.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from wren.http.request import Request
from wren.http.response import Response

Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Anything awaitable as ``mw(request, next)`` that yields a ``Response``.

    A plain function::

        async def tag(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("X-Routed-By", "wren")

    or an object with ``__call__``, such as the built-in ``AccessLog``.
    Middleware cannot decline: ``Pass`` only means something inside a
    route handler.
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
