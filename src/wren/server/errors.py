"""Turn exceptions raised during dispatch into responses.

``HTTPError`` (the 404 for an exhausted route table included) renders
with its own status; any other exception is a 500. A handler registered
with ``@app.error`` is looked up by exception class first, then by status.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any, TypeAlias

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response
from wren.server.negotiation import negotiate

logger = logging.getLogger("wren.server")

ErrorHandlers: TypeAlias = dict[int | type, Callable[..., Any]]

_PLAIN = "text/plain; charset=utf-8"


def _plain(body: str, status: int) -> Response:
    return Response(body=body, status=status, content_type=_PLAIN)


async def run_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    status: int,
) -> Response:
    """Call an ``@app.error`` handler and negotiate what it returns.

    The handler receives as many of ``(request, exc)`` as its signature
    takes. Bare return values get *status*. If the handler itself fails,
    the failure is logged and a plain 500 is sent instead.
    """
    arity = len(inspect.signature(handler).parameters)
    try:
        result = handler(*(request, exc)[:arity])
        if inspect.isawaitable(result):
            result = await result
        return negotiate(result, status=status)
    except Exception:
        logger.exception(
            "error handler %s failed on %s %s",
            getattr(handler, "__qualname__", handler),
            request.method,
            request.path,
        )
        return _plain("Internal Server Error", 500)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """Render *exc*. Unhandled 404s have an empty body."""
    logger.debug("%d %s %s %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        return await run_error_handler(handler, request, exc, exc.status)

    body = f"{exc.status}: {exc.detail}" if debug and exc.detail else exc.detail
    return Response(
        body=body, status=exc.status, content_type=_PLAIN, headers=tuple(exc.headers)
    )


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """Render a handler failure as a 500, with the traceback when *debug*."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        return await run_error_handler(handler, request, exc, 500)

    if debug:
        return _plain("".join(traceback.format_exception(exc)), 500)
    return _plain("Internal Server Error", 500)
