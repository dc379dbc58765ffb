"""From an ASGI ``http`` scope to a sent response.

The scope becomes a ``Request``, which passes through middleware into
``dispatch``; errors are rendered by ``wren.server.errors``.

Dispatch walks the route table in registration order. For each route
that matches, the handler runs with that route's captures bound; it
either responds (dispatch stops), raises ``Pass`` (dispatch moves on),
or fails (dispatch stops with a 500). An exhausted table is a 404.
"""

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke, invoke_in_thread
from wren.errors import HTTPError, NotFound, Pass
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next
from wren.routing.params import Params
from wren.routing.router import Router
from wren.server.errors import ErrorHandlers, handle_http_error, handle_internal_error
from wren.server.negotiation import negotiate
from wren.server.sender import send_response

logger = logging.getLogger("wren.routing")

_BOOLEANS = {
    **dict.fromkeys(("true", "1", "yes", "on"), True),
    **dict.fromkeys(("false", "0", "no", "off"), False),
}


async def _through(mw: Callable[..., Any], next: Next, request: Request) -> Response:
    return await mw(request, next)


def chain(middleware: tuple[Callable[..., Any], ...], endpoint: Next) -> Next:
    """Wrap *endpoint* in *middleware*, the first entry outermost."""
    for mw in reversed(middleware):
        endpoint = functools.partial(_through, mw, endpoint)
    return endpoint


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: ErrorHandlers,
    debug: bool,
    offload: bool = False,
) -> None:
    """Answer one ``http`` scope. Lifespan and websocket scopes are ignored here."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    pipeline = chain(middleware, functools.partial(dispatch, router=router, offload=offload))
    try:
        response = await pipeline(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    await send_response(response, send, head=request.method == "HEAD")


async def dispatch(request: Request, router: Router, *, offload: bool = False) -> Response:
    """Run the first route that matches *request* and does not decline.

    Raises ``NotFound`` when every candidate is exhausted. Handler
    exceptions other than ``Pass`` propagate to the caller.
    """
    for match in router.candidates(request):
        bound = request.with_params(match.params)
        try:
            result = await call_handler(match.route.handler, bound, offload=offload)
        except Pass:
            logger.debug(
                "%s %s declined by %s %s",
                request.method,
                request.path,
                match.route.method,
                match.route.pattern,
            )
            continue
        return negotiate(result)

    raise NotFound


async def call_handler(
    handler: Callable[..., Any],
    request: Request,
    *,
    offload: bool = False,
) -> Any:
    """Call *handler* with kwargs resolved from *request*.

    Raises ``Pass`` if the handler declines.
    """
    kwargs = build_handler_kwargs(handler, request)
    if offload:
        return await invoke_in_thread(handler, **kwargs)
    return await invoke(handler, **kwargs)


def convert_capture(annotation: type, value: str) -> Any:
    """Convert a captured segment to *annotation*, raising ``Pass`` on failure.

    ``bool`` accepts ``true/false``, ``1/0``, ``yes/no`` and ``on/off``
    (case-insensitive) and nothing else.
    """
    if annotation is bool:
        try:
            return _BOOLEANS[value.lower()]
        except KeyError:
            raise Pass from None
    try:
        return annotation(value)
    except (ValueError, TypeError):
        raise Pass from None


def build_handler_kwargs(handler: Callable[..., Any], request: Request) -> dict[str, Any]:
    """Resolve the handler's keyword arguments from the bound request.

    A parameter receives, in order of precedence:

    1. the ``Request``, if it is named ``request`` or annotated ``Request``;
    2. the ``Params``, if it is named ``params`` or annotated ``Params``;
    3. the capture of the same name. An annotation other than ``str`` is
       converted with ``convert_capture``, so ``def show(id: int)`` only
       serves numeric ids.

    The names ``request`` and ``params`` are taken by the first two rules.
    A capture with either name is still bound and readable through
    ``params``, but never arrives as its own argument.
    """
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        annotation = param.annotation
        if name == "request" or annotation is Request:
            kwargs[name] = request
        elif name == "params" or annotation is Params:
            kwargs[name] = request.params
        elif name in request.params:
            value = request.params[name]
            if isinstance(annotation, type) and annotation is not str:
                value = convert_capture(annotation, value)
            kwargs[name] = value
    return kwargs
