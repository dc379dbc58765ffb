"""The ``App``: an ordered route table plus the ASGI entry point.

Routes, middleware, error handlers and hooks are registered first. The
first ASGI call compiles the table, after which registration raises.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren._internal.types import ErrorHandler, Handler
from wren.config import AppConfig
from wren.errors import ConfigurationError
from wren.http.methods import StdMethod, parse_method
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Middleware
from wren.routing.patterns import RoutePattern, as_pattern, function
from wren.routing.route import Route
from wren.routing.router import Router
from wren.server.handler import call_handler, handle_request
from wren.server.negotiation import negotiate

logger = logging.getLogger("wren")


class App:
    """The wren application.

    An explicit route-table builder: routes are appended in call order and
    dispatched in that same order. Nothing is registered globally.

    Usage::

        app = App()

        @app.get("/users/:id")
        def user(id: str):
            return f"user {id}"

        @app.not_found
        def missing(path: str):
            return f"nothing at {path}"

    Registration is meant to happen at import time, on one thread. If
    several workers make the first ASGI call at once, a lock makes sure
    the table is compiled exactly once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router: Router = Router()
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._middleware: tuple[Callable[..., Any], ...] = ()

    # -- Route registration --

    def add_route(
        self,
        method: StdMethod | str,
        pattern: RoutePattern | str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> Route:
        """Append a route for one HTTP method.

        Args:
            method: A ``StdMethod`` or its name (``"GET"``, ``"get"``).
            pattern: A route pattern; plain strings are capture patterns.
            handler: Sync or async callable. Raise ``Pass`` to decline.
            name: Optional label, kept on the ``Route`` for introspection.

        Raises:
            ConfigurationError: Unknown method, or an invalid pattern.
        """
        self._check_not_frozen()
        std_method = parse_method(str(method).upper())
        if std_method is None:
            msg = f"Unknown HTTP method {method!r}. Use one of: {', '.join(StdMethod)}"
            raise ConfigurationError(msg)
        route = Route(method=std_method, pattern=as_pattern(pattern), handler=handler, name=name)
        self._router.add(route)
        return route

    def route(
        self,
        pattern: RoutePattern | str,
        *,
        methods: Iterable[StdMethod | str] = (StdMethod.GET,),
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a handler for one or more methods via decorator.

        One route is appended per method, in the order given.
        """

        def decorator(func: Handler) -> Handler:
            for method in methods:
                self.add_route(method, pattern, func, name=name)
            return func

        return decorator

    def get(
        self, pattern: RoutePattern | str, *, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """``@app.get(pattern)`` is ``add_route(GET, pattern, handler)``."""
        return self.route(pattern, methods=(StdMethod.GET,), name=name)

    def post(
        self, pattern: RoutePattern | str, *, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """``@app.post(pattern)`` is ``add_route(POST, pattern, handler)``."""
        return self.route(pattern, methods=(StdMethod.POST,), name=name)

    def put(
        self, pattern: RoutePattern | str, *, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """``@app.put(pattern)`` is ``add_route(PUT, pattern, handler)``."""
        return self.route(pattern, methods=(StdMethod.PUT,), name=name)

    def delete(
        self, pattern: RoutePattern | str, *, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """``@app.delete(pattern)`` is ``add_route(DELETE, pattern, handler)``."""
        return self.route(pattern, methods=(StdMethod.DELETE,), name=name)

    def patch(
        self, pattern: RoutePattern | str, *, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """``@app.patch(pattern)`` is ``add_route(PATCH, pattern, handler)``."""
        return self.route(pattern, methods=(StdMethod.PATCH,), name=name)

    def match_any(
        self, pattern: RoutePattern | str, *, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """Register a handler for every standard method.

        Appends one route per ``StdMethod``, in enum order, at the current
        position of the table. A request only ever matches the one for its
        own method.
        """
        return self.route(pattern, methods=tuple(StdMethod), name=name)

    def not_found(self, handler: Handler) -> Handler:
        """Register the catch-all handler via decorator.

        Matches every request regardless of method or path and binds
        ``path`` to the request path. Bare return values are sent with status
        404; a returned ``Response`` or ``(value, status)`` tuple keeps its
        own status, 200 included.

        This always matches, so it must be the last route registered.
        """

        async def not_found_handler(request: Request) -> Response:
            result = await call_handler(
                handler, request, offload=self.config.offload_sync_handlers
            )
            return negotiate(result, status=404)

        not_found_handler.__name__ = getattr(handler, "__name__", "not_found")
        not_found_handler.__qualname__ = getattr(handler, "__qualname__", "not_found")
        self.match_any(function(_bind_path), name="not_found")(not_found_handler)
        return handler

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator.

        ``@app.error(404)`` replaces the empty default 404 produced when no
        route responds; ``@app.error(500)`` handles handler failures.
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware around the route table. First added runs outermost."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Decorator: run *func* (sync or async) on ``lifespan.startup``.

        A hook that raises fails the startup and the server exits.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes, in dispatch order."""
        return self._router.routes

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point. The first call of any scope type freezes the app."""
        self._ensure_frozen()
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
            offload=self.config.offload_sync_handlers,
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        """Serve the lifespan scope until the server asks for shutdown.

        A failing startup hook is reported as ``lifespan.startup.failed``
        and ends the scope.
        """
        while True:
            match (await receive())["type"]:
                case "lifespan.startup":
                    try:
                        await self.startup()
                    except Exception as exc:
                        logger.exception("startup hook failed")
                        await send({"type": "lifespan.startup.failed", "message": str(exc)})
                        return
                    await send({"type": "lifespan.startup.complete"})
                case "lifespan.shutdown":
                    await self.shutdown()
                    await send({"type": "lifespan.shutdown.complete"})
                    return

    async def startup(self) -> None:
        """Run the startup hooks in registration order."""
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run the shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            # Another thread may have frozen the app while this one waited
            if not self._frozen:
                logging.getLogger("wren").setLevel(self.config.log_level.upper())
                self._router.compile()
                self._middleware = tuple(self._middleware_list)
                self._frozen = True
                logger.debug("route table compiled with %d routes", len(self._router))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and error handlers first."
            )
            raise RuntimeError(msg)


def _bind_path(request: Request) -> list[tuple[str, str]]:
    return [("path", request.path)]
