"""Ordered route table.

Routes are appended during setup and frozen into a tuple when the app
compiles. Dispatch order is registration order: the first route whose
method and pattern match, and whose handler does not decline, wins.
"""

import logging
from collections.abc import Iterator

from wren.http.request import Request
from wren.routing.route import Route, RouteMatch

logger = logging.getLogger("wren.routing")


class Router:
    """Append-only route table with first-match-wins lookup.

    Usage::

        router = Router()
        router.add(Route(StdMethod.GET, capture("/users/:id"), handler))
        router.compile()
        for match in router.candidates(request):
            ...
    """

    __slots__ = ("_compiled", "_pending", "_routes")

    def __init__(self) -> None:
        self._pending: list[Route] = []
        self._routes: tuple[Route, ...] = ()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Append a route to the table. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        logger.debug("route %d: %s %s", len(self._pending), route.method, route.pattern)
        self._pending.append(route)

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._routes = tuple(self._pending)
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in dispatch order."""
        if self._compiled:
            return self._routes
        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self.routes)

    def candidates(self, request: Request) -> Iterator[RouteMatch]:
        """Yield every matching route for *request*, in registration order.

        Lazy: a route is only matched once the caller asks for the next
        candidate, so routes after the one that responds are never tried.
        """
        for route in self.routes:
            match = route.match(request)
            if match is not None:
                yield match

    def match(self, request: Request) -> RouteMatch | None:
        """Return the first matching route, ignoring handler outcomes."""
        return next(self.candidates(request), None)
