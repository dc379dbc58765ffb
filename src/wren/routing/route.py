"""Route and RouteMatch frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wren._internal.types import Handler
from wren.http.methods import StdMethod, parse_method
from wren.routing.params import Params
from wren.routing.patterns import RoutePattern, match_pattern

if TYPE_CHECKING:
    from wren.http.request import Request


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen (method, pattern, handler) binding.

    Created during app setup and never mutated afterwards.
    """

    method: StdMethod
    pattern: RoutePattern
    handler: Handler
    name: str | None = None

    def match(self, request: Request) -> RouteMatch | None:
        """Match *request* against this route.

        The method is checked first; the pattern is only consulted when
        the request's method parses to this route's method.
        """
        if parse_method(request.method) is not self.method:
            return None
        captures = match_pattern(self.pattern, request)
        if captures is None:
            return None
        return RouteMatch(route=self, params=Params(captures))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: Params
