"""Wren exception hierarchy.

Shared across Router, App, dispatcher, and middleware so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a route or the app is configured incorrectly.

    Raised at registration time (malformed regex, unknown method), never
    while serving a request.
    """


class Pass(WrenError):  # noqa: N818
    """Raised by a handler to decline the request.

    The dispatcher treats the route as if it had not matched and moves on
    to the next candidate in registration order::

        @app.get("/users/:id")
        def by_id(id: str):
            if not id.isdigit():
                raise Pass
            return f"user {id}"
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Raised by the dispatcher, middleware, or handlers. The ASGI handler
    catches these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: the route table was exhausted without a response."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(status=404, detail=detail)
