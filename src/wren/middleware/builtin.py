"""Built-in middleware: access logging.

Logs one line per request through the stdlib ``logging`` module, on the
``wren.access`` logger, once the route table has answered or failed.
"""

import logging
import time

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next


class AccessLog:
    """Log method, path, status, and elapsed time for every request.

    Usage::

        app.add_middleware(AccessLog())

    Output (at INFO)::

        GET /users/42 200 1.3ms

    An ``HTTPError`` leaving the route table (including the 404 for an
    exhausted table) is logged with its status and re-raised; any other
    exception is logged as 500 and re-raised.
    """

    __slots__ = ("level", "logger")

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger("wren.access")
        self.level = level

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.perf_counter()
        status = 500
        try:
            response = await next(request)
            status = response.status
            return response
        except HTTPError as exc:
            status = exc.status
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.logger.log(
                self.level,
                "%s %s %d %.1fms",
                request.method,
                request.url,
                status,
                elapsed_ms,
            )
