"""Middleware. Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    AccessLog -- one log line per request on the ``wren.access`` logger
"""

from wren.middleware.builtin import AccessLog
from wren.middleware.protocol import Middleware, Next

__all__ = [
    "AccessLog",
    "Middleware",
    "Next",
]
