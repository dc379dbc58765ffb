"""Standard HTTP request methods.

The closed verb set a route can be registered for. Requests carrying any
other method token never match a route.
"""

from enum import StrEnum


class StdMethod(StrEnum):
    """The standard HTTP methods, in the order ``match_any`` registers them."""

    GET = "GET"
    POST = "POST"
    HEAD = "HEAD"
    PUT = "PUT"
    DELETE = "DELETE"
    TRACE = "TRACE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"


def parse_method(token: str | bytes) -> StdMethod | None:
    """Parse a raw request method token.

    Method tokens are case-sensitive (RFC 9110), so ``"get"`` is not
    ``GET``. Returns ``None`` for anything outside the standard set.
    """
    if isinstance(token, bytes):
        token = token.decode("latin-1")
    try:
        return StdMethod(token)
    except ValueError:
        return None
