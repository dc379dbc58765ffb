"""Content negotiation: map handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable. Declining is not
a return value: handlers raise ``Pass`` for that, so ``None`` can mean
"respond with an empty 200".
"""

import json as json_module
from typing import Any

from wren.http.response import Response


def negotiate(value: Any, *, status: int = 200) -> Response:
    """Convert a route handler's return value to a Response.

    *status* is the status given to bare values. A ``Response`` or a
    status tuple names its own status and keeps it.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``None``                -> *status*, empty body
    3. ``str``                 -> *status*, text/html
    4. ``bytes``               -> *status*, application/octet-stream
    5. ``dict`` / ``list``     -> *status*, application/json
    6. ``(value, int)``        -> negotiate value, override status
    7. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case None:
            return Response(body="", status=status)
        case str():
            return Response(body=value, status=status)
        case bytes():
            return Response(body=value, status=status, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                status=status,
                content_type="application/json; charset=utf-8",
            )
        case (inner, int() as code):
            return negotiate(inner).with_status(code)
        case (inner, int() as code, dict() as headers):
            return negotiate(inner).with_status(code).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, dict, list, None, or Response; "
                f"raise Pass to decline."
            )
            raise TypeError(msg)
