"""Write a wren Response to ASGI ``send``."""

from wren._internal.asgi import Send
from wren.http.response import Response

# Statuses that never carry a message body
_BODYLESS = frozenset({204, 304})


def encode_headers(response: Response, length: int) -> list[tuple[bytes, bytes]]:
    """Response headers as ASGI byte pairs, names lower-cased.

    ``content-type`` comes first and ``content-length`` last.
    """
    pairs = [("content-type", response.content_type), *response.headers]
    pairs.append(("content-length", str(length)))
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response* as one start message and one body message.

    1xx, 204 and 304 responses have an empty body. A ``HEAD`` response
    advertises the length of the body it would have sent but sends none.
    """
    status = response.status
    body = b"" if status < 200 or status in _BODYLESS else response.body_bytes

    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": b"" if head else body})
