"""The value a request ends in.

Handlers may return a ``Response`` directly or any value that
``wren.server.negotiation.negotiate`` converts into one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """Body, status, content type and extra headers.

    Frozen; every ``with_*`` method returns a changed copy::

        Response("gone").with_status(410).with_header("X-Reason", "moved")
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def with_header(self, name: str, value: str) -> Response:
        """Append one header. Existing headers of the same name are kept."""
        return self.with_headers({name: value})

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        return replace(self, headers=self.headers + tuple(headers.items()))

    def header(self, name: str) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        """``body`` encoded as UTF-8 if it is a str."""
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        """``body`` decoded as UTF-8 if it is bytes."""
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body
