"""Immutable, case-insensitive request headers.

Built from the raw ASGI byte pairs, decoded as latin-1 once. Names are
folded to lower case; duplicate headers keep their order.
"""

from wren._internal.multimap import PairMapping


class Headers(PairMapping):
    """Request headers. ``headers["Accept"]`` and ``headers["accept"]`` agree."""

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        super().__init__((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)
        object.__setattr__(self, "_raw", raw)

    @staticmethod
    def _fold(key: str) -> str:
        return key.lower()

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """The byte pairs as received from the ASGI scope."""
        return self._raw
