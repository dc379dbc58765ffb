"""Immutable query string parameters.

Query parameters are never bound as route captures; predicates that want
them read ``request.query`` directly.
"""

from urllib.parse import parse_qsl

from wren._internal.multimap import PairMapping


class QueryParams(PairMapping):
    """Decoded ``key=value`` pairs from the query string, in order.

    Blank values are kept, so ``?flag=`` binds ``flag`` to ``""``.
    """

    __slots__ = ("_raw",)

    def __init__(self, query_string: bytes = b"") -> None:
        super().__init__(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True))
        object.__setattr__(self, "_raw", query_string)

    @property
    def raw(self) -> bytes:
        return self._raw
