"""Captured route parameters.

The ordered ``(key, value)`` pairs a pattern binds, exposed as a
read-only ``MultiValueMapping``.

Binding order is preserved: capture segments left to right, regex
groups ``"0"``, ``"1"``, ``"2"``, … When a key is bound more than once
(``/:id/x/:id``), ``params[key]`` returns the **first** binding and
``get_list`` returns every binding in order. Handlers can rely on this.
"""

from wren._internal.multimap import PairMapping


class Params(PairMapping):
    """Immutable, ordered route captures. Keys are case-sensitive."""

    __slots__ = ()
