"""Multi-valued string mappings shared by Params, Headers, and QueryParams.

``MultiValueMapping`` is the structural protocol predicates and middleware
can accept. ``PairMapping`` is the concrete base: an immutable, ordered
tuple of ``(key, value)`` pairs where lookup returns the first binding.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class MultiValueMapping(Protocol):
    """A read-only string mapping where keys can have multiple values.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    def __getitem__(self, key: str) -> str: ...
    def __contains__(self, key: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def __len__(self) -> int: ...
    def get(self, key: str, default: str | None = None) -> str | None: ...
    def get_list(self, key: str) -> list[str]: ...


class PairMapping(Mapping[str, str]):
    """Ordered ``(key, value)`` pairs with first-binding lookup.

    Subclasses override ``_fold`` to normalise keys (headers fold case).
    Keys are folded once, when the mapping is built.
    """

    __slots__ = ("_pairs",)

    _pairs: tuple[tuple[str, str], ...]

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        folded = tuple((self._fold(str(k)), str(v)) for k, v in pairs)
        object.__setattr__(self, "_pairs", folded)

    @staticmethod
    def _fold(key: str) -> str:
        return key

    def __getitem__(self, key: str) -> str:
        wanted = self._fold(key)
        for name, value in self._pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        wanted = self._fold(key)
        return any(name == wanted for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._pairs:
            if name not in seen:
                seen.add(name)
                yield name

    def __len__(self) -> int:
        return len({name for name, _ in self._pairs})

    def __eq__(self, other: object) -> bool:
        if type(other) is type(self):
            return self._pairs == other._pairs  # type: ignore[attr-defined]
        return Mapping.__eq__(self, other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._pairs)!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key*, in order."""
        wanted = self._fold(key)
        return [value for name, value in self._pairs if name == wanted]

    def items_list(self) -> list[tuple[str, str]]:
        """Return the ordered pairs, duplicates included."""
        return list(self._pairs)
