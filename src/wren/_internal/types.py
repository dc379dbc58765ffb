"""Shared type aliases used across wren modules."""

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from wren.http.request import Request

# Route handler: user-defined function with variable signature
Handler: TypeAlias = Callable[..., Any]

# Error handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]

# A single bound capture
Param: TypeAlias = tuple[str, str]

# Custom matcher: ``None`` means no match, a sequence means match with captures
Predicate: TypeAlias = Callable[["Request"], Sequence[Param] | None]
