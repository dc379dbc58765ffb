"""Route patterns and the path matcher.

A route pattern is one of four closed variants:

``LiteralPattern``
    The request path must equal the text exactly.
``CapturePattern``
    Sinatra-style segments; ``:name`` segments bind the matching path
    segment to ``name``. Plain strings given to the registration API
    become capture patterns.
``RegexPattern``
    A regular expression searched against the request path. Group 0 is
    bound to ``"0"``, capturing groups to ``"1"``, ``"2"``, …
``FunctionPattern``
    An arbitrary predicate over the whole ``Request``. ``None`` means no
    match; a sequence of ``(key, value)`` pairs means match.

``match_pattern`` dispatches over the variants and returns the ordered
captures, or ``None``. Matching is pure: no variant touches shared state.

Examples::

    match_pattern(capture("/foo/:bar"), request)      # /foo/something
    # -> [("bar", "something")]

    match_pattern(regex("^/f(.*)r$"), request)        # /foo/bar
    # -> [("0", "/foo/bar"), ("1", "oo/ba")]
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from wren._internal.types import Param, Predicate
from wren.errors import ConfigurationError

if TYPE_CHECKING:
    from wren.http.request import Request


@dataclass(frozen=True, slots=True)
class LiteralPattern:
    """Exact path equality, no captures."""

    text: str

    def __str__(self) -> str:
        return self.text

    def match(self, request: Request) -> list[Param] | None:
        return match_pattern(self, request)


@dataclass(frozen=True, slots=True)
class CapturePattern:
    """Slash-separated segments with ``:name`` captures."""

    text: str

    def __str__(self) -> str:
        return self.text

    def match(self, request: Request) -> list[Param] | None:
        return match_pattern(self, request)


@dataclass(frozen=True, slots=True)
class RegexPattern:
    """A regular expression, compiled once at construction.

    Raises ``ConfigurationError`` if *text* is not a valid expression,
    so a broken route fails at registration instead of per request.
    """

    text: str
    compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.text)
        except re.error as exc:
            msg = f"Invalid regex route pattern {self.text!r}: {exc}"
            raise ConfigurationError(msg) from exc
        object.__setattr__(self, "compiled", compiled)

    def __str__(self) -> str:
        return f"regex:{self.text}"

    def match(self, request: Request) -> list[Param] | None:
        return match_pattern(self, request)


@dataclass(frozen=True, slots=True)
class FunctionPattern:
    """A custom matcher over the full request."""

    predicate: Predicate

    def __str__(self) -> str:
        name = getattr(self.predicate, "__qualname__", None) or repr(self.predicate)
        return f"function:{name}"

    def match(self, request: Request) -> list[Param] | None:
        return match_pattern(self, request)


RoutePattern: TypeAlias = LiteralPattern | CapturePattern | RegexPattern | FunctionPattern

_PATTERN_TYPES = (LiteralPattern, CapturePattern, RegexPattern, FunctionPattern)


# -- Constructors --


def literal(text: str) -> LiteralPattern:
    """Match the request path exactly, without captures."""
    return LiteralPattern(text)


def capture(text: str) -> CapturePattern:
    """Sinatra-style pattern: ``capture("/users/:id")``."""
    return CapturePattern(text)


def regex(text: str) -> RegexPattern:
    """Match with a regular expression.

    Captures are positional only: ``"0"`` is the whole match, then one
    key per capturing group. Named groups are numbered like any other
    group; their names are not bound.
    """
    return RegexPattern(text)


def function(predicate: Predicate) -> FunctionPattern:
    """Match with a function of the request.

    Return ``None`` for no match, or a sequence of ``(key, value)`` pairs
    to bind::

        function(lambda req: [("version", req.http_version)])
    """
    return FunctionPattern(predicate)


def as_pattern(value: RoutePattern | str) -> RoutePattern:
    """Coerce a registration argument to a pattern. Strings become captures."""
    if isinstance(value, str):
        return CapturePattern(value)
    if isinstance(value, _PATTERN_TYPES):
        return value
    msg = f"Expected a route pattern or str, got {type(value).__name__}"
    raise ConfigurationError(msg)


# -- Matching --


def match_pattern(pattern: RoutePattern, request: Request) -> list[Param] | None:
    """Match *pattern* against *request*.

    Returns the ordered captures on success (possibly empty), or ``None``.
    """
    match pattern:
        case LiteralPattern(text=text):
            return [] if request.path == text else None
        case CapturePattern(text=text):
            return match_segments(text, request.path)
        case RegexPattern(compiled=compiled):
            return match_regex(compiled, request.path)
        case FunctionPattern(predicate=predicate):
            found = predicate(request)
            if found is None:
                return None
            return [(str(key), str(value)) for key, value in found]
    msg = f"Unknown route pattern: {pattern!r}"
    raise TypeError(msg)


def match_segments(pattern: str, path: str) -> list[Param] | None:
    """Walk pattern and path segments in lock-step.

    Trailing empty segments on either side (trailing slashes) are
    ignored. A ``:name`` segment never binds an empty path segment.
    """
    pattern_parts = pattern.split("/")
    path_parts = path.split("/")
    captures: list[Param] = []

    for pat, seg in zip(pattern_parts, path_parts, strict=False):
        if pat == seg:
            continue
        if not pat:
            return None
        if pat.startswith(":") and seg:
            captures.append((pat[1:], seg))
            continue
        return None

    if len(pattern_parts) > len(path_parts):
        rest = pattern_parts[len(path_parts) :]
    else:
        rest = path_parts[len(pattern_parts) :]
    if any(rest):
        return None
    return captures


def match_regex(compiled: re.Pattern[str], path: str) -> list[Param] | None:
    """Search *path*; bind group 0 and each capturing group positionally.

    Groups that did not take part in the match bind ``""``.
    """
    found = compiled.search(path)
    if found is None:
        return None
    values = [found.group(0), *(group or "" for group in found.groups())]
    return [(str(index), value) for index, value in enumerate(values)]
