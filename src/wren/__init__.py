"""Wren, a small ASGI toolkit built around an ordered route table.

Routes are tried in the order they were registered. The first one whose
method and pattern match, and whose handler does not decline, answers
the request.

Basic usage::

    from wren import App, Pass, regex

    app = App()

    @app.get("/foo/:bar")
    def foo(bar: str):
        return bar

    @app.get(regex(r"^/f(.*)r$"))
    def fr(params):
        return f"Path: {params['0']}\\nCapture: {params['1']}"

    @app.not_found
    def missing(path: str):
        return f"no route for {path}"

Serve ``app`` with any ASGI server.
"""

import importlib

__version__ = "0.1.0"

# Public name -> defining module, imported on first attribute access
_EXPORTS = {
    "App": "wren.app",
    "AppConfig": "wren.config",
    "Request": "wren.http.request",
    "Response": "wren.http.response",
    "StdMethod": "wren.http.methods",
    "Params": "wren.routing.params",
    "Route": "wren.routing.route",
    "capture": "wren.routing.patterns",
    "function": "wren.routing.patterns",
    "literal": "wren.routing.patterns",
    "regex": "wren.routing.patterns",
    "AccessLog": "wren.middleware",
    "Middleware": "wren.middleware",
    "Next": "wren.middleware",
    "ConfigurationError": "wren.errors",
    "HTTPError": "wren.errors",
    "NotFound": "wren.errors",
    "Pass": "wren.errors",
    "WrenError": "wren.errors",
}
__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> object:
    """Import public names lazily so ``import wren`` stays cheap."""
    try:
        module = _EXPORTS[name]
    except KeyError:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg) from None
    return getattr(importlib.import_module(module), name)
