"""Call handlers and hooks that may be ``def`` or ``async def``."""

import functools
import inspect
from typing import Any

import anyio


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* on the event loop, awaiting the result if needed."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def invoke_in_thread(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler*, running it in an anyio worker thread unless it is async.

    Used when ``AppConfig.offload_sync_handlers`` is set, so a blocking
    ``def`` handler does not hold up other requests.
    """
    if inspect.iscoroutinefunction(handler):
        return await handler(*args, **kwargs)
    result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result
