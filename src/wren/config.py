"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, log_level="debug")
    """

    # Include tracebacks in 500 response bodies
    debug: bool = False

    # Level applied to the "wren" logger when the app freezes
    log_level: str = "warning"

    # Run plain ``def`` handlers in a worker thread (anyio.to_thread)
    offload_sync_handlers: bool = False
