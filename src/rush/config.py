"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(redirect_trailing_slash=True)
    """

    # Dispatch
    redirect_trailing_slash: bool = False

    # ASGI adapter
    max_content_length: int = 16 * 1024 * 1024  # 16 MB
    offload_handlers: bool = True  # run serve() in an anyio worker thread
