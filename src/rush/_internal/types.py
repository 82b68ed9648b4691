"""Shared type aliases used across rush modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from rush.http.request import Request
    from rush.http.response import ResponseWriter

# Terminal request handler: writes its answer into the response sink
Handler: TypeAlias = Callable[["Request", "ResponseWriter"], None]

# Handler-to-handler transformation composed around a terminal handler
Middleware: TypeAlias = Callable[[Handler], Handler]
