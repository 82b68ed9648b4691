"""Middleware: plain handler-to-handler callables, no inheritance required.

A middleware is any callable matching:
    def mw(next: Handler) -> Handler

Built-in middleware:
    Recoverer -- Turn uncaught handler exceptions into a logged 500
    RequestLogger -- One log record per request with status and timing
"""

from rush.middleware.builtin import Recoverer, RequestLogger
from rush.middleware.chain import compose

__all__ = [
    "Recoverer",
    "RequestLogger",
    "compose",
]
