"""Middleware composition.

A middleware is any callable matching::

    def mw(next: Handler) -> Handler: ...

No base class required. ``compose`` wraps right-to-left, so the first
middleware in the list is the outermost layer: it runs first on the way
in and last on the way out.
"""

from collections.abc import Sequence

from rush._internal.types import Handler, Middleware


def compose(middlewares: Sequence[Middleware], handler: Handler) -> Handler:
    """Wrap *handler* in *middlewares*, first one outermost."""
    for middleware in reversed(middlewares):
        handler = middleware(handler)
    return handler
