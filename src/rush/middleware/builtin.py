"""Built-in middleware: panic recovery and request logging.

Neither is installed by default. Handler failures propagate out of the
router unless the caller chooses to install ``Recoverer``::

    router.use(RequestLogger(), Recoverer())
"""

import logging
import time

from rush._internal.types import Handler
from rush.http.request import Request
from rush.http.response import ResponseWriter, error

logger = logging.getLogger("rush.middleware")


class Recoverer:
    """Turn an uncaught handler exception into a logged 500.

    If the handler already committed its response, the status cannot be
    changed any more; the exception is still logged.
    """

    __slots__ = ("logger",)

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.logger = log or logger

    def __call__(self, next: Handler) -> Handler:
        log = self.logger

        def recover(request: Request, response: ResponseWriter) -> None:
            try:
                next(request, response)
            except Exception:
                log.exception("500 %s %s", request.method, request.path)
                if not response.committed:
                    error(response, "Internal Server Error", 500)

        return recover


class RequestLogger:
    """Emit one record per request: method, path, status, elapsed time."""

    __slots__ = ("level", "logger")

    def __init__(self, log: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = log or logger
        self.level = level

    def __call__(self, next: Handler) -> Handler:
        log = self.logger
        level = self.level

        def log_request(request: Request, response: ResponseWriter) -> None:
            start = time.perf_counter()
            try:
                next(request, response)
            finally:
                elapsed = (time.perf_counter() - start) * 1000
                log.log(
                    level,
                    "%s %s -> %d (%.1fms)",
                    request.method,
                    request.url,
                    response.status,
                    elapsed,
                )

        return log_request
