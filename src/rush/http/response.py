"""Response sink handed to every handler.

A ``ResponseWriter`` buffers one response: status and headers are
settable until the first ``write_header()`` or ``write()``, after which
they are committed and later changes no longer reach the client.
"""

import logging

from rush.http.headers import MutableHeaders

logger = logging.getLogger("rush.server")


class ResponseWriter:
    """Settable status and headers plus a write-once body stream.

    Usage inside a handler::

        def show(request: Request, response: ResponseWriter) -> None:
            response.headers["Content-Type"] = "application/json"
            response.write(b'{"ok": true}')
    """

    __slots__ = ("_chunks", "_committed", "_sent_headers", "headers", "status")

    def __init__(self) -> None:
        self.status: int = 200
        self.headers: MutableHeaders = MutableHeaders()
        self._chunks: list[bytes] = []
        self._committed: bool = False
        self._sent_headers: list[tuple[bytes, bytes]] = []

    @property
    def committed(self) -> bool:
        """True once status and headers have been fixed."""
        return self._committed

    def write_header(self, status: int) -> None:
        """Commit *status* and the current headers.

        Only the first call has an effect.
        """
        if self._committed:
            logger.debug("superfluous write_header(%d), already sent %d", status, self.status)
            return
        self.status = status
        self._sent_headers = self.headers.raw()
        self._committed = True

    def write(self, data: str | bytes) -> int:
        """Append *data* to the body, committing a 200 first if needed."""
        if not self._committed:
            self.write_header(self.status)
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        self._chunks.append(chunk)
        return len(chunk)

    @property
    def sent_headers(self) -> list[tuple[bytes, bytes]]:
        """Header pairs as committed (what a transport must send)."""
        if not self._committed:
            return self.headers.raw()
        return self._sent_headers

    @property
    def body(self) -> bytes:
        """Everything written so far."""
        return b"".join(self._chunks)

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")


def error(response: ResponseWriter, message: str, status: int) -> None:
    """Reply with a plain-text error *message* and *status*.

    The caller is expected to write nothing further.
    """
    response.headers["Content-Type"] = "text/plain; charset=utf-8"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.write_header(status)
    response.write(message + "\n")


def redirect(response: ResponseWriter, url: str, status: int = 302) -> None:
    """Reply with a redirect to *url*."""
    response.headers["Location"] = url
    response.write_header(status)
