"""ASGI adapter: translates ASGI scope/messages to rush types.

The only component that touches raw ASGI directly. Reads the request
body, builds a ``Request``, runs the synchronous ``Router.serve`` (in a
worker thread by default, since handlers may block), and sends the
buffered ``ResponseWriter`` back through ASGI ``send()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import anyio.to_thread

from rush._internal.asgi import Receive, Scope, Send
from rush.http.request import Request
from rush.http.response import ResponseWriter, error

if TYPE_CHECKING:
    from rush.router import Router

logger = logging.getLogger("rush.server")


class BodyTooLarge(Exception):  # noqa: N818
    """The request body exceeded ``RouterConfig.max_content_length``."""


async def handle_asgi(router: Router, scope: Scope, receive: Receive, send: Send) -> None:
    """Process one ASGI connection scope through *router*."""
    scope_type = scope["type"]
    if scope_type == "lifespan":
        await _handle_lifespan(receive, send)
        return
    if scope_type != "http":
        return

    config = router.config
    response = ResponseWriter()
    try:
        body = await read_body(receive, config.max_content_length)
    except BodyTooLarge:
        logger.debug("413 %s %s", scope["method"], scope["path"])
        error(response, "Request Entity Too Large", 413)
        await send_response(response, send)
        return

    request = Request.from_asgi(scope, body)
    if config.offload_handlers:
        await anyio.to_thread.run_sync(router.serve, request, response)
    else:
        router.serve(request, response)

    await send_response(response, send, head=request.method == "HEAD")


async def read_body(receive: Receive, limit: int) -> bytes:
    """Collect every ``http.request`` chunk, refusing more than *limit* bytes."""
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunk = message.get("body", b"")
        if chunk:
            size += len(chunk)
            if size > limit:
                raise BodyTooLarge
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: ResponseWriter, send: Send, *, head: bool = False) -> None:
    """Translate a buffered ResponseWriter into ASGI send() calls.

    HEAD responses keep the ``content-length`` of the body they omit.
    """
    if not response.committed:
        response.write_header(response.status)

    raw_headers = list(response.sent_headers)
    allowed = _body_allowed(response.status)
    body = response.body if allowed else b""

    if not any(name == b"content-length" for name, _ in raw_headers):
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge lifespan startup and shutdown; the router holds no resources."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
