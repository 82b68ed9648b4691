"""Synchronous test client for rush routers.

Uses the same Request and ResponseWriter types as production and calls
``Router.serve`` directly: no ASGI, no HTTP involved.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from rush.http.headers import Headers
from rush.http.request import Request
from rush.http.response import ResponseWriter
from rush.router import Router


@dataclass(frozen=True, slots=True)
class TestResponse:
    """What the client saw, plus the request that produced it."""

    __test__ = False  # Tell pytest this is not a test class

    status: int
    headers: Headers
    body: bytes
    request: Request

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")


class TestClient:
    """Test client for rush routers.

    Usage::

        client = TestClient(router)
        response = client.get("/users/42")
        assert response.status == 200
        assert response.request.path_value("id") == "42"
    """

    __test__ = False  # Tell pytest this is not a test class
    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes = b"",
    ) -> TestResponse:
        """Serve one request; a ``?query`` suffix on *path* is split off."""
        path, _, query = path.partition("?")
        request = Request(
            method=method,
            path=path,
            headers=Headers.from_dict(headers or {}),
            query_string=query.encode("latin-1"),
            body=body,
        )
        response = ResponseWriter()
        self.router.serve(request, response)
        return TestResponse(
            status=response.status,
            headers=Headers(tuple(response.sent_headers)),
            body=response.body,
            request=request,
        )

    def get(self, path: str, *, headers: Mapping[str, str] | None = None) -> TestResponse:
        """Send a GET request."""
        return self.request("GET", path, headers=headers)

    def head(self, path: str, *, headers: Mapping[str, str] | None = None) -> TestResponse:
        """Send a HEAD request."""
        return self.request("HEAD", path, headers=headers)

    def options(self, path: str, *, headers: Mapping[str, str] | None = None) -> TestResponse:
        """Send an OPTIONS request."""
        return self.request("OPTIONS", path, headers=headers)

    def post(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes = b"",
    ) -> TestResponse:
        """Send a POST request."""
        return self.request("POST", path, headers=headers, body=body)

    def put(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes = b"",
    ) -> TestResponse:
        """Send a PUT request."""
        return self.request("PUT", path, headers=headers, body=body)

    def patch(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes = b"",
    ) -> TestResponse:
        """Send a PATCH request."""
        return self.request("PATCH", path, headers=headers, body=body)

    def delete(self, path: str, *, headers: Mapping[str, str] | None = None) -> TestResponse:
        """Send a DELETE request."""
        return self.request("DELETE", path, headers=headers)
