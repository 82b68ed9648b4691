"""HTTP request as seen by the router.

Transport metadata is frozen at creation. The only per-request mutable
state is the path-parameter bag the router fills in on a match.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from rush.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An already-parsed HTTP request.

    ``path`` is the decoded URL path; percent-decoding is the transport's
    job. ``path_params`` is owned by this request alone, so concurrent
    requests never share parameter storage.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query_string: bytes = b""
    body: bytes = b""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Filled by the router on a successful match
    # (dict contents are mutable even though the field reference is frozen)
    path_params: dict[str, str] = field(default_factory=dict)

    def path_value(self, name: str, default: str = "") -> str:
        """Return the captured value of path parameter *name*.

        The wildcard remainder is available under ``"*"``.
        """
        return self.path_params.get(name, default)

    def set_path_value(self, name: str, value: str) -> None:
        """Bind path parameter *name* for downstream handlers."""
        self.path_params[name] = value

    @property
    def url(self) -> str:
        """Path plus query string, as sent by the client."""
        if self.query_string:
            return f"{self.path}?{self.query_string.decode('latin-1')}"
        return self.path

    def text(self) -> str:
        """Read the body as text (UTF-8)."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        import json as json_module

        return json_module.loads(self.body)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], body: bytes = b"") -> Request:
        """Create a Request from an ASGI HTTP scope and its fully-read body."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            body=body,
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )
