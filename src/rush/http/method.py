"""HTTP method enumeration.

Route tables are keyed by ``Method`` members rather than free-form
strings, so the hot path never hashes arbitrary method tokens and an
unknown method simply has no entry.
"""

from __future__ import annotations

from enum import StrEnum


class Method(StrEnum):
    """The canonical HTTP method set."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    @classmethod
    def parse(cls, token: str) -> Method | None:
        """Return the member for *token*, or ``None`` if it is not a known method.

        Matching is exact: request methods are case-sensitive on the wire.
        Registration code uppercases before calling this.
        """
        return _BY_NAME.get(token)


_BY_NAME: dict[str, Method] = {m.value: m for m in Method}

# Registered when a route is added without an explicit method list
ALL_METHODS: tuple[Method, ...] = tuple(Method)
