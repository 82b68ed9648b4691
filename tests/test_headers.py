"""Tests for rush.http.headers: request and response header bags."""

import pytest

from rush.http.headers import Headers, MutableHeaders


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"content-type", b"text/html"),))
        assert headers["Content-Type"] == "text/html"
        assert "CONTENT-TYPE" in headers

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("x-missing") is None
        assert headers.get("x-missing", "fallback") == "fallback"
        with pytest.raises(KeyError):
            headers["x-missing"]

    def test_multiple_values(self) -> None:
        headers = Headers(((b"accept", b"text/html"), (b"Accept", b"*/*")))
        assert headers["accept"] == "text/html"
        assert headers.get_list("accept") == ["text/html", "*/*"]
        assert list(headers) == ["accept"]
        assert len(headers) == 1

    def test_from_dict(self) -> None:
        headers = Headers.from_dict({"X-Request-Id": "abc"})
        assert headers["x-request-id"] == "abc"
        assert headers.raw == ((b"x-request-id", b"abc"),)

    def test_contains_non_string(self) -> None:
        assert 1 not in Headers(((b"a", b"b"),))


class TestMutableHeaders:
    def test_set_replaces(self) -> None:
        headers = MutableHeaders()
        headers["Allow"] = "GET"
        headers.set("allow", "GET, HEAD")
        assert headers["ALLOW"] == "GET, HEAD"
        assert headers.get_list("allow") == ["GET, HEAD"]

    def test_add_appends(self) -> None:
        headers = MutableHeaders()
        headers.add("Set-Cookie", "a=1")
        headers.add("Set-Cookie", "b=2")
        assert headers.get_list("set-cookie") == ["a=1", "b=2"]
        assert headers.raw() == [(b"set-cookie", b"a=1"), (b"set-cookie", b"b=2")]

    def test_delete(self) -> None:
        headers = MutableHeaders()
        headers["Location"] = "/ok"
        del headers["location"]
        assert "Location" not in headers
        assert len(headers) == 0

    def test_mapping_helpers(self) -> None:
        headers = MutableHeaders()
        headers["A"] = "1"
        assert headers.get("a") == "1"
        assert headers.get("b") is None
        assert dict(headers) == {"a": "1"}
