"""Tests for rush.middleware: composition and built-in middleware."""

import logging

import pytest

from rush.http.request import Request
from rush.http.response import ResponseWriter
from rush.middleware import Recoverer, RequestLogger, compose
from rush.router import Router
from rush.testing import TestClient


def _layer(trace: list[str], name: str):
    def middleware(next):
        def handler(request: Request, response: ResponseWriter) -> None:
            trace.append(f"{name}>")
            next(request, response)
            trace.append(f"<{name}")

        return handler

    return middleware


def _boom(request: Request, response: ResponseWriter) -> None:
    raise ValueError("boom")


class TestCompose:
    def test_no_middleware_returns_handler(self) -> None:
        def handler(request: Request, response: ResponseWriter) -> None:
            pass

        assert compose([], handler) is handler

    def test_first_is_outermost(self) -> None:
        trace: list[str] = []

        def handler(request: Request, response: ResponseWriter) -> None:
            trace.append("handler")

        wrapped = compose([_layer(trace, "m1"), _layer(trace, "m2")], handler)
        wrapped(Request("GET", "/"), ResponseWriter())

        assert trace == ["m1>", "m2>", "handler", "<m2", "<m1"]

    def test_middleware_applied_at_compose_time(self) -> None:
        calls: list[str] = []

        def counting(next):
            calls.append("wrap")
            return next

        handler = compose([counting, counting], lambda request, response: None)
        handler(Request("GET", "/"), ResponseWriter())
        handler(Request("GET", "/"), ResponseWriter())

        assert calls == ["wrap", "wrap"]


class TestRecoverer:
    def test_exception_becomes_500(self, caplog: pytest.LogCaptureFixture) -> None:
        router = Router()
        router.use(Recoverer())
        router.get("/boom", _boom)

        with caplog.at_level(logging.ERROR, logger="rush.middleware"):
            response = TestClient(router).get("/boom")

        assert response.status == 500
        assert response.text == "Internal Server Error\n"
        assert "500 GET /boom" in caplog.text
        assert "ValueError: boom" in caplog.text

    def test_committed_response_untouched(self) -> None:
        def partial(request: Request, response: ResponseWriter) -> None:
            response.write("partial")
            raise RuntimeError("late failure")

        router = Router()
        router.use(Recoverer())
        router.get("/partial", partial)

        response = TestClient(router).get("/partial")
        assert response.status == 200
        assert response.text == "partial"

    def test_without_recoverer_exception_propagates(self) -> None:
        router = Router()
        router.get("/boom", _boom)

        with pytest.raises(ValueError, match="boom"):
            TestClient(router).get("/boom")

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        router = Router()
        router.use(Recoverer(logging.getLogger("myapp.errors")))
        router.get("/boom", _boom)

        with caplog.at_level(logging.ERROR, logger="myapp.errors"):
            TestClient(router).get("/boom")

        assert [r.name for r in caplog.records] == ["myapp.errors"]


class TestRequestLogger:
    def test_one_record_per_request(self, caplog: pytest.LogCaptureFixture) -> None:
        router = Router()
        router.use(RequestLogger())
        router.get("/users/{id}", lambda request, response: response.write("ok"))
        client = TestClient(router)

        with caplog.at_level(logging.INFO, logger="rush.middleware"):
            client.get("/users/7?full=1")
            client.get("/missing")

        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 2
        assert messages[0].startswith("GET /users/7?full=1 -> 200 (")
        assert messages[1].startswith("GET /missing -> 404 (")

    def test_logs_even_when_handler_raises(self, caplog: pytest.LogCaptureFixture) -> None:
        router = Router()
        router.use(RequestLogger(level=logging.WARNING))
        router.get("/boom", _boom)

        with caplog.at_level(logging.WARNING, logger="rush.middleware"), pytest.raises(ValueError):
            TestClient(router).get("/boom")

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.WARNING
