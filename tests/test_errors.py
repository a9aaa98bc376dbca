"""Tests for apirouter.errors and apirouter.server.errors — hierarchy and 500 bodies."""

import errno
import logging

import pytest

from apirouter.config import RouterConfig
from apirouter.errors import ConfigurationError, RouterError
from apirouter.http.request import Request
from apirouter.http.response import Response
from apirouter.server.errors import debug_detail, error_code, format_trace, handle_internal_error


def _raise(exc: Exception) -> Exception:
    try:
        raise exc
    except Exception as caught:
        return caught


def _nested() -> Exception:
    def inner() -> None:
        raise ValueError("deep")

    def outer() -> None:
        inner()

    try:
        outer()
    except ValueError as exc:
        return exc
    raise AssertionError("unreachable")


class TestHierarchy:
    def test_configuration_error_is_router_error(self) -> None:
        assert issubclass(ConfigurationError, RouterError)

    def test_router_error_is_exception(self) -> None:
        assert issubclass(RouterError, Exception)


class TestErrorCode:
    def test_plain_exception(self) -> None:
        assert error_code(ValueError("x")) == 0

    def test_code_attribute(self) -> None:
        class Coded(Exception):
            code = 42

        assert error_code(Coded()) == 42

    def test_errno(self) -> None:
        assert error_code(OSError(errno.ENOENT, "missing")) == errno.ENOENT

    def test_non_int_code_ignored(self) -> None:
        class Coded(Exception):
            code = "E42"

        assert error_code(Coded()) == 0

    def test_bool_code_ignored(self) -> None:
        class Coded(Exception):
            code = True

        assert error_code(Coded()) == 0


class TestFormatTrace:
    def test_innermost_first(self) -> None:
        trace = format_trace(_nested())
        assert [frame["function"] for frame in trace] == ["inner", "outer", "_nested"]
        assert all(isinstance(frame["line"], int) for frame in trace)
        assert trace[0]["file"].endswith("test_errors.py")

    def test_limit(self) -> None:
        trace = format_trace(_nested(), limit=1)
        assert [frame["function"] for frame in trace] == ["inner"]

    def test_no_traceback(self) -> None:
        assert format_trace(ValueError("never raised")) == []


class TestDebugDetail:
    def test_shape(self) -> None:
        detail = debug_detail(_raise(ValueError("bad value")), RouterConfig())
        assert set(detail) == {"code", "message", "trace"}
        assert detail["message"] == "bad value"
        assert detail["code"] == 0

    def test_trace_limit_from_config(self) -> None:
        detail = debug_detail(_nested(), RouterConfig(trace_limit=2))
        assert len(detail["trace"]) == 2


class TestHandleInternalError:
    def test_production_body(self) -> None:
        response = Response()
        handle_internal_error(
            _raise(ValueError("secret")), Request(), response, RouterConfig(log_errors=False)
        )
        assert response.status_code == 500
        assert response.content == b'{"error":"Internal Server Error"}'
        assert b"secret" not in response.content

    def test_debug_body(self) -> None:
        response = Response()
        handle_internal_error(
            _raise(ValueError("secret")),
            Request(),
            response,
            RouterConfig(debug=True, log_errors=False),
        )
        body = response.json()
        assert body["error"] == "Internal Server Error"
        assert body["debug"]["message"] == "secret"

    def test_logs_exception(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="apirouter.server"):
            handle_internal_error(
                _raise(ValueError("x")),
                Request.build("POST", "/orders"),
                Response(),
                RouterConfig(),
            )
        record = caplog.records[-1]
        assert record.getMessage() == "500 POST /orders"
        assert record.exc_info is not None
