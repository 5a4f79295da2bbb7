# =============================================================================
# tests/test_handlers.py - Error Handler Tests
# =============================================================================
# Each handler is tested directly and through the assembled application.
# =============================================================================

import asyncio
import json
import logging

import pytest
from fastapi.testclient import TestClient
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from seed_api.exceptions import MethodNotAllowedError, PlatformFatalError
from seed_api.handlers import (
    PLATFORM_ERROR_MESSAGE,
    ErrorHandler,
    ErrorHandlers,
    NotAllowedHandler,
    NotFoundHandler,
    PlatformErrorHandler,
)
from tests.conftest import read_log


def make_request(path: str = "/missing") -> Request:
    return Request({
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "query_string": b"",
        "headers": [],
    })


def body_of(response) -> dict:
    return json.loads(response.body)


@pytest.fixture
def log():
    return logging.getLogger("test_handlers")


# =============================================================================
# Direct Invocation
# =============================================================================

class TestErrorHandler:
    """Tests for the generic error handler."""

    def test_response(self, log, caplog):
        with caplog.at_level(logging.ERROR, logger="test_handlers"):
            response = asyncio.run(ErrorHandler(log)(make_request(), RuntimeError("boom")))

        assert response.status_code == 500
        assert body_of(response) == {"error": True, "message": "Error: boom"}
        assert [r.getMessage() for r in caplog.records] == ["ErrorHandler: Error: boom"]


class TestNotFoundHandler:
    """Tests for the not-found handler."""

    def test_response(self, log, caplog):
        with caplog.at_level(logging.ERROR, logger="test_handlers"):
            response = asyncio.run(
                NotFoundHandler(log)(make_request("/missing"), StarletteHTTPException(404))
            )

        assert response.status_code == 404
        assert body_of(response) == {
            "error": True,
            "message": "Route not found for resource: http://testserver/missing",
        }
        assert len(caplog.records) == 1


class TestNotAllowedHandler:
    """Tests for the method-not-allowed handler."""

    def test_methods_from_router_exception(self, log):
        exc = StarletteHTTPException(405, headers={"Allow": "GET, POST"})

        response = asyncio.run(NotAllowedHandler(log)(make_request(), exc))

        assert response.status_code == 405
        assert response.headers["allow"] == "GET, POST"
        assert body_of(response) == {"error": True, "message": "Method must be one of: GET, POST"}

    def test_methods_from_domain_exception(self, log):
        exc = MethodNotAllowedError(["PUT", "DELETE"])

        response = asyncio.run(NotAllowedHandler(log)(make_request(), exc))

        assert response.headers["allow"] == "PUT, DELETE"
        assert body_of(response)["message"] == "Method must be one of: PUT, DELETE"


class TestPlatformErrorHandler:
    """Tests for the low-level failure handler."""

    def test_fixed_message_and_logged_detail(self, log, caplog):
        with caplog.at_level(logging.ERROR, logger="test_handlers"):
            response = asyncio.run(
                PlatformErrorHandler(log)(make_request(), MemoryError("heap exhausted"))
            )

        assert response.status_code == 500
        assert body_of(response) == {"error": True, "message": PLATFORM_ERROR_MESSAGE}
        assert "heap exhausted" not in response.body.decode()
        assert "heap exhausted" in caplog.records[0].getMessage()

    def test_message_is_fixed_string(self, log):
        response = asyncio.run(PlatformErrorHandler(log)(make_request(), SystemError("x")))

        assert body_of(response) == {"error": True, "message": "PHP error"}


class TestErrorHandlersSet:
    """Tests for the HTTP exception dispatcher."""

    def test_other_status_keeps_error_shape(self, log):
        handlers = ErrorHandlers.build(log)

        response = asyncio.run(
            handlers.http_exception(make_request(), StarletteHTTPException(400, detail="Bad input"))
        )

        assert response.status_code == 400
        assert body_of(response) == {"error": True, "message": "Bad input"}


# =============================================================================
# Through the Application
# =============================================================================

class TestHandlersInApp:
    """Tests for the handlers as installed on the application."""

    def test_unknown_route(self, client, settings):
        response = client.get("/does/not/exist")

        assert response.status_code == 404
        assert response.json() == {
            "error": True,
            "message": "Route not found for resource: http://testserver/does/not/exist",
        }
        assert "NotFound error: Route not found for resource" in read_log(settings)

    def test_wrong_method_on_path_route(self, client):
        response = client.post("/hello/foo")

        assert response.status_code == 405
        assert response.headers["allow"] == "GET"
        assert response.json() == {"error": True, "message": "Method must be one of: GET"}

    def test_wrong_method_on_body_route(self, client):
        response = client.delete("/hello")

        assert response.status_code == 405
        assert response.headers["allow"] == "POST"

    def test_unhandled_exception(self, app, settings):
        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        response = TestClient(app, raise_server_exceptions=False).get("/boom")

        assert response.status_code == 500
        assert response.json() == {"error": True, "message": "Error: kaboom"}
        assert "ErrorHandler: Error: kaboom" in read_log(settings)

    @pytest.mark.parametrize("exc", [
        RecursionError("too deep"),
        SystemError("interpreter state"),
        PlatformFatalError("native crash"),
    ])
    def test_platform_failures(self, app, settings, exc):
        @app.get("/fatal")
        async def fatal():
            raise exc

        response = TestClient(app).get("/fatal")

        assert response.status_code == 500
        assert response.json() == {"error": True, "message": PLATFORM_ERROR_MESSAGE}
        assert str(exc) not in response.text
        assert str(exc) in read_log(settings)
