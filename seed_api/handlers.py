# =============================================================================
# seed_api/handlers.py - Error Handlers
# =============================================================================
# Four handlers turn failures into the API's standard error body
# {"error": true, "message": "..."}:
#
# | Handler              | Trigger                         | Status |
# |----------------------|---------------------------------|--------|
# | ErrorHandler         | unhandled exception             | 500    |
# | NotFoundHandler      | no route matched                | 404    |
# | NotAllowedHandler    | path matched, method didn't     | 405    |
# | PlatformErrorHandler | low-level interpreter failure   | 500    |
#
# Each handler logs once through the application logger it was built with.
# =============================================================================

import logging
from dataclasses import dataclass

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from seed_api.exceptions import (
    MethodNotAllowedError,
    PlatformFatalError,
    RouteNotFoundError,
)

PLATFORM_ERROR_MESSAGE = "PHP error"

# Failures of the interpreter itself rather than of application code
PLATFORM_ERRORS: tuple[type[BaseException], ...] = (
    MemoryError,
    RecursionError,
    SystemError,
    PlatformFatalError,
)


def error_body(message: str) -> dict:
    return {"error": True, "message": message}


class ErrorHandler:
    """Unhandled exceptions -> 500 with the exception message."""

    def __init__(self, log: logging.Logger):
        self.log = log

    async def __call__(self, request: Request, exc: Exception) -> JSONResponse:
        message = f"Error: {exc}"
        self.log.error(f"ErrorHandler: {message}", exc_info=exc)
        return JSONResponse(status_code=500, content=error_body(message))


class NotFoundHandler:
    """No matching route -> 404 naming the requested resource."""

    def __init__(self, log: logging.Logger):
        self.log = log

    async def __call__(self, request: Request, exc: Exception) -> JSONResponse:
        error = RouteNotFoundError(str(request.url))
        self.log.error(f"NotFound error: {error.message}")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())


class NotAllowedHandler:
    """Known path, unsupported method -> 405 with an Allow header."""

    def __init__(self, log: logging.Logger):
        self.log = log

    @staticmethod
    def allowed_methods(exc: Exception) -> list[str]:
        if isinstance(exc, MethodNotAllowedError):
            return list(exc.methods)

        allow = (getattr(exc, "headers", None) or {}).get("Allow", "")
        return [method.strip() for method in allow.split(",") if method.strip()]

    async def __call__(self, request: Request, exc: Exception) -> JSONResponse:
        methods = self.allowed_methods(exc)
        error = MethodNotAllowedError(methods)
        self.log.error(f"NotAllowed Error: {error.message}")
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_dict(),
            headers={"Allow": ", ".join(methods)},
        )


class PlatformErrorHandler:
    """
    Low-level failures -> 500 with a fixed message.

    The detail is written to the log only, never to the client.
    """

    def __init__(self, log: logging.Logger):
        self.log = log

    async def __call__(self, request: Request, exc: BaseException) -> JSONResponse:
        self.log.error(f"{PLATFORM_ERROR_MESSAGE}: {exc!r}")
        return JSONResponse(status_code=500, content=error_body(PLATFORM_ERROR_MESSAGE))


# =============================================================================
# Handler Set
# =============================================================================

@dataclass(frozen=True)
class ErrorHandlers:
    """The four error handlers, built together from one logger."""

    log: logging.Logger
    error: ErrorHandler
    not_found: NotFoundHandler
    not_allowed: NotAllowedHandler
    platform_error: PlatformErrorHandler

    @classmethod
    def build(cls, log: logging.Logger) -> "ErrorHandlers":
        return cls(
            log=log,
            error=ErrorHandler(log),
            not_found=NotFoundHandler(log),
            not_allowed=NotAllowedHandler(log),
            platform_error=PlatformErrorHandler(log),
        )

    async def http_exception(self, request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Route the router's 404/405 to their handlers; keep the shape for the rest."""
        if exc.status_code == 404:
            return await self.not_found(request, exc)
        if exc.status_code == 405:
            return await self.not_allowed(request, exc)

        self.log.warning(f"HTTP {exc.status_code}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )


def register_error_handlers(app: FastAPI, handlers: ErrorHandlers) -> None:
    """Install the handler set on the application."""
    app.add_exception_handler(StarletteHTTPException, handlers.http_exception)
    app.add_exception_handler(RouteNotFoundError, handlers.not_found)
    app.add_exception_handler(MethodNotAllowedError, handlers.not_allowed)
    for exc_class in PLATFORM_ERRORS:
        app.add_exception_handler(exc_class, handlers.platform_error)
    app.add_exception_handler(Exception, handlers.error)
