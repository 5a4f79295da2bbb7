# =============================================================================
# seed_api/main.py - FastAPI Application Entry Point
# =============================================================================
# Assembles the application: container -> CORS -> error handlers -> routes.
# If startup fails, the process serves nothing but a JSON 500 explaining why.
#
# Usage:
#   uvicorn seed_api.main:app --reload
#   python -m seed_api
# =============================================================================

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.types import Receive, Scope, Send

from seed_api import API_DESCRIPTION, API_TITLE, __version__
from seed_api.config import Settings
from seed_api.container import Container, build_container
from seed_api.cors import add_cors_middleware
from seed_api.handlers import error_body, register_error_handlers
from seed_api.logs import RequestContextMiddleware
from seed_api.routes import register_routes

logger = logging.getLogger(__name__)

STARTUP_ERROR_PREFIX = "Unable to start application services: "


def create_app(
    settings: Settings | None = None,
    container: Container | None = None,
) -> FastAPI:
    """
    Build the runnable application.

    Args:
        settings: Process settings (defaults to get_settings())
        container: Prebuilt container, mainly for tests

    Returns:
        Configured FastAPI application

    Raises:
        SeedApiException: Configuration could not be loaded
    """
    if container is None:
        container = build_container(settings)

    log = container.log

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.container = container

    app.add_middleware(
        RequestContextMiddleware,
        session_cookie=container.settings.SESSION_COOKIE,
    )
    add_cors_middleware(app, container.cors, log)

    register_error_handlers(app, container.handlers)
    register_routes(app, container)

    log.debug("Application bootstrap complete")
    return app


class StartupFailureApp:
    """ASGI app answering every HTTP request with the startup error."""

    def __init__(self, message: str):
        self.message = message

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            while True:
                message = await receive()
                if message["type"] == "lifespan.startup":
                    await send({"type": "lifespan.startup.complete"})
                elif message["type"] == "lifespan.shutdown":
                    await send({"type": "lifespan.shutdown.complete"})
                    return

        if scope["type"] != "http":
            return

        response = JSONResponse(status_code=500, content=error_body(self.message))
        await response(scope, receive, send)


def bootstrap(settings: Settings | None = None) -> FastAPI | StartupFailureApp:
    """
    Create the application, or a failure app if startup goes wrong.

    Returns:
        The application, or StartupFailureApp carrying the error message
    """
    try:
        return create_app(settings)
    except Exception as e:
        message = f"{STARTUP_ERROR_PREFIX}{e}"
        logger.error(message)
        return StartupFailureApp(message)


# Application instance for uvicorn
app = bootstrap()
