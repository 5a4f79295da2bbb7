# =============================================================================
# seed_api/routes.py - Route Registration
# =============================================================================
# Attaches every endpoint to the application, once, in a fixed order:
#   GET  /
#   GET  /home
#   GET  /hello/{name}
#   POST /hello
#   GET  /swagger/swagger.json
# =============================================================================

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from seed_api.container import Container
from seed_api.routers import default, hello, swagger
from seed_api.routers.static import StaticRoute


class RouteFactory:
    """Registers the route groups on an application."""

    def __init__(self, container: Container):
        self.container = container

    def create_default_routes(self, app: FastAPI) -> None:
        app.include_router(default.router)

    def create_static_routes(self, app: FastAPI) -> None:
        home = StaticRoute(
            self.container.templates,
            "home",
            self.container.view_cache_status,
        )
        app.add_api_route(
            "/home",
            home,
            methods=["GET"],
            response_class=HTMLResponse,
            summary="Home page",
            tags=["Static"],
        )

    def create_hello_routes(self, app: FastAPI) -> None:
        app.include_router(hello.router)

    def create_swagger_routes(self, app: FastAPI) -> None:
        app.include_router(swagger.router)


def register_routes(app: FastAPI, container: Container) -> bool:
    """
    Register all routes on the application.

    Returns:
        True if routes were registered, False if this app already had them
    """
    if getattr(app.state, "routes_registered", False):
        container.log.warning("Routes already registered, skipping")
        return False

    factory = RouteFactory(container)
    factory.create_default_routes(app)
    factory.create_static_routes(app)
    factory.create_hello_routes(app)
    factory.create_swagger_routes(app)

    app.state.routes_registered = True
    container.log.debug("Routes registered")
    return True
