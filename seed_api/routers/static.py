# =============================================================================
# seed_api/routers/static.py - Template Pages
# =============================================================================
# StaticRoute renders one HTML template. GET /home is registered with the
# "home" template.
# =============================================================================

from fastapi import Request, Response
from fastapi.templating import Jinja2Templates

DEFAULT_NAME = "No name given"


class StaticRoute:
    """
    Endpoint rendering `<template>.html` with `name` and `cache_status`.

    `name` comes from the route's path parameters when the pattern declares
    one, otherwise DEFAULT_NAME is used.
    """

    def __init__(self, templates: Jinja2Templates, template: str, cache_status: str):
        self.templates = templates
        self.template = template
        self.cache_status = cache_status
        self.__name__ = f"static_{template}"

    def __call__(self, request: Request) -> Response:
        name = request.path_params.get("name") or DEFAULT_NAME

        return self.templates.TemplateResponse(
            request,
            f"{self.template}.html",
            {"name": name, "cache_status": self.cache_status},
        )
