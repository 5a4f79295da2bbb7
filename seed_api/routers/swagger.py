# =============================================================================
# seed_api/routers/swagger.py - API Documentation
# =============================================================================
# GET /swagger/swagger.json - the API description, generated from the
# application's registered routes on every request.
# =============================================================================

from typing import Any

from fastapi import APIRouter, Request
from fastapi.openapi.utils import get_openapi

from seed_api import API_DESCRIPTION, API_TITLE, __version__
from seed_api.dependencies import ContainerDep

router = APIRouter(tags=["Swagger"])


def build_swagger(request: Request, api_url: str) -> dict[str, Any]:
    """
    Scan the application's routes and build the API document.

    The returned object always carries `swagger`, `info` and `paths`;
    `swagger` holds the version of the generated specification.
    """
    document = get_openapi(
        title=API_TITLE,
        version=__version__,
        description=API_DESCRIPTION,
        routes=request.app.routes,
        servers=[{"url": api_url}],
    )
    return {"swagger": document["openapi"], **document}


@router.get("/swagger/swagger.json", summary="API description")
async def swagger(request: Request, container: ContainerDep) -> dict[str, Any]:
    return build_swagger(request, container.api.api_url)
