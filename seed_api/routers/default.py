# =============================================================================
# seed_api/routers/default.py - Default Route
# =============================================================================
# GET / - placeholder endpoint, answers with an empty 200 response.
# =============================================================================

from fastapi import APIRouter, Response

router = APIRouter()


@router.get("/", summary="Default route")
async def default_route() -> Response:
    return Response(status_code=200)
