# =============================================================================
# seed_api/routers/hello.py - Hello Endpoints
# =============================================================================
# GET  /hello/{name}?format=json|html  - name from the path
# POST /hello                           - name and format from the body
#
# Both answer with either:
#   JSON: {"error": false, "data": {"hello": "<name>"}}
#   HTML: <p id="hello">Hello, <name>.</p>
# =============================================================================

import json
from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from seed_api.dependencies import LoggerDep

router = APIRouter(tags=["Hello"])

HELLO_HTML = '<p id="hello">Hello, {name}.</p>'
DEFAULT_FORMAT = "json"

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# =============================================================================
# Response Models
# =============================================================================

class HelloData(BaseModel):
    hello: str


class HelloResponse(BaseModel):
    """JSON greeting."""
    error: bool = False
    data: HelloData


class HelloRequest(BaseModel):
    """Body accepted by POST /hello (JSON or form encoded)."""
    name: str = Field(..., examples=["world"])
    format: str = Field(default=DEFAULT_FORMAT, examples=["json", "html"])


HELLO_RESPONSES: dict[int | str, dict[str, Any]] = {
    200: {
        "model": HelloResponse,
        "content": {"text/html": {"example": HELLO_HTML.format(name="world")}},
        "description": "Greeting as JSON (default) or HTML",
    },
}


# =============================================================================
# Helpers
# =============================================================================

def render_hello(name: Any, fmt: str) -> Response:
    """
    Build the greeting response.

    The name is written to the HTML body as given, without escaping.
    """
    if str(fmt).lower() == "html":
        return HTMLResponse(HELLO_HTML.format(name=name))

    return JSONResponse({"error": False, "data": {"hello": name}})


async def parse_body(request: Request) -> dict[str, Any]:
    """
    Parse a JSON object or form body into a dict.

    Raises:
        HTTPException: 400 if the body is malformed JSON or not an object
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items()}

    raw = await request.body()
    if not raw:
        return {}

    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Malformed JSON body") from None

    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be an object")

    return body


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/hello/{name}", responses=HELLO_RESPONSES, summary="Say hello to a name from the path")
async def hello_name(
    name: str,
    log: LoggerDep,
    fmt: str = Query(DEFAULT_FORMAT, alias="format", description="json or html"),
) -> Response:
    log.debug(f"Hello route: name={name} format={fmt}")
    return render_hello(name, fmt)


@router.post(
    "/hello",
    responses=HELLO_RESPONSES,
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": HelloRequest.model_json_schema()},
                "application/x-www-form-urlencoded": {"schema": HelloRequest.model_json_schema()},
            },
        },
    },
    summary="Say hello to a name from the request body",
)
async def hello(request: Request, log: LoggerDep) -> Response:
    """
    Same as GET /hello/{name}, with `name` and `format` taken from the body.
    """
    body = await parse_body(request)

    if "name" not in body:
        raise HTTPException(status_code=400, detail="Missing body parameter: name")

    fmt = body.get("format") or DEFAULT_FORMAT
    log.debug(f"Hello route: name={body['name']} format={fmt}")
    return render_hello(body["name"], fmt)
