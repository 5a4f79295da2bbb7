# =============================================================================
# seed_api/cors.py - CORS Policy
# =============================================================================
# The allowed origins come from CORS_URLs in the INI file; everything else
# about the policy is fixed. Enforcement is left to Starlette's
# CORSMiddleware.
# =============================================================================

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from seed_api.config import ApiConfig
from seed_api.exceptions import ConfigParseError

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS_ALLOW: list[str] = []
CORS_HEADERS_EXPOSE = [
    "Content-Type",
    "X-Requested-With",
    "X-authentication",
    "X-client",
]
CORS_CREDENTIALS = True
CORS_CACHE = 0


class CorsPolicy(BaseModel):
    """Static CORS policy handed to the middleware."""

    model_config = ConfigDict(frozen=True)

    origins: list[str] = Field(..., min_length=1)
    methods: list[str] = Field(default_factory=lambda: list(CORS_METHODS))
    allow_headers: list[str] = Field(default_factory=lambda: list(CORS_HEADERS_ALLOW))
    expose_headers: list[str] = Field(default_factory=lambda: list(CORS_HEADERS_EXPOSE))
    credentials: bool = CORS_CREDENTIALS
    cache: int = CORS_CACHE


def build_cors_policy(api_config: ApiConfig) -> CorsPolicy:
    """
    Derive the CORS policy from the API configuration.

    Raises:
        ConfigParseError: No origins configured
    """
    if not api_config.cors_urls:
        raise ConfigParseError("CORS_URLs must list at least one origin")

    return CorsPolicy(origins=list(api_config.cors_urls))


def add_cors_middleware(app: FastAPI, policy: CorsPolicy, log: logging.Logger) -> None:
    """Attach CORSMiddleware configured from the policy."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=policy.origins,
        allow_methods=policy.methods,
        allow_headers=policy.allow_headers,
        allow_credentials=policy.credentials,
        expose_headers=policy.expose_headers,
        max_age=policy.cache,
    )
    log.debug("CORS Middleware added")
