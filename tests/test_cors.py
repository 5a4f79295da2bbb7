# =============================================================================
# tests/test_cors.py - CORS Policy Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from seed_api.config import ApiConfig
from seed_api.cors import (
    CORS_HEADERS_EXPOSE,
    CORS_METHODS,
    CorsPolicy,
    build_cors_policy,
)


def make_api_config(cors_urls: str) -> ApiConfig:
    return ApiConfig.from_ini({"API": {"API_URL": "http://localhost", "CORS_URLs": cors_urls}})


class TestBuildCorsPolicy:
    """Tests for deriving the policy from configuration."""

    def test_origins_exact_and_ordered(self):
        policy = build_cors_policy(make_api_config("http://a.test:80,https://a.test:443"))

        assert policy.origins == ["http://a.test:80", "https://a.test:443"]

    def test_fixed_policy_values(self):
        policy = build_cors_policy(make_api_config("http://a.test"))

        assert policy.methods == ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
        assert policy.allow_headers == []
        assert policy.expose_headers == CORS_HEADERS_EXPOSE
        assert policy.credentials is True
        assert policy.cache == 0

    def test_defaults_are_not_shared(self):
        policy = build_cors_policy(make_api_config("http://a.test"))

        assert policy.methods == CORS_METHODS
        assert policy.methods is not CORS_METHODS

    def test_empty_origin_list_rejected(self):
        with pytest.raises(ValidationError):
            CorsPolicy(origins=[])


class TestCorsMiddleware:
    """Tests for the middleware attached to the application."""

    def test_preflight_allowed_origin(self, client):
        response = client.options(
            "/hello/foo",
            headers={
                "Origin": "http://a.test:80",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://a.test:80"
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.headers["access-control-max-age"] == "0"
        assert "DELETE" in response.headers["access-control-allow-methods"]

    def test_preflight_disallowed_origin(self, client):
        response = client.options(
            "/hello/foo",
            headers={
                "Origin": "http://evil.test",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_simple_request_exposes_headers(self, client):
        response = client.get("/hello/foo", headers={"Origin": "https://a.test:443"})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://a.test:443"
        exposed = response.headers["access-control-expose-headers"]
        for header in CORS_HEADERS_EXPOSE:
            assert header in exposed
