# =============================================================================
# seed_api/ - Seed HTTP API Package
# =============================================================================
# A starter FastAPI service:
# - main.py: App assembly, startup failure handling
# - config.py: Process settings and INI configuration
# - container.py: Services built once at startup
# - logs.py, cors.py, handlers.py: Logging, CORS policy, error handlers
# - routes.py + routers/: Endpoint registration and definitions
# =============================================================================

__version__ = "1.0.0"

API_TITLE = "Seed API"
API_DESCRIPTION = "Starter API with hello endpoints, CORS and structured error responses."
