# =============================================================================
# tests/ - Test Suite
# =============================================================================
# - test_config.py: INI loading and settings
# - test_logs.py: Logger construction and record enrichment
# - test_cors.py: CORS policy and middleware
# - test_handlers.py: Error handlers
# - test_routes.py: Route registration
# - test_endpoints.py: Endpoint behaviour
# - test_main.py: Application assembly and startup failure
#
# Run tests with: pytest
# =============================================================================
