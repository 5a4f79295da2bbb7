# =============================================================================
# seed_api/routers/ - API Route Definitions
# =============================================================================
# - default.py: GET / placeholder
# - hello.py: GET /hello/{name}, POST /hello
# - static.py: template pages (GET /home)
# - swagger.py: GET /swagger/swagger.json
#
# Routes are attached to the application by seed_api/routes.py.
# =============================================================================

from . import default
from . import hello
from . import static
from . import swagger

__all__ = [
    "default",
    "hello",
    "static",
    "swagger",
]
