# =============================================================================
# seed_api/__main__.py - Development Server
# =============================================================================
# Usage:
#   python -m seed_api
# =============================================================================

import uvicorn

from seed_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("seed_api.main:app", host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
