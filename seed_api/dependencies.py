# =============================================================================
# seed_api/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the services built at startup.
# The container is stored on app.state by create_app().
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends, Request

from seed_api.container import Container


def get_container(request: Request) -> Container:
    """Return the container of the application serving this request."""
    return request.app.state.container


def get_logger(container: Annotated[Container, Depends(get_container)]) -> logging.Logger:
    """Return the application logger."""
    return container.log


# Type aliases for dependency injection
ContainerDep = Annotated[Container, Depends(get_container)]
LoggerDep = Annotated[logging.Logger, Depends(get_logger)]
