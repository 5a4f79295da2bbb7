# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Shared fixtures: a temporary INI file, settings pointing at it, and a
# TestClient around a freshly assembled application.
# =============================================================================

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from seed_api.config import Settings
from seed_api.container import build_container
from seed_api.main import create_app

TEST_INI = """\
[API]
API_URL = http://localhost:8000
CORS_URLs = http://a.test:80,https://a.test:443
LogThreshold = DEBUG
"""


def read_log(settings: Settings) -> str:
    """Return everything written to the test log file so far."""
    path = Path(settings.LOG_DIR) / settings.LOG_FILE
    return path.read_text(encoding="utf-8") if path.exists() else ""


@pytest.fixture
def ini_file(tmp_path):
    """INI file with the standard test configuration."""
    path = tmp_path / "test.ini"
    path.write_text(TEST_INI, encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path, ini_file):
    """Settings writing logs under the test's temporary directory."""
    return Settings(
        INI_NAME=str(ini_file),
        LOG_DIR=str(tmp_path / "logs"),
        LOG_FILE="test.log",
        LOGGER_NAME="TEST_API_LOGGER",
    )


@pytest.fixture
def container(settings):
    return build_container(settings)


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    """Client that returns 500 responses instead of re-raising."""
    return TestClient(app, raise_server_exceptions=False)
