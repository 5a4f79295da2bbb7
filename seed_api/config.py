# =============================================================================
# seed_api/config.py - Application Settings & INI Configuration
# =============================================================================
# Two layers of configuration:
#
# 1. Settings (pydantic-settings): process defaults loaded from environment
#    variables or a .env file - where the INI file lives, where logs go,
#    which templates to render.
# 2. ApiConfig (pydantic): the typed record parsed from the INI file's [API]
#    section. Loaded once at startup and read-only afterwards.
#
# Usage:
#   from seed_api.config import get_settings, load_ini, ApiConfig
#   settings = get_settings()
#   api_config = ApiConfig.from_ini(load_ini(settings.INI_NAME))
#
# Example INI file:
#   [API]
#   API_URL = http://localhost:8000
#   CORS_URLs = http://localhost:3000,https://localhost:443
#   LogPath = logs
#   LogThreshold = INFO
# =============================================================================

import configparser
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from seed_api.exceptions import ConfigNotFoundError, ConfigParseError

# Process-level diagnostic sink, used before the application logger exists
logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent

API_SECTION = "API"


class Settings(BaseSettings):
    """
    Process defaults loaded from environment variables.

    Values from the INI file (LogPath, LogThreshold) take precedence over
    LOG_DIR and LOG_THRESHOLD when present.
    """

    # -------------------------------------------------------------------------
    # Configuration File
    # -------------------------------------------------------------------------

    INI_NAME: str = Field(
        default="app.ini",
        description="Path to the INI configuration file"
    )

    # -------------------------------------------------------------------------
    # Logging Defaults
    # -------------------------------------------------------------------------

    LOGGER_NAME: str = Field(
        default="API_LOGGER",
        description="Name of the application logger"
    )

    LOG_DIR: str = Field(
        default="logs",
        description="Log directory (overridden by LogPath in the INI file)"
    )

    LOG_FILE: str = Field(
        default="api.log",
        description="Log file name inside the log directory"
    )

    LOG_THRESHOLD: str = Field(
        default="INFO",
        description="Minimum log level (overridden by LogThreshold in the INI file)"
    )

    SESSION_COOKIE: str = Field(
        default="session_id",
        description="Cookie holding the session identifier added to log records"
    )

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    TEMPLATE_DIR: str = Field(
        default=str(PACKAGE_DIR / "templates"),
        description="Directory containing the HTML templates"
    )

    CACHE_DIR: str | None = Field(
        default=None,
        description="Template bytecode cache directory (unset disables caching)"
    )

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: The process settings instance
    """
    return Settings()


# =============================================================================
# INI Loading
# =============================================================================

def load_ini(path: str | os.PathLike) -> dict[str, dict[str, str]]:
    """
    Read an INI file into a nested mapping of section -> key -> value.

    Key case is preserved and no value interpolation is performed.

    Args:
        path: Location of the INI file

    Returns:
        Nested dict of strings

    Raises:
        ConfigNotFoundError: The file does not exist
        ConfigParseError: The file exists but cannot be read or parsed
    """
    path = str(path)

    if not os.path.exists(path):
        error = ConfigNotFoundError(path)
        logger.error(error.message)
        raise error

    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str

    try:
        with open(path, encoding="utf-8") as fh:
            parser.read_file(fh, source=path)
    except (OSError, UnicodeDecodeError, configparser.Error) as e:
        error = ConfigParseError(f"Could not read configuration file: {path}")
        logger.error(f"{error.message} ({e})")
        raise error from e

    return {section: dict(parser.items(section)) for section in parser.sections()}


# =============================================================================
# Typed Configuration
# =============================================================================

def split_origins(value: str) -> list[str]:
    """
    Parse a comma-separated origin list, preserving order.

    Example: "http://a.test:80, https://a.test:443" -> ["http://a.test:80", "https://a.test:443"]
    """
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class ApiConfig(BaseModel):
    """
    Typed view of the [API] section of the INI file.

    Required keys: API_URL, CORS_URLs. Optional keys: LogPath, LogThreshold.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_url: str = Field(..., alias="API_URL", min_length=1)
    cors_urls: list[str] = Field(..., alias="CORS_URLs")
    log_path: str | None = Field(default=None, alias="LogPath")
    log_threshold: str | None = Field(default=None, alias="LogThreshold")

    @field_validator("cors_urls", mode="before")
    @classmethod
    def parse_cors_urls(cls, value):
        if isinstance(value, str):
            value = split_origins(value)
        if not value:
            raise ValueError("at least one CORS origin is required")
        return value

    @classmethod
    def from_ini(cls, ini: Mapping[str, Mapping[str, str]]) -> "ApiConfig":
        """
        Build the typed config from a loaded INI mapping.

        Raises:
            ConfigParseError: Section missing or keys missing/invalid
        """
        if API_SECTION not in ini:
            raise ConfigParseError(f"Missing [{API_SECTION}] section in configuration")

        try:
            return cls.model_validate(dict(ini[API_SECTION]))
        except ValidationError as e:
            fields = ", ".join(
                str(err["loc"][0]) for err in e.errors() if err.get("loc")
            )
            raise ConfigParseError(
                f"Invalid [{API_SECTION}] configuration: {fields or e}"
            ) from e
