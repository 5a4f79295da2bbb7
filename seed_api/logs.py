# =============================================================================
# seed_api/logs.py - Application Logging
# =============================================================================
# Builds the file-backed application logger:
# - LogConfig: where the log lives and at which threshold it records
# - build_logger(): daily rotating file handler with a custom line format
# - SessionFilter: stamps every record with the session id and client IP
# - RequestContextMiddleware: captures those two values per request
#
# Line format:
#   [2024-01-15 10:00:00,000][abc123][127.0.0.1] API_LOGGER.INFO: message
# =============================================================================

import logging
import os
import sys
import warnings
from contextvars import ContextVar
from logging.handlers import TimedRotatingFileHandler

from pydantic import BaseModel, ConfigDict
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from seed_api.config import ApiConfig, Settings
from seed_api.exceptions import ConfigParseError

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s][%(session)s][%(remote_ip)s] %(name)s.%(levelname)s: %(message)s"

LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_session_id: ContextVar[str] = ContextVar("session_id", default="")
_remote_ip: ContextVar[str] = ContextVar("remote_ip", default="")


# =============================================================================
# Log Configuration
# =============================================================================

def parse_threshold(value: str | int) -> int:
    """
    Convert a threshold from configuration into a logging level.

    Accepts level names (case-insensitive) or integer levels.

    Raises:
        ConfigParseError: The value is not a known level
    """
    if isinstance(value, int):
        return value

    text = str(value).strip()
    if text.isdigit():
        return int(text)

    level = LEVEL_NAMES.get(text.upper())
    if level is None:
        raise ConfigParseError(f"Invalid log threshold: {value}")
    return level


class LogConfig(BaseModel):
    """Where and at which level the application logs."""

    model_config = ConfigDict(frozen=True)

    log_dir: str
    log_file: str
    threshold: int = logging.INFO

    @property
    def log_path(self) -> str:
        return os.path.join(self.log_dir, self.log_file)

    @classmethod
    def from_config(cls, settings: Settings, api_config: ApiConfig) -> "LogConfig":
        """Process defaults, overridden by LogPath / LogThreshold from the INI file."""
        log_dir = api_config.log_path or settings.LOG_DIR
        threshold = api_config.log_threshold or settings.LOG_THRESHOLD

        return cls(
            log_dir=log_dir,
            log_file=settings.LOG_FILE,
            threshold=parse_threshold(threshold),
        )


# =============================================================================
# Record Enrichment
# =============================================================================

class SessionFilter(logging.Filter):
    """Adds `session` and `remote_ip` attributes to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session = _session_id.get()
        record.remote_ip = _remote_ip.get()
        return True


class RequestContextMiddleware:
    """
    ASGI middleware recording the session id and client IP of the current
    request so SessionFilter can attach them to log records.

    The values are left set after the inner app returns: the server error
    handler runs outside this middleware and must still see them. Each
    request runs in its own task context, so nothing leaks between requests.
    """

    def __init__(self, app: ASGIApp, session_cookie: str = "session_id"):
        self.app = app
        self.session_cookie = session_cookie

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        conn = HTTPConnection(scope)
        _session_id.set(conn.cookies.get(self.session_cookie, ""))
        _remote_ip.set(conn.client.host if conn.client else "")
        await self.app(scope, receive, send)


# =============================================================================
# Logger Construction
# =============================================================================

def create_log_dir(path: str) -> bool:
    """
    Make sure the log directory exists.

    Returns:
        True if the directory exists or was created, False otherwise
    """
    if os.path.isdir(path):
        return True

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.error(f"Unable to create log directory: {path} ({e})")
        return False

    return True


def enable_debug_diagnostics() -> None:
    """Show every warning and route warnings through logging."""
    warnings.simplefilter("always")
    logging.captureWarnings(True)


def build_logger(name: str, log_config: LogConfig) -> logging.Logger:
    """
    Create the application logger.

    Any handlers left from a previous build are closed and replaced, so the
    logger can be rebuilt (e.g. once per test) without duplicating output.

    Args:
        name: Logger name
        log_config: Target file and threshold

    Returns:
        Configured logger
    """
    log = logging.getLogger(name)
    log.setLevel(log_config.threshold)

    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    if create_log_dir(log_config.log_dir):
        handler = TimedRotatingFileHandler(
            log_config.log_path,
            when="midnight",
            backupCount=0,
            encoding="utf-8",
        )
    else:
        logger.warning(f"Logging to stderr, log directory unavailable: {log_config.log_dir}")
        handler = logging.StreamHandler(sys.stderr)

    handler.setLevel(log_config.threshold)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SessionFilter())
    log.addHandler(handler)

    if log_config.threshold == logging.DEBUG:
        enable_debug_diagnostics()

    return log
