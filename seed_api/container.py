# =============================================================================
# seed_api/container.py - Service Container
# =============================================================================
# All services the application needs, built once at startup in dependency
# order:
#
#   Settings -> INI file -> ApiConfig -> LogConfig -> logger
#            -> error handlers -> CORS policy -> templates
#
# Components receive their collaborators through their constructors; nothing
# is looked up by name at request time.
# =============================================================================

import logging
import os
from dataclasses import dataclass

from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemBytecodeCache, FileSystemLoader, select_autoescape

from seed_api.config import ApiConfig, Settings, get_settings, load_ini
from seed_api.cors import CorsPolicy, build_cors_policy
from seed_api.handlers import ErrorHandlers
from seed_api.logs import LogConfig, build_logger

CACHE_ENABLED = "enabled"
CACHE_DISABLED = "disabled"


@dataclass(frozen=True)
class Container:
    """Read-only bundle of configured services."""

    settings: Settings
    api: ApiConfig
    log: logging.Logger
    handlers: ErrorHandlers
    cors: CorsPolicy
    templates: Jinja2Templates
    view_cache_status: str


def build_templates(settings: Settings, log: logging.Logger) -> tuple[Jinja2Templates, str]:
    """
    Create the template renderer.

    Compiled templates are cached on disk when CACHE_DIR is set and usable.

    Returns:
        (templates, cache status)
    """
    bytecode_cache = None
    cache_status = CACHE_DISABLED

    if settings.CACHE_DIR:
        try:
            os.makedirs(settings.CACHE_DIR, exist_ok=True)
            bytecode_cache = FileSystemBytecodeCache(settings.CACHE_DIR)
            cache_status = CACHE_ENABLED
        except OSError as e:
            log.warning(f"Template cache disabled, cannot use {settings.CACHE_DIR}: {e}")

    env = Environment(
        loader=FileSystemLoader(settings.TEMPLATE_DIR),
        autoescape=select_autoescape(),
        bytecode_cache=bytecode_cache,
    )
    return Jinja2Templates(env=env), cache_status


def build_container(settings: Settings | None = None) -> Container:
    """
    Load configuration and construct every service.

    Args:
        settings: Process settings (defaults to get_settings())

    Returns:
        Fully built container

    Raises:
        ConfigNotFoundError: INI file missing
        ConfigParseError: INI file unreadable or incomplete
    """
    if settings is None:
        settings = get_settings()

    ini = load_ini(settings.INI_NAME)
    api = ApiConfig.from_ini(ini)

    log_config = LogConfig.from_config(settings, api)
    log = build_logger(settings.LOGGER_NAME, log_config)

    handlers = ErrorHandlers.build(log)
    cors = build_cors_policy(api)
    templates, cache_status = build_templates(settings, log)

    log.debug(f"Container built from {settings.INI_NAME}")

    return Container(
        settings=settings,
        api=api,
        log=log,
        handlers=handlers,
        cors=cors,
        templates=templates,
        view_cache_status=cache_status,
    )
