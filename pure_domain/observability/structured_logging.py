"""Structlog configuration helpers."""
from __future__ import annotations

import logging
from typing import Optional

import structlog

from pure_domain.core.config import Settings, get_settings

PACKAGE_LOGGER = "pure_domain"


def configure_structlog(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_JSON
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(settings.LOG_LEVEL)
    logging.getLogger(__name__).info("structlog configured")
