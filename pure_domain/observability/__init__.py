"""Observability helpers."""

from .structured_logging import configure_structlog

__all__ = ["configure_structlog"]
