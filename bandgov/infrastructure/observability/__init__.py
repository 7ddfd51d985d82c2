"""Observability infrastructure (structured logging)."""

from bandgov.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_component,
)

__all__ = ["configure_structlog", "get_logger_for_component"]
