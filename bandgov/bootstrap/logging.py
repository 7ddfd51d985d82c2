"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from bandgov.config.governance_config import GovernanceConfig
from bandgov.infrastructure.observability import configure_structlog as _configure_structlog


def configure_logging(config: GovernanceConfig) -> None:
    """Configure structlog for the configured environment."""
    _configure_structlog(environment=config.environment)


__all__ = ["configure_logging"]
