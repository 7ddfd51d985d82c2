"""Configuration for the governance engine."""

from bandgov.config.governance_config import (
    DEFAULT_GOVERNANCE_CONFIG,
    DEVELOPMENT_GOVERNANCE_CONFIG,
    GovernanceConfig,
)

__all__ = [
    "DEFAULT_GOVERNANCE_CONFIG",
    "DEVELOPMENT_GOVERNANCE_CONFIG",
    "GovernanceConfig",
]
