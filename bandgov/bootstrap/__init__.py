"""Composition root for the governance engine."""

from bandgov.bootstrap.container import GovernanceContainer, build_governance_container
from bandgov.bootstrap.logging import configure_logging

__all__ = ["GovernanceContainer", "build_governance_container", "configure_logging"]
