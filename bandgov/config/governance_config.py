"""Governance engine configuration.

Defaults applied to bands that do not carry their own settings, plus the
runtime environment used to pick the log renderer. Every value can be
overridden via environment variables; unparseable values fall back to
the default.

Environment Variables:
- BANDGOV_ENVIRONMENT: "production" (JSON logs) or "development" (default: production)
- BANDGOV_DEFAULT_VOTING_PERIOD_DAYS: Voting window length in days (default: 7)
- BANDGOV_DEFAULT_QUORUM_PERCENTAGE: Participation required, 0-100 (default: 50)
- BANDGOV_REQUIRE_PROPOSAL_REVIEW: "true"/"false" (default: true)
- BANDGOV_DEFAULT_VOTING_METHOD: VotingMethod name (default: SIMPLE_MAJORITY)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from uuid import UUID

from bandgov.domain.models.band_settings import BandGovernanceSettings, VotingMethod

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _get_voting_method_env(key: str, default: VotingMethod) -> VotingMethod:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return VotingMethod(value.strip().upper())
    except ValueError:
        return default


@dataclass(frozen=True)
class GovernanceConfig:
    """Engine-wide governance defaults.

    Attributes:
        environment: "production" or "development"; selects log output.
        default_voting_period_days: Voting window for bands without settings.
        default_quorum_percentage: Quorum for bands without settings.
        require_proposal_review: Whether DRAFT goes through review by default.
        default_voting_method: Pass threshold for bands without settings.
    """

    environment: str = "production"
    default_voting_period_days: int = 7
    default_quorum_percentage: int = 50
    require_proposal_review: bool = True
    default_voting_method: VotingMethod = VotingMethod.SIMPLE_MAJORITY

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.default_voting_period_days < 1:
            raise ValueError(
                "default_voting_period_days must be at least 1, "
                f"got {self.default_voting_period_days}"
            )
        if not 0 <= self.default_quorum_percentage <= 100:
            raise ValueError(
                "default_quorum_percentage must be between 0 and 100, "
                f"got {self.default_quorum_percentage}"
            )

    @classmethod
    def from_environment(cls) -> GovernanceConfig:
        """Create config from environment variables with defaults.

        Out-of-range numbers fall back to the default rather than failing
        startup.

        Returns:
            GovernanceConfig with values from environment or defaults.
        """
        defaults = cls()
        period = _get_int_env(
            "BANDGOV_DEFAULT_VOTING_PERIOD_DAYS", defaults.default_voting_period_days
        )
        if period < 1:
            period = defaults.default_voting_period_days
        quorum = _get_int_env(
            "BANDGOV_DEFAULT_QUORUM_PERCENTAGE", defaults.default_quorum_percentage
        )
        if not 0 <= quorum <= 100:
            quorum = defaults.default_quorum_percentage
        return cls(
            environment=os.environ.get("BANDGOV_ENVIRONMENT", defaults.environment),
            default_voting_period_days=period,
            default_quorum_percentage=quorum,
            require_proposal_review=_get_bool_env(
                "BANDGOV_REQUIRE_PROPOSAL_REVIEW", defaults.require_proposal_review
            ),
            default_voting_method=_get_voting_method_env(
                "BANDGOV_DEFAULT_VOTING_METHOD", defaults.default_voting_method
            ),
        )

    def default_settings(self, band_id: UUID) -> BandGovernanceSettings:
        """Build band settings from these defaults."""
        return BandGovernanceSettings(
            band_id=band_id,
            voting_method=self.default_voting_method,
            require_proposal_review=self.require_proposal_review,
            voting_period_days=self.default_voting_period_days,
            quorum_percentage=self.default_quorum_percentage,
        )


# Default config (no environment overrides)
DEFAULT_GOVERNANCE_CONFIG = GovernanceConfig()

# Development config with console logs and short windows for local runs
DEVELOPMENT_GOVERNANCE_CONFIG = GovernanceConfig(
    environment="development",
    default_voting_period_days=1,
)
