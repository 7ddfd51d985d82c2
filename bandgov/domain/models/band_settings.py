"""Band-level governance settings.

Settings are owned by the Band and are read-only to the governance
core. They decide the pass threshold for non-dissolution proposals,
whether proposals go through review before voting, how long voting
lasts, the quorum and which roles hold which capabilities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from bandgov.domain.models.membership import MemberRole


class VotingMethod(Enum):
    """Pass threshold applied to (yes, no) counts.

    Methods:
        SIMPLE_MAJORITY: more than 50% YES
        SUPERMAJORITY_66: at least 66% YES
        SUPERMAJORITY_75: at least 75% YES
        UNANIMOUS: no NO votes and at least one YES
    """

    SIMPLE_MAJORITY = "SIMPLE_MAJORITY"
    SUPERMAJORITY_66 = "SUPERMAJORITY_66"
    SUPERMAJORITY_75 = "SUPERMAJORITY_75"
    UNANIMOUS = "UNANIMOUS"


DEFAULT_VOTING_ROLES: frozenset[MemberRole] = frozenset(
    {
        MemberRole.FOUNDER,
        MemberRole.GOVERNOR,
        MemberRole.MODERATOR,
        MemberRole.CONDUCTOR,
        MemberRole.VOTING_MEMBER,
    }
)

# CONDUCTOR cannot review
DEFAULT_REVIEWER_ROLES: frozenset[MemberRole] = frozenset(
    {MemberRole.MODERATOR, MemberRole.GOVERNOR, MemberRole.FOUNDER}
)

DEFAULT_CREATOR_ROLES: frozenset[MemberRole] = frozenset(
    {
        MemberRole.FOUNDER,
        MemberRole.GOVERNOR,
        MemberRole.MODERATOR,
        MemberRole.CONDUCTOR,
    }
)

# The author may always close their own proposal
DEFAULT_CLOSER_ROLES: frozenset[MemberRole] = frozenset(
    {MemberRole.FOUNDER, MemberRole.GOVERNOR}
)


@dataclass(frozen=True, eq=True)
class BandGovernanceSettings:
    """Governance configuration for one Band.

    Attributes:
        band_id: The Band these settings belong to.
        voting_method: Pass threshold for non-dissolution proposals.
        require_proposal_review: DRAFT goes to PENDING_REVIEW when True,
            straight to OPEN otherwise.
        voting_period_days: Length of a voting window.
        quorum_percentage: Minimum participation (0-100) among eligible
            voters for non-dissolution proposals.
        voting_roles: Roles that may vote.
        reviewer_roles: Roles that may review.
        creator_roles: Roles that may create proposals.
        closer_roles: Roles (besides the author) that may close proposals.
    """

    band_id: UUID
    voting_method: VotingMethod = VotingMethod.SIMPLE_MAJORITY
    require_proposal_review: bool = True
    voting_period_days: int = 7
    quorum_percentage: int = 50
    voting_roles: frozenset[MemberRole] = field(default=DEFAULT_VOTING_ROLES)
    reviewer_roles: frozenset[MemberRole] = field(default=DEFAULT_REVIEWER_ROLES)
    creator_roles: frozenset[MemberRole] = field(default=DEFAULT_CREATOR_ROLES)
    closer_roles: frozenset[MemberRole] = field(default=DEFAULT_CLOSER_ROLES)

    def __post_init__(self) -> None:
        """Validate settings values."""
        if self.voting_period_days < 1:
            raise ValueError(
                f"voting_period_days must be at least 1, got {self.voting_period_days}"
            )
        if not 0 <= self.quorum_percentage <= 100:
            raise ValueError(
                f"quorum_percentage must be between 0 and 100, got {self.quorum_percentage}"
            )
