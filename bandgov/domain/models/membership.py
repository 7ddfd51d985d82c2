"""Band membership domain model.

A membership is a user's role-scoped participation record within a
Band. Memberships are owned by an external Membership Oracle; this
module only describes their shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class MemberRole(Enum):
    """Role of a member within a Band.

    Roles:
        FOUNDER: Band founder; full governance powers
        GOVERNOR: Governance lead; may review and close proposals
        MODERATOR: May review proposals
        CONDUCTOR: May create proposals and vote
        VOTING_MEMBER: May vote
        OBSERVER: Read-only participant
    """

    FOUNDER = "FOUNDER"
    GOVERNOR = "GOVERNOR"
    MODERATOR = "MODERATOR"
    CONDUCTOR = "CONDUCTOR"
    VOTING_MEMBER = "VOTING_MEMBER"
    OBSERVER = "OBSERVER"

    @property
    def rank(self) -> int:
        """Seniority used by the reviewer eligibility rule."""
        return ROLE_RANK[self]


ROLE_RANK: dict[MemberRole, int] = {
    MemberRole.FOUNDER: 4,
    MemberRole.GOVERNOR: 3,
    MemberRole.MODERATOR: 2,
    MemberRole.CONDUCTOR: 1,
    MemberRole.VOTING_MEMBER: 0,
    MemberRole.OBSERVER: 0,
}


class MemberStatus(Enum):
    """Whether a membership is currently in force."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass(frozen=True, eq=True)
class Membership:
    """A user's membership in a Band.

    Attributes:
        member_id: Identifier of the membership record.
        band_id: The Band.
        user_id: The member's user id.
        role: Current role.
        status: ACTIVE or INACTIVE.
    """

    member_id: UUID
    band_id: UUID
    user_id: UUID
    role: MemberRole
    status: MemberStatus = MemberStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    @property
    def is_founder(self) -> bool:
        return self.role == MemberRole.FOUNDER
