"""Founder nomination domain model.

A founder nomination proposes that an existing member of a Band become
a co-founder. It has its own small state machine:

    OPEN -> APPROVED (every current founder voted YES)
    OPEN -> REJECTED (any current founder voted NO)

APPROVED and REJECTED are final.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID

from bandgov.domain.errors.state_transition import InvalidStateTransitionError
from bandgov.domain.models.vote import VoteChoice


class NominationStatus(Enum):
    """Status of a founder nomination."""

    OPEN = "OPEN"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    def valid_transitions(self) -> frozenset[NominationStatus]:
        return NOMINATION_TRANSITION_MATRIX.get(self, frozenset())


NOMINATION_TRANSITION_MATRIX: dict[NominationStatus, frozenset[NominationStatus]] = {
    NominationStatus.OPEN: frozenset(
        {NominationStatus.APPROVED, NominationStatus.REJECTED}
    ),
    NominationStatus.APPROVED: frozenset(),
    NominationStatus.REJECTED: frozenset(),
}


@dataclass(frozen=True, eq=True)
class FounderNomination:
    """A nomination of a member to become a co-founder.

    Attributes:
        id: UUIDv7 identifier.
        band_id: The Band.
        nominator_id: User id of the founder who nominated.
        target_member_id: Membership id of the nominee.
        target_user_id: User id of the nominee.
        reason: Why the nominee should become a founder.
        status: OPEN, APPROVED or REJECTED.
        created_at: When the nomination was made.
        decided_at: When the nomination left OPEN.
        decision_reason: Short explanation of the decision.
    """

    id: UUID
    band_id: UUID
    nominator_id: UUID
    target_member_id: UUID
    target_user_id: UUID
    reason: str
    created_at: datetime
    status: NominationStatus = field(default=NominationStatus.OPEN)
    decided_at: datetime | None = field(default=None)
    decision_reason: str | None = field(default=None)

    @property
    def is_open(self) -> bool:
        return self.status == NominationStatus.OPEN

    def with_decision(
        self, new_status: NominationStatus, now: datetime, reason: str
    ) -> FounderNomination:
        """Create new nomination with a final decision.

        Raises:
            InvalidStateTransitionError: If the nomination is already decided.
        """
        valid_transitions = self.status.valid_transitions()
        if new_status not in valid_transitions:
            raise InvalidStateTransitionError(
                from_state=self.status,
                to_state=new_status,
                allowed_transitions=valid_transitions,
            )
        return replace(
            self, status=new_status, decided_at=now, decision_reason=reason
        )


@dataclass(frozen=True, eq=True)
class NominationVote:
    """One founder's vote on a nomination; one row per (nomination, founder)."""

    nomination_id: UUID
    founder_user_id: UUID
    choice: VoteChoice
    cast_at: datetime

    @property
    def is_final(self) -> bool:
        """A NO cannot be withdrawn or changed while the nomination is open."""
        return self.choice == VoteChoice.NO
