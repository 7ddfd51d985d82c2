"""Vote domain model.

One Vote row exists per (proposal_id, user_id). Casting again replaces
the choice, comment and timestamp of that row; prior choices are not
kept.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID


class VoteChoice(Enum):
    """A member's choice on a proposal or nomination."""

    YES = "YES"
    NO = "NO"
    ABSTAIN = "ABSTAIN"


@dataclass(frozen=True, eq=True)
class Vote:
    """A member's recorded vote on a proposal.

    Attributes:
        id: UUIDv7 of the row; stable across overwrites.
        proposal_id: The proposal voted on.
        user_id: The voter.
        choice: YES, NO or ABSTAIN.
        comment: Optional free-text comment.
        cast_at: When the row was first written.
        updated_at: When the row was last overwritten.
    """

    id: UUID
    proposal_id: UUID
    user_id: UUID
    choice: VoteChoice
    comment: str | None = field(default=None)
    cast_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)

    @property
    def key(self) -> tuple[UUID, UUID]:
        """Composite identity of the row."""
        return (self.proposal_id, self.user_id)

    def overwritten_by(self, other: Vote) -> Vote:
        """Return this row carrying ``other``'s choice, comment and time."""
        return replace(
            self,
            choice=other.choice,
            comment=other.comment,
            updated_at=other.updated_at,
        )
