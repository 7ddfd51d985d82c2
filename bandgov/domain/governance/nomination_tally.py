"""Literal-unanimity rule for founder nominations.

Evaluated against the founders as they are *now*, not as they were when
the nomination was made:

- any current founder voting NO rejects the nomination;
- every current founder voting YES approves it;
- otherwise it stays OPEN. ABSTAIN means "not yet decided".

Votes from people who are no longer founders are ignored.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass
from uuid import UUID

from bandgov.domain.models.founder_nomination import NominationStatus, NominationVote
from bandgov.domain.models.vote import VoteChoice


@dataclass(frozen=True, eq=True)
class NominationVerdict:
    """Outcome of evaluating a nomination.

    Attributes:
        status: OPEN, APPROVED or REJECTED.
        yes: YES votes from current founders.
        no: NO votes from current founders.
        pending_founder_ids: Current founders who have not voted YES or NO.
        reason: Explanation for a decided verdict.
    """

    status: NominationStatus
    yes: int
    no: int
    pending_founder_ids: frozenset[UUID]
    reason: str | None = None

    @property
    def is_decided(self) -> bool:
        return self.status != NominationStatus.OPEN


def evaluate_nomination(
    votes: Iterable[NominationVote],
    current_founder_ids: Collection[UUID],
) -> NominationVerdict:
    """Apply the unanimity rule to the current founder set."""
    founders = frozenset(current_founder_ids)
    choices = {
        vote.founder_user_id: vote.choice
        for vote in votes
        if vote.founder_user_id in founders
    }
    yes = sum(1 for choice in choices.values() if choice == VoteChoice.YES)
    no = sum(1 for choice in choices.values() if choice == VoteChoice.NO)
    pending = frozenset(
        founder_id
        for founder_id in founders
        if choices.get(founder_id, VoteChoice.ABSTAIN) == VoteChoice.ABSTAIN
    )

    if no > 0:
        return NominationVerdict(
            status=NominationStatus.REJECTED,
            yes=yes,
            no=no,
            pending_founder_ids=pending,
            reason=f"{no} founder(s) voted NO; nomination requires unanimous YES",
        )
    if founders and yes == len(founders):
        return NominationVerdict(
            status=NominationStatus.APPROVED,
            yes=yes,
            no=no,
            pending_founder_ids=pending,
            reason=f"All {yes} current founder(s) voted YES",
        )
    return NominationVerdict(
        status=NominationStatus.OPEN, yes=yes, no=no, pending_founder_ids=pending
    )
