"""Result DTOs returned by governance services.

Application layer defines its own result types; any surrounding API
layer maps these to its wire format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from bandgov.domain.models.founder_nomination import (
    FounderNomination,
    NominationStatus,
    NominationVote,
)
from bandgov.domain.models.history import ProposalEditRecord
from bandgov.domain.models.integrity import IntegrityIssue
from bandgov.domain.models.proposal import Proposal, ProposalStatus
from bandgov.domain.models.tally import TallyResult
from bandgov.domain.models.vote import Vote


@dataclass(frozen=True)
class VoteAck:
    """Acknowledgement of a cast vote.

    Attributes:
        vote: The stored row.
        created: True for a first vote, False when it replaced an earlier one.
    """

    vote: Vote
    created: bool

    @property
    def message(self) -> str:
        return "Vote recorded" if self.created else "Vote updated"


@dataclass(frozen=True)
class CloseResult:
    """Outcome of closing a proposal."""

    proposal: Proposal
    tally: TallyResult

    @property
    def status(self) -> ProposalStatus:
        return self.proposal.status


@dataclass(frozen=True)
class EditResult:
    """Outcome of an edit.

    Attributes:
        proposal: The edited proposal.
        record: The edit history entry.
        votes_reset: Number of votes deleted by the edit.
        overridden_issues: Integrity warnings the author proceeded past.
    """

    proposal: Proposal
    record: ProposalEditRecord
    votes_reset: int = 0
    overridden_issues: tuple[IntegrityIssue, ...] = field(default=())


@dataclass(frozen=True)
class ElapsedSweepResult:
    """Proposals closed by one sweep, and those skipped after a race."""

    closed: tuple[CloseResult, ...]
    skipped_ids: tuple[UUID, ...] = field(default=())


@dataclass(frozen=True)
class NominationAck:
    """Acknowledgement of a nomination vote.

    Attributes:
        nomination: The nomination after evaluation.
        vote: The stored vote row.
        created: True for a first vote by this founder.
        pending_founder_ids: Current founders still to vote YES or NO.
    """

    nomination: FounderNomination
    vote: NominationVote
    created: bool
    pending_founder_ids: frozenset[UUID] = field(default=frozenset())

    @property
    def status(self) -> NominationStatus:
        return self.nomination.status
