"""Proposal repository port.

Persistence for proposals, their votes and their history. Every write
that must be atomic with respect to other writers on the same proposal
is a single method here:

- update_cas: status/field change guarded by compare-and-set on status
  and edit_count.
- apply_edit: content edit, optionally deleting all votes, in one step.
- upsert_vote: insert or overwrite the (proposal, user) row while the
  proposal is OPEN and its window has not elapsed.
- close_voting: run a pure resolver over a consistent snapshot of the
  proposal and its votes and write the result.

Developer Golden Rules:
1. FAIL LOUD - Repository raises domain errors, never returns partial state
2. CAS FOR TRANSITIONS - Use update_cas() for every status change
3. ONE ROW PER VOTER - upsert_vote() overwrites, never appends
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol
from uuid import UUID

from bandgov.domain.models.history import ProposalEditRecord, ProposalReviewRecord
from bandgov.domain.models.proposal import Proposal, ProposalStatus
from bandgov.domain.models.tally import TallyResult
from bandgov.domain.models.vote import Vote

CloseResolver = Callable[[Proposal, list[Vote]], tuple[Proposal, TallyResult]]
"""Pure function mapping (OPEN proposal, its votes) to (closed proposal, tally)."""


class ProposalRepositoryProtocol(Protocol):
    """Protocol for proposal, vote and history storage."""

    async def save(self, proposal: Proposal) -> None:
        """Store a new proposal.

        Raises:
            ValueError: If proposal.id already exists.
        """
        ...

    async def get(self, proposal_id: UUID) -> Proposal | None:
        """Retrieve a proposal by id, or None."""
        ...

    async def list_by_band(
        self,
        band_id: UUID,
        status: ProposalStatus | None = None,
    ) -> list[Proposal]:
        """List a band's proposals, newest first, optionally by status."""
        ...

    async def update_cas(
        self,
        updated: Proposal,
        expected_status: ProposalStatus,
        expected_edit_count: int,
    ) -> Proposal:
        """Replace the stored proposal if it still matches what was read.

        Args:
            updated: The new proposal state.
            expected_status: Status the stored proposal must have.
            expected_edit_count: edit_count the stored proposal must have.

        Returns:
            The stored proposal.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            ConcurrencyConflictError: If status or edit_count moved.
        """
        ...

    async def apply_edit(
        self,
        updated: Proposal,
        expected_status: ProposalStatus,
        expected_edit_count: int,
        reset_votes: bool,
    ) -> list[Vote]:
        """Write an edited proposal, deleting all its votes if asked.

        Both happen under one lock; a concurrent vote lands entirely
        before (and is deleted) or entirely after (and counts).

        Returns:
            The deleted votes (empty when reset_votes is False).

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            ConcurrencyConflictError: If status or edit_count moved.
        """
        ...

    async def upsert_vote(self, vote: Vote, now: datetime) -> tuple[Vote, bool]:
        """Insert or overwrite the (proposal_id, user_id) vote row.

        Returns:
            Tuple of (stored vote, True if the row was created).

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            InvalidStateError: If the proposal is not OPEN or its voting
                window elapsed before ``now``.
        """
        ...

    async def list_votes(self, proposal_id: UUID) -> list[Vote]:
        """Current vote rows for a proposal, oldest first."""
        ...

    async def close_voting(
        self,
        proposal_id: UUID,
        expected_edit_count: int,
        resolver: CloseResolver,
    ) -> tuple[Proposal, TallyResult]:
        """Close voting atomically.

        Returns:
            Tuple of (stored closed proposal, tally) from the resolver.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            InvalidStateError: If the proposal is no longer OPEN.
            ConcurrencyConflictError: If it was edited since it was read.
        """
        ...

    async def add_edit_record(self, record: ProposalEditRecord) -> None: ...

    async def list_edit_records(self, proposal_id: UUID) -> list[ProposalEditRecord]:
        """Edit history, oldest first."""
        ...

    async def add_review_record(self, record: ProposalReviewRecord) -> None: ...

    async def list_review_records(
        self, proposal_id: UUID
    ) -> list[ProposalReviewRecord]:
        """Review history, oldest first."""
        ...
