"""In-memory proposal repository stub.

Stores proposals, votes and history in dicts. Atomic operations are
simulated with one asyncio.Lock per proposal: every write to a
proposal or its votes takes that lock, so a vote, an edit-reset and a
close on the same proposal are serialized exactly as row locks would
serialize them in a database.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from uuid import UUID

from bandgov.application.ports.proposal_repository import (
    CloseResolver,
    ProposalRepositoryProtocol,
)
from bandgov.domain.errors.concurrent_modification import ConcurrencyConflictError
from bandgov.domain.errors.not_found import ProposalNotFoundError
from bandgov.domain.errors.state_transition import InvalidStateError
from bandgov.domain.models.history import ProposalEditRecord, ProposalReviewRecord
from bandgov.domain.models.proposal import Proposal, ProposalStatus
from bandgov.domain.models.tally import TallyResult
from bandgov.domain.models.vote import Vote


class ProposalRepositoryStub(ProposalRepositoryProtocol):
    """In-memory implementation of ProposalRepositoryProtocol.

    Attributes:
        _proposals: proposal.id -> Proposal.
        _votes: proposal.id -> {user_id -> Vote}; one row per voter.
        _edit_records: proposal.id -> edit history.
        _review_records: proposal.id -> review history.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._proposals: dict[UUID, Proposal] = {}
        self._votes: dict[UUID, dict[UUID, Vote]] = {}
        self._edit_records: dict[UUID, list[ProposalEditRecord]] = {}
        self._review_records: dict[UUID, list[ProposalReviewRecord]] = {}
        self._locks: dict[UUID, asyncio.Lock] = {}
        # Counts close_voting calls that got past the status check
        self.close_commits = 0

    def _lock_for(self, proposal_id: UUID) -> asyncio.Lock:
        return self._locks.setdefault(proposal_id, asyncio.Lock())

    def _require(self, proposal_id: UUID) -> Proposal:
        proposal = self._proposals.get(proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id)
        return proposal

    @staticmethod
    def _check_cas(
        current: Proposal,
        expected_status: ProposalStatus,
        expected_edit_count: int,
        operation: str,
    ) -> None:
        if current.status != expected_status:
            raise ConcurrencyConflictError(
                current.id,
                operation,
                f"Expected status {expected_status.value}, found {current.status.value}.",
            )
        if current.edit_count != expected_edit_count:
            raise ConcurrencyConflictError(
                current.id,
                operation,
                f"Expected edit_count {expected_edit_count}, found {current.edit_count}.",
            )

    async def save(self, proposal: Proposal) -> None:
        if proposal.id in self._proposals:
            raise ValueError(f"Proposal already exists: {proposal.id}")
        self._proposals[proposal.id] = proposal
        self._votes[proposal.id] = {}

    async def get(self, proposal_id: UUID) -> Proposal | None:
        return self._proposals.get(proposal_id)

    async def list_by_band(
        self,
        band_id: UUID,
        status: ProposalStatus | None = None,
    ) -> list[Proposal]:
        matching = [
            p
            for p in self._proposals.values()
            if p.band_id == band_id and (status is None or p.status == status)
        ]
        matching.sort(key=lambda p: p.created_at, reverse=True)
        return matching

    async def update_cas(
        self,
        updated: Proposal,
        expected_status: ProposalStatus,
        expected_edit_count: int,
    ) -> Proposal:
        async with self._lock_for(updated.id):
            current = self._require(updated.id)
            self._check_cas(current, expected_status, expected_edit_count, "update")
            self._proposals[updated.id] = updated
            return updated

    async def apply_edit(
        self,
        updated: Proposal,
        expected_status: ProposalStatus,
        expected_edit_count: int,
        reset_votes: bool,
    ) -> list[Vote]:
        async with self._lock_for(updated.id):
            current = self._require(updated.id)
            self._check_cas(current, expected_status, expected_edit_count, "edit")
            deleted: list[Vote] = []
            if reset_votes:
                deleted = list(self._votes.get(updated.id, {}).values())
                self._votes[updated.id] = {}
            self._proposals[updated.id] = updated
            return deleted

    async def upsert_vote(self, vote: Vote, now: datetime) -> tuple[Vote, bool]:
        async with self._lock_for(vote.proposal_id):
            proposal = self._require(vote.proposal_id)
            if proposal.status != ProposalStatus.OPEN:
                raise InvalidStateError(
                    f"Proposal {proposal.id} is {proposal.status.value}, not OPEN"
                )
            if proposal.voting_window_elapsed(now):
                raise InvalidStateError(
                    f"Voting period has ended for proposal {proposal.id}"
                )
            rows = self._votes.setdefault(vote.proposal_id, {})
            existing = rows.get(vote.user_id)
            if existing is None:
                rows[vote.user_id] = vote
                return vote, True
            stored = existing.overwritten_by(vote)
            rows[vote.user_id] = stored
            return stored, False

    async def list_votes(self, proposal_id: UUID) -> list[Vote]:
        return list(self._votes.get(proposal_id, {}).values())

    async def close_voting(
        self,
        proposal_id: UUID,
        expected_edit_count: int,
        resolver: CloseResolver,
    ) -> tuple[Proposal, TallyResult]:
        async with self._lock_for(proposal_id):
            current = self._require(proposal_id)
            if current.status != ProposalStatus.OPEN:
                raise InvalidStateError(
                    f"Proposal {proposal_id} is already {current.status.value}"
                )
            if current.edit_count != expected_edit_count:
                raise ConcurrencyConflictError(
                    proposal_id,
                    "close",
                    f"Proposal was edited (edit_count {current.edit_count}).",
                )
            closed, tally = resolver(current, list(self._votes.get(proposal_id, {}).values()))
            self._proposals[proposal_id] = closed
            self.close_commits += 1
            return closed, tally

    async def add_edit_record(self, record: ProposalEditRecord) -> None:
        self._edit_records.setdefault(record.proposal_id, []).append(record)

    async def list_edit_records(self, proposal_id: UUID) -> list[ProposalEditRecord]:
        return list(self._edit_records.get(proposal_id, []))

    async def add_review_record(self, record: ProposalReviewRecord) -> None:
        self._review_records.setdefault(record.proposal_id, []).append(record)

    async def list_review_records(
        self, proposal_id: UUID
    ) -> list[ProposalReviewRecord]:
        return list(self._review_records.get(proposal_id, []))

    def clear(self) -> None:
        """Clear all stored data (for testing)."""
        self._proposals.clear()
        self._votes.clear()
        self._edit_records.clear()
        self._review_records.clear()
        self._locks.clear()
        self.close_commits = 0
