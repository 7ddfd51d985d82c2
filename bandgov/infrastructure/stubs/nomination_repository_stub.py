"""In-memory founder nomination repository stub.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from bandgov.application.ports.nomination_repository import (
    NominationRepositoryProtocol,
)
from bandgov.domain.errors.concurrent_modification import ConcurrencyConflictError
from bandgov.domain.errors.not_found import NominationNotFoundError
from bandgov.domain.errors.state_transition import InvalidStateError
from bandgov.domain.models.founder_nomination import (
    FounderNomination,
    NominationStatus,
    NominationVote,
)


class NominationRepositoryStub(NominationRepositoryProtocol):
    """In-memory implementation of NominationRepositoryProtocol."""

    def __init__(self) -> None:
        self._nominations: dict[UUID, FounderNomination] = {}
        self._votes: dict[UUID, dict[UUID, NominationVote]] = {}
        self._lock = asyncio.Lock()

    def _require(self, nomination_id: UUID) -> FounderNomination:
        nomination = self._nominations.get(nomination_id)
        if nomination is None:
            raise NominationNotFoundError(nomination_id)
        return nomination

    async def save(self, nomination: FounderNomination) -> None:
        if nomination.id in self._nominations:
            raise ValueError(f"Nomination already exists: {nomination.id}")
        self._nominations[nomination.id] = nomination
        self._votes[nomination.id] = {}

    async def get(self, nomination_id: UUID) -> FounderNomination | None:
        return self._nominations.get(nomination_id)

    async def find_open_for_target(
        self, band_id: UUID, target_member_id: UUID
    ) -> FounderNomination | None:
        for nomination in self._nominations.values():
            if (
                nomination.band_id == band_id
                and nomination.target_member_id == target_member_id
                and nomination.is_open
            ):
                return nomination
        return None

    async def upsert_vote(self, vote: NominationVote) -> tuple[NominationVote, bool]:
        async with self._lock:
            nomination = self._require(vote.nomination_id)
            if not nomination.is_open:
                raise InvalidStateError(
                    f"Nomination {nomination.id} is already {nomination.status.value}"
                )
            rows = self._votes.setdefault(vote.nomination_id, {})
            existing = rows.get(vote.founder_user_id)
            if existing is not None and existing.is_final:
                raise InvalidStateError(
                    f"Founder {vote.founder_user_id} already voted NO on nomination "
                    f"{nomination.id}; a NO vote cannot be changed"
                )
            rows[vote.founder_user_id] = vote
            return vote, existing is None

    async def list_votes(self, nomination_id: UUID) -> list[NominationVote]:
        return list(self._votes.get(nomination_id, {}).values())

    async def decide_cas(self, decided: FounderNomination) -> FounderNomination:
        async with self._lock:
            current = self._require(decided.id)
            if current.status != NominationStatus.OPEN:
                raise ConcurrencyConflictError(
                    decided.id,
                    "decide_nomination",
                    f"Already {current.status.value}.",
                )
            self._nominations[decided.id] = decided
            return decided
