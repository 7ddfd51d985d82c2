"""Founder nomination repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from bandgov.domain.models.founder_nomination import (
    FounderNomination,
    NominationVote,
)


class NominationRepositoryProtocol(Protocol):
    """Protocol for founder nomination storage.

    Methods:
        save: Store a new nomination
        get: Retrieve a nomination by id
        find_open_for_target: The OPEN nomination for a member, if any
        upsert_vote: One row per (nomination, founder)
        list_votes: Votes on a nomination
        decide_cas: Record a decision if the nomination is still OPEN
    """

    async def save(self, nomination: FounderNomination) -> None:
        """Store a new nomination.

        Raises:
            ValueError: If nomination.id already exists.
        """
        ...

    async def get(self, nomination_id: UUID) -> FounderNomination | None: ...

    async def find_open_for_target(
        self, band_id: UUID, target_member_id: UUID
    ) -> FounderNomination | None: ...

    async def upsert_vote(self, vote: NominationVote) -> tuple[NominationVote, bool]:
        """Insert or overwrite the founder's vote.

        A stored NO is final. Implementations check it atomically with
        the write, so a later request cannot replace a NO before the
        nomination is evaluated.

        Returns:
            Tuple of (stored vote, True if the row was created).

        Raises:
            NominationNotFoundError: If the nomination does not exist.
            InvalidStateError: If the nomination is no longer OPEN, or the
                founder already voted NO.
        """
        ...

    async def list_votes(self, nomination_id: UUID) -> list[NominationVote]: ...

    async def decide_cas(self, decided: FounderNomination) -> FounderNomination:
        """Store a decided nomination if the stored one is still OPEN.

        Raises:
            NominationNotFoundError: If the nomination does not exist.
            ConcurrencyConflictError: If it was decided by someone else.
        """
        ...
