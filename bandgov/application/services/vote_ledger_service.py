"""Vote Ledger Service.

Casting, listing and previewing votes on OPEN proposals. One row per
(proposal, member): casting again overwrites the member's row. Voting
never changes proposal status; only close does.

The repository re-checks "still OPEN, window not elapsed" under the
same lock that writes the row, so a vote racing an edit-reset lands
wholly before the reset (and is deleted) or wholly after it (and
counts).
"""

from __future__ import annotations

from uuid import UUID

from uuid6 import uuid7

from bandgov.application.dtos.governance import VoteAck
from bandgov.application.ports.proposal_repository import ProposalRepositoryProtocol
from bandgov.application.ports.time_authority import TimeAuthorityProtocol
from bandgov.application.services.base import LoggingMixin
from bandgov.application.services.governance_lookup import GovernanceLookup
from bandgov.application.services.side_effects import SideEffectDispatcher
from bandgov.domain.errors.state_transition import InvalidStateError
from bandgov.domain.errors.validation import ValidationError
from bandgov.domain.events.governance import (
    PROPOSAL_VOTE_CAST_EVENT_TYPE,
    GovernanceAuditEvent,
)
from bandgov.domain.governance import permissions
from bandgov.domain.governance.lifecycle import LifecycleEvent, require_status
from bandgov.domain.governance.tally import TallyEngine
from bandgov.domain.models.proposal import ProposalType
from bandgov.domain.models.tally import TallyResult
from bandgov.domain.models.vote import Vote, VoteChoice


class VoteLedgerService(LoggingMixin):
    """Vote casting and running tallies."""

    def __init__(
        self,
        repository: ProposalRepositoryProtocol,
        lookup: GovernanceLookup,
        tally_engine: TallyEngine,
        side_effects: SideEffectDispatcher,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._repository = repository
        self._lookup = lookup
        self._tally_engine = tally_engine
        self._side_effects = side_effects
        self._time = time_authority
        self._init_logger()

    async def cast_vote(
        self,
        proposal_id: UUID,
        user_id: UUID,
        choice: VoteChoice,
        comment: str | None = None,
    ) -> VoteAck:
        """Cast or replace the member's vote.

        Args:
            proposal_id: The OPEN proposal.
            user_id: The voter.
            choice: YES, NO or ABSTAIN (not ABSTAIN on dissolution).
            comment: Optional comment.

        Returns:
            VoteAck with the stored row and whether it was new.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            PermissionDeniedError: If the member's role cannot vote.
            InvalidStateError: If the proposal is not OPEN or the voting
                window has elapsed.
            ValidationError: If ABSTAIN is cast on a dissolution proposal.
        """
        log = self._log_operation(
            "cast_vote", proposal_id=str(proposal_id), user_id=str(user_id)
        )
        proposal = await self._lookup.proposal(proposal_id)
        settings = await self._lookup.settings(proposal.band_id)
        ctx = await self._lookup.context(proposal.band_id, user_id, proposal)
        permissions.require(
            permissions.can_vote(ctx, settings),
            "Your role cannot vote in this band",
            ctx,
            "vote",
        )
        require_status(proposal, LifecycleEvent.VOTE)
        now = self._time.now()
        if proposal.voting_window_elapsed(now):
            log.info("vote_rejected_window_elapsed")
            raise InvalidStateError(f"Voting period has ended for proposal {proposal_id}")
        if proposal.type == ProposalType.DISSOLUTION and choice == VoteChoice.ABSTAIN:
            raise ValidationError(
                "Abstaining is not allowed on dissolution proposals. "
                "You must vote YES or NO.",
                field="choice",
            )

        stored, created = await self._repository.upsert_vote(
            Vote(
                id=uuid7(),
                proposal_id=proposal_id,
                user_id=user_id,
                choice=choice,
                comment=comment.strip() if comment and comment.strip() else None,
                cast_at=now,
                updated_at=now,
            ),
            now,
        )
        log.info("vote_recorded" if created else "vote_updated", choice=choice.value)

        await self._side_effects.audit(
            GovernanceAuditEvent(
                event_type=PROPOSAL_VOTE_CAST_EVENT_TYPE,
                band_id=proposal.band_id,
                subject_id=proposal_id,
                actor_id=user_id,
                occurred_at=now,
                details={"choice": choice.value, "replaced": not created},
            )
        )
        return VoteAck(vote=stored, created=created)

    async def list_votes(self, proposal_id: UUID) -> list[Vote]:
        """Current vote rows for a proposal.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
        """
        await self._lookup.proposal(proposal_id)
        return await self._repository.list_votes(proposal_id)

    async def preview_tally(self, proposal_id: UUID) -> TallyResult:
        """Tally the current votes without closing.

        Uses the same rules close would apply right now.
        """
        proposal = await self._lookup.proposal(proposal_id)
        settings = await self._lookup.settings(proposal.band_id)
        eligible = await self._lookup.eligible_voter_count(proposal.band_id, settings)
        votes = await self._repository.list_votes(proposal_id)
        return self._tally_engine.compute_verdict(
            proposal.type,
            votes,
            eligible,
            settings.voting_method,
            settings.quorum_percentage,
        )
