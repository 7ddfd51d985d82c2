"""Founder Nomination Service.

A current founder nominates another member to become a co-founder.
Every founder in office at evaluation time must vote YES; a single NO
rejects the nomination immediately and for good. ABSTAIN leaves the
founder undecided. The nominee never votes on their own nomination.

The nomination is re-evaluated after every vote, and on demand through
refresh_nomination when the set of founders has changed.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from uuid6 import uuid7

from bandgov.application.dtos.governance import NominationAck
from bandgov.application.ports.membership_oracle import MembershipOracleProtocol
from bandgov.application.ports.nomination_repository import (
    NominationRepositoryProtocol,
)
from bandgov.application.ports.time_authority import TimeAuthorityProtocol
from bandgov.application.services.base import LoggingMixin
from bandgov.application.services.side_effects import SideEffectDispatcher
from bandgov.domain.errors.concurrent_modification import ConcurrencyConflictError
from bandgov.domain.errors.not_found import (
    MembershipNotFoundError,
    NominationNotFoundError,
)
from bandgov.domain.errors.state_transition import InvalidStateError
from bandgov.domain.errors.validation import ValidationError
from bandgov.domain.events.governance import (
    NOMINATION_CREATED_EVENT_TYPE,
    NOMINATION_DECIDED_EVENT_TYPE,
    NOMINATION_VOTE_CAST_EVENT_TYPE,
    GovernanceAuditEvent,
)
from bandgov.domain.governance import permissions
from bandgov.domain.governance.nomination_tally import (
    NominationVerdict,
    evaluate_nomination,
)
from bandgov.domain.governance.permissions import PermissionContext
from bandgov.domain.governance.reasons import require_reason
from bandgov.domain.models.founder_nomination import (
    FounderNomination,
    NominationStatus,
    NominationVote,
)
from bandgov.domain.models.membership import MemberRole
from bandgov.domain.models.notification import (
    GovernanceNotification,
    NotificationType,
)
from bandgov.domain.models.vote import VoteChoice

FOUNDER_ROLES: frozenset[MemberRole] = frozenset({MemberRole.FOUNDER})


class FounderNominationService(LoggingMixin):
    """Founder-Nomination sub-flow."""

    def __init__(
        self,
        repository: NominationRepositoryProtocol,
        membership_oracle: MembershipOracleProtocol,
        side_effects: SideEffectDispatcher,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._repository = repository
        self._membership_oracle = membership_oracle
        self._side_effects = side_effects
        self._time = time_authority
        self._init_logger()

    async def nominate_as_founder(
        self,
        band_id: UUID,
        nominator_id: UUID,
        target_member_id: UUID,
        reason: str,
    ) -> FounderNomination:
        """Open a nomination for ``target_member_id``.

        Args:
            band_id: The band.
            nominator_id: User id of the nominating founder.
            target_member_id: Membership id of the nominee.
            reason: Why (at least 10 characters).

        Returns:
            The OPEN nomination.

        Raises:
            PermissionDeniedError: If the nominator is not an active founder.
            ValidationError: If the reason is too short, or the target is
                inactive, already a founder, or the nominator.
            MembershipNotFoundError: If the target is not a member.
            InvalidStateError: If the target already has an open nomination.
        """
        log = self._log_operation(
            "nominate_as_founder",
            band_id=str(band_id),
            nominator_id=str(nominator_id),
            target_member_id=str(target_member_id),
        )
        nominator = await self._membership_oracle.get_membership(band_id, nominator_id)
        ctx = PermissionContext.for_member(nominator, nominator_id)
        permissions.require(
            permissions.can_nominate_founder(ctx),
            "Only founders can nominate co-founders",
            ctx,
            "nominate_founder",
        )
        nomination_reason = require_reason(reason, "reason")

        target = await self._membership_oracle.get_member_by_id(band_id, target_member_id)
        if target is None:
            raise MembershipNotFoundError(band_id, target_member_id)
        if target.user_id == nominator_id:
            raise ValidationError("You cannot nominate yourself", field="target_member_id")
        if not target.is_active:
            raise ValidationError(
                "Only active members can be nominated", field="target_member_id"
            )
        if target.is_founder:
            raise ValidationError(
                "This member is already a founder", field="target_member_id"
            )
        existing = await self._repository.find_open_for_target(band_id, target_member_id)
        if existing is not None:
            raise InvalidStateError(
                f"Member {target_member_id} already has an open nomination {existing.id}"
            )

        now = self._time.now()
        nomination = FounderNomination(
            id=uuid7(),
            band_id=band_id,
            nominator_id=nominator_id,
            target_member_id=target_member_id,
            target_user_id=target.user_id,
            reason=nomination_reason,
            created_at=now,
        )
        await self._repository.save(nomination)
        log.info("founder_nominated", nomination_id=str(nomination.id))

        founders = await self._current_founder_ids(band_id)
        await self._side_effects.publish(
            GovernanceNotification(
                type=NotificationType.FOUNDER_NOMINATED,
                band_id=band_id,
                subject_id=nomination.id,
                recipient_ids=tuple(
                    founder_id for founder_id in founders if founder_id != nominator_id
                ),
                title="A member was nominated as co-founder",
                payload={"target_user_id": str(target.user_id)},
            )
        )
        await self._audit(
            NOMINATION_CREATED_EVENT_TYPE,
            nomination,
            nominator_id,
            now,
            target_user_id=str(target.user_id),
        )
        return nomination

    async def vote_on_nomination(
        self,
        nomination_id: UUID,
        founder_id: UUID,
        choice: VoteChoice,
    ) -> NominationAck:
        """Record a founder's vote and re-evaluate the nomination.

        Raises:
            NominationNotFoundError: If the nomination does not exist.
            PermissionDeniedError: If the voter is not a current founder,
                or is the nominee.
            InvalidStateError: If the nomination is already decided, or
                the founder already voted NO.
        """
        log = self._log_operation(
            "vote_on_nomination",
            nomination_id=str(nomination_id),
            founder_id=str(founder_id),
        )
        nomination = await self.get_nomination(nomination_id)
        membership = await self._membership_oracle.get_membership(
            nomination.band_id, founder_id
        )
        ctx = PermissionContext.for_member(membership, founder_id)
        if founder_id == nomination.target_user_id:
            reason = "You cannot vote on your own nomination"
        else:
            reason = "Only current founders can vote on founder nominations"
        permissions.require(
            permissions.can_vote_on_nomination(ctx, nomination.target_user_id),
            reason,
            ctx,
            "vote_on_nomination",
        )
        if not nomination.is_open:
            raise InvalidStateError(
                f"Nomination {nomination_id} is already {nomination.status.value}"
            )

        now = self._time.now()
        stored_vote, created = await self._repository.upsert_vote(
            NominationVote(
                nomination_id=nomination_id,
                founder_user_id=founder_id,
                choice=choice,
                cast_at=now,
            )
        )
        log.info("nomination_vote_recorded", choice=choice.value, created=created)
        await self._audit(
            NOMINATION_VOTE_CAST_EVENT_TYPE,
            nomination,
            founder_id,
            now,
            choice=choice.value,
        )

        evaluated, verdict = await self._evaluate(nomination)
        return NominationAck(
            nomination=evaluated,
            vote=stored_vote,
            created=created,
            pending_founder_ids=verdict.pending_founder_ids,
        )

    async def refresh_nomination(self, nomination_id: UUID) -> FounderNomination:
        """Re-evaluate an OPEN nomination against the current founders."""
        nomination = await self.get_nomination(nomination_id)
        if not nomination.is_open:
            return nomination
        evaluated, _ = await self._evaluate(nomination)
        return evaluated

    async def get_nomination(self, nomination_id: UUID) -> FounderNomination:
        """Load a nomination.

        Raises:
            NominationNotFoundError: If it does not exist.
        """
        nomination = await self._repository.get(nomination_id)
        if nomination is None:
            raise NominationNotFoundError(nomination_id)
        return nomination

    async def _current_founder_ids(self, band_id: UUID) -> tuple[UUID, ...]:
        founders = await self._membership_oracle.list_members(band_id, roles=FOUNDER_ROLES)
        return tuple(founder.user_id for founder in founders)

    async def _evaluate(
        self, nomination: FounderNomination
    ) -> tuple[FounderNomination, NominationVerdict]:
        log = self._log_operation("evaluate_nomination", nomination_id=str(nomination.id))
        founders = await self._current_founder_ids(nomination.band_id)
        votes = await self._repository.list_votes(nomination.id)
        verdict = evaluate_nomination(votes, founders)
        if not verdict.is_decided:
            return nomination, verdict

        now = self._time.now()
        try:
            decided = await self._repository.decide_cas(
                nomination.with_decision(verdict.status, now, verdict.reason or "")
            )
        except ConcurrencyConflictError:
            log.info("nomination_decided_concurrently")
            return await self.get_nomination(nomination.id), verdict

        if decided.status == NominationStatus.APPROVED:
            await self._membership_oracle.promote_to_founder(
                decided.band_id, decided.target_member_id
            )
        log.info(
            "nomination_decided",
            status=decided.status.value,
            yes=verdict.yes,
            no=verdict.no,
        )
        await self._side_effects.publish(
            GovernanceNotification(
                type=NotificationType.FOUNDER_NOMINATION_DECIDED,
                band_id=decided.band_id,
                subject_id=decided.id,
                recipient_ids=tuple(dict.fromkeys((*founders, decided.target_user_id))),
                title=(
                    "You are now a co-founder"
                    if decided.status == NominationStatus.APPROVED
                    else "Founder nomination was not approved"
                ),
                payload={"status": decided.status.value, "reason": decided.decision_reason},
            )
        )
        await self._audit(
            NOMINATION_DECIDED_EVENT_TYPE,
            decided,
            None,
            now,
            status=decided.status.value,
            yes=verdict.yes,
            no=verdict.no,
            reason=decided.decision_reason,
        )
        return decided, verdict

    async def _audit(
        self,
        event_type: str,
        nomination: FounderNomination,
        actor_id: UUID | None,
        now: datetime,
        **details: object,
    ) -> None:
        await self._side_effects.audit(
            GovernanceAuditEvent(
                event_type=event_type,
                band_id=nomination.band_id,
                subject_id=nomination.id,
                actor_id=actor_id,
                occurred_at=now,
                details=dict(details),
            )
        )
