"""Proposal Edit Service (Edit Guard).

Authors may edit their proposal in DRAFT, PENDING_REVIEW, OPEN,
REJECTED and WITHDRAWN. Editing an OPEN proposal needs a reason of at
least ten characters and, in one atomic repository call, deletes every
vote, restarts the voting window and increments edit_count. Prior
voters other than the editor are told their vote was reset.

A blocked or un-overridden Integrity Hook result aborts the edit before
anything is written.
"""

from __future__ import annotations

from datetime import timedelta
from uuid import UUID

from bandgov.application.dtos.governance import EditResult
from bandgov.application.ports.content_hash_service import ContentHashServiceProtocol
from bandgov.application.ports.proposal_repository import ProposalRepositoryProtocol
from bandgov.application.ports.time_authority import TimeAuthorityProtocol
from bandgov.application.services.base import LoggingMixin
from bandgov.application.services.edit_records import build_edit_record
from bandgov.application.services.governance_lookup import GovernanceLookup
from bandgov.application.services.integrity_gate import IntegrityGate
from bandgov.application.services.side_effects import SideEffectDispatcher
from bandgov.domain.events.governance import (
    PROPOSAL_EDITED_EVENT_TYPE,
    GovernanceAuditEvent,
)
from bandgov.domain.governance import permissions
from bandgov.domain.governance.edit_guard import plan_edit, validate_edit_reason
from bandgov.domain.models.history import ProposalEditRecord
from bandgov.domain.models.integrity import IntegrityAction
from bandgov.domain.models.notification import (
    GovernanceNotification,
    NotificationType,
)
from bandgov.domain.models.proposal import (
    ProposalContent,
    ProposalPriority,
    ProposalType,
)


class ProposalEditService(LoggingMixin):
    """Applies content edits under the Edit Guard rules."""

    def __init__(
        self,
        repository: ProposalRepositoryProtocol,
        lookup: GovernanceLookup,
        integrity_gate: IntegrityGate,
        hash_service: ContentHashServiceProtocol,
        side_effects: SideEffectDispatcher,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._repository = repository
        self._lookup = lookup
        self._integrity_gate = integrity_gate
        self._hash_service = hash_service
        self._side_effects = side_effects
        self._time = time_authority
        self._init_logger()

    async def edit_proposal(
        self,
        proposal_id: UUID,
        user_id: UUID,
        content: ProposalContent,
        edit_reason: str | None = None,
        proceed_with_flags: bool = False,
        proposal_type: ProposalType | None = None,
        priority: ProposalPriority | None = None,
    ) -> EditResult:
        """Edit a proposal's content.

        Args:
            proposal_id: The proposal.
            user_id: The author.
            content: The full new content.
            edit_reason: Required (>= 10 chars) while voting is open.
            proceed_with_flags: Accept integrity warnings.
            proposal_type: New classification, if changing.
            priority: New priority, if changing.

        Returns:
            EditResult with the edited proposal and its history record.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            PermissionDeniedError: If the user is not the author.
            InvalidStateError: If the proposal is APPROVED or CLOSED.
            ValidationError: If the reason or content is invalid.
            IntegrityBlockedError: If the Integrity Hook refused.
            ConcurrencyConflictError: If the proposal changed underneath.
        """
        log = self._log_operation(
            "edit_proposal", proposal_id=str(proposal_id), user_id=str(user_id)
        )
        proposal = await self._lookup.proposal(proposal_id)
        ctx = await self._lookup.context(proposal.band_id, user_id, proposal)
        permissions.require(
            permissions.can_edit(ctx),
            "Only the author can edit this proposal",
            ctx,
            "edit",
        )
        plan = plan_edit(proposal.status)
        reason = validate_edit_reason(plan, edit_reason)
        content.ensure_valid()
        flags = await self._integrity_gate.screen(
            IntegrityAction.UPDATE,
            proposal.band_id,
            content.to_integrity_payload(),
            proceed_with_flags=proceed_with_flags,
        )

        voting_period: timedelta | None = None
        if plan.resets_votes:
            settings = await self._lookup.settings(proposal.band_id)
            voting_period = timedelta(days=settings.voting_period_days)

        now = self._time.now()
        updated = proposal.with_content_edit(
            content,
            user_id,
            now,
            voting_period=voting_period,
            proposal_type=proposal_type,
            priority=priority,
            integrity_flags=flags,
        )
        deleted = await self._repository.apply_edit(
            updated,
            expected_status=proposal.status,
            expected_edit_count=proposal.edit_count,
            reset_votes=plan.resets_votes,
        )
        record = build_edit_record(
            self._hash_service, proposal, content, user_id, reason, len(deleted), now
        )
        await self._repository.add_edit_record(record)
        log.info(
            "proposal_edited",
            status=proposal.status.value,
            edit_count=updated.edit_count,
            votes_reset=len(deleted),
            changed_fields=list(record.changed_fields),
        )

        if deleted:
            voter_ids = [vote.user_id for vote in deleted if vote.user_id != user_id]
            await self._side_effects.notify_voters_of_edit(
                proposal.id, reason or "", voter_ids
            )
        if plan.notifies_reviewers:
            settings = await self._lookup.settings(proposal.band_id)
            reviewers = await self._lookup.member_user_ids(
                proposal.band_id,
                roles=settings.reviewer_roles,
                exclude=(user_id,),
            )
            await self._side_effects.publish(
                GovernanceNotification(
                    type=NotificationType.PROPOSAL_EDITED_DURING_REVIEW,
                    band_id=proposal.band_id,
                    subject_id=proposal.id,
                    recipient_ids=reviewers,
                    title=f'Proposal "{updated.title}" was edited during review',
                    payload={"changed_fields": list(record.changed_fields)},
                )
            )
        await self._side_effects.audit(
            GovernanceAuditEvent(
                event_type=PROPOSAL_EDITED_EVENT_TYPE,
                band_id=proposal.band_id,
                subject_id=proposal.id,
                actor_id=user_id,
                occurred_at=now,
                details={
                    "status": proposal.status.value,
                    "reason": reason,
                    "changed_fields": list(record.changed_fields),
                    "votes_reset": len(deleted),
                    "content_hash": record.content_hash,
                    "integrity_flags": [issue.to_dict() for issue in flags],
                },
            )
        )
        return EditResult(
            proposal=updated,
            record=record,
            votes_reset=len(deleted),
            overridden_issues=flags,
        )

    async def get_edit_history(
        self, proposal_id: UUID, user_id: UUID
    ) -> list[ProposalEditRecord]:
        """Edit records for a proposal, oldest first.

        Raises:
            PermissionDeniedError: If the user is not an active member.
        """
        proposal = await self._lookup.proposal(proposal_id)
        ctx = await self._lookup.context(proposal.band_id, user_id, proposal)
        permissions.require(
            permissions.can_view_history(ctx),
            "Only active members can view edit history",
            ctx,
            "view_history",
        )
        return await self._repository.list_edit_records(proposal_id)
