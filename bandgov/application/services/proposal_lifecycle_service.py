"""Proposal Lifecycle Service.

Owns the proposal state machine: creation, submission, review,
withdrawal, resubmission, closing and archiving. Every operation checks
in the same order, before any write:

1. the proposal, band settings and actor membership exist (NotFound);
2. the actor holds the capability (PermissionDenied);
3. the proposal is in a status the event may start from (InvalidState);
4. input validation (Validation, LimitExceeded, IntegrityBlocked).

The write itself is a single compare-and-set repository call. Audit
events and notifications are sent only after it commits.

Developer Golden Rules:
1. CHECK BEFORE WRITE - A failed operation leaves nothing behind
2. CAS FOR TRANSITIONS - Concurrent writers lose with ConcurrencyConflict
3. EVENT AFTER SAVE - Side effects only after the write commits
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from uuid6 import uuid7

from bandgov.application.dtos.governance import CloseResult, ElapsedSweepResult
from bandgov.application.ports.content_hash_service import ContentHashServiceProtocol
from bandgov.application.ports.proposal_repository import ProposalRepositoryProtocol
from bandgov.application.ports.time_authority import TimeAuthorityProtocol
from bandgov.application.services.base import LoggingMixin
from bandgov.application.services.edit_records import build_edit_record
from bandgov.application.services.governance_lookup import GovernanceLookup
from bandgov.application.services.integrity_gate import IntegrityGate
from bandgov.application.services.side_effects import SideEffectDispatcher
from bandgov.domain.errors.concurrent_modification import ConcurrencyConflictError
from bandgov.domain.errors.state_transition import InvalidStateError
from bandgov.domain.events.governance import (
    PROPOSAL_APPROVED_EVENT_TYPE,
    PROPOSAL_ARCHIVED_EVENT_TYPE,
    PROPOSAL_CLOSED_EVENT_TYPE,
    PROPOSAL_CREATED_EVENT_TYPE,
    PROPOSAL_REJECTED_EVENT_TYPE,
    PROPOSAL_RESUBMITTED_EVENT_TYPE,
    PROPOSAL_SUBMITTED_EVENT_TYPE,
    PROPOSAL_WITHDRAWN_EVENT_TYPE,
    GovernanceAuditEvent,
)
from bandgov.domain.governance import permissions
from bandgov.domain.governance.lifecycle import LifecycleEvent, require_status
from bandgov.domain.governance.permissions import PermissionContext
from bandgov.domain.governance.reasons import require_reason
from bandgov.domain.governance.resubmission import ensure_can_resubmit
from bandgov.domain.governance.tally import TallyEngine
from bandgov.domain.models.band_settings import BandGovernanceSettings
from bandgov.domain.models.history import (
    ProposalReviewRecord,
    ReviewAction,
)
from bandgov.domain.models.integrity import IntegrityAction
from bandgov.domain.models.membership import MemberRole
from bandgov.domain.models.notification import (
    GovernanceNotification,
    NotificationType,
)
from bandgov.domain.models.proposal import (
    Proposal,
    ProposalContent,
    ProposalPriority,
    ProposalStatus,
    ProposalType,
)
from bandgov.domain.models.tally import TallyResult
from bandgov.domain.models.vote import Vote


class ProposalLifecycleService(LoggingMixin):
    """Lifecycle Controller for band proposals."""

    def __init__(
        self,
        repository: ProposalRepositoryProtocol,
        lookup: GovernanceLookup,
        integrity_gate: IntegrityGate,
        tally_engine: TallyEngine,
        side_effects: SideEffectDispatcher,
        time_authority: TimeAuthorityProtocol,
        hash_service: ContentHashServiceProtocol,
    ) -> None:
        """Initialize the lifecycle service.

        Args:
            repository: Proposal, vote and history storage.
            lookup: Shared proposal, settings and membership reads.
            integrity_gate: Pre-commit content screening.
            tally_engine: Computes verdicts on close.
            side_effects: Post-commit notifications and audit.
            time_authority: Clock.
            hash_service: Content hashing for resubmission edits.
        """
        self._repository = repository
        self._lookup = lookup
        self._integrity_gate = integrity_gate
        self._tally_engine = tally_engine
        self._side_effects = side_effects
        self._time = time_authority
        self._hash_service = hash_service
        self._init_logger()

    # ------------------------------------------------------------------
    # Creation and submission
    # ------------------------------------------------------------------

    async def create_proposal(
        self,
        band_id: UUID,
        author_id: UUID,
        content: ProposalContent,
        proposal_type: ProposalType = ProposalType.GENERAL,
        priority: ProposalPriority = ProposalPriority.MEDIUM,
        proceed_with_flags: bool = False,
    ) -> Proposal:
        """Create a proposal in DRAFT.

        Args:
            band_id: The band.
            author_id: The creating member.
            content: Title, description and structured fields.
            proposal_type: Classification.
            priority: Urgency.
            proceed_with_flags: Accept integrity warnings.

        Returns:
            The new DRAFT proposal.

        Raises:
            BandNotFoundError: If the band is unknown.
            PermissionDeniedError: If the author's role cannot create.
            ValidationError: If the content is invalid.
            IntegrityBlockedError: If the Integrity Hook refused.
        """
        log = self._log_operation(
            "create_proposal", band_id=str(band_id), author_id=str(author_id)
        )
        settings = await self._lookup.settings(band_id)
        ctx = await self._lookup.context(band_id, author_id)
        permissions.require(
            permissions.can_create(ctx, settings),
            "Your role cannot create proposals in this band",
            ctx,
            "create",
        )
        content.ensure_valid()
        flags = await self._integrity_gate.screen(
            IntegrityAction.CREATE,
            band_id,
            content.to_integrity_payload(),
            proceed_with_flags=proceed_with_flags,
        )

        now = self._time.now()
        proposal = Proposal(
            id=uuid7(),
            band_id=band_id,
            created_by_id=author_id,
            content=content,
            type=proposal_type,
            priority=priority,
            created_at=now,
            updated_at=now,
            integrity_flags=flags,
        )
        await self._repository.save(proposal)
        log.info(
            "proposal_created",
            proposal_id=str(proposal.id),
            proposal_type=proposal_type.value,
            integrity_flags=len(flags),
        )

        await self._audit(
            PROPOSAL_CREATED_EVENT_TYPE,
            proposal,
            author_id,
            now,
            type=proposal_type.value,
            priority=priority.value,
            integrity_flags=[issue.to_dict() for issue in flags],
        )
        return proposal

    async def submit_for_review(self, proposal_id: UUID, user_id: UUID) -> Proposal:
        """Submit a DRAFT proposal.

        Goes to PENDING_REVIEW when the band requires review, otherwise
        straight to OPEN with a fresh voting window.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            PermissionDeniedError: If the user is not the author.
            InvalidStateError: If the proposal is not DRAFT.
            ConcurrencyConflictError: If it changed underneath.
        """
        log = self._log_operation(
            "submit_for_review", proposal_id=str(proposal_id), user_id=str(user_id)
        )
        proposal = await self._lookup.proposal(proposal_id)
        settings = await self._lookup.settings(proposal.band_id)
        ctx = await self._lookup.context(proposal.band_id, user_id, proposal)
        permissions.require(
            permissions.can_submit(ctx),
            "Only the author can submit this proposal",
            ctx,
            "submit",
        )
        require_status(proposal, LifecycleEvent.SUBMIT)

        now = self._time.now()
        updated = proposal.with_submission(
            settings.require_proposal_review, now, self._voting_period(settings)
        )
        stored = await self._repository.update_cas(
            updated,
            expected_status=proposal.status,
            expected_edit_count=proposal.edit_count,
        )
        log.info(
            "proposal_submitted",
            status=stored.status.value,
            submission_count=stored.submission_count,
        )

        await self._announce_submission(stored, settings)
        await self._audit(
            PROPOSAL_SUBMITTED_EVENT_TYPE,
            stored,
            user_id,
            now,
            status=stored.status.value,
            submission_count=stored.submission_count,
        )
        return stored

    async def resubmit_proposal(
        self,
        proposal_id: UUID,
        user_id: UUID,
        content: ProposalContent | None = None,
        edit_reason: str | None = None,
        proceed_with_flags: bool = False,
    ) -> Proposal:
        """Resubmit a REJECTED or WITHDRAWN proposal, optionally edited.

        Clears the previous review decision and any votes left over from
        an earlier voting window. Capped at three submissions in total.

        Args:
            proposal_id: The proposal.
            user_id: The author.
            content: Revised content, if the author changed it.
            edit_reason: Why the content changed.
            proceed_with_flags: Accept integrity warnings on the new content.

        Returns:
            The proposal in PENDING_REVIEW or OPEN.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            PermissionDeniedError: If the user is not the author.
            InvalidStateError: If the proposal is not REJECTED or WITHDRAWN.
            LimitExceededError: If all submissions are used.
            ValidationError: If the revised content is invalid.
            IntegrityBlockedError: If the Integrity Hook refused.
        """
        log = self._log_operation(
            "resubmit_proposal", proposal_id=str(proposal_id), user_id=str(user_id)
        )
        proposal = await self._lookup.proposal(proposal_id)
        settings = await self._lookup.settings(proposal.band_id)
        ctx = await self._lookup.context(proposal.band_id, user_id, proposal)
        permissions.require(
            permissions.can_submit(ctx),
            "Only the author can resubmit this proposal",
            ctx,
            "submit",
        )
        require_status(proposal, LifecycleEvent.RESUBMIT)
        ensure_can_resubmit(proposal)

        now = self._time.now()
        working = proposal
        edit_record = None
        if content is not None and content != proposal.content:
            content.ensure_valid()
            flags = await self._integrity_gate.screen(
                IntegrityAction.UPDATE,
                proposal.band_id,
                content.to_integrity_payload(),
                proceed_with_flags=proceed_with_flags,
            )
            reason = edit_reason.strip() if edit_reason and edit_reason.strip() else None
            working = proposal.with_content_edit(
                content, user_id, now, integrity_flags=flags
            )
            edit_record = build_edit_record(
                self._hash_service, proposal, content, user_id, reason, 0, now
            )

        updated = working.with_submission(
            settings.require_proposal_review, now, self._voting_period(settings)
        )
        cleared = await self._repository.apply_edit(
            updated,
            expected_status=proposal.status,
            expected_edit_count=proposal.edit_count,
            reset_votes=True,
        )
        if edit_record is not None:
            await self._repository.add_edit_record(edit_record)
        log.info(
            "proposal_resubmitted",
            status=updated.status.value,
            submission_count=updated.submission_count,
            edited=edit_record is not None,
            stale_votes_cleared=len(cleared),
        )

        await self._announce_submission(updated, settings)
        await self._audit(
            PROPOSAL_RESUBMITTED_EVENT_TYPE,
            updated,
            user_id,
            now,
            previous_status=proposal.status.value,
            status=updated.status.value,
            submission_count=updated.submission_count,
            edited=edit_record is not None,
        )
        return updated

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    async def approve_proposal(self, proposal_id: UUID, reviewer_id: UUID) -> Proposal:
        """Approve a PENDING_REVIEW proposal for voting.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            PermissionDeniedError: If the reviewer may not review it.
            InvalidStateError: If the proposal is not PENDING_REVIEW.
        """
        log = self._log_operation(
            "approve_proposal",
            proposal_id=str(proposal_id),
            reviewer_id=str(reviewer_id),
        )
        proposal = await self._lookup.proposal(proposal_id)
        settings = await self._lookup.settings(proposal.band_id)
        ctx = await self._lookup.context(
            proposal.band_id, reviewer_id, proposal, include_author_role=True
        )
        self._require_reviewer(ctx, settings)
        require_status(proposal, LifecycleEvent.APPROVE)

        now = self._time.now()
        updated = proposal.with_status(
            ProposalStatus.OPEN,
            now,
            reviewed_by_id=reviewer_id,
            reviewed_at=now,
            voting_started_at=now,
            voting_ends_at=now + self._voting_period(settings),
        )
        stored = await self._repository.update_cas(
            updated,
            expected_status=proposal.status,
            expected_edit_count=proposal.edit_count,
        )
        await self._repository.add_review_record(
            ProposalReviewRecord(
                id=uuid7(),
                proposal_id=proposal.id,
                reviewer_id=reviewer_id,
                action=ReviewAction.APPROVED,
                reason=None,
                reviewed_at=now,
            )
        )
        log.info("proposal_approved_for_voting", voting_ends_at=str(stored.voting_ends_at))

        await self._side_effects.publish(
            self._notification(
                NotificationType.PROPOSAL_APPROVED_FOR_VOTING,
                stored,
                (stored.created_by_id,),
                f'Your proposal "{stored.title}" is open for voting',
            )
        )
        await self._announce_voting_opened(stored, settings)
        await self._audit(PROPOSAL_APPROVED_EVENT_TYPE, stored, reviewer_id, now)
        return stored

    async def reject_proposal(
        self, proposal_id: UUID, reviewer_id: UUID, reason: str
    ) -> Proposal:
        """Reject a PENDING_REVIEW proposal with a reason.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            PermissionDeniedError: If the reviewer may not review it.
            InvalidStateError: If the proposal is not PENDING_REVIEW.
            ValidationError: If the reason is shorter than 10 characters.
        """
        log = self._log_operation(
            "reject_proposal",
            proposal_id=str(proposal_id),
            reviewer_id=str(reviewer_id),
        )
        proposal = await self._lookup.proposal(proposal_id)
        settings = await self._lookup.settings(proposal.band_id)
        ctx = await self._lookup.context(
            proposal.band_id, reviewer_id, proposal, include_author_role=True
        )
        self._require_reviewer(ctx, settings)
        require_status(proposal, LifecycleEvent.REJECT)
        rejection_reason = require_reason(reason, "rejection_reason")

        now = self._time.now()
        updated = proposal.with_status(
            ProposalStatus.REJECTED,
            now,
            rejection_reason=rejection_reason,
            reviewed_by_id=reviewer_id,
            reviewed_at=now,
        )
        stored = await self._repository.update_cas(
            updated,
            expected_status=proposal.status,
            expected_edit_count=proposal.edit_count,
        )
        await self._repository.add_review_record(
            ProposalReviewRecord(
                id=uuid7(),
                proposal_id=proposal.id,
                reviewer_id=reviewer_id,
                action=ReviewAction.REJECTED,
                reason=rejection_reason,
                reviewed_at=now,
            )
        )
        log.info("proposal_rejected_in_review")

        await self._side_effects.publish(
            self._notification(
                NotificationType.PROPOSAL_REJECTED_IN_REVIEW,
                stored,
                (stored.created_by_id,),
                f'Your proposal "{stored.title}" was not approved',
                reason=rejection_reason,
                remaining_submissions=stored.remaining_submissions,
            )
        )
        await self._audit(
            PROPOSAL_REJECTED_EVENT_TYPE,
            stored,
            reviewer_id,
            now,
            reason=rejection_reason,
        )
        return stored

    async def withdraw_proposal(self, proposal_id: UUID, user_id: UUID) -> Proposal:
        """Withdraw a PENDING_REVIEW proposal.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            PermissionDeniedError: If the user is not the author.
            InvalidStateError: If the proposal is not PENDING_REVIEW.
        """
        log = self._log_operation(
            "withdraw_proposal", proposal_id=str(proposal_id), user_id=str(user_id)
        )
        proposal = await self._lookup.proposal(proposal_id)
        ctx = await self._lookup.context(proposal.band_id, user_id, proposal)
        permissions.require(
            permissions.can_withdraw(ctx),
            "Only the author can withdraw this proposal",
            ctx,
            "withdraw",
        )
        require_status(proposal, LifecycleEvent.WITHDRAW)

        now = self._time.now()
        stored = await self._repository.update_cas(
            proposal.with_status(ProposalStatus.WITHDRAWN, now),
            expected_status=proposal.status,
            expected_edit_count=proposal.edit_count,
        )
        log.info("proposal_withdrawn", remaining_submissions=stored.remaining_submissions)
        await self._audit(PROPOSAL_WITHDRAWN_EVENT_TYPE, stored, user_id, now)
        return stored

    # ------------------------------------------------------------------
    # Closing and archiving
    # ------------------------------------------------------------------

    async def close_proposal(self, proposal_id: UUID, user_id: UUID) -> CloseResult:
        """Close voting and record the verdict.

        The tally and the status write happen in one repository call; a
        second close fails instead of recomputing the tally.

        Returns:
            CloseResult with the APPROVED or REJECTED proposal and tally.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            PermissionDeniedError: If the user is not the author, a
                founder or a governor.
            InvalidStateError: If the proposal is not OPEN.
            ConcurrencyConflictError: If it was edited while closing.
        """
        proposal = await self._lookup.proposal(proposal_id)
        settings = await self._lookup.settings(proposal.band_id)
        ctx = await self._lookup.context(proposal.band_id, user_id, proposal)
        permissions.require(
            permissions.can_close(ctx, settings),
            "Only the author, founders and governors can close this proposal",
            ctx,
            "close",
        )
        require_status(proposal, LifecycleEvent.CLOSE)
        return await self._close(proposal, settings, actor_id=user_id)

    async def close_elapsed_proposals(self, band_id: UUID) -> ElapsedSweepResult:
        """Close every OPEN proposal whose voting window has elapsed.

        Runs as the system (no actor). Proposals closed by someone else
        while the sweep runs are skipped.
        """
        log = self._log_operation("close_elapsed_proposals", band_id=str(band_id))
        settings = await self._lookup.settings(band_id)
        now = self._time.now()
        open_proposals = await self._repository.list_by_band(
            band_id, status=ProposalStatus.OPEN
        )

        closed: list[CloseResult] = []
        skipped: list[UUID] = []
        for proposal in open_proposals:
            if not proposal.voting_window_elapsed(now):
                continue
            try:
                closed.append(await self._close(proposal, settings, actor_id=None))
            except (InvalidStateError, ConcurrencyConflictError) as e:
                log.info(
                    "elapsed_close_skipped",
                    proposal_id=str(proposal.id),
                    reason=e.reason,
                )
                skipped.append(proposal.id)

        log.info("elapsed_sweep_completed", closed=len(closed), skipped=len(skipped))
        return ElapsedSweepResult(closed=tuple(closed), skipped_ids=tuple(skipped))

    async def archive_proposal(self, proposal_id: UUID, user_id: UUID) -> Proposal:
        """Move an APPROVED or REJECTED proposal to CLOSED.

        Raises:
            ProposalNotFoundError: If the proposal does not exist.
            PermissionDeniedError: If the user is not the author, a
                founder or a governor.
            InvalidStateError: If the proposal is not APPROVED or REJECTED.
        """
        log = self._log_operation(
            "archive_proposal", proposal_id=str(proposal_id), user_id=str(user_id)
        )
        proposal = await self._lookup.proposal(proposal_id)
        settings = await self._lookup.settings(proposal.band_id)
        ctx = await self._lookup.context(proposal.band_id, user_id, proposal)
        permissions.require(
            permissions.can_archive(ctx, settings),
            "Only the author, founders and governors can archive this proposal",
            ctx,
            "archive",
        )
        require_status(proposal, LifecycleEvent.ARCHIVE)

        now = self._time.now()
        stored = await self._repository.update_cas(
            proposal.with_status(ProposalStatus.CLOSED, now),
            expected_status=proposal.status,
            expected_edit_count=proposal.edit_count,
        )
        log.info("proposal_archived", outcome=proposal.status.value)
        await self._audit(
            PROPOSAL_ARCHIVED_EVENT_TYPE,
            stored,
            user_id,
            now,
            outcome=proposal.status.value,
        )
        return stored

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_proposal(self, proposal_id: UUID) -> Proposal:
        return await self._lookup.proposal(proposal_id)

    async def list_pending_review(self, band_id: UUID, user_id: UUID) -> list[Proposal]:
        """PENDING_REVIEW proposals the user is allowed to review."""
        settings = await self._lookup.settings(band_id)
        pending = await self._repository.list_by_band(
            band_id, status=ProposalStatus.PENDING_REVIEW
        )
        reviewable: list[Proposal] = []
        for proposal in pending:
            ctx = await self._lookup.context(
                band_id, user_id, proposal, include_author_role=True
            )
            if permissions.can_review(ctx, settings):
                reviewable.append(proposal)
        return reviewable

    async def get_review_history(
        self, proposal_id: UUID, user_id: UUID
    ) -> list[ProposalReviewRecord]:
        """Review decisions on a proposal, oldest first.

        Raises:
            PermissionDeniedError: If the user is not an active member.
        """
        proposal = await self._lookup.proposal(proposal_id)
        ctx = await self._lookup.context(proposal.band_id, user_id, proposal)
        permissions.require(
            permissions.can_view_history(ctx),
            "Only active members can view review history",
            ctx,
            "view_history",
        )
        return await self._repository.list_review_records(proposal_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _close(
        self,
        proposal: Proposal,
        settings: BandGovernanceSettings,
        actor_id: UUID | None,
    ) -> CloseResult:
        log = self._log_operation(
            "close_proposal",
            proposal_id=str(proposal.id),
            actor_id=str(actor_id) if actor_id is not None else "system",
        )
        eligible = await self._lookup.eligible_voter_count(proposal.band_id, settings)
        now = self._time.now()

        def resolve(current: Proposal, votes: list[Vote]) -> tuple[Proposal, TallyResult]:
            tally = self._tally_engine.compute_verdict(
                current.type,
                votes,
                eligible,
                settings.voting_method,
                settings.quorum_percentage,
            )
            outcome = ProposalStatus.APPROVED if tally.passed else ProposalStatus.REJECTED
            return (
                current.with_status(outcome, now, closed_at=now, final_tally=tally),
                tally,
            )

        closed, tally = await self._repository.close_voting(
            proposal.id, proposal.edit_count, resolve
        )
        log.info(
            "proposal_closed",
            outcome=closed.status.value,
            yes=tally.yes,
            no=tally.no,
            abstain=tally.abstain,
            eligible_voters=tally.eligible_voters,
        )

        members = await self._lookup.member_user_ids(closed.band_id)
        await self._side_effects.publish(
            self._notification(
                NotificationType.PROPOSAL_CLOSED,
                closed,
                members,
                f'Voting closed on "{closed.title}": {closed.status.value}',
                outcome=closed.status.value,
                tally=tally.to_dict(),
            )
        )
        await self._audit(
            PROPOSAL_CLOSED_EVENT_TYPE,
            closed,
            actor_id,
            now,
            outcome=closed.status.value,
            tally=tally.to_dict(),
        )
        return CloseResult(proposal=closed, tally=tally)

    def _require_reviewer(
        self, ctx: PermissionContext, settings: BandGovernanceSettings
    ) -> None:
        if ctx.is_author:
            reason = "Authors cannot review their own proposals"
        elif ctx.role is None or ctx.role not in settings.reviewer_roles:
            reason = "Your role cannot review proposals in this band"
        elif ctx.author_role == MemberRole.FOUNDER:
            reason = "Founder proposals need a moderator or higher to review"
        else:
            reason = "Reviewer must hold a role at least as senior as the author"
        permissions.require(
            permissions.can_review(ctx, settings), reason, ctx, "review"
        )

    @staticmethod
    def _voting_period(settings: BandGovernanceSettings) -> timedelta:
        return timedelta(days=settings.voting_period_days)

    async def _announce_submission(
        self, proposal: Proposal, settings: BandGovernanceSettings
    ) -> None:
        if proposal.status == ProposalStatus.OPEN:
            await self._announce_voting_opened(proposal, settings)
            return
        reviewers = await self._lookup.member_user_ids(
            proposal.band_id,
            roles=settings.reviewer_roles,
            exclude=(proposal.created_by_id,),
        )
        await self._side_effects.publish(
            self._notification(
                NotificationType.PROPOSAL_NEEDS_REVIEW,
                proposal,
                reviewers,
                f'Proposal "{proposal.title}" needs review',
                submission_count=proposal.submission_count,
            )
        )

    async def _announce_voting_opened(
        self, proposal: Proposal, settings: BandGovernanceSettings
    ) -> None:
        voters = await self._lookup.member_user_ids(
            proposal.band_id,
            roles=settings.voting_roles,
            exclude=(proposal.created_by_id,),
        )
        await self._side_effects.publish(
            self._notification(
                NotificationType.PROPOSAL_VOTING_OPENED,
                proposal,
                voters,
                f'Voting is open on "{proposal.title}"',
                voting_ends_at=(
                    proposal.voting_ends_at.isoformat()
                    if proposal.voting_ends_at is not None
                    else None
                ),
            )
        )

    @staticmethod
    def _notification(
        notification_type: NotificationType,
        proposal: Proposal,
        recipients: tuple[UUID, ...],
        title: str,
        **payload: Any,
    ) -> GovernanceNotification:
        return GovernanceNotification(
            type=notification_type,
            band_id=proposal.band_id,
            subject_id=proposal.id,
            recipient_ids=recipients,
            title=title,
            payload=payload,
        )

    async def _audit(
        self,
        event_type: str,
        proposal: Proposal,
        actor_id: UUID | None,
        now: datetime,
        **details: Any,
    ) -> None:
        await self._side_effects.audit(
            GovernanceAuditEvent(
                event_type=event_type,
                band_id=proposal.band_id,
                subject_id=proposal.id,
                actor_id=actor_id,
                occurred_at=now,
                details=details,
            )
        )
