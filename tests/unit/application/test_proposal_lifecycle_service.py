"""Unit tests for ProposalLifecycleService over the in-memory stubs."""

from datetime import timedelta

import pytest
from uuid6 import uuid7

from bandgov.domain.errors import (
    BandNotFoundError,
    IntegrityBlockedError,
    InvalidStateError,
    LimitExceededError,
    PermissionDeniedError,
    ProposalNotFoundError,
    ValidationError,
)
from bandgov.domain.models.history import ReviewAction
from bandgov.domain.models.notification import NotificationType
from bandgov.domain.models.proposal import ProposalStatus
from bandgov.domain.models.vote import VoteChoice
from tests.helpers import FakeTimeAuthority, GovernanceWorld
from tests.helpers.governance_world import BLOCKED_TERM, FLAGGED_TERM, make_content

REASON = "Needs a clearer budget breakdown"


class TestCreateProposal:
    async def test_creates_draft(self, world: GovernanceWorld) -> None:
        proposal = await world.draft()

        assert proposal.status == ProposalStatus.DRAFT
        assert proposal.submission_count == 0
        assert proposal.created_at == world.clock.now()
        assert await world.repository.get(proposal.id) == proposal
        assert world.audit.event_types() == ["proposal.created"]

    async def test_voting_member_cannot_create(self, world: GovernanceWorld) -> None:
        with pytest.raises(PermissionDeniedError) as exc_info:
            await world.draft(author=world.voter_a)
        assert exc_info.value.capability == "create"

    async def test_unknown_band(self, world: GovernanceWorld) -> None:
        with pytest.raises(BandNotFoundError):
            await world.container.lifecycle.create_proposal(
                uuid7(), world.conductor.user_id, make_content()
            )

    async def test_invalid_content(self, world: GovernanceWorld) -> None:
        with pytest.raises(ValidationError):
            await world.draft(content=make_content(title="Gig"))

    async def test_blocked_content_writes_nothing(self, world: GovernanceWorld) -> None:
        content = make_content(
            description=f"Let us {BLOCKED_TERM} the tour fund before anyone notices."
        )
        with pytest.raises(IntegrityBlockedError) as exc_info:
            await world.draft(content=content)

        assert not exc_info.value.can_override
        assert await world.repository.list_by_band(world.band_id) == []
        assert world.audit.events == []

    async def test_flagged_content_needs_override(self, world: GovernanceWorld) -> None:
        content = make_content(
            description=f"Sign an {FLAGGED_TERM} deal with one venue for the season."
        )
        with pytest.raises(IntegrityBlockedError) as exc_info:
            await world.draft(content=content)
        assert exc_info.value.can_override

        proposal = await world.container.lifecycle.create_proposal(
            world.band_id, world.conductor.user_id, content, proceed_with_flags=True
        )
        assert len(proposal.integrity_flags) == 1


class TestSubmit:
    async def test_submit_goes_to_review(self, world: GovernanceWorld) -> None:
        proposal = await world.pending()

        assert proposal.status == ProposalStatus.PENDING_REVIEW
        assert proposal.submission_count == 1
        needs_review = world.notifier.of_type(NotificationType.PROPOSAL_NEEDS_REVIEW)
        assert set(needs_review[0].recipient_ids) == {
            world.founder.user_id,
            world.governor.user_id,
            world.moderator.user_id,
        }

    async def test_submit_without_review_opens_voting(
        self, fake_time_authority: FakeTimeAuthority
    ) -> None:
        world = GovernanceWorld.create(fake_time_authority, require_proposal_review=False)
        proposal = await world.pending()

        assert proposal.status == ProposalStatus.OPEN
        assert proposal.voting_ends_at == fake_time_authority.now() + timedelta(days=7)
        assert world.notifier.of_type(NotificationType.PROPOSAL_VOTING_OPENED)

    async def test_only_author_submits(self, world: GovernanceWorld) -> None:
        proposal = await world.draft()
        with pytest.raises(PermissionDeniedError):
            await world.container.lifecycle.submit_for_review(
                proposal.id, world.founder.user_id
            )

    async def test_submit_twice_is_invalid_state(self, world: GovernanceWorld) -> None:
        proposal = await world.pending()
        with pytest.raises(InvalidStateError):
            await world.container.lifecycle.submit_for_review(
                proposal.id, world.conductor.user_id
            )

    async def test_missing_proposal(self, world: GovernanceWorld) -> None:
        with pytest.raises(ProposalNotFoundError):
            await world.container.lifecycle.submit_for_review(
                uuid7(), world.conductor.user_id
            )

    async def test_notifier_failure_does_not_undo_submit(
        self, world: GovernanceWorld
    ) -> None:
        world.notifier.set_fail()
        proposal = await world.pending()

        stored = await world.repository.get(proposal.id)
        assert stored is not None
        assert stored.status == ProposalStatus.PENDING_REVIEW


class TestReview:
    async def test_approve_opens_voting(self, world: GovernanceWorld) -> None:
        pending = await world.pending()
        proposal = await world.container.lifecycle.approve_proposal(
            pending.id, world.moderator.user_id
        )

        assert proposal.status == ProposalStatus.OPEN
        assert proposal.reviewed_by_id == world.moderator.user_id
        assert proposal.voting_ends_at == world.clock.now() + timedelta(days=7)
        history = await world.container.lifecycle.get_review_history(
            proposal.id, world.voter_a.user_id
        )
        assert [record.action for record in history] == [ReviewAction.APPROVED]

    async def test_author_cannot_review_own(self, world: GovernanceWorld) -> None:
        pending = await world.pending(author=world.governor)
        with pytest.raises(PermissionDeniedError, match="own proposals"):
            await world.container.lifecycle.approve_proposal(
                pending.id, world.governor.user_id
            )

    async def test_conductor_cannot_review(self, world: GovernanceWorld) -> None:
        pending = await world.pending(author=world.moderator)
        with pytest.raises(PermissionDeniedError, match="cannot review"):
            await world.container.lifecycle.approve_proposal(
                pending.id, world.conductor.user_id
            )

    async def test_moderator_cannot_review_governor(self, world: GovernanceWorld) -> None:
        pending = await world.pending(author=world.governor)
        with pytest.raises(PermissionDeniedError, match="senior"):
            await world.container.lifecycle.approve_proposal(
                pending.id, world.moderator.user_id
            )

    async def test_moderator_may_review_founder(self, world: GovernanceWorld) -> None:
        pending = await world.pending(author=world.founder)
        proposal = await world.container.lifecycle.approve_proposal(
            pending.id, world.moderator.user_id
        )
        assert proposal.status == ProposalStatus.OPEN

    async def test_reject_needs_reason(self, world: GovernanceWorld) -> None:
        pending = await world.pending()
        with pytest.raises(ValidationError):
            await world.container.lifecycle.reject_proposal(
                pending.id, world.governor.user_id, "no"
            )
        stored = await world.repository.get(pending.id)
        assert stored is not None
        assert stored.status == ProposalStatus.PENDING_REVIEW

    async def test_reject_records_reason(self, world: GovernanceWorld) -> None:
        pending = await world.pending()
        proposal = await world.container.lifecycle.reject_proposal(
            pending.id, world.governor.user_id, REASON
        )

        assert proposal.status == ProposalStatus.REJECTED
        assert proposal.rejection_reason == REASON
        rejected = world.notifier.of_type(NotificationType.PROPOSAL_REJECTED_IN_REVIEW)
        assert rejected[0].recipient_ids == (world.conductor.user_id,)
        assert rejected[0].payload["remaining_submissions"] == 2

    async def test_approve_draft_is_invalid_state(self, world: GovernanceWorld) -> None:
        draft = await world.draft()
        with pytest.raises(InvalidStateError):
            await world.container.lifecycle.approve_proposal(
                draft.id, world.governor.user_id
            )

    async def test_pending_list_respects_rank(self, world: GovernanceWorld) -> None:
        from_conductor = await world.pending()
        await world.pending(author=world.governor)

        visible = await world.container.lifecycle.list_pending_review(
            world.band_id, world.moderator.user_id
        )
        assert [p.id for p in visible] == [from_conductor.id]


class TestWithdrawAndResubmit:
    async def test_withdraw(self, world: GovernanceWorld) -> None:
        pending = await world.pending()
        proposal = await world.container.lifecycle.withdraw_proposal(
            pending.id, world.conductor.user_id
        )
        assert proposal.status == ProposalStatus.WITHDRAWN

    async def test_only_author_withdraws(self, world: GovernanceWorld) -> None:
        pending = await world.pending()
        with pytest.raises(PermissionDeniedError):
            await world.container.lifecycle.withdraw_proposal(
                pending.id, world.founder.user_id
            )

    async def test_withdraw_open_is_invalid_state(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        with pytest.raises(InvalidStateError):
            await world.container.lifecycle.withdraw_proposal(
                proposal.id, world.conductor.user_id
            )

    async def test_resubmit_with_edit_records_history(self, world: GovernanceWorld) -> None:
        pending = await world.pending()
        await world.container.lifecycle.reject_proposal(
            pending.id, world.governor.user_id, REASON
        )

        proposal = await world.container.lifecycle.resubmit_proposal(
            pending.id,
            world.conductor.user_id,
            content=make_content(title="Buy a new PA system for outdoor shows"),
            edit_reason="Scoped to outdoor shows",
        )

        assert proposal.status == ProposalStatus.PENDING_REVIEW
        assert proposal.submission_count == 2
        assert proposal.rejection_reason is None
        history = await world.container.edits.get_edit_history(
            proposal.id, world.conductor.user_id
        )
        assert history[0].changed_fields == ("title",)
        assert history[0].status_at_edit == ProposalStatus.REJECTED

    async def test_fourth_submission_exceeds_limit(self, world: GovernanceWorld) -> None:
        lifecycle = world.container.lifecycle
        proposal = await world.pending()
        for _ in range(2):
            await lifecycle.reject_proposal(proposal.id, world.governor.user_id, REASON)
            proposal = await lifecycle.resubmit_proposal(proposal.id, world.conductor.user_id)
        await lifecycle.reject_proposal(proposal.id, world.governor.user_id, REASON)
        assert proposal.submission_count == 3

        with pytest.raises(LimitExceededError):
            await lifecycle.resubmit_proposal(proposal.id, world.conductor.user_id)
        stored = await world.repository.get(proposal.id)
        assert stored is not None
        assert stored.status == ProposalStatus.REJECTED
        assert stored.is_terminal

    async def test_resubmit_after_failed_vote_clears_votes(
        self, world: GovernanceWorld
    ) -> None:
        proposal = await world.open()
        for member in (world.founder, world.voter_a, world.voter_b):
            await world.container.votes.cast_vote(proposal.id, member.user_id, VoteChoice.NO)
        closed = await world.container.lifecycle.close_proposal(
            proposal.id, world.conductor.user_id
        )
        assert closed.status == ProposalStatus.REJECTED

        resubmitted = await world.container.lifecycle.resubmit_proposal(
            proposal.id, world.conductor.user_id
        )
        assert resubmitted.final_tally is None
        assert resubmitted.closed_at is None
        assert await world.container.votes.list_votes(proposal.id) == []


class TestCloseAndArchive:
    async def test_close_approves_on_majority(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        votes = world.container.votes
        await votes.cast_vote(proposal.id, world.founder.user_id, VoteChoice.YES)
        await votes.cast_vote(proposal.id, world.voter_a.user_id, VoteChoice.YES)
        await votes.cast_vote(proposal.id, world.voter_b.user_id, VoteChoice.NO)

        result = await world.container.lifecycle.close_proposal(
            proposal.id, world.conductor.user_id
        )

        assert result.status == ProposalStatus.APPROVED
        assert result.tally.eligible_voters == 6
        assert result.proposal.final_tally == result.tally
        assert result.proposal.closed_at == world.clock.now()
        closed = world.notifier.of_type(NotificationType.PROPOSAL_CLOSED)
        assert len(closed[0].recipient_ids) == 7

    async def test_close_rejects_without_quorum(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        await world.container.votes.cast_vote(
            proposal.id, world.founder.user_id, VoteChoice.YES
        )

        result = await world.container.lifecycle.close_proposal(
            proposal.id, world.governor.user_id
        )
        assert result.status == ProposalStatus.REJECTED
        assert not result.tally.quorum_met

    async def test_moderator_cannot_close(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        with pytest.raises(PermissionDeniedError):
            await world.container.lifecycle.close_proposal(
                proposal.id, world.moderator.user_id
            )

    async def test_second_close_is_invalid_state(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        await world.container.lifecycle.close_proposal(proposal.id, world.founder.user_id)
        with pytest.raises(InvalidStateError):
            await world.container.lifecycle.close_proposal(
                proposal.id, world.founder.user_id
            )
        assert world.repository.close_commits == 1

    async def test_archive_after_close(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        await world.container.lifecycle.close_proposal(proposal.id, world.founder.user_id)

        archived = await world.container.lifecycle.archive_proposal(
            proposal.id, world.conductor.user_id
        )
        assert archived.status == ProposalStatus.CLOSED
        assert archived.is_terminal

    async def test_archive_open_is_invalid_state(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        with pytest.raises(InvalidStateError):
            await world.container.lifecycle.archive_proposal(
                proposal.id, world.founder.user_id
            )

    async def test_sweep_closes_only_elapsed(self, world: GovernanceWorld) -> None:
        early = await world.open()
        world.clock.advance(delta=timedelta(days=3))
        late = await world.open()
        world.clock.advance(delta=timedelta(days=5))

        result = await world.container.lifecycle.close_elapsed_proposals(world.band_id)

        assert [closed.proposal.id for closed in result.closed] == [early.id]
        stored_late = await world.repository.get(late.id)
        assert stored_late is not None
        assert stored_late.status == ProposalStatus.OPEN
        closed_events = [e for e in world.audit.events if e.event_type == "proposal.closed"]
        assert closed_events[0].actor_id is None
