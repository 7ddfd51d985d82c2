"""Unit tests for ProposalEditService (Edit Guard)."""

from datetime import timedelta

import pytest
from uuid6 import uuid7

from bandgov.domain.errors import (
    IntegrityBlockedError,
    InvalidStateError,
    PermissionDeniedError,
    ValidationError,
)
from bandgov.domain.models.notification import NotificationType
from bandgov.domain.models.proposal import ProposalPriority, ProposalStatus, ProposalType
from bandgov.domain.models.vote import VoteChoice
from tests.helpers import GovernanceWorld
from tests.helpers.governance_world import BLOCKED_TERM, make_content

NEW_CONTENT = make_content(
    description="Our current PA cannot cover outdoor venues or the new club."
)


class TestEditOpenProposal:
    async def test_edit_resets_votes_and_window(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        voters = (world.founder, world.voter_a, world.voter_b)
        for member in voters:
            await world.container.votes.cast_vote(proposal.id, member.user_id, VoteChoice.YES)
        world.clock.advance(delta=timedelta(days=1))

        result = await world.container.edits.edit_proposal(
            proposal.id, world.conductor.user_id, NEW_CONTENT, edit_reason="fixed budget"
        )

        assert result.votes_reset == 3
        assert result.proposal.edit_count == proposal.edit_count + 1
        assert result.proposal.status == ProposalStatus.OPEN
        assert proposal.voting_ends_at is not None
        assert result.proposal.voting_ends_at is not None
        assert result.proposal.voting_ends_at > proposal.voting_ends_at
        assert await world.container.votes.list_votes(proposal.id) == []
        _, reason, notified = world.notifier.vote_resets[0]
        assert reason == "fixed budget"
        assert set(notified) == {member.user_id for member in voters}

    async def test_editor_not_notified_of_own_reset(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        await world.container.votes.cast_vote(
            proposal.id, world.conductor.user_id, VoteChoice.YES
        )

        result = await world.container.edits.edit_proposal(
            proposal.id, world.conductor.user_id, NEW_CONTENT, edit_reason="fixed budget"
        )
        assert result.votes_reset == 1
        assert world.notifier.vote_resets == []

    async def test_short_reason_keeps_votes(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        await world.container.votes.cast_vote(proposal.id, world.voter_a.user_id, VoteChoice.NO)

        with pytest.raises(ValidationError):
            await world.container.edits.edit_proposal(
                proposal.id, world.conductor.user_id, NEW_CONTENT, edit_reason="typo"
            )
        assert len(await world.container.votes.list_votes(proposal.id)) == 1
        stored = await world.repository.get(proposal.id)
        assert stored is not None
        assert stored.edit_count == 0

    async def test_blocked_edit_changes_nothing(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        blocked = make_content(description=f"We should {BLOCKED_TERM} the merch money now.")
        with pytest.raises(IntegrityBlockedError):
            await world.container.edits.edit_proposal(
                proposal.id, world.conductor.user_id, blocked, edit_reason="fixed budget"
            )
        stored = await world.repository.get(proposal.id)
        assert stored == proposal


class TestEditOtherStatuses:
    async def test_draft_edit_records_history(self, world: GovernanceWorld) -> None:
        draft = await world.draft()
        result = await world.container.edits.edit_proposal(
            draft.id,
            world.conductor.user_id,
            NEW_CONTENT,
            proposal_type=ProposalType.BUDGET,
            priority=ProposalPriority.HIGH,
        )

        assert result.proposal.type == ProposalType.BUDGET
        assert result.proposal.priority == ProposalPriority.HIGH
        assert result.record.changed_fields == ("description",)
        assert result.record.reason is None
        assert len(result.record.content_hash) == 64
        history = await world.container.edits.get_edit_history(
            draft.id, world.observer.user_id
        )
        assert history == [result.record]

    async def test_pending_edit_notifies_reviewers(self, world: GovernanceWorld) -> None:
        pending = await world.pending()
        await world.container.edits.edit_proposal(
            pending.id, world.conductor.user_id, NEW_CONTENT
        )

        edited = world.notifier.of_type(NotificationType.PROPOSAL_EDITED_DURING_REVIEW)
        assert set(edited[0].recipient_ids) == {
            world.founder.user_id,
            world.governor.user_id,
            world.moderator.user_id,
        }

    async def test_non_author_cannot_edit(self, world: GovernanceWorld) -> None:
        draft = await world.draft()
        with pytest.raises(PermissionDeniedError):
            await world.container.edits.edit_proposal(
                draft.id, world.founder.user_id, NEW_CONTENT
            )

    async def test_approved_proposal_not_editable(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        for member in (world.founder, world.voter_a, world.voter_b):
            await world.container.votes.cast_vote(proposal.id, member.user_id, VoteChoice.YES)
        await world.container.lifecycle.close_proposal(proposal.id, world.conductor.user_id)

        with pytest.raises(InvalidStateError):
            await world.container.edits.edit_proposal(
                proposal.id, world.conductor.user_id, NEW_CONTENT, edit_reason="too late now"
            )

    async def test_history_hidden_from_non_members(self, world: GovernanceWorld) -> None:
        draft = await world.draft()
        with pytest.raises(PermissionDeniedError):
            await world.container.edits.get_edit_history(draft.id, uuid7())
