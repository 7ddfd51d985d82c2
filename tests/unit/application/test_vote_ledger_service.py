"""Unit tests for VoteLedgerService."""

from datetime import timedelta

import pytest

from bandgov.domain.errors import InvalidStateError, PermissionDeniedError, ValidationError
from bandgov.domain.models.proposal import ProposalType
from bandgov.domain.models.vote import VoteChoice
from tests.helpers import GovernanceWorld


class TestCastVote:
    async def test_first_vote_creates_row(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        ack = await world.container.votes.cast_vote(
            proposal.id, world.voter_a.user_id, VoteChoice.YES, comment="  Loud is good  "
        )

        assert ack.created
        assert ack.message == "Vote recorded"
        assert ack.vote.comment == "Loud is good"
        assert ack.vote.cast_at == world.clock.now()

    async def test_second_vote_overwrites_single_row(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        votes = world.container.votes
        first = await votes.cast_vote(proposal.id, world.voter_a.user_id, VoteChoice.YES)
        world.clock.advance(seconds=60)
        second = await votes.cast_vote(proposal.id, world.voter_a.user_id, VoteChoice.NO)

        rows = await votes.list_votes(proposal.id)
        assert len(rows) == 1
        assert rows[0].choice == VoteChoice.NO
        assert not second.created
        assert second.vote.id == first.vote.id
        assert second.vote.cast_at == first.vote.cast_at
        assert second.vote.updated_at == world.clock.now()

    async def test_observer_cannot_vote(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        with pytest.raises(PermissionDeniedError):
            await world.container.votes.cast_vote(
                proposal.id, world.observer.user_id, VoteChoice.YES
            )

    async def test_permission_checked_before_status(self, world: GovernanceWorld) -> None:
        draft = await world.draft()
        with pytest.raises(PermissionDeniedError):
            await world.container.votes.cast_vote(
                draft.id, world.observer.user_id, VoteChoice.YES
            )

    async def test_vote_on_pending_is_invalid_state(self, world: GovernanceWorld) -> None:
        pending = await world.pending()
        with pytest.raises(InvalidStateError):
            await world.container.votes.cast_vote(
                pending.id, world.voter_a.user_id, VoteChoice.YES
            )

    async def test_vote_at_deadline_accepted(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        world.clock.advance(delta=timedelta(days=7))
        ack = await world.container.votes.cast_vote(
            proposal.id, world.voter_a.user_id, VoteChoice.YES
        )
        assert ack.created

    async def test_vote_after_deadline_rejected(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        world.clock.advance(delta=timedelta(days=7, seconds=1))
        with pytest.raises(InvalidStateError, match="ended"):
            await world.container.votes.cast_vote(
                proposal.id, world.voter_a.user_id, VoteChoice.YES
            )
        assert await world.container.votes.list_votes(proposal.id) == []

    async def test_abstain_on_dissolution_rejected(self, world: GovernanceWorld) -> None:
        proposal = await world.open(proposal_type=ProposalType.DISSOLUTION)
        with pytest.raises(ValidationError) as exc_info:
            await world.container.votes.cast_vote(
                proposal.id, world.voter_a.user_id, VoteChoice.ABSTAIN
            )
        assert exc_info.value.field == "choice"
        assert await world.container.votes.list_votes(proposal.id) == []

    async def test_vote_is_audited(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        await world.container.votes.cast_vote(
            proposal.id, world.voter_a.user_id, VoteChoice.ABSTAIN
        )
        event = world.audit.events[-1]
        assert event.event_type == "proposal.vote_cast"
        assert event.details == {"choice": "ABSTAIN", "replaced": False}


class TestPreviewTally:
    async def test_preview_matches_current_votes(self, world: GovernanceWorld) -> None:
        proposal = await world.open()
        votes = world.container.votes
        await votes.cast_vote(proposal.id, world.voter_a.user_id, VoteChoice.YES)
        await votes.cast_vote(proposal.id, world.voter_b.user_id, VoteChoice.YES)
        await votes.cast_vote(proposal.id, world.founder.user_id, VoteChoice.ABSTAIN)

        tally = await votes.preview_tally(proposal.id)

        assert tally.yes == 2
        assert tally.abstain == 1
        assert tally.percentage_yes == 100.0
        assert tally.participation_percentage == 50.0
        assert tally.passed
