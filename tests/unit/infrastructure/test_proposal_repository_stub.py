"""Unit tests for ProposalRepositoryStub atomic operations."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest
from uuid6 import uuid7

from bandgov.domain.errors import ConcurrencyConflictError, InvalidStateError
from bandgov.domain.models.proposal import Proposal, ProposalStatus
from bandgov.domain.models.tally import TallyResult
from bandgov.domain.models.vote import Vote, VoteChoice
from bandgov.infrastructure.stubs import ProposalRepositoryStub
from tests.helpers.governance_world import make_content

NOW = datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc)


def _open_proposal() -> Proposal:
    return Proposal(
        id=uuid7(),
        band_id=uuid7(),
        created_by_id=uuid7(),
        content=make_content(),
        status=ProposalStatus.OPEN,
        submission_count=1,
        voting_started_at=NOW,
        voting_ends_at=NOW + timedelta(days=7),
    )


def _vote(proposal: Proposal, user_id=None, choice=VoteChoice.YES, at=NOW) -> Vote:
    return Vote(
        id=uuid7(),
        proposal_id=proposal.id,
        user_id=user_id or uuid7(),
        choice=choice,
        cast_at=at,
        updated_at=at,
    )


def _approve(proposal: Proposal, votes: list[Vote]) -> tuple[Proposal, TallyResult]:
    tally = TallyResult(
        yes=len(votes),
        no=0,
        abstain=0,
        total=len(votes),
        eligible_voters=len(votes),
        percentage_yes=100.0,
        percentage_no=0.0,
        participation_percentage=100.0,
        quorum_required=50,
        quorum_met=True,
        passed=True,
    )
    return replace(proposal, status=ProposalStatus.APPROVED, final_tally=tally), tally


@pytest.fixture
async def repository() -> ProposalRepositoryStub:
    return ProposalRepositoryStub()


@pytest.fixture
async def proposal(repository: ProposalRepositoryStub) -> Proposal:
    stored = _open_proposal()
    await repository.save(stored)
    return stored


class TestSave:
    async def test_duplicate_id_rejected(
        self, repository: ProposalRepositoryStub, proposal: Proposal
    ) -> None:
        with pytest.raises(ValueError):
            await repository.save(proposal)

    async def test_list_by_band_filters_status(
        self, repository: ProposalRepositoryStub, proposal: Proposal
    ) -> None:
        assert await repository.list_by_band(proposal.band_id) == [proposal]
        assert await repository.list_by_band(proposal.band_id, ProposalStatus.DRAFT) == []


class TestUpsertVote:
    async def test_overwrite_keeps_row_identity(
        self, repository: ProposalRepositoryStub, proposal: Proposal
    ) -> None:
        first, created = await repository.upsert_vote(_vote(proposal), NOW)
        later = NOW + timedelta(hours=1)
        second, created_again = await repository.upsert_vote(
            _vote(proposal, first.user_id, VoteChoice.NO, later), later
        )

        assert created is True
        assert created_again is False
        assert second.id == first.id
        assert second.cast_at == NOW
        assert second.updated_at == later
        assert second.choice == VoteChoice.NO
        assert await repository.list_votes(proposal.id) == [second]

    async def test_rejects_after_window(
        self, repository: ProposalRepositoryStub, proposal: Proposal
    ) -> None:
        late = NOW + timedelta(days=7, seconds=1)
        with pytest.raises(InvalidStateError, match="Voting period has ended"):
            await repository.upsert_vote(_vote(proposal, at=late), late)


class TestCompareAndSet:
    async def test_stale_edit_count_conflicts(
        self, repository: ProposalRepositoryStub, proposal: Proposal
    ) -> None:
        edited = replace(proposal, edit_count=1)
        await repository.update_cas(edited, ProposalStatus.OPEN, 0)

        with pytest.raises(ConcurrencyConflictError):
            await repository.update_cas(edited, ProposalStatus.OPEN, 0)

    async def test_apply_edit_returns_deleted_votes(
        self, repository: ProposalRepositoryStub, proposal: Proposal
    ) -> None:
        vote, _ = await repository.upsert_vote(_vote(proposal), NOW)

        deleted = await repository.apply_edit(
            replace(proposal, edit_count=1), ProposalStatus.OPEN, 0, reset_votes=True
        )

        assert deleted == [vote]
        assert await repository.list_votes(proposal.id) == []


class TestCloseVoting:
    async def test_close_runs_resolver_once(
        self, repository: ProposalRepositoryStub, proposal: Proposal
    ) -> None:
        await repository.upsert_vote(_vote(proposal), NOW)

        closed, tally = await repository.close_voting(proposal.id, 0, _approve)

        assert closed.status == ProposalStatus.APPROVED
        assert tally.yes == 1
        assert repository.close_commits == 1
        with pytest.raises(InvalidStateError):
            await repository.close_voting(proposal.id, 0, _approve)
        assert repository.close_commits == 1

    async def test_close_after_edit_conflicts(
        self, repository: ProposalRepositoryStub, proposal: Proposal
    ) -> None:
        await repository.update_cas(
            replace(proposal, edit_count=1), ProposalStatus.OPEN, 0
        )

        with pytest.raises(ConcurrencyConflictError):
            await repository.close_voting(proposal.id, 0, _approve)
        assert repository.close_commits == 0
