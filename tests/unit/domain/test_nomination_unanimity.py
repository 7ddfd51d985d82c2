"""Unit tests for founder nomination evaluation."""

from datetime import datetime, timezone

from uuid6 import uuid7

from bandgov.domain.governance.nomination_tally import evaluate_nomination
from bandgov.domain.models.founder_nomination import NominationStatus, NominationVote
from bandgov.domain.models.vote import VoteChoice

NOW = datetime(2026, 1, 15, tzinfo=timezone.utc)
NOMINATION_ID = uuid7()


def _vote(founder_id, choice: VoteChoice) -> NominationVote:
    return NominationVote(
        nomination_id=NOMINATION_ID, founder_user_id=founder_id, choice=choice, cast_at=NOW
    )


class TestEvaluateNomination:
    def test_any_no_rejects(self) -> None:
        a, b, c = uuid7(), uuid7(), uuid7()
        verdict = evaluate_nomination(
            [_vote(a, VoteChoice.YES), _vote(b, VoteChoice.YES), _vote(c, VoteChoice.NO)],
            [a, b, c],
        )
        assert verdict.status == NominationStatus.REJECTED
        assert verdict.is_decided
        assert verdict.no == 1

    def test_all_yes_approves(self) -> None:
        a, b = uuid7(), uuid7()
        verdict = evaluate_nomination(
            [_vote(a, VoteChoice.YES), _vote(b, VoteChoice.YES)], [a, b]
        )
        assert verdict.status == NominationStatus.APPROVED
        assert verdict.pending_founder_ids == frozenset()

    def test_missing_vote_stays_open(self) -> None:
        a, b = uuid7(), uuid7()
        verdict = evaluate_nomination([_vote(a, VoteChoice.YES)], [a, b])
        assert verdict.status == NominationStatus.OPEN
        assert verdict.pending_founder_ids == frozenset({b})

    def test_abstain_is_undecided(self) -> None:
        a, b = uuid7(), uuid7()
        verdict = evaluate_nomination(
            [_vote(a, VoteChoice.YES), _vote(b, VoteChoice.ABSTAIN)], [a, b]
        )
        assert verdict.status == NominationStatus.OPEN
        assert b in verdict.pending_founder_ids

    def test_votes_from_former_founders_ignored(self) -> None:
        current, former = uuid7(), uuid7()
        verdict = evaluate_nomination(
            [_vote(current, VoteChoice.YES), _vote(former, VoteChoice.NO)], [current]
        )
        assert verdict.status == NominationStatus.APPROVED

    def test_no_founders_never_approves(self) -> None:
        verdict = evaluate_nomination([], [])
        assert verdict.status == NominationStatus.OPEN
