"""Unit tests for the edit guard, resubmission limiter and lifecycle table."""

import pytest
from uuid6 import uuid7

from bandgov.domain.errors import InvalidStateError, LimitExceededError, ValidationError
from bandgov.domain.errors.governance import ErrorKind
from bandgov.domain.governance.edit_guard import (
    EDITABLE_STATUSES,
    plan_edit,
    validate_edit_reason,
)
from bandgov.domain.governance.lifecycle import (
    EVENT_SOURCE_STATUSES,
    LifecycleEvent,
    require_status,
)
from bandgov.domain.governance.reasons import require_reason
from bandgov.domain.governance.resubmission import ensure_can_resubmit
from bandgov.domain.models.proposal import (
    Proposal,
    ProposalContent,
    ProposalStatus,
)


def _proposal(status: ProposalStatus, submission_count: int = 1) -> Proposal:
    return Proposal(
        id=uuid7(),
        band_id=uuid7(),
        created_by_id=uuid7(),
        content=ProposalContent(
            title="Hire a sound engineer",
            description="Live mixes are inconsistent from venue to venue.",
        ),
        status=status,
        submission_count=submission_count,
    )


class TestEditGuard:
    def test_open_edit_requires_reason_and_resets(self) -> None:
        plan = plan_edit(ProposalStatus.OPEN)
        assert plan.requires_reason
        assert plan.resets_votes
        assert not plan.notifies_reviewers

    def test_pending_review_notifies_reviewers(self) -> None:
        plan = plan_edit(ProposalStatus.PENDING_REVIEW)
        assert plan.notifies_reviewers
        assert not plan.resets_votes

    @pytest.mark.parametrize("status", [ProposalStatus.APPROVED, ProposalStatus.CLOSED])
    def test_final_statuses_not_editable(self, status: ProposalStatus) -> None:
        assert status not in EDITABLE_STATUSES
        with pytest.raises(InvalidStateError):
            plan_edit(status)

    def test_open_edit_reason_too_short(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_edit_reason(plan_edit(ProposalStatus.OPEN), "typo")
        assert exc_info.value.field == "edit_reason"

    def test_open_edit_reason_of_twelve_chars_accepted(self) -> None:
        assert validate_edit_reason(plan_edit(ProposalStatus.OPEN), " fixed budget ") == "fixed budget"

    def test_draft_reason_optional(self) -> None:
        plan = plan_edit(ProposalStatus.DRAFT)
        assert validate_edit_reason(plan, None) is None
        assert validate_edit_reason(plan, "   ") is None


class TestReasons:
    def test_reason_trimmed_before_length_check(self) -> None:
        with pytest.raises(ValidationError, match="at least 10"):
            require_reason("   short    ", "rejection_reason")

    def test_missing_reason(self) -> None:
        with pytest.raises(ValidationError):
            require_reason(None, "reason")


class TestResubmissionLimit:
    def test_third_submission_allowed(self) -> None:
        ensure_can_resubmit(_proposal(ProposalStatus.REJECTED, submission_count=2))

    def test_fourth_submission_refused(self) -> None:
        proposal = _proposal(ProposalStatus.WITHDRAWN, submission_count=3)
        with pytest.raises(LimitExceededError) as exc_info:
            ensure_can_resubmit(proposal)
        assert exc_info.value.kind == ErrorKind.LIMIT_EXCEEDED
        assert exc_info.value.limit == 3
        assert exc_info.value.proposal_id == proposal.id


class TestLifecycleTable:
    def test_every_event_has_sources(self) -> None:
        assert set(EVENT_SOURCE_STATUSES) == set(LifecycleEvent)

    def test_event_sources_are_legal_matrix_edges(self) -> None:
        for sources in EVENT_SOURCE_STATUSES.values():
            for status in sources:
                assert status.valid_transitions()

    def test_approve_from_draft_refused(self) -> None:
        with pytest.raises(InvalidStateError, match="expected PENDING_REVIEW"):
            require_status(_proposal(ProposalStatus.DRAFT, 0), LifecycleEvent.APPROVE)

    def test_archive_from_open_refused(self) -> None:
        with pytest.raises(InvalidStateError):
            require_status(_proposal(ProposalStatus.OPEN), LifecycleEvent.ARCHIVE)

    def test_archive_from_rejected_allowed(self) -> None:
        require_status(_proposal(ProposalStatus.REJECTED), LifecycleEvent.ARCHIVE)
