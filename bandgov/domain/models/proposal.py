"""Proposal domain model and lifecycle state machine.

State Machine:
    DRAFT -> PENDING_REVIEW (submit, band requires review)
    DRAFT -> OPEN (submit, band does not require review)
    PENDING_REVIEW -> OPEN (reviewer approves)
    PENDING_REVIEW -> REJECTED (reviewer rejects with reason)
    PENDING_REVIEW -> WITHDRAWN (author withdraws)
    REJECTED -> PENDING_REVIEW | OPEN (resubmit, capped)
    WITHDRAWN -> PENDING_REVIEW | OPEN (resubmit, capped)
    OPEN -> APPROVED | REJECTED (close, per tally verdict)
    APPROVED -> CLOSED (archive)
    REJECTED -> CLOSED (archive)

Final States:
    APPROVED (until archived) and CLOSED accept no further lifecycle
    events apart from archiving. REJECTED and WITHDRAWN become terminal
    once the proposal has used all of its submissions.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from bandgov.domain.errors.state_transition import InvalidStateTransitionError
from bandgov.domain.errors.validation import ValidationError
from bandgov.domain.models.integrity import IntegrityIssue
from bandgov.domain.models.tally import TallyResult

MAX_SUBMISSIONS: int = 3
MIN_TITLE_LENGTH: int = 5
MIN_DESCRIPTION_LENGTH: int = 20


class ProposalType(Enum):
    """Classification of a proposal; selects the tally rule.

    DISSOLUTION uses the unanimous-rejection rule, every other type uses
    the Band's voting method.
    """

    GENERAL = "GENERAL"
    BUDGET = "BUDGET"
    PROJECT = "PROJECT"
    POLICY = "POLICY"
    MEMBERSHIP = "MEMBERSHIP"
    DISSOLUTION = "DISSOLUTION"


class ProposalPriority(Enum):
    """Author-assigned urgency."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class ProposalStatus(Enum):
    """Lifecycle status of a proposal.

    States:
        DRAFT: Created, not yet submitted
        PENDING_REVIEW: Waiting for a reviewer
        OPEN: Voting in progress
        APPROVED: Tally passed
        REJECTED: Rejected in review or tally failed
        CLOSED: Archived
        WITHDRAWN: Pulled from review by the author
    """

    DRAFT = "DRAFT"
    PENDING_REVIEW = "PENDING_REVIEW"
    OPEN = "OPEN"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CLOSED = "CLOSED"
    WITHDRAWN = "WITHDRAWN"

    def valid_transitions(self) -> frozenset[ProposalStatus]:
        """Get valid transitions from this status.

        Returns:
            Frozenset of statuses this status can transition to.
        """
        return STATUS_TRANSITION_MATRIX.get(self, frozenset())

    def is_final(self) -> bool:
        """True for statuses that never re-enter the lifecycle."""
        return self in FINAL_STATUSES


FINAL_STATUSES: frozenset[ProposalStatus] = frozenset(
    {ProposalStatus.APPROVED, ProposalStatus.CLOSED}
)

RESUBMITTABLE_STATUSES: frozenset[ProposalStatus] = frozenset(
    {ProposalStatus.REJECTED, ProposalStatus.WITHDRAWN}
)

STATUS_TRANSITION_MATRIX: dict[ProposalStatus, frozenset[ProposalStatus]] = {
    ProposalStatus.DRAFT: frozenset(
        {ProposalStatus.PENDING_REVIEW, ProposalStatus.OPEN}
    ),
    ProposalStatus.PENDING_REVIEW: frozenset(
        {ProposalStatus.OPEN, ProposalStatus.REJECTED, ProposalStatus.WITHDRAWN}
    ),
    ProposalStatus.OPEN: frozenset({ProposalStatus.APPROVED, ProposalStatus.REJECTED}),
    ProposalStatus.REJECTED: frozenset(
        {ProposalStatus.PENDING_REVIEW, ProposalStatus.OPEN, ProposalStatus.CLOSED}
    ),
    ProposalStatus.WITHDRAWN: frozenset(
        {ProposalStatus.PENDING_REVIEW, ProposalStatus.OPEN}
    ),
    ProposalStatus.APPROVED: frozenset({ProposalStatus.CLOSED}),
    ProposalStatus.CLOSED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class ProposalContent:
    """The content fields of a proposal.

    Opaque to the lifecycle; inspected by the Integrity Hook and diffed
    for the edit history.
    """

    title: str
    description: str
    problem_statement: str | None = None
    expected_outcome: str | None = None
    risks_and_concerns: str | None = None
    budget_requested: Decimal | None = None
    budget_breakdown: str | None = None
    funding_source: str | None = None
    proposed_start_date: date | None = None
    proposed_end_date: date | None = None
    milestones: str | None = None
    external_links: tuple[str, ...] = ()

    def validation_errors(self) -> list[tuple[str, str]]:
        """Return (field, message) pairs for invalid fields."""
        errors: list[tuple[str, str]] = []
        if len(self.title.strip()) < MIN_TITLE_LENGTH:
            errors.append(
                ("title", f"Title must be at least {MIN_TITLE_LENGTH} characters")
            )
        if len(self.description.strip()) < MIN_DESCRIPTION_LENGTH:
            errors.append(
                (
                    "description",
                    f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters",
                )
            )
        if self.budget_requested is not None and self.budget_requested < 0:
            errors.append(("budget_requested", "Budget requested cannot be negative"))
        if (
            self.proposed_start_date is not None
            and self.proposed_end_date is not None
            and self.proposed_end_date < self.proposed_start_date
        ):
            errors.append(
                ("proposed_end_date", "Proposed end date is before the start date")
            )
        return errors

    def ensure_valid(self) -> None:
        """Raise ValidationError for the first invalid field."""
        errors = self.validation_errors()
        if errors:
            field_name, message = errors[0]
            raise ValidationError(message, field=field_name)

    def to_integrity_payload(self) -> dict[str, Any]:
        """Fields handed to the Integrity Hook, None values omitted."""
        payload = self.to_dict()
        return {key: value for key, value in payload.items() if value is not None}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible types."""
        return {
            "title": self.title,
            "description": self.description,
            "problem_statement": self.problem_statement,
            "expected_outcome": self.expected_outcome,
            "risks_and_concerns": self.risks_and_concerns,
            "budget_requested": (
                str(self.budget_requested)
                if self.budget_requested is not None
                else None
            ),
            "budget_breakdown": self.budget_breakdown,
            "funding_source": self.funding_source,
            "proposed_start_date": (
                self.proposed_start_date.isoformat()
                if self.proposed_start_date is not None
                else None
            ),
            "proposed_end_date": (
                self.proposed_end_date.isoformat()
                if self.proposed_end_date is not None
                else None
            ),
            "milestones": self.milestones,
            "external_links": list(self.external_links),
        }

    def changed_fields(self, other: ProposalContent) -> list[str]:
        """Names of fields whose value differs in ``other``."""
        return [
            f.name
            for f in fields(self)
            if getattr(self, f.name) != getattr(other, f.name)
        ]

    def canonical_content_bytes(self) -> bytes:
        """Return canonical bytes for content hashing."""
        return json.dumps(self.to_dict(), sort_keys=True).encode("utf-8")


@dataclass(frozen=True, eq=True)
class Proposal:
    """A votable unit of collective decision-making.

    Frozen: every change produces a new instance through one of the
    ``with_*`` methods, which enforce the transition matrix.

    Attributes:
        id: UUIDv7 identifier.
        band_id: Owning Band.
        created_by_id: Author; sole holder of edit and withdraw rights.
        content: Title, description and structured fields.
        type: Classification; selects the tally rule.
        priority: Author-assigned urgency.
        status: Lifecycle status.
        submission_count: Submissions made so far (max 3).
        edit_count: Content edits made so far.
        voting_started_at: Start of the current voting window.
        voting_ends_at: End of the current voting window; set once the
            proposal has been OPEN.
        closed_at: When voting was closed.
        rejection_reason: Reviewer's reason when rejected in review.
        reviewed_by_id: Reviewer of the latest review decision.
        reviewed_at: Time of the latest review decision.
        submitted_at: Time of the latest submission.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
        last_edited_at: Time of the latest content edit.
        last_edited_by_id: Author of the latest content edit.
        final_tally: Tally snapshot written when voting closed.
        integrity_flags: Integrity warnings the author chose to override.
    """

    id: UUID
    band_id: UUID
    created_by_id: UUID
    content: ProposalContent
    type: ProposalType = field(default=ProposalType.GENERAL)
    priority: ProposalPriority = field(default=ProposalPriority.MEDIUM)
    status: ProposalStatus = field(default=ProposalStatus.DRAFT)
    submission_count: int = field(default=0)
    edit_count: int = field(default=0)
    voting_started_at: datetime | None = field(default=None)
    voting_ends_at: datetime | None = field(default=None)
    closed_at: datetime | None = field(default=None)
    rejection_reason: str | None = field(default=None)
    reviewed_by_id: UUID | None = field(default=None)
    reviewed_at: datetime | None = field(default=None)
    submitted_at: datetime | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)
    last_edited_at: datetime | None = field(default=None)
    last_edited_by_id: UUID | None = field(default=None)
    final_tally: TallyResult | None = field(default=None)
    integrity_flags: tuple[IntegrityIssue, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate counters."""
        if not 0 <= self.submission_count <= MAX_SUBMISSIONS:
            raise ValueError(
                f"submission_count must be between 0 and {MAX_SUBMISSIONS}, "
                f"got {self.submission_count}"
            )
        if self.edit_count < 0:
            raise ValueError(f"edit_count cannot be negative, got {self.edit_count}")

    @property
    def title(self) -> str:
        return self.content.title

    @property
    def is_terminal(self) -> bool:
        """True when no lifecycle event can move the proposal any more."""
        if self.status.is_final():
            return True
        return (
            self.status in RESUBMITTABLE_STATUSES
            and self.submission_count >= MAX_SUBMISSIONS
        )

    @property
    def remaining_submissions(self) -> int:
        return MAX_SUBMISSIONS - self.submission_count

    def is_author(self, user_id: UUID) -> bool:
        return self.created_by_id == user_id

    def voting_window_elapsed(self, now: datetime) -> bool:
        """True once ``now`` is past the end of the voting window."""
        return self.voting_ends_at is None or now > self.voting_ends_at

    def with_status(
        self, new_status: ProposalStatus, now: datetime, **changes: Any
    ) -> Proposal:
        """Create new proposal in ``new_status`` after checking the matrix.

        Args:
            new_status: The status to transition to.
            now: Timestamp recorded as updated_at.
            **changes: Other fields to update in the same step.

        Returns:
            New Proposal with the updated status.

        Raises:
            InvalidStateTransitionError: If the transition is not valid.
        """
        valid_transitions = self.status.valid_transitions()
        if new_status not in valid_transitions:
            raise InvalidStateTransitionError(
                from_state=self.status,
                to_state=new_status,
                allowed_transitions=valid_transitions,
            )
        return replace(self, status=new_status, updated_at=now, **changes)

    def with_submission(
        self,
        require_review: bool,
        now: datetime,
        voting_period: timedelta,
    ) -> Proposal:
        """Submit (or resubmit) the proposal.

        Moves to PENDING_REVIEW or straight to OPEN, increments
        submission_count and clears the previous review decision.
        """
        changes: dict[str, Any] = {
            "submission_count": self.submission_count + 1,
            "submitted_at": now,
            "reviewed_by_id": None,
            "reviewed_at": None,
            "rejection_reason": None,
            "closed_at": None,
            "final_tally": None,
        }
        if require_review:
            return self.with_status(ProposalStatus.PENDING_REVIEW, now, **changes)
        return self.with_status(
            ProposalStatus.OPEN,
            now,
            voting_started_at=now,
            voting_ends_at=now + voting_period,
            **changes,
        )

    def with_content_edit(
        self,
        content: ProposalContent,
        editor_id: UUID,
        now: datetime,
        voting_period: timedelta | None = None,
        proposal_type: ProposalType | None = None,
        priority: ProposalPriority | None = None,
        integrity_flags: tuple[IntegrityIssue, ...] = (),
    ) -> Proposal:
        """Apply a content edit; status is unchanged.

        When ``voting_period`` is given the voting window restarts at
        ``now``.
        """
        changes: dict[str, Any] = {
            "content": content,
            "edit_count": self.edit_count + 1,
            "last_edited_at": now,
            "last_edited_by_id": editor_id,
            "updated_at": now,
            "integrity_flags": self.integrity_flags + integrity_flags,
        }
        if proposal_type is not None:
            changes["type"] = proposal_type
        if priority is not None:
            changes["priority"] = priority
        if voting_period is not None:
            changes["voting_started_at"] = now
            changes["voting_ends_at"] = now + voting_period
        return replace(self, **changes)
