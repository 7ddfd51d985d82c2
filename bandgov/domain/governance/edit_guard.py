"""Edit Guard: what an edit requires and what it resets.

| Status          | Reason required | Resets votes and window | Notifies     |
|-----------------|-----------------|-------------------------|--------------|
| DRAFT           | no              | no                      | nobody       |
| PENDING_REVIEW  | no              | no                      | reviewers    |
| OPEN            | yes (>= 10)     | yes                     | prior voters |
| REJECTED        | no              | no                      | nobody       |
| WITHDRAWN       | no              | no                      | nobody       |

APPROVED and CLOSED proposals cannot be edited.
"""

from __future__ import annotations

from dataclasses import dataclass

from bandgov.domain.errors.state_transition import InvalidStateError
from bandgov.domain.governance.reasons import require_reason
from bandgov.domain.models.proposal import ProposalStatus

EDITABLE_STATUSES: frozenset[ProposalStatus] = frozenset(
    {
        ProposalStatus.DRAFT,
        ProposalStatus.PENDING_REVIEW,
        ProposalStatus.OPEN,
        ProposalStatus.REJECTED,
        ProposalStatus.WITHDRAWN,
    }
)


@dataclass(frozen=True, eq=True)
class EditPlan:
    """What an edit in a given status must do."""

    status: ProposalStatus
    requires_reason: bool
    resets_votes: bool
    notifies_reviewers: bool


def plan_edit(status: ProposalStatus) -> EditPlan:
    """Decide the edit rules for ``status``.

    Raises:
        InvalidStateError: If the status is not editable.
    """
    if status not in EDITABLE_STATUSES:
        raise InvalidStateError(f"Cannot edit a proposal with status {status.value}")
    voting = status == ProposalStatus.OPEN
    return EditPlan(
        status=status,
        requires_reason=voting,
        resets_votes=voting,
        notifies_reviewers=status == ProposalStatus.PENDING_REVIEW,
    )


def validate_edit_reason(plan: EditPlan, edit_reason: str | None) -> str | None:
    """Return the normalized edit reason.

    Raises:
        ValidationError: If a reason is required and missing or too short.
    """
    if plan.requires_reason:
        return require_reason(edit_reason, "edit_reason")
    if edit_reason is None:
        return None
    return edit_reason.strip() or None
