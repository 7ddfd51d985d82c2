"""Lifecycle events and the statuses each one may start from.

The status transition matrix on ProposalStatus says which edges exist;
this table says which *event* may use them. DRAFT -> OPEN is a legal
edge, for example, but only ``submit`` may take it, never ``approve``.
"""

from __future__ import annotations

from enum import Enum

from bandgov.domain.errors.state_transition import InvalidStateError
from bandgov.domain.models.proposal import Proposal, ProposalStatus


class LifecycleEvent(Enum):
    """Caller-initiated proposal events."""

    SUBMIT = "submit"
    RESUBMIT = "resubmit"
    APPROVE = "approve"
    REJECT = "reject"
    WITHDRAW = "withdraw"
    VOTE = "vote"
    CLOSE = "close"
    ARCHIVE = "archive"


EVENT_SOURCE_STATUSES: dict[LifecycleEvent, frozenset[ProposalStatus]] = {
    LifecycleEvent.SUBMIT: frozenset({ProposalStatus.DRAFT}),
    LifecycleEvent.RESUBMIT: frozenset(
        {ProposalStatus.REJECTED, ProposalStatus.WITHDRAWN}
    ),
    LifecycleEvent.APPROVE: frozenset({ProposalStatus.PENDING_REVIEW}),
    LifecycleEvent.REJECT: frozenset({ProposalStatus.PENDING_REVIEW}),
    LifecycleEvent.WITHDRAW: frozenset({ProposalStatus.PENDING_REVIEW}),
    LifecycleEvent.VOTE: frozenset({ProposalStatus.OPEN}),
    LifecycleEvent.CLOSE: frozenset({ProposalStatus.OPEN}),
    LifecycleEvent.ARCHIVE: frozenset(
        {ProposalStatus.APPROVED, ProposalStatus.REJECTED}
    ),
}


def require_status(proposal: Proposal, event: LifecycleEvent) -> None:
    """Raise InvalidStateError unless ``event`` may start from the status."""
    allowed = EVENT_SOURCE_STATUSES[event]
    if proposal.status not in allowed:
        expected = ", ".join(sorted(status.value for status in allowed))
        raise InvalidStateError(
            f"Cannot {event.value} proposal {proposal.id}: status is "
            f"{proposal.status.value}, expected {expected}"
        )
