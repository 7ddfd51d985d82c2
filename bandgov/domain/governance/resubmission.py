"""Resubmission Limiter.

A proposal may be submitted at most MAX_SUBMISSIONS times in total:
the first submission from DRAFT plus resubmissions from REJECTED or
WITHDRAWN.
"""

from __future__ import annotations

from bandgov.domain.errors.limit import LimitExceededError
from bandgov.domain.models.proposal import MAX_SUBMISSIONS, Proposal


def ensure_can_resubmit(proposal: Proposal) -> None:
    """Raise LimitExceededError when the submission cap is reached."""
    if proposal.submission_count >= MAX_SUBMISSIONS:
        raise LimitExceededError(
            proposal_id=proposal.id,
            submission_count=proposal.submission_count,
            limit=MAX_SUBMISSIONS,
        )
