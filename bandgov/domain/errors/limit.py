"""Limit errors."""

from __future__ import annotations

from uuid import UUID

from bandgov.domain.errors.governance import ErrorKind, GovernanceError


class LimitExceededError(GovernanceError):
    """Raised when a proposal has used all of its submissions.

    Attributes:
        proposal_id: The proposal that hit the cap.
        submission_count: Submissions already made.
        limit: The configured maximum.
    """

    kind = ErrorKind.LIMIT_EXCEEDED

    def __init__(self, proposal_id: UUID, submission_count: int, limit: int) -> None:
        """Initialize limit exceeded error.

        Args:
            proposal_id: The proposal that hit the cap.
            submission_count: Submissions already made.
            limit: The maximum number of submissions.
        """
        self.proposal_id = proposal_id
        self.submission_count = submission_count
        self.limit = limit
        super().__init__(
            f"Maximum resubmission limit ({limit}) reached for proposal "
            f"{proposal_id}: {submission_count} submissions made"
        )
