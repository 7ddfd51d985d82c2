"""Input validation errors."""

from __future__ import annotations

from bandgov.domain.errors.governance import ErrorKind, GovernanceError


class ValidationError(GovernanceError):
    """Raised when input fails validation.

    Examples: a rejection reason shorter than 10 characters, a missing
    edit reason while voting is open, ABSTAIN on a dissolution proposal.

    Attributes:
        field: Name of the offending field, when there is one.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, reason: str, field: str | None = None) -> None:
        """Initialize validation error.

        Args:
            reason: Human-readable explanation.
            field: Name of the offending field (optional).
        """
        self.field = field
        super().__init__(reason)
