"""Governance error base class and error kinds.

Every error raised by a public governance operation carries a machine
readable kind and a human-readable reason so the calling layer can map
it to a response without parsing messages.

Kinds:
- PERMISSION_DENIED: role or ownership check failed
- INVALID_STATE: transition not legal from the current status
- VALIDATION: malformed input (short reason, ABSTAIN on dissolution, ...)
- LIMIT_EXCEEDED: resubmission cap reached
- NOT_FOUND: proposal, member, band or nomination missing
- INTEGRITY_BLOCKED: Integrity Hook refused the content
- CONCURRENCY_CONFLICT: lost a race on close or vote reset
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from bandgov.domain.exceptions import BandGovError


class ErrorKind(Enum):
    """Closed set of governance error kinds."""

    PERMISSION_DENIED = "PERMISSION_DENIED"
    INVALID_STATE = "INVALID_STATE"
    VALIDATION = "VALIDATION"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    NOT_FOUND = "NOT_FOUND"
    INTEGRITY_BLOCKED = "INTEGRITY_BLOCKED"
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"


class GovernanceError(BandGovError):
    """Base error for all governance operations.

    Subclasses set ``kind``. The ``reason`` attribute holds the
    human-readable explanation shown to the caller.

    Attributes:
        kind: The error kind (class level).
        reason: Human-readable reason for the failure.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, reason: str) -> None:
        """Initialize the error.

        Args:
            reason: Human-readable reason for the failure.
        """
        self.reason = reason
        super().__init__(reason)

    def to_dict(self) -> dict[str, str]:
        """Return the kind and reason as a plain dict."""
        return {"kind": self.kind.value, "reason": self.reason}
