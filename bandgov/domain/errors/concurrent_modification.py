"""Concurrent modification error for compare-and-set writes.

Raised by repositories when the row no longer matches what the caller
read: the status moved, or an edit bumped edit_count in between. The
caller should re-read the proposal and decide whether to retry.
"""

from __future__ import annotations

from uuid import UUID

from bandgov.domain.errors.governance import ErrorKind, GovernanceError


class ConcurrencyConflictError(GovernanceError):
    """Raised when a compare-and-set write loses a race.

    Attributes:
        entity_id: The proposal or nomination being modified.
        operation: Description of the failed operation (e.g. "close").
    """

    kind = ErrorKind.CONCURRENCY_CONFLICT

    def __init__(self, entity_id: UUID, operation: str, detail: str = "") -> None:
        """Initialize concurrency conflict error.

        Args:
            entity_id: The entity being modified.
            operation: Description of the failed operation.
            detail: Extra context about what changed.
        """
        self.entity_id = entity_id
        self.operation = operation
        suffix = f" {detail}" if detail else ""
        super().__init__(
            f"Concurrent modification detected for {entity_id} during "
            f"{operation}.{suffix}"
        )
