"""Permission errors for role and ownership checks."""

from __future__ import annotations

from uuid import UUID

from bandgov.domain.errors.governance import ErrorKind, GovernanceError


class PermissionDeniedError(GovernanceError):
    """Raised when the actor's role or identity does not satisfy a guard.

    Attributes:
        actor_id: The user that attempted the operation.
        capability: The capability that was checked (e.g. "review").
    """

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(
        self,
        reason: str,
        actor_id: UUID | None = None,
        capability: str | None = None,
    ) -> None:
        """Initialize permission denied error.

        Args:
            reason: Human-readable explanation.
            actor_id: The user that attempted the operation.
            capability: Name of the capability that was denied.
        """
        self.actor_id = actor_id
        self.capability = capability
        super().__init__(reason)
