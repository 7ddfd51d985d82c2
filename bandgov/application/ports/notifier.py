"""Notifier port.

Post-commit notifications. Called only after a write has committed;
a failing notifier never undoes the write.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from bandgov.domain.models.notification import GovernanceNotification


class NotifierProtocol(Protocol):
    """Protocol for the notification service."""

    async def notify_voters_of_edit(
        self,
        proposal_id: UUID,
        reason: str,
        voter_ids: Sequence[UUID],
    ) -> None:
        """Tell members whose votes were reset that the proposal changed.

        Args:
            proposal_id: The edited proposal.
            reason: The author's edit reason.
            voter_ids: Members whose votes were deleted.
        """
        ...

    async def publish(self, notification: GovernanceNotification) -> None:
        """Deliver a notification to its recipients."""
        ...
