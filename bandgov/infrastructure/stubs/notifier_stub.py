"""Recording notifier stub.

Keeps every notification in memory so tests can assert on who was told
what. set_fail() makes every call raise, to exercise the post-commit
failure path.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from bandgov.application.ports.notifier import NotifierProtocol
from bandgov.domain.models.notification import (
    GovernanceNotification,
    NotificationType,
)


class NotifierStub(NotifierProtocol):
    """In-memory implementation of NotifierProtocol.

    Attributes:
        published: Notifications passed to publish().
        vote_resets: (proposal_id, reason, voter_ids) per reset notice.
    """

    def __init__(self) -> None:
        self.published: list[GovernanceNotification] = []
        self.vote_resets: list[tuple[UUID, str, tuple[UUID, ...]]] = []
        self._should_fail = False

    def set_fail(self, should_fail: bool = True) -> None:
        self._should_fail = should_fail

    async def notify_voters_of_edit(
        self,
        proposal_id: UUID,
        reason: str,
        voter_ids: Sequence[UUID],
    ) -> None:
        if self._should_fail:
            raise ConnectionError("Notification service unavailable")
        self.vote_resets.append((proposal_id, reason, tuple(voter_ids)))

    async def publish(self, notification: GovernanceNotification) -> None:
        if self._should_fail:
            raise ConnectionError("Notification service unavailable")
        self.published.append(notification)

    def of_type(self, notification_type: NotificationType) -> list[GovernanceNotification]:
        return [n for n in self.published if n.type == notification_type]
