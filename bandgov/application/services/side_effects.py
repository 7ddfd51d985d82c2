"""Post-commit side effects: notifications and audit records.

Everything here runs after the write has committed. A failing notifier
or audit sink is logged and reported, never raised: the committed
state change stands.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from bandgov.application.ports.audit_logger import AuditLoggerProtocol
from bandgov.application.ports.notifier import NotifierProtocol
from bandgov.application.services.base import LoggingMixin
from bandgov.domain.events.governance import GovernanceAuditEvent
from bandgov.domain.models.notification import GovernanceNotification


class SideEffectDispatcher(LoggingMixin):
    """Sends notifications and audit events without failing the caller."""

    def __init__(
        self,
        notifier: NotifierProtocol,
        audit_logger: AuditLoggerProtocol,
    ) -> None:
        self._notifier = notifier
        self._audit_logger = audit_logger
        self._init_logger()

    async def audit(self, event: GovernanceAuditEvent) -> bool:
        """Record an audit event.

        Returns:
            True if the audit logger accepted it.
        """
        try:
            await self._audit_logger.record(event)
        except Exception as e:
            self._log_operation(
                "audit",
                event_type=event.event_type,
                subject_id=str(event.subject_id),
            ).warning("audit_record_failed", error=str(e))
            return False
        return True

    async def publish(self, notification: GovernanceNotification) -> bool:
        """Publish a notification; empty recipient lists are skipped.

        Returns:
            True if delivered (or nothing to deliver).
        """
        if not notification.recipient_ids:
            return True
        try:
            await self._notifier.publish(notification)
        except Exception as e:
            self._log_operation(
                "publish",
                notification_type=notification.type.value,
                subject_id=str(notification.subject_id),
                recipients=len(notification.recipient_ids),
            ).warning("notification_failed", error=str(e))
            return False
        return True

    async def notify_voters_of_edit(
        self,
        proposal_id: UUID,
        reason: str,
        voter_ids: Sequence[UUID],
    ) -> bool:
        """Tell members whose votes were reset that the proposal changed."""
        if not voter_ids:
            return True
        try:
            await self._notifier.notify_voters_of_edit(
                proposal_id, reason, tuple(voter_ids)
            )
        except Exception as e:
            self._log_operation(
                "notify_voters_of_edit",
                proposal_id=str(proposal_id),
                voters=len(voter_ids),
            ).warning("vote_reset_notification_failed", error=str(e))
            return False
        return True
