"""Audit logger port."""

from __future__ import annotations

from typing import Protocol

from bandgov.domain.events.governance import GovernanceAuditEvent


class AuditLoggerProtocol(Protocol):
    """Protocol for recording governance audit events.

    Called after the write commits; failures are logged by the caller
    and do not undo the write.
    """

    async def record(self, event: GovernanceAuditEvent) -> None:
        """Record one audit event."""
        ...
