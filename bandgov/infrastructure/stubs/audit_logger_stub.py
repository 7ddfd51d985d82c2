"""Recording audit logger stub.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

from bandgov.application.ports.audit_logger import AuditLoggerProtocol
from bandgov.domain.events.governance import GovernanceAuditEvent


class AuditLoggerStub(AuditLoggerProtocol):
    """Keeps audit events in memory.

    Attributes:
        events: Recorded events, in order.
    """

    def __init__(self) -> None:
        self.events: list[GovernanceAuditEvent] = []
        self._save_should_fail = False

    def set_save_should_fail(self, should_fail: bool) -> None:
        self._save_should_fail = should_fail

    async def record(self, event: GovernanceAuditEvent) -> None:
        if self._save_should_fail:
            raise RuntimeError("Audit sink unavailable")
        self.events.append(event)

    def event_types(self) -> list[str]:
        return [event.event_type for event in self.events]
