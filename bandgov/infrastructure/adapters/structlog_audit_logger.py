"""Audit logger that writes governance events to the structured log.

Each event becomes one "governance_audit" log entry carrying the event's
serialized form and a BLAKE3 digest of its signable content, so an
external log store can verify entries were not altered.
"""

from __future__ import annotations

import structlog

from bandgov.application.ports.audit_logger import AuditLoggerProtocol
from bandgov.application.ports.content_hash_service import (
    ContentHashServiceProtocol,
)
from bandgov.domain.events.governance import GovernanceAuditEvent


class StructlogAuditLogger(AuditLoggerProtocol):
    """AuditLoggerProtocol backed by structlog."""

    def __init__(self, hash_service: ContentHashServiceProtocol) -> None:
        self._hash_service = hash_service
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component="audit",
        )

    async def record(self, event: GovernanceAuditEvent) -> None:
        digest = self._hash_service.hash_content(event.signable_content())
        self._log.info(
            "governance_audit",
            content_hash=digest.hex(),
            **event.to_dict(),
        )
