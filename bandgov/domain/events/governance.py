"""Governance audit event payloads.

Every committed lifecycle change produces one GovernanceAuditEvent,
handed to the Audit Logger after the write. Event types use dotted
lowercase names.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

# Event type constants
PROPOSAL_CREATED_EVENT_TYPE: str = "proposal.created"
PROPOSAL_EDITED_EVENT_TYPE: str = "proposal.edited"
PROPOSAL_SUBMITTED_EVENT_TYPE: str = "proposal.submitted"
PROPOSAL_RESUBMITTED_EVENT_TYPE: str = "proposal.resubmitted"
PROPOSAL_APPROVED_EVENT_TYPE: str = "proposal.review_approved"
PROPOSAL_REJECTED_EVENT_TYPE: str = "proposal.review_rejected"
PROPOSAL_WITHDRAWN_EVENT_TYPE: str = "proposal.withdrawn"
PROPOSAL_VOTE_CAST_EVENT_TYPE: str = "proposal.vote_cast"
PROPOSAL_CLOSED_EVENT_TYPE: str = "proposal.closed"
PROPOSAL_ARCHIVED_EVENT_TYPE: str = "proposal.archived"
NOMINATION_CREATED_EVENT_TYPE: str = "founder_nomination.created"
NOMINATION_VOTE_CAST_EVENT_TYPE: str = "founder_nomination.vote_cast"
NOMINATION_DECIDED_EVENT_TYPE: str = "founder_nomination.decided"

GOVERNANCE_EVENT_SCHEMA_VERSION: str = "1.0.0"


@dataclass(frozen=True, eq=True)
class GovernanceAuditEvent:
    """Audit record of one committed governance action.

    Attributes:
        event_type: One of the *_EVENT_TYPE constants.
        band_id: The Band.
        subject_id: The proposal or nomination acted on.
        actor_id: The user who acted; None for system sweeps.
        occurred_at: Commit time.
        details: Event-specific values (JSON-compatible).
    """

    event_type: str
    band_id: UUID
    subject_id: UUID
    actor_id: UUID | None
    occurred_at: datetime
    details: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert payload to dict for the audit sink.

        Returns:
            Dict including schema_version.
        """
        return {
            "event_type": self.event_type,
            "band_id": str(self.band_id),
            "subject_id": str(self.subject_id),
            "actor_id": str(self.actor_id) if self.actor_id is not None else None,
            "occurred_at": self.occurred_at.isoformat(),
            "details": self.details,
            "schema_version": GOVERNANCE_EVENT_SCHEMA_VERSION,
        }

    def signable_content(self) -> bytes:
        """Return canonical JSON bytes, keys sorted."""
        return json.dumps(self.to_dict(), sort_keys=True, default=str).encode(
            "utf-8"
        )
