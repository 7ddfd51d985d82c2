"""Domain events for bandgov."""

from bandgov.domain.events.governance import (
    GOVERNANCE_EVENT_SCHEMA_VERSION,
    NOMINATION_CREATED_EVENT_TYPE,
    NOMINATION_DECIDED_EVENT_TYPE,
    NOMINATION_VOTE_CAST_EVENT_TYPE,
    PROPOSAL_APPROVED_EVENT_TYPE,
    PROPOSAL_ARCHIVED_EVENT_TYPE,
    PROPOSAL_CLOSED_EVENT_TYPE,
    PROPOSAL_CREATED_EVENT_TYPE,
    PROPOSAL_EDITED_EVENT_TYPE,
    PROPOSAL_REJECTED_EVENT_TYPE,
    PROPOSAL_RESUBMITTED_EVENT_TYPE,
    PROPOSAL_SUBMITTED_EVENT_TYPE,
    PROPOSAL_VOTE_CAST_EVENT_TYPE,
    PROPOSAL_WITHDRAWN_EVENT_TYPE,
    GovernanceAuditEvent,
)

__all__: list[str] = [
    "GOVERNANCE_EVENT_SCHEMA_VERSION",
    "GovernanceAuditEvent",
    "NOMINATION_CREATED_EVENT_TYPE",
    "NOMINATION_DECIDED_EVENT_TYPE",
    "NOMINATION_VOTE_CAST_EVENT_TYPE",
    "PROPOSAL_APPROVED_EVENT_TYPE",
    "PROPOSAL_ARCHIVED_EVENT_TYPE",
    "PROPOSAL_CLOSED_EVENT_TYPE",
    "PROPOSAL_CREATED_EVENT_TYPE",
    "PROPOSAL_EDITED_EVENT_TYPE",
    "PROPOSAL_REJECTED_EVENT_TYPE",
    "PROPOSAL_RESUBMITTED_EVENT_TYPE",
    "PROPOSAL_SUBMITTED_EVENT_TYPE",
    "PROPOSAL_VOTE_CAST_EVENT_TYPE",
    "PROPOSAL_WITHDRAWN_EVENT_TYPE",
]
