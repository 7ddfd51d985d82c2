"""Append-only history records for proposals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from bandgov.domain.models.proposal import ProposalStatus


class ReviewAction(Enum):
    """Outcome of a review decision."""

    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True, eq=True)
class ProposalEditRecord:
    """One content edit.

    Attributes:
        id: UUIDv7 identifier.
        proposal_id: The edited proposal.
        editor_id: Who made the edit (always the author).
        status_at_edit: Proposal status when the edit was made.
        reason: Edit reason; required while voting is open.
        changed_fields: Names of the content fields that changed.
        votes_reset: Votes deleted by this edit.
        content_hash: BLAKE3 hex digest of the new content.
        edited_at: When the edit was made.
    """

    id: UUID
    proposal_id: UUID
    editor_id: UUID
    status_at_edit: ProposalStatus
    reason: str | None
    changed_fields: tuple[str, ...]
    votes_reset: int
    content_hash: str
    edited_at: datetime


@dataclass(frozen=True, eq=True)
class ProposalReviewRecord:
    """One review decision on a proposal."""

    id: UUID
    proposal_id: UUID
    reviewer_id: UUID
    action: ReviewAction
    reason: str | None
    reviewed_at: datetime
