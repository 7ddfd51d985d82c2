"""Edit history record construction, shared by edit and resubmit."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from uuid6 import uuid7

from bandgov.application.ports.content_hash_service import ContentHashServiceProtocol
from bandgov.domain.models.history import ProposalEditRecord
from bandgov.domain.models.proposal import Proposal, ProposalContent


def build_edit_record(
    hash_service: ContentHashServiceProtocol,
    before: Proposal,
    content: ProposalContent,
    editor_id: UUID,
    reason: str | None,
    votes_reset: int,
    now: datetime,
) -> ProposalEditRecord:
    """Describe an edit of ``before`` to ``content``."""
    return ProposalEditRecord(
        id=uuid7(),
        proposal_id=before.id,
        editor_id=editor_id,
        status_at_edit=before.status,
        reason=reason,
        changed_fields=tuple(before.content.changed_fields(content)),
        votes_reset=votes_reset,
        content_hash=hash_service.hash_content(
            content.canonical_content_bytes()
        ).hex(),
        edited_at=now,
    )
