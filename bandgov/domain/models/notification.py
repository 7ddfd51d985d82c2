"""Outbound notification model.

Notifications are handed to the Notifier port after a write commits.
Delivery (email, in-app) belongs to the notification service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import UUID


class NotificationType(Enum):
    """Kinds of governance notifications."""

    PROPOSAL_NEEDS_REVIEW = "PROPOSAL_NEEDS_REVIEW"
    PROPOSAL_EDITED_DURING_REVIEW = "PROPOSAL_EDITED_DURING_REVIEW"
    PROPOSAL_APPROVED_FOR_VOTING = "PROPOSAL_APPROVED_FOR_VOTING"
    PROPOSAL_REJECTED_IN_REVIEW = "PROPOSAL_REJECTED_IN_REVIEW"
    PROPOSAL_VOTING_OPENED = "PROPOSAL_VOTING_OPENED"
    PROPOSAL_VOTE_RESET = "PROPOSAL_VOTE_RESET"
    PROPOSAL_CLOSED = "PROPOSAL_CLOSED"
    FOUNDER_NOMINATED = "FOUNDER_NOMINATED"
    FOUNDER_NOMINATION_DECIDED = "FOUNDER_NOMINATION_DECIDED"


@dataclass(frozen=True, eq=True)
class GovernanceNotification:
    """A notification addressed to a set of users.

    Attributes:
        type: Notification kind.
        band_id: The Band it concerns.
        subject_id: The proposal or nomination it concerns.
        recipient_ids: Users to notify.
        title: Short human-readable headline.
        payload: Extra data for the template.
    """

    type: NotificationType
    band_id: UUID
    subject_id: UUID
    recipient_ids: tuple[UUID, ...]
    title: str
    payload: dict[str, Any] = field(default_factory=dict, compare=False)
