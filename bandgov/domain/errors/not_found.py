"""Not-found errors for proposals, members, bands and nominations."""

from __future__ import annotations

from uuid import UUID

from bandgov.domain.errors.governance import ErrorKind, GovernanceError


class NotFoundError(GovernanceError):
    """Base error for missing entities."""

    kind = ErrorKind.NOT_FOUND


class ProposalNotFoundError(NotFoundError):
    """Raised when a proposal does not exist."""

    def __init__(self, proposal_id: UUID) -> None:
        self.proposal_id = proposal_id
        super().__init__(f"Proposal not found: {proposal_id}")


class BandNotFoundError(NotFoundError):
    """Raised when a band has no governance settings."""

    def __init__(self, band_id: UUID) -> None:
        self.band_id = band_id
        super().__init__(f"Band not found: {band_id}")


class MembershipNotFoundError(NotFoundError):
    """Raised when a user (or member id) has no membership in a band.

    Attributes:
        band_id: The band that was searched.
        subject_id: The user id or member id that was looked up.
    """

    def __init__(self, band_id: UUID, subject_id: UUID) -> None:
        self.band_id = band_id
        self.subject_id = subject_id
        super().__init__(f"No membership for {subject_id} in band {band_id}")


class NominationNotFoundError(NotFoundError):
    """Raised when a founder nomination does not exist."""

    def __init__(self, nomination_id: UUID) -> None:
        self.nomination_id = nomination_id
        super().__init__(f"Founder nomination not found: {nomination_id}")
